"""
Tests for compliance orders, consular summaries and embassy review.
"""

from unittest.mock import patch
from sports_reels.db.models.audit import AuditLog
from sports_reels.db.models.compliance import ComplianceDocument
from tests.base import ApiTestCase


class ComplianceTestCase(ApiTestCase):

    def setUp(self):
        patcher = patch("sports_reels.services.analysis_service.llm_configured", return_value=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.director, self.token = self.make_team_user()
        self.player = self.make_player(self.director.team, schengen_score=70, uk_gbe_score=40)

    def generate(self, **data):
        payload = {"player_id": str(self.player.id), "visa_type": "uk_gbe", "target_country": "England"}
        payload.update(data)
        return self.api("POST", "/api/compliance/documents/", token=self.token, data=payload)

    def submit(self, document_id, country="United Kingdom"):
        return self.api(
            "POST", f"/api/compliance/documents/{document_id}/submit/", token=self.token,
            data={"embassy_country": country},
        )


class TestComplianceOrders(ComplianceTestCase):

    def create_order(self):
        return self.api("POST", "/api/compliance/orders/", token=self.token, data={
            "player_id": str(self.player.id), "visa_type": "uk_gbe", "target_country": "England",
        })

    def test_order_lifecycle(self):
        status, order = self.create_order()
        self.assertEqual(status, 201)
        self.assertEqual(order["status"], "pending_payment")
        self.assertEqual(order["amount"], "49.99")
        base = f"/api/compliance/orders/{order['id']}"

        status, body = self.api("POST", f"{base}/generate/", token=self.token)
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "Order must be paid before generating document")

        status, body = self.api("POST", f"{base}/pay/", token=self.token)
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "paid")
        self.assertTrue(body["payment_reference"].startswith("SIM-"))

        status, body = self.api("POST", f"{base}/pay/", token=self.token)
        self.assertEqual(status, 409)
        self.assertEqual(body["current_status"], "paid")

        status, document = self.api("POST", f"{base}/generate/", token=self.token)
        self.assertEqual(status, 201)
        self.assertEqual(document["order_id"], order["id"])
        self.assertEqual(document["status"], "draft")
        self.assertEqual(document["eligibility_score"], 55.0)

        _, body = self.api("GET", base + "/", token=self.token)
        self.assertEqual(body["status"], "completed")

        status, body = self.api("POST", f"{base}/generate/", token=self.token)
        self.assertEqual(status, 400)
        self.assertEqual(ComplianceDocument.objects.filter(order_id=order["id"]).count(), 1)

    def test_invalid_visa_type(self):
        status, body = self.api("POST", "/api/compliance/orders/", token=self.token, data={
            "player_id": str(self.player.id), "visa_type": "tourist", "target_country": "England",
        })
        self.assertEqual(status, 400)
        self.assertTrue(body["error"].startswith("'visa_type' must be one of"))

    def test_orders_are_scoped_to_team(self):
        self.create_order()
        _, rival_token = self.make_team_user("rival@club.test", club="Cairo United")
        _, body = self.api("GET", "/api/compliance/orders/", token=rival_token)
        self.assertEqual(body["orders"], [])


class TestComplianceDocuments(ComplianceTestCase):

    def test_generate_uses_rule_based_summary(self):
        status, document = self.generate()

        self.assertEqual(status, 201)
        self.assertTrue(document["ai_summary"].startswith("Compliance summary for Kofi Mensah (Ghana)."))
        self.assertIn("Requested route: uk_gbe for England.", document["ai_summary"])
        snapshot = document["eligibility_snapshot"]
        self.assertEqual(snapshot["player"]["full_name"], "Kofi Mensah")
        self.assertEqual(snapshot["scores"]["schengen_score"], 70.0)
        self.assertIn("assessment", snapshot)

    def test_date_range_validation(self):
        status, body = self.generate(date_range_start="2025-06-01", date_range_end="2025-01-01")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "date_range_start must not be after date_range_end")

        status, body = self.generate(date_range_start="June")
        self.assertEqual(status, 400)

    def test_draft_can_be_edited_until_submitted(self):
        _, document = self.generate()
        path = f"/api/compliance/documents/{document['id']}/"

        status, body = self.api("PUT", path, token=self.token, data={"ai_summary": "Edited summary"})
        self.assertEqual(status, 200)
        self.assertEqual(body["ai_summary"], "Edited summary")

        status, body = self.submit(document["id"])
        self.assertEqual(status, 201)
        self.assertEqual(body["document"]["status"], "submitted")
        verification = body["verification"]
        self.assertEqual(verification["status"], "pending")
        self.assertEqual(verification["embassy_country"], "United Kingdom")
        self.assertRegex(verification["verification_code"], r"^SR-[A-Z2-9]{8}$")

        status, body = self.api("PUT", path, token=self.token, data={"ai_summary": "Too late"})
        self.assertEqual(status, 409)
        self.assertEqual(body["error"], "Document cannot be modified after submission")

    def test_document_is_submitted_once(self):
        _, document = self.generate()
        self.submit(document["id"])
        status, body = self.submit(document["id"])
        self.assertEqual(status, 409)
        self.assertEqual(body["current_status"], "submitted")

    def test_submit_requires_country(self):
        _, document = self.generate()
        status, body = self.submit(document["id"], country=" ")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'embassy_country' is required")

    def test_public_verification_lookup(self):
        _, document = self.generate()
        _, body = self.submit(document["id"])
        code = body["verification"]["verification_code"]

        status, public = self.api("GET", f"/api/verify/{code.lower()}/")

        self.assertEqual(status, 200)
        self.assertEqual(public["player_name"], "Kofi Mensah")
        self.assertEqual(public["document_status"], "submitted")
        self.assertNotIn("notes", public)

        status, _ = self.api("GET", "/api/verify/SR-UNKNOWN1/")
        self.assertEqual(status, 404)

    def test_player_documents(self):
        self.generate()
        _, body = self.api("GET", f"/api/players/{self.player.id}/documents/", token=self.token)
        self.assertEqual(len(body["documents"]), 1)

    def test_player_filter_must_be_a_uuid(self):
        status, body = self.api("GET", "/api/compliance/documents/?player_id=not-a-uuid", token=self.token)
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'player_id' must be a UUID")

        self.generate()
        _, body = self.api("GET", f"/api/compliance/documents/?player_id={self.player.id}", token=self.token)
        self.assertEqual(len(body["documents"]), 1)


class TestEmbassyReview(ComplianceTestCase):

    def setUp(self):
        super().setUp()
        self.embassy, self.embassy_token = self.make_user(
            "visa@embassy.test", "embassy", embassy_country="United Kingdom",
        )

    def submitted_verification(self):
        _, document = self.generate()
        _, body = self.submit(document["id"])
        return body["verification"]

    def review(self, verification_id, token=None, **data):
        return self.api(
            "PUT", f"/api/embassy/verifications/{verification_id}/",
            token=token or self.embassy_token, data=data,
        )

    def test_embassy_sees_own_country_only(self):
        self.submitted_verification()
        _, french_token = self.make_user("visa@ambassade.test", "embassy", embassy_country="France")

        _, body = self.api("GET", "/api/embassy/verifications/", token=self.embassy_token)
        self.assertEqual(len(body["verifications"]), 1)
        _, body = self.api("GET", "/api/embassy/verifications/", token=french_token)
        self.assertEqual(body["verifications"], [])

    def test_review_must_pass_through_under_review(self):
        verification = self.submitted_verification()

        status, body = self.review(verification["id"], status="approved")
        self.assertEqual(status, 409)
        self.assertEqual(body["current_status"], "pending")

        status, body = self.review(verification["id"], status="under_review")
        self.assertEqual(status, 200)
        self.assertEqual(body["reviewed_by"], self.embassy.id)

        status, body = self.review(verification["id"], status="approved", notes="All evidence verified")
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "approved")
        self.assertEqual(body["notes"], "All evidence verified")
        self.assertIsNotNone(body["verified_at"])

        _, detail = self.api("GET", f"/api/embassy/verifications/{verification['id']}/", token=self.embassy_token)
        self.assertEqual(detail["document"]["status"], "verified")

        status, _ = self.review(verification["id"], status="rejected")
        self.assertEqual(status, 409)

    def test_rejection_is_audited_as_warning(self):
        verification = self.submitted_verification()
        self.review(verification["id"], status="under_review")
        self.review(verification["id"], status="rejected")

        entry = AuditLog.objects.get(action="verification_rejected")
        self.assertEqual(entry.severity, "warning")
        self.assertEqual(entry.actor_id, self.embassy.id)

    def test_notes_only_update(self):
        verification = self.submitted_verification()
        status, body = self.review(verification["id"], notes="Awaiting club letter")
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "pending")
        self.assertEqual(body["notes"], "Awaiting club letter")

    def test_only_embassy_users_review(self):
        verification = self.submitted_verification()
        status, _ = self.review(verification["id"], token=self.token, status="under_review")
        self.assertEqual(status, 403)

    def test_empty_review(self):
        verification = self.submitted_verification()
        status, body = self.review(verification["id"])
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'status' or 'notes' is required")
