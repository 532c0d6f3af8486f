"""
Tests for federation letter requests, fees and federation admin endpoints.
"""

from datetime import date, timedelta
from decimal import Decimal
from sports_reels.db.models.federation import (
    FederationFeeSchedule,
    FederationLetterRequest,
    FederationPayment,
    FederationProfile,
)
from sports_reels.db.models.tokens import TokenBalance
from sports_reels.services import federation_service
from tests.base import ApiTestCase


class TestRequestNumber(ApiTestCase):

    def test_format_uses_utc_year_and_base36_millis(self):
        # 2025-12-31T23:59:59.5Z
        self.assertEqual(
            federation_service.generate_request_number(1767225599.5),
            f"FLR-2025-{federation_service._base36(1767225599500)}",
        )
        self.assertEqual(federation_service._base36(35), "Z")
        self.assertEqual(federation_service._base36(36), "10")
        self.assertEqual(federation_service._base36(0), "0")


class TestFeeResolution(ApiTestCase):

    def setUp(self):
        self.ghana = FederationProfile.objects.create(
            name="Ghana Football Association", country="Ghana",
            default_fee=Decimal("200.00"), platform_service_charge=Decimal("30.00"),
        )

    def test_platform_defaults(self):
        self.assertEqual(federation_service.resolve_fees("Germany"), (Decimal("150.00"), Decimal("25.00")))

    def test_federation_defaults(self):
        self.assertEqual(
            federation_service.resolve_fees("Germany", self.ghana),
            (Decimal("200.00"), Decimal("30.00")),
        )

    def test_bound_schedule_beats_generic(self):
        FederationFeeSchedule.objects.create(country="Germany", base_fee=Decimal("120.00"))
        FederationFeeSchedule.objects.create(
            country="germany", federation=self.ghana,
            base_fee=Decimal("300.00"), platform_service_charge=Decimal("20.00"),
        )

        self.assertEqual(
            federation_service.resolve_fees("Germany", self.ghana),
            (Decimal("300.00"), Decimal("20.00")),
        )
        self.assertEqual(federation_service.resolve_fees(" Germany "), (Decimal("120.00"), Decimal("25.00")))

    def test_inactive_and_expired_schedules_are_ignored(self):
        today = date.today()
        FederationFeeSchedule.objects.create(country="Germany", base_fee=Decimal("500.00"), is_active=False)
        FederationFeeSchedule.objects.create(
            country="Germany", base_fee=Decimal("600.00"), effective_to=today - timedelta(days=1),
        )
        FederationFeeSchedule.objects.create(
            country="Germany", base_fee=Decimal("700.00"), effective_from=today + timedelta(days=1),
        )

        self.assertEqual(federation_service.resolve_fees("Germany")[0], Decimal("150.00"))


class FederationTestCase(ApiTestCase):

    def setUp(self):
        self.director, self.token = self.make_team_user()
        self.federation_admin, self.fa_token = self.make_user("desk@gfa.test", "federation_admin")
        self.player = self.make_player(self.director.team)

    def create_request(self, **data):
        payload = {
            "player_id": str(self.player.id),
            "target_club_name": "Hamburg SV",
            "target_club_country": "Germany",
            "transfer_type": "permanent",
        }
        payload.update(data)
        return self.api("POST", "/api/federation-letters/", token=self.token, data=payload)

    def act(self, request_id, step, token=None, data=None):
        return self.api(
            "POST", f"/api/federation-letters/{request_id}/{step}/", token=token or self.token, data=data,
        )


class TestLetterRequests(FederationTestCase):

    def test_create_charges_ten_tokens(self):
        status, body = self.create_request()

        self.assertEqual(status, 201)
        self.assertEqual(body["new_balance"], 40)
        self.assertRegex(body["request_number"], r"^FLR-\d{4}-[0-9A-Z]+$")
        self.assertEqual(body["status"], "pending")
        self.assertEqual(body["payment_status"], "unpaid")
        self.assertEqual(body["athlete_full_name"], "Kofi Mensah")
        self.assertEqual(body["athlete_nationality"], "Ghana")
        self.assertEqual(body["fee_amount"], "150.00")
        self.assertEqual(body["service_charge"], "25.00")
        self.assertEqual(body["total_amount"], "175.00")
        self.assertIsNone(body["federation_id"])

    def test_federation_is_matched_by_nationality(self):
        ghana = FederationProfile.objects.create(name="GFA", country="ghana", currency="GHS")
        _, body = self.create_request()
        self.assertEqual(body["federation_id"], ghana.id)
        self.assertEqual(body["currency"], "GHS")

    def test_validation_happens_before_charging(self):
        status, body = self.create_request(target_club_name="")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'target_club_name' is required")

        status, body = self.create_request(transfer_type="swap")
        self.assertEqual(status, 400)
        self.assertEqual(TokenBalance.objects.get(user=self.director).balance, 50)

    def test_insufficient_tokens_creates_nothing(self):
        TokenBalance.objects.filter(user=self.director).update(balance=9)

        status, body = self.create_request()

        self.assertEqual(status, 400)
        self.assertTrue(body["needs_purchase"])
        self.assertEqual(body["required"], 10)
        self.assertFalse(FederationLetterRequest.objects.exists())

    def test_scouts_cannot_request_letters(self):
        _, scout_token = self.make_user("scout@agency.test", "scout")
        status, _ = self.api("POST", "/api/federation-letters/", token=scout_token, data={
            "player_id": str(self.player.id), "target_club_name": "Hamburg SV", "target_club_country": "Germany",
        })
        self.assertEqual(status, 403)

    def test_full_lifecycle(self):
        _, created = self.create_request()
        request_id = created["id"]

        status, body = self.act(request_id, "submit")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "Payment required before submission")

        status, body = self.act(request_id, "confirm-payment")
        self.assertEqual(status, 200)
        self.assertEqual(body["payment_status"], "paid")
        payments = FederationPayment.objects.filter(request_id=request_id)
        self.assertEqual(
            sorted((p.fee_type, p.amount) for p in payments),
            [("federation_fee", Decimal("150.00")), ("service_charge", Decimal("25.00"))],
        )

        status, body = self.act(request_id, "submit")
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "submitted")
        self.assertIsNotNone(body["submitted_at"])

        status, _ = self.act(request_id, "process")
        self.assertEqual(status, 403)

        status, body = self.act(request_id, "process", token=self.fa_token)
        self.assertEqual(status, 200)
        self.assertEqual(body["processed_by"], self.federation_admin.id)

        status, body = self.act(request_id, "issue", token=self.fa_token)
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "issued")
        self.assertEqual(body["issued_document_path"], f"issued/{created['request_number']}.pdf")

        status, body = self.act(request_id, "reject", token=self.fa_token, data={"rejection_reason": "late"})
        self.assertEqual(status, 409)

        _, activities = self.api("GET", f"/api/federation-letters/{request_id}/activities/", token=self.token)
        self.assertEqual(
            [a["activity_type"] for a in activities["activities"]],
            ["created", "payment_confirmed", "submitted", "accepted", "issued"],
        )
        self.assertEqual(activities["activities"][3]["previous_status"], "submitted")
        self.assertEqual(activities["activities"][3]["new_status"], "processing")

    def test_payment_is_confirmed_once(self):
        _, created = self.create_request()
        self.act(created["id"], "confirm-payment")
        status, body = self.act(created["id"], "confirm-payment")
        self.assertEqual(status, 409)
        self.assertEqual(body["current_status"], "paid")

    def test_reject_records_reason(self):
        _, created = self.create_request()
        status, body = self.act(created["id"], "reject", token=self.fa_token, data={"rejection_reason": "Missing contract"})
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "rejected")
        self.assertEqual(body["rejection_reason"], "Missing contract")

    def test_edit_and_delete_only_while_pending(self):
        _, created = self.create_request()
        path = f"/api/federation-letters/{created['id']}/"

        status, body = self.api("PUT", path, token=self.token, data={"target_club_country": "France"})
        self.assertEqual(status, 200)
        self.assertEqual(body["target_club_country"], "France")

        self.act(created["id"], "reject", token=self.fa_token)
        status, body = self.api("PUT", path, token=self.token, data={"notes": "x"})
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "Only pending requests can be changed")
        status, body = self.api("DELETE", path, token=self.token)
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "Can only delete pending requests")

    def test_delete_pending(self):
        _, created = self.create_request()
        status, body = self.api("DELETE", f"/api/federation-letters/{created['id']}/", token=self.token)
        self.assertEqual(status, 200)
        self.assertEqual(body, {"success": True})
        self.assertFalse(FederationLetterRequest.objects.exists())

    def test_summary_counts(self):
        _, first = self.create_request()
        self.create_request()
        self.act(first["id"], "reject", token=self.fa_token)

        _, body = self.api("GET", "/api/federation-letters/summary/", token=self.token)

        self.assertEqual(body["total"], 2)
        self.assertEqual(body["pending"], 1)
        self.assertEqual(body["rejected"], 1)
        self.assertEqual(body["issued"], 0)


class TestFederationAdmin(FederationTestCase):

    def test_dashboard_stats(self):
        _, created = self.create_request()
        for step in ("confirm-payment", "submit"):
            self.act(created["id"], step)
        self.create_request()

        status, body = self.api("GET", "/api/federation-admin/dashboard-stats/", token=self.fa_token)
        self.assertEqual(status, 200)
        self.assertEqual(body, {"total_requests": 2, "processed": 0, "pending": 1, "total_revenue": "0.00"})

        self.act(created["id"], "process", token=self.fa_token)
        self.act(created["id"], "issue", token=self.fa_token)
        _, body = self.api("GET", "/api/federation-admin/dashboard-stats/", token=self.fa_token)
        self.assertEqual(body["processed"], 1)
        self.assertEqual(body["total_revenue"], "150.00")

        status, _ = self.api("GET", "/api/federation-admin/dashboard-stats/", token=self.token)
        self.assertEqual(status, 403)

    def test_fee_schedule_management(self):
        status, _ = self.api("POST", "/api/federation-admin/fee-schedules/", token=self.token, data={
            "country": "Germany",
        })
        self.assertEqual(status, 403)

        status, body = self.api("POST", "/api/federation-admin/fee-schedules/", token=self.fa_token, data={
            "country": "Germany", "base_fee": "180.00", "platform_service_charge": "20.00", "currency": "eur",
        })
        self.assertEqual(status, 201)
        self.assertEqual(body["total"], "200.00")
        self.assertEqual(body["currency"], "EUR")

        _, created = self.create_request()
        self.assertEqual(created["total_amount"], "200.00")

        status, body = self.api("PUT", f"/api/federation-admin/fee-schedules/{body['id']}/", token=self.fa_token, data={
            "effective_from": "2026-06-01", "effective_to": "2026-01-01",
        })
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "effective_from must not be after effective_to")

    def test_fee_schedule_validation(self):
        status, body = self.api("POST", "/api/federation-admin/fee-schedules/", token=self.fa_token, data={
            "base_fee": "10",
        })
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'country' is required")

        status, body = self.api("POST", "/api/federation-admin/fee-schedules/", token=self.fa_token, data={
            "country": "Spain", "base_fee": "-1",
        })
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'base_fee' must be non-negative")

        for fee in ("NaN", "Infinity"):
            status, body = self.api("POST", "/api/federation-admin/fee-schedules/", token=self.fa_token, data={
                "country": "Spain", "base_fee": fee,
            })
            self.assertEqual(status, 400)
            self.assertEqual(body["error"], "'base_fee' must be a number")

        status, _ = self.api("DELETE", "/api/federation-admin/fee-schedules/999/", token=self.fa_token)
        self.assertEqual(status, 404)

    def test_profiles(self):
        status, body = self.api("POST", "/api/federation-admin/profiles/", token=self.fa_token, data={
            "name": "Ghana Football Association", "country": "Ghana",
        })
        self.assertEqual(status, 201)
        self.assertEqual(body["default_fee"], "150.00")

        status, body = self.api("POST", "/api/federation-admin/profiles/", token=self.fa_token, data={
            "name": "GFA", "country": "ghana",
        })
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "A federation for ghana already exists")

    def test_admin_request_list(self):
        self.create_request()
        _, body = self.api("GET", "/api/federation-admin/requests/?status=pending", token=self.fa_token)
        self.assertEqual(len(body["requests"]), 1)
        status, _ = self.api("GET", "/api/federation-admin/requests/", token=self.token)
        self.assertEqual(status, 403)
