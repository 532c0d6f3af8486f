"""
Tests for scouting inquiries and their message threads.
"""

from sports_reels.db.models.tokens import TokenBalance
from tests.base import ApiTestCase


class TestInquiries(ApiTestCase):

    def setUp(self):
        self.director, self.token = self.make_team_user()
        self.scout, self.scout_token = self.make_user("scout@agency.test", "scout")
        self.player = self.make_player(self.director.team, current_club_name="Lagos City FC",
                                       schengen_score=64, asia_score=50)

    def open_inquiry(self, **data):
        payload = {"player_id": str(self.player.id), "buying_club_name": "Hamburg SV"}
        payload.update(data)
        return self.api("POST", "/api/scouting/inquiries/", token=self.scout_token, data=payload)

    def advance(self, inquiry_id, status, token=None):
        return self.api(
            "PATCH", f"/api/scouting/inquiries/{inquiry_id}/", token=token or self.token, data={"status": status},
        )

    def test_open_inquiry_defaults(self):
        status, body = self.open_inquiry(message="Interested in a loan")

        self.assertEqual(status, 201)
        self.assertEqual(body["status"], "inquiry")
        self.assertEqual(body["selling_club_name"], "Lagos City FC")
        self.assertEqual(body["compliance_score"], 57.0)
        self.assertEqual(body["created_by"], self.scout.id)

    def test_buying_club_required_without_team(self):
        status, body = self.open_inquiry(buying_club_name="")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'buying_club_name' is required")

    def test_team_club_is_the_default_buyer(self):
        buyer, buyer_token = self.make_team_user("buyer@club.test", club="Cairo United")
        status, body = self.api("POST", "/api/scouting/inquiries/", token=buyer_token, data={
            "player_id": str(self.player.id),
        })
        self.assertEqual(status, 201)
        self.assertEqual(body["buying_club_name"], "Cairo United")

    def test_visibility(self):
        _, inquiry = self.open_inquiry()
        _, rival_token = self.make_team_user("rival@club.test", club="Cairo United")

        _, body = self.api("GET", "/api/scouting/inquiries/", token=self.token)
        self.assertEqual([i["id"] for i in body["inquiries"]], [inquiry["id"]])
        status, _ = self.api("GET", f"/api/scouting/inquiries/{inquiry['id']}/", token=rival_token)
        self.assertEqual(status, 404)

    def test_status_moves_forward_only(self):
        _, inquiry = self.open_inquiry()

        status, body = self.advance(inquiry["id"], "due_diligence")
        self.assertEqual(status, 409)
        self.assertEqual(body["requested_status"], "due_diligence")

        for target in ("negotiation", "due_diligence", "closed"):
            status, body = self.advance(inquiry["id"], target)
            self.assertEqual(status, 200)
            self.assertEqual(body["status"], target)

        status, _ = self.advance(inquiry["id"], "negotiation")
        self.assertEqual(status, 409)

    def test_inquiry_can_close_early(self):
        _, inquiry = self.open_inquiry()
        status, body = self.advance(inquiry["id"], "closed", token=self.scout_token)
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "closed")

    def test_status_filter(self):
        _, inquiry = self.open_inquiry()
        self.open_inquiry(buying_club_name="Ajax")
        self.advance(inquiry["id"], "negotiation")

        _, body = self.api("GET", "/api/scouting/inquiries/?status=negotiation", token=self.token)

        self.assertEqual([i["id"] for i in body["inquiries"]], [inquiry["id"]])


class TestInquiryMessages(ApiTestCase):

    def setUp(self):
        self.director, self.token = self.make_team_user()
        self.scout, self.scout_token = self.make_user("scout@agency.test", "scout")
        self.player = self.make_player(self.director.team)
        _, inquiry = self.api("POST", "/api/scouting/inquiries/", token=self.scout_token, data={
            "player_id": str(self.player.id), "buying_club_name": "Hamburg SV",
        })
        self.path = f"/api/scouting/inquiries/{inquiry['id']}/messages/"
        self.detail_path = f"/api/scouting/inquiries/{inquiry['id']}/"

    def post(self, token, content):
        return self.api("POST", self.path, token=token, data={"content": content})

    def test_messages_are_charged_per_role(self):
        status, body = self.post(self.scout_token, "Is the player available in January?")
        self.assertEqual(status, 201)
        self.assertEqual(body["new_balance"], 48)

        status, body = self.post(self.token, "Yes, for the right fee.")
        self.assertEqual(status, 201)
        self.assertEqual(body["new_balance"], 47)

        _, thread = self.api("GET", self.path, token=self.token)
        self.assertEqual(
            [m["content"] for m in thread["messages"]],
            ["Is the player available in January?", "Yes, for the right fee."],
        )

    def test_unaffordable_message_is_not_stored(self):
        TokenBalance.objects.filter(user=self.scout).update(balance=1)

        status, body = self.post(self.scout_token, "Hello")

        self.assertEqual(status, 400)
        self.assertTrue(body["needs_purchase"])
        _, thread = self.api("GET", self.path, token=self.token)
        self.assertEqual(thread["messages"], [])

    def test_empty_message(self):
        status, body = self.post(self.scout_token, "   ")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'content' is required")

    def test_closed_inquiry_rejects_messages(self):
        self.api("PATCH", self.detail_path, token=self.token, data={"status": "closed"})
        status, body = self.post(self.scout_token, "Any update?")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "Inquiry is closed")
