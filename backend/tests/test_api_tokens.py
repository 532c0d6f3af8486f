"""
Tests for token balances, spending and pack purchases.
"""

from sports_reels.db.models.tokens import TokenBalance, TokenTransaction
from sports_reels.services import token_service
from tests.base import ApiTestCase


class TestBalance(ApiTestCase):

    def setUp(self):
        self.scout, self.token = self.make_user("scout@agency.test", "scout")

    def test_welcome_bonus_is_recorded_once(self):
        self.api("GET", "/api/tokens/balance/", token=self.token)
        status, body = self.api("GET", "/api/tokens/transactions/", token=self.token)

        self.assertEqual(status, 200)
        self.assertEqual(len(body["transactions"]), 1)
        self.assertEqual(body["transactions"][0]["action"], "welcome_bonus")
        self.assertEqual(body["transactions"][0]["balance_after"], 50)

    def test_costs_follow_role(self):
        _, body = self.api("GET", "/api/tokens/costs/", token=self.token)
        self.assertEqual(body["role"], "scout")
        self.assertEqual(body["costs"]["view_profile"], 2)
        self.assertNotIn("federation_letter_request", body["costs"])

        _, director_token = self.make_team_user()
        _, body = self.api("GET", "/api/tokens/costs/", token=director_token)
        self.assertEqual(body["costs"]["federation_letter_request"], 10)


class TestSpend(ApiTestCase):

    def setUp(self):
        self.scout, self.token = self.make_user("scout@agency.test", "scout")

    def spend(self, action, **extra):
        return self.api("POST", "/api/tokens/spend/", token=self.token, data=dict(action=action, **extra))

    def test_spend_debits_balance_and_ledger(self):
        status, body = self.spend("video_analysis")

        self.assertEqual(status, 200)
        self.assertEqual(body, {"success": True, "new_balance": 42, "cost": 8, "action": "video_analysis"})
        balance = TokenBalance.objects.get(user=self.scout)
        self.assertEqual(balance.lifetime_spent, 8)
        entry = TokenTransaction.objects.filter(user=self.scout).first()
        self.assertEqual(entry.amount, -8)
        self.assertEqual(entry.balance_after, 42)

    def test_action_outside_role_table(self):
        status, body = self.spend("federation_letter_request")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], 'Invalid action "federation_letter_request" for role "scout"')

    def test_missing_action(self):
        status, body = self.spend("")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'action' is required")

    def test_non_string_action(self):
        status, body = self.spend(7)
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'action' must be a string")

    def test_insufficient_balance_needs_purchase(self):
        TokenBalance.objects.filter(user=self.scout).update(balance=7)

        status, body = self.spend("video_analysis")

        self.assertEqual(status, 400)
        self.assertTrue(body["needs_purchase"])
        self.assertEqual(body["current_balance"], 7)
        self.assertEqual(body["required"], 8)
        self.assertEqual(TokenBalance.objects.get(user=self.scout).balance, 7)

    def test_balance_never_goes_negative(self):
        TokenBalance.objects.filter(user=self.scout).update(balance=3)

        results = [self.spend("view_profile")[0] for _ in range(3)]

        self.assertEqual(results, [200, 400, 400])
        self.assertEqual(TokenBalance.objects.get(user=self.scout).balance, 1)

    def test_user_without_balance(self):
        TokenBalance.objects.filter(user=self.scout).delete()
        status, body = self.spend("shortlist")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "No token balance found")

    def test_invalid_player_id(self):
        status, body = self.spend("shortlist", player_id="not-a-uuid")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "'player_id' must be a UUID")

    def test_refund(self):
        self.spend("video_analysis")
        new_balance = token_service.refund_tokens(self.scout, "video_analysis", 8)
        self.assertEqual(new_balance, 50)
        self.assertEqual(TokenBalance.objects.get(user=self.scout).lifetime_spent, 0)


class TestPurchase(ApiTestCase):

    def setUp(self):
        self.scout, self.token = self.make_user("scout@agency.test", "scout")

    def test_default_packs_are_seeded(self):
        status, body = self.api("GET", "/api/tokens/packs/", token=self.token)
        self.assertEqual(status, 200)
        self.assertEqual(
            [(p["name"], p["tokens"], p["price_cents"]) for p in body["packs"]],
            [("Starter", 50, 999), ("Standard", 100, 1799), ("Pro", 150, 2499), ("Enterprise", 200, 2999)],
        )

    def test_purchase_and_confirm(self):
        _, packs = self.api("GET", "/api/tokens/packs/", token=self.token)
        standard = next(p for p in packs["packs"] if p["name"] == "Standard")

        status, purchase = self.api("POST", "/api/tokens/purchase/", token=self.token, data={"pack_id": standard["id"]})
        self.assertEqual(status, 201)
        self.assertEqual(purchase["status"], "pending")

        path = f"/api/tokens/purchase/{purchase['id']}/confirm/"
        status, body = self.api("POST", path, token=self.token)
        self.assertEqual(status, 200)
        self.assertEqual(body["new_balance"], 150)
        self.assertEqual(body["purchase"]["status"], "completed")
        self.assertTrue(body["purchase"]["payment_reference"].startswith("SIM-"))

        status, body = self.api("POST", path, token=self.token)
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "Purchase already completed")

        _, history = self.api("GET", "/api/tokens/purchases/", token=self.token)
        self.assertEqual(len(history["purchases"]), 1)

    def test_unknown_pack(self):
        status, body = self.api("POST", "/api/tokens/purchase/", token=self.token, data={"pack_id": 9999})
        self.assertEqual(status, 404)
        self.assertEqual(body["error"], "Token pack not found")

    def test_other_users_cannot_confirm(self):
        pack = token_service.list_packs()[0]
        purchase = token_service.create_purchase(self.scout, pack.id)
        _, other_token = self.make_user("agent@agency.test", "agent")

        status, _ = self.api("POST", f"/api/tokens/purchase/{purchase.id}/confirm/", token=other_token)

        self.assertEqual(status, 404)
