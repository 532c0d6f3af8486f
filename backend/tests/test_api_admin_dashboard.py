"""
Tests for platform administration, dashboards and the health check.
"""

from unittest.mock import patch
from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from sports_reels.documents.services.storage import storage_service
from tests.base import ApiTestCase

User = get_user_model()


class TestAdministration(ApiTestCase):

    def setUp(self):
        self.admin, self.token = self.make_user("root@sportsreels.test", "admin")
        self.director, self.director_token = self.make_team_user()
        self.make_user("scout@agency.test", "scout")
        self.make_user("agent@agency.test", "agent")
        self.make_user("visa@embassy.test", "embassy", embassy_country="Germany")
        self.make_player(self.director.team)

    def test_stats(self):
        status, body = self.api("GET", "/api/admin/stats/", token=self.token)
        self.assertEqual(status, 200)
        self.assertEqual(body, {
            "total_users": 5,
            "total_teams": 1,
            "total_players": 1,
            "total_scouts": 2,
            "total_embassy_users": 1,
            "total_federation_users": 0,
        })

    def test_admin_only(self):
        for path in ("/api/admin/stats/", "/api/admin/users/", "/api/admin/audit-logs/",
                     "/api/admin/payments/", "/api/admin/fee-schedules/", "/api/admin/federations/"):
            with self.subTest(path=path):
                status, _ = self.api("GET", path, token=self.director_token)
                self.assertEqual(status, 403)

    def test_list_and_filter_users(self):
        _, body = self.api("GET", "/api/admin/users/", token=self.token)
        self.assertEqual(len(body["users"]), 5)

        _, body = self.api("GET", "/api/admin/users/?role=embassy", token=self.token)
        self.assertEqual([u["email"] for u in body["users"]], ["visa@embassy.test"])
        self.assertEqual(body["users"][0]["embassy_country"], "Germany")

    def test_create_user_follows_signup_rules(self):
        status, body = self.api("POST", "/api/admin/users/", token=self.token, data={
            "email": "desk@gfa.test", "password": "Str0ng-Pass!23", "role": "federation_admin",
        })
        self.assertEqual(status, 201)
        self.assertEqual(body["role"], "federation_admin")

        status, body = self.api("POST", "/api/admin/users/", token=self.token, data={
            "email": "desk@gfa.test", "password": "Str0ng-Pass!23",
        })
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "A user with this email already exists.")

        status, body = self.api("POST", "/api/admin/users/", token=self.token, data={"email": "x@y.test"})
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "Email and password are required")

    def test_delete_user(self):
        scout = User.objects.get(email="scout@agency.test")

        status, _ = self.api("DELETE", f"/api/admin/users/{scout.id}/", token=self.token)
        self.assertEqual(status, 200)
        self.assertFalse(User.objects.filter(id=scout.id).exists())

        status, body = self.api("DELETE", f"/api/admin/users/{self.admin.id}/", token=self.token)
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "You cannot delete your own account")

        status, _ = self.api("DELETE", "/api/admin/users/99999/", token=self.token)
        self.assertEqual(status, 404)

    def test_reset_password_token(self):
        status, body = self.api("POST", f"/api/admin/users/{self.director.id}/reset-password/", token=self.token)

        self.assertEqual(status, 200)
        self.assertEqual(body["user_id"], self.director.id)
        self.assertEqual(body["expires_in_hours"], 24)
        self.assertTrue(default_token_generator.check_token(self.director, body["token"]))

    def test_audit_logs(self):
        scout = User.objects.get(email="scout@agency.test")
        self.api("DELETE", f"/api/admin/users/{scout.id}/", token=self.token)

        status, body = self.api("GET", "/api/admin/audit-logs/?category=admin&limit=10", token=self.token)

        self.assertEqual(status, 200)
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["limit"], 10)
        self.assertEqual(body["offset"], 0)
        entry = body["logs"][0]
        self.assertEqual(entry["action"], "user_deleted")
        self.assertEqual(entry["severity"], "warning")
        self.assertEqual(entry["actor_id"], self.admin.id)

    def test_audit_log_category_must_be_known(self):
        status, body = self.api("GET", "/api/admin/audit-logs/?category=billing", token=self.token)
        self.assertEqual(status, 400)
        self.assertTrue(body["error"].startswith("'category' must be one of"))


class TestDashboard(ApiTestCase):

    def setUp(self):
        self.director, self.token = self.make_team_user()
        team = self.director.team
        self.make_player(team, first_name="Ama", last_name="Boateng", schengen_score=70)
        self.make_player(team, first_name="Yaw", last_name="Asante", schengen_score=40)
        self.make_player(team, first_name="Tunde", last_name="Bello", nationality="Nigeria", schengen_score=10)
        self.kofi = self.make_player(team)

    def test_status_buckets(self):
        status, body = self.api("GET", "/api/dashboard/stats/", token=self.token)

        self.assertEqual(status, 200)
        self.assertEqual(body, {
            "total_players": 4,
            "green_status": 1,
            "yellow_status": 1,
            "red_status": 1,
            "pending_verifications": 0,
            "active_inquiries": 0,
            "reports_generated": 0,
        })

    def test_stats_are_scoped_to_team(self):
        _, rival_token = self.make_team_user("rival@club.test", club="Cairo United")
        _, body = self.api("GET", "/api/dashboard/stats/", token=rival_token)
        self.assertEqual(body["total_players"], 0)

    def test_map_data(self):
        self.api("POST", "/api/federation-letters/", token=self.token, data={
            "player_id": str(self.kofi.id),
            "target_club_name": "Hamburg SV",
            "target_club_country": "Germany",
        })

        status, body = self.api("GET", "/api/dashboard/map-data/", token=self.token)

        self.assertEqual(status, 200)
        origins = {o["country"]: o for o in body["player_origins"]}
        self.assertEqual(sorted(origins), ["ghana", "nigeria"])
        self.assertEqual(origins["ghana"]["count"], 3)
        self.assertEqual(
            [p["name"] for p in origins["ghana"]["players"]],
            ["Yaw Asante", "Ama Boateng", "Kofi Mensah"],
        )
        self.assertEqual(body["transfer_destinations"], [{
            "from_country": "ghana",
            "to_country": "germany",
            "player_name": "Kofi Mensah",
            "player_id": str(self.kofi.id),
        }])


class TestHealth(ApiTestCase):

    @patch.object(storage_service, "check_health", return_value=True)
    def test_healthy(self, _check_health):
        status, body = self.api("GET", "/api/health/")

        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["services"]["database"]["status"], "healthy")
        self.assertEqual(body["services"]["storage"]["status"], "healthy")

    @patch.object(storage_service, "check_health", return_value=False)
    def test_missing_bucket_degrades(self, _check_health):
        status, body = self.api("GET", "/api/health/")
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "degraded")

    @patch.object(storage_service, "check_health", side_effect=ValueError("bad endpoint"))
    def test_storage_error_degrades(self, _check_health):
        status, body = self.api("GET", "/api/health/")
        self.assertEqual(status, 200)
        self.assertEqual(body["status"], "degraded")
        self.assertEqual(body["services"]["storage"]["status"], "unhealthy")
