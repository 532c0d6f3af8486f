"""
Tests for the portal API client against a fake API server.
"""

import unittest
from aiohttp import test_utils, web
from sports_reels.portal.client import (
    BALANCE_PATH,
    TRANSACTIONS_PATH,
    InsufficientTokensError,
    PortalClient,
    PortalError,
    UploadError,
)


class FakeApi:
    """Records every call and answers like the platform API."""

    def __init__(self):
        self.calls = []
        self.headers = []
        self.balance = 20
        self.reject_spend = False
        self.fail_request_url = False
        self.malformed_ticket = False
        self.fail_put = False
        self.fail_create = False
        self.stored = {}
        self.created = []

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/api/auth/login/", self.login)
        app.router.add_post("/api/logout/", self.logout)
        app.router.add_post("/api/uploads/request-url/", self.request_url)
        app.router.add_put("/storage/{path:.*}", self.storage_put)
        app.router.add_post("/api/videos/", self.create_video)
        app.router.add_get("/api/tokens/balance/", self.get_balance)
        app.router.add_get("/api/tokens/transactions/", self.get_transactions)
        app.router.add_post("/api/tokens/spend/", self.spend)
        app.router.add_get("/api/dashboard/stats/", self.dashboard_stats)
        app.router.add_get("/api/embassy/verifications/", self.verifications)
        return app

    def _record(self, request):
        self.calls.append((request.method, request.path))
        self.headers.append(dict(request.headers))

    def count(self, method, path):
        return self.calls.count((method, path))

    async def login(self, request):
        self._record(request)
        data = await request.json()
        if data["password"] != "Str0ng-Pass!23":
            return web.json_response({"error": "Invalid credentials"}, status=401)
        return web.json_response({
            "message": "Login successful",
            "user": {"id": 1, "email": data["email"], "role": "scout"},
            "access": "access-token",
            "refresh": "refresh-token",
        })

    async def logout(self, request):
        self._record(request)
        return web.json_response({"message": "Logged out"})

    async def request_url(self, request):
        self._record(request)
        if self.fail_request_url:
            return web.json_response({"error": "Unsupported video type"}, status=400)
        if self.malformed_ticket:
            return web.json_response({"url": "nope"})
        data = await request.json()
        object_path = f"uploads/1/abc_{data['name']}"
        return web.json_response({
            "upload_url": f"http://{request.host}/storage/{object_path}",
            "object_path": object_path,
            "file_name": data["name"],
            "expires_in": 900,
        })

    async def storage_put(self, request):
        self._record(request)
        if self.fail_put:
            return web.Response(status=500)
        self.stored[request.match_info["path"]] = (await request.read(), request.headers.get("Content-Type"))
        return web.Response(status=200)

    async def create_video(self, request):
        self._record(request)
        if self.fail_create:
            return web.json_response({"error": "'title' is required"}, status=400)
        data = await request.json()
        self.created.append(data)
        return web.json_response(dict(data, id="video-1"), status=201)

    async def get_balance(self, request):
        self._record(request)
        return web.json_response({"balance": self.balance, "lifetime_purchased": 0, "lifetime_spent": 0})

    async def get_transactions(self, request):
        self._record(request)
        return web.json_response({"transactions": []})

    async def spend(self, request):
        self._record(request)
        data = await request.json()
        if self.reject_spend:
            return web.json_response({
                "error": "Insufficient tokens",
                "needs_purchase": True,
                "current_balance": 1,
                "required": 2,
            }, status=400)
        self.balance -= 2
        return web.json_response({"success": True, "new_balance": self.balance, "cost": 2, "action": data["action"]})

    async def dashboard_stats(self, request):
        self._record(request)
        return web.json_response({
            "total_players": 4,
            "green_status": 1,
            "yellow_status": 1,
            "red_status": 1,
            "pending_verifications": 2,
            "active_inquiries": 0,
            "reports_generated": 3,
        })

    async def verifications(self, request):
        self._record(request)
        rows = [
            {"id": "v-1", "player_name": "Kofi Mensah", "embassy_country": "United Kingdom",
             "status": "pending", "verification_code": "SR-ABCDEFGH", "notes": ""},
            {"id": "v-2", "player_name": "Ama Boateng", "embassy_country": "United Kingdom",
             "status": "under_review", "verification_code": "SR-HJKLMNPQ", "notes": ""},
        ]
        status = request.query.get("status")
        return web.json_response({"verifications": [r for r in rows if not status or r["status"] == status]})


class PortalClientTestCase(unittest.IsolatedAsyncioTestCase):

    role = "sporting_director"

    async def asyncSetUp(self):
        self.api = FakeApi()
        self.server = test_utils.TestServer(self.api.app())
        await self.server.start_server()
        self.client = PortalClient(base_url=f"http://{self.server.host}:{self.server.port}", role=self.role)
        await self.client.__aenter__()

    async def asyncTearDown(self):
        await self.client.__aexit__(None, None, None)
        await self.server.close()


class TestVideoUpload(PortalClientTestCase):

    async def test_upload_creates_exactly_one_video(self):
        progress = []

        video = await self.client.upload_video(
            b"\x00\x01match-bytes",
            "final.mp4",
            metadata={"player_id": "p-1", "title": "Cup final", "minutes_played": 90},
            on_progress=progress.append,
        )

        self.assertEqual(progress, [10, 30, 100])
        self.assertEqual(self.api.count("POST", "/api/videos/"), 1)
        self.assertEqual(video["id"], "video-1")
        created = self.api.created[0]
        self.assertEqual(created["file_url"], "uploads/1/abc_final.mp4")
        self.assertEqual(created["source"], "manual")
        self.assertEqual(created["title"], "Cup final")
        self.assertEqual(self.api.stored["uploads/1/abc_final.mp4"], (b"\x00\x01match-bytes", "video/mp4"))

    async def test_phase_order(self):
        await self.client.upload_video(b"x", "a.mov", "video/quicktime", metadata={"title": "t"})
        self.assertEqual(self.api.calls, [
            ("POST", "/api/uploads/request-url/"),
            ("PUT", "/storage/uploads/1/abc_a.mov"),
            ("POST", "/api/videos/"),
        ])

    async def test_request_url_failure_aborts(self):
        self.api.fail_request_url = True
        progress = []

        with self.assertRaises(UploadError) as ctx:
            await self.client.upload_video(b"x", "a.exe", metadata={"title": "t"}, on_progress=progress.append)

        self.assertEqual(ctx.exception.title, "Upload failed")
        self.assertEqual(ctx.exception.description, "Unsupported video type")
        self.assertEqual(progress, [10])
        self.assertEqual(self.api.count("POST", "/api/videos/"), 0)
        self.assertEqual(self.api.stored, {})

    async def test_storage_failure_aborts(self):
        self.api.fail_put = True

        with self.assertRaises(UploadError):
            await self.client.upload_video(b"x", "a.mp4", metadata={"title": "t"})

        self.assertEqual(self.api.count("POST", "/api/videos/"), 0)

    async def test_create_failure_raises_upload_error(self):
        self.api.fail_create = True

        with self.assertRaises(UploadError) as ctx:
            await self.client.upload_video(b"x", "a.mp4", metadata={})

        self.assertEqual(ctx.exception.status, 400)

    async def test_malformed_upload_ticket_aborts(self):
        self.api.malformed_ticket = True
        progress = []

        with self.assertRaises(UploadError) as ctx:
            await self.client.upload_video(b"x", "a.mp4", metadata={"title": "t"}, on_progress=progress.append)

        self.assertEqual(ctx.exception.title, "Upload failed")
        self.assertEqual(progress, [10])
        self.assertEqual(self.api.count("POST", "/api/videos/"), 0)

    async def test_unreachable_api_raises_upload_error(self):
        async with PortalClient(base_url="http://127.0.0.1:1", role=self.role, timeout=5) as offline:
            with self.assertRaises(UploadError) as ctx:
                await offline.upload_video(b"x", "a.mp4", metadata={"title": "t"})

        self.assertEqual(ctx.exception.title, "Upload failed")
        self.assertTrue(ctx.exception.description.startswith("Failed to get upload URL"))


class TestTokenSpend(PortalClientTestCase):

    role = "scout"

    async def test_spend_invalidates_balance_and_transactions(self):
        await self.client.get(TRANSACTIONS_PATH)
        self.assertEqual((await self.client.token_balance()).balance, 20)

        result = await self.client.spend("view_profile", player_id="p-1")

        self.assertEqual(result.new_balance, 18)
        self.assertNotIn(BALANCE_PATH, self.client.cache)
        self.assertNotIn(TRANSACTIONS_PATH, self.client.cache)
        self.assertEqual((await self.client.token_balance()).balance, 18)
        self.assertEqual(self.api.count("GET", BALANCE_PATH), 2)

    async def test_cached_balance_is_reused(self):
        await self.client.token_balance()
        await self.client.token_balance()
        self.assertEqual(self.api.count("GET", BALANCE_PATH), 1)

    async def test_guard_blocks_before_calling_server(self):
        self.api.balance = 7

        with self.assertRaises(InsufficientTokensError) as ctx:
            await self.client.spend("video_analysis")

        self.assertEqual(ctx.exception.title, "Insufficient Tokens")
        self.assertEqual(self.api.count("POST", "/api/tokens/spend/"), 0)

    async def test_unknown_action_is_blocked(self):
        with self.assertRaises(PortalError) as ctx:
            await self.client.spend("federation_letter_request")
        self.assertNotIsInstance(ctx.exception, InsufficientTokensError)
        self.assertEqual(ctx.exception.title, "Action unavailable")
        self.assertEqual(self.api.count("POST", "/api/tokens/spend/"), 0)

    async def test_server_rejection_still_invalidates(self):
        """Stale cached balance allowed the attempt; the server decides."""
        self.api.reject_spend = True
        await self.client.token_balance()

        with self.assertRaises(InsufficientTokensError) as ctx:
            await self.client.spend("view_profile")

        self.assertTrue(ctx.exception.payload["needs_purchase"])
        self.assertNotIn(BALANCE_PATH, self.client.cache)


class TestReads(PortalClientTestCase):

    async def test_dashboard_stats(self):
        stats = await self.client.dashboard_stats()
        self.assertEqual(stats.total_players, 4)
        self.assertEqual(stats.reports_generated, 3)

    async def test_verification_rows_carry_actions(self):
        rows = await self.client.verifications()

        self.assertEqual([r.status_label for r in rows], ["Pending", "Under Review"])
        self.assertEqual(rows[0].actions, ())
        self.assertEqual(rows[1].actions, ("approve", "reject"))

        under_review = await self.client.verifications(status="under_review")
        self.assertEqual([r.id for r in under_review], ["v-2"])


class TestLogin(PortalClientTestCase):

    async def test_invalid_credentials(self):
        with self.assertRaises(PortalError) as ctx:
            await self.client.login("scout@example.com", "wrong")
        self.assertEqual(ctx.exception.title, "Invalid credentials")
        self.assertIsNone(self.client.access_token)

    async def test_demo_role_header_until_login(self):
        await self.client.token_balance()
        self.assertEqual(self.api.headers[-1].get("X-User-Role"), "sporting_director")

        user = await self.client.login("scout@example.com", "Str0ng-Pass!23")

        self.assertEqual(user["role"], "scout")
        self.assertEqual(self.client.role, "scout")
        self.assertEqual(len(self.client.cache), 0)
        await self.client.token_balance()
        self.assertEqual(self.api.headers[-1].get("Authorization"), "Bearer access-token")
        self.assertNotIn("X-User-Role", self.api.headers[-1])

    async def test_logout_drops_tokens(self):
        await self.client.login("scout@example.com", "Str0ng-Pass!23")
        await self.client.logout()
        self.assertIsNone(self.client.access_token)
        self.assertEqual(self.api.count("POST", "/api/logout/"), 1)


if __name__ == "__main__":
    unittest.main()
