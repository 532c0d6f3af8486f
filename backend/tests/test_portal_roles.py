"""
Tests for portal route tables and the persisted role selection.
"""

import json
import tempfile
import unittest
from pathlib import Path
from sports_reels.portal import roles


class TestRouteTableSelection(unittest.TestCase):
    """Each role gets exactly one table through the fixed chain."""

    def test_roles_map_to_tables(self):
        expected = {
            "admin": roles.ADMIN_ROUTES,
            "embassy": roles.EMBASSY_ROUTES,
            "scout": roles.SCOUT_ROUTES,
            "agent": roles.SCOUT_ROUTES,
            "federation_admin": roles.FEDERATION_ADMIN_ROUTES,
            "sporting_director": roles.TEAM_ROUTES,
            "legal": roles.TEAM_ROUTES,
            "coach": roles.TEAM_ROUTES,
        }
        for role, table in expected.items():
            with self.subTest(role=role):
                self.assertIs(roles.route_table_for(role), table)

    def test_unknown_or_missing_role_falls_through_to_team(self):
        self.assertIs(roles.route_table_for("goalkeeper"), roles.TEAM_ROUTES)
        self.assertIs(roles.route_table_for(None), roles.TEAM_ROUTES)
        self.assertIs(roles.route_table_for(""), roles.TEAM_ROUTES)

    def test_role_only_reaches_its_own_pages(self):
        """Patterns unique to other tables resolve to NotFound."""
        for table in roles.ROUTE_TABLES:
            own = set(table.patterns)
            for other in roles.ROUTE_TABLES:
                if other is table:
                    continue
                for pattern in other.patterns:
                    if pattern in own:
                        continue
                    path = pattern.replace(":id", "abc")
                    with self.subTest(table=table.name, path=path):
                        self.assertFalse(table.resolve(path).found)

    def test_every_own_pattern_resolves(self):
        for table in roles.ROUTE_TABLES:
            for pattern, page in table.routes:
                path = pattern.replace(":id", "abc")
                with self.subTest(table=table.name, path=path):
                    match = table.resolve(path)
                    self.assertEqual(match.page, page)


class TestRouteMatching(unittest.TestCase):

    def test_params_are_captured(self):
        match = roles.resolve("sporting_director", "/players/4f1c")
        self.assertEqual(match.page, "PlayerProfile")
        self.assertEqual(match.params, {"id": "4f1c"})

    def test_scout_profile_path(self):
        match = roles.resolve("agent", "/scout/player/77")
        self.assertEqual(match.page, "PlayerProfile")
        self.assertEqual(match.params, {"id": "77"})

    def test_trailing_slash_and_query_ignored(self):
        self.assertEqual(roles.resolve("admin", "/admin/users/?page=2").page, "AdminUsers")

    def test_unmatched_path_is_not_found(self):
        match = roles.resolve("embassy", "/players")
        self.assertEqual(match.page, roles.NOT_FOUND)
        self.assertFalse(match.found)

    def test_extra_segments_do_not_match(self):
        self.assertIsNone(roles.match_path("/players/:id", "/players/1/videos"))

    def test_shared_profile_is_public_for_every_role(self):
        for role in ("admin", "embassy", "scout", "federation_admin", "coach"):
            with self.subTest(role=role):
                match = roles.resolve(role, "/shared/player/tok-123")
                self.assertEqual(match.page, "SharedPlayerProfile")
                self.assertEqual(match.params, {"token": "tok-123"})


class TestTokenBadgeRoles(unittest.TestCase):

    def test_badge_roles(self):
        for role in ("scout", "agent", "sporting_director", "coach"):
            self.assertTrue(roles.shows_token_balance(role), role)
        for role in ("legal", "admin", "embassy", "federation_admin", None):
            self.assertFalse(roles.shows_token_balance(role), role)

    def test_display_names(self):
        self.assertEqual(roles.role_display_name("legal"), "Legal Team")
        self.assertEqual(roles.role_display_name("nobody"), "User")


class TestRoleSelection(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "portal" / "state.json"
        self.selection = roles.RoleSelection(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_no_selection_initially(self):
        self.assertIsNone(self.selection.get())
        self.assertIsNone(self.selection.route_table())

    def test_select_persists_under_storage_key(self):
        self.selection.select("embassy")

        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"sports-reels-role": "embassy"})
        self.assertEqual(roles.RoleSelection(self.path).get(), "embassy")
        self.assertIs(self.selection.route_table(), roles.EMBASSY_ROUTES)

    def test_clear_keeps_other_state(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"theme": "dark", "sports-reels-role": "scout"}))

        self.selection.clear()

        self.assertIsNone(self.selection.get())
        self.assertEqual(json.loads(self.path.read_text()), {"theme": "dark"})

    def test_corrupt_file_reads_as_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json")
        self.assertIsNone(self.selection.get())


if __name__ == "__main__":
    unittest.main()
