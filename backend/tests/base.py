"""
Shared fixtures for API tests.
"""

import json
from django.test import Client, TestCase
from sports_reels.account.services.auth_service import create_user
from sports_reels.db.models.player import Player

PASSWORD = "Str0ng-Pass!23"


class ApiTestCase(TestCase):
    """TestCase with JSON helpers and per-role accounts."""

    def make_user(self, email, role, **kwargs):
        user, tokens = create_user(email, PASSWORD, role=role, **kwargs)
        return user, tokens["access"]

    def make_team_user(self, email="director@club.test", role="sporting_director", club="Lagos City FC",
                       league_band=2):
        return self.make_user(email, role, team={"name": club, "country": "Nigeria", "league_band": league_band})

    def make_player(self, team, **fields):
        defaults = {"first_name": "Kofi", "last_name": "Mensah", "nationality": "Ghana"}
        defaults.update(fields)
        player = Player(team=team, **defaults)
        player.refresh_overall_score()
        player.save()
        return player

    def api(self, method, path, token=None, data=None, **extra):
        """Call the API with a Bearer token and a JSON body; returns (status, payload)."""
        client = Client()
        if token:
            extra["HTTP_AUTHORIZATION"] = f"Bearer {token}"
        body = json.dumps(data) if data is not None else ""
        response = getattr(client, method.lower())(path, data=body, content_type="application/json", **extra)
        return response.status_code, response.json()
