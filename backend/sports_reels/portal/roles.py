"""
Role-based route tables for the portal.

The selected role only picks which table of pages is reachable. It carries
no security meaning: the backend enforces access on every API call.
"""
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple
from sports_reels.core.config import PORTAL_STATE_DIR
from sports_reels.core.logging import get_logger

logger = get_logger(__name__)

ROLE_STORAGE_KEY = 'sports-reels-role'
NOT_FOUND = 'NotFound'

# Reachable with or without a selected role
PUBLIC_ROUTES: Tuple[Tuple[str, str], ...] = (
    ('/shared/player/:token', 'SharedPlayerProfile'),
)

TOKEN_BADGE_ROLES = frozenset({'scout', 'agent', 'sporting_director', 'coach'})

ROLE_DISPLAY_NAMES: Dict[str, str] = {
    'sporting_director': 'Sporting Director',
    'legal': 'Legal Team',
    'scout': 'Scout',
    'agent': 'Agent',
    'coach': 'Coach',
    'admin': 'Administrator',
    'embassy': 'Embassy Official',
    'federation_admin': 'Federation Administrator',
}


@dataclass(frozen=True)
class RouteMatch:
    page: str
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.page != NOT_FOUND


def match_path(pattern: str, path: str) -> Optional[Dict[str, str]]:
    """
    Match a path against a pattern with ``:name`` segments.

    Returns the captured parameters, or None when the path does not match.
    Trailing slashes and query strings are ignored.
    """
    path = path.split('?', 1)[0]
    pattern_parts = [p for p in pattern.strip('/').split('/') if p]
    path_parts = [p for p in path.strip('/').split('/') if p]
    if len(pattern_parts) != len(path_parts):
        return None

    params = {}
    for expected, actual in zip(pattern_parts, path_parts):
        if expected.startswith(':'):
            params[expected[1:]] = actual
        elif expected != actual:
            return None
    return params


class RouteTable:
    """Ordered pattern -> page table; the first matching pattern wins."""

    def __init__(self, name: str, routes: Tuple[Tuple[str, str], ...]):
        self.name = name
        self.routes = routes

    def __repr__(self):
        return f"RouteTable({self.name!r})"

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(pattern for pattern, _ in self.routes)

    @property
    def pages(self) -> Tuple[str, ...]:
        return tuple(page for _, page in self.routes)

    def resolve(self, path: str) -> RouteMatch:
        for pattern, page in PUBLIC_ROUTES + self.routes:
            params = match_path(pattern, path)
            if params is not None:
                return RouteMatch(page, params)
        return RouteMatch(NOT_FOUND)


ADMIN_ROUTES = RouteTable('admin', (
    ('/', 'AdminDashboard'),
    ('/admin', 'AdminDashboard'),
    ('/admin/users', 'AdminUsers'),
    ('/admin/users/new', 'AdminUsers'),
    ('/admin/messages', 'AdminMessages'),
    ('/admin/payments', 'AdminPayments'),
    ('/admin/audit-logs', 'AdminAuditLogs'),
    ('/admin/gdpr', 'AdminGdpr'),
    ('/settings', 'Settings'),
))

TEAM_ROUTES = RouteTable('team', (
    ('/', 'Dashboard'),
    ('/players', 'Players'),
    ('/players/:id', 'PlayerProfile'),
    ('/videos', 'Videos'),
    ('/video-reels', 'VideoReels'),
    ('/reports', 'Reports'),
    ('/scouting', 'Scouting'),
    ('/embassy', 'Embassy'),
    ('/access', 'Access'),
    ('/messages', 'Messages'),
    ('/settings', 'Settings'),
    ('/invitation-letters', 'InvitationLetters'),
    ('/team-sheets', 'TeamSheets'),
    ('/federation-letters', 'FederationLetters'),
    ('/federation-admin', 'FederationAdmin'),
    ('/token-bank', 'TokenBank'),
))

SCOUT_ROUTES = RouteTable('scout', (
    ('/', 'ScoutDashboard'),
    ('/scout-dashboard', 'ScoutDashboard'),
    ('/scout/player/:id', 'PlayerProfile'),
    ('/video-reels', 'VideoReels'),
    ('/messages', 'Messages'),
    ('/token-bank', 'TokenBank'),
))

EMBASSY_ROUTES = RouteTable('embassy', (
    ('/', 'EmbassyDashboard'),
    ('/embassy/document/:id', 'EmbassyDocumentView'),
    ('/player/:id', 'PlayerProfile'),
))

FEDERATION_ADMIN_ROUTES = RouteTable('federation_admin', (
    ('/', 'FederationAdmin'),
    ('/federation-admin', 'FederationAdmin'),
    ('/settings', 'Settings'),
))

ROUTE_TABLES = (ADMIN_ROUTES, TEAM_ROUTES, SCOUT_ROUTES, EMBASSY_ROUTES, FEDERATION_ADMIN_ROUTES)


def route_table_for(role: Optional[str]) -> RouteTable:
    """Pick the route table for a role; unknown roles get the team table."""
    if role == 'admin':
        return ADMIN_ROUTES
    if role == 'embassy':
        return EMBASSY_ROUTES
    if role == 'scout' or role == 'agent':
        return SCOUT_ROUTES
    if role == 'federation_admin':
        return FEDERATION_ADMIN_ROUTES
    return TEAM_ROUTES


def resolve(role: Optional[str], path: str) -> RouteMatch:
    return route_table_for(role).resolve(path)


def shows_token_balance(role: Optional[str]) -> bool:
    return role in TOKEN_BADGE_ROLES


def role_display_name(role: Optional[str]) -> str:
    return ROLE_DISPLAY_NAMES.get(role or '', 'User')


class RoleSelection:
    """
    Locally persisted role choice.

    Stored as one key in a small JSON state file so other portal state can
    live beside it.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else Path(PORTAL_STATE_DIR) / 'state.json'

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable portal state file {self.path}")
            return {}
        return state if isinstance(state, dict) else {}

    def _write(self, state: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix('.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(state, f)
        os.replace(tmp_path, self.path)

    def get(self) -> Optional[str]:
        return self._read().get(ROLE_STORAGE_KEY) or None

    def select(self, role: str):
        state = self._read()
        state[ROLE_STORAGE_KEY] = role
        self._write(state)
        logger.info(f"Portal role set to {role}")

    def clear(self):
        state = self._read()
        if state.pop(ROLE_STORAGE_KEY, None) is not None:
            self._write(state)

    def route_table(self) -> Optional[RouteTable]:
        """Active table, or None when no role has been picked yet."""
        role = self.get()
        return route_table_for(role) if role else None
