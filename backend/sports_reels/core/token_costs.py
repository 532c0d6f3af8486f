"""
Static per-action token cost tables.

Shared by the backend (authoritative spend) and the portal client
(advisory spend guard).
"""
from typing import Dict, Optional

SCOUT_TOKEN_COSTS: Dict[str, int] = {
    'view_profile': 2,
    'shortlist': 1,
    'video_analysis': 8,
    'watch_video': 1,
    'contact_request': 2,
}

TEAM_TOKEN_COSTS: Dict[str, int] = {
    'video_analysis': 8,
    'scouting_messaging': 3,
    'transfer_report': 5,
    'federation_letter_request': 10,
}

ACTION_DESCRIPTIONS: Dict[str, str] = {
    'view_profile': 'Viewed player profile',
    'shortlist': 'Added player to shortlist',
    'video_analysis': 'AI video analysis',
    'watch_video': 'Watched player video',
    'contact_request': 'Sent contact request',
    'scouting_messaging': 'Sent scouting message',
    'transfer_report': 'Generated transfer report',
    'federation_letter_request': 'Requested federation letter',
}

SCOUT_ROLES = frozenset({'scout', 'agent'})

WELCOME_BONUS_TOKENS = 50
WELCOME_BONUS_MONTHS = 6
LOW_BALANCE_THRESHOLD = 10


def costs_for_role(role: Optional[str]) -> Dict[str, int]:
    """Return the cost table that applies to a role."""
    if role in SCOUT_ROLES:
        return SCOUT_TOKEN_COSTS
    return TEAM_TOKEN_COSTS


def cost_of(role: Optional[str], action: str) -> Optional[int]:
    """Cost of an action for a role, or None when the role cannot perform it."""
    return costs_for_role(role).get(action)


def messaging_action_for_role(role: Optional[str]) -> str:
    if role in SCOUT_ROLES:
        return 'contact_request'
    return 'scouting_messaging'
