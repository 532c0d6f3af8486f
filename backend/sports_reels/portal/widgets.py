"""
Display rules for portal badges and tables.
"""
from typing import Optional, Tuple
from sports_reels.core.token_costs import LOW_BALANCE_THRESHOLD

GREEN_SCORE = 60
YELLOW_SCORE = 35

VISA_STATUS_LABELS = {
    'green': 'Eligible',
    'yellow': 'Conditional',
    'red': 'Ineligible',
}

VERIFICATION_STATUS_LABELS = {
    'pending': 'Pending',
    'under_review': 'Under Review',
    'approved': 'Approved',
    'rejected': 'Rejected',
}

REVIEW_ACTIONS = ('approve', 'reject')


def token_badge_variant(balance: Optional[int]) -> str:
    """Badge style for the header token counter; a missing balance counts as 0."""
    if (balance or 0) < LOW_BALANCE_THRESHOLD:
        return 'destructive'
    return 'secondary'


def token_badge_text(balance: Optional[int]) -> str:
    return f"{balance or 0} tokens"


def visa_status(score: float) -> str:
    if score >= GREEN_SCORE:
        return 'green'
    if score >= YELLOW_SCORE:
        return 'yellow'
    return 'red'


def visa_status_badge(score: float) -> Tuple[str, str]:
    """(status, text) for an eligibility badge, e.g. ('green', '72% - Eligible')."""
    status = visa_status(score)
    return status, f"{score}% - {VISA_STATUS_LABELS[status]}"


def verification_status_label(status: str) -> str:
    return VERIFICATION_STATUS_LABELS.get(status, status)


def verification_actions(status: str) -> Tuple[str, ...]:
    """Row actions in the embassy table; only rows under review can be decided."""
    if status == 'under_review':
        return REVIEW_ACTIONS
    return ()
