"""
Client-side token spend guard.

Advisory only: it decides whether to offer a gated action. The backend
re-checks and performs the spend atomically.
"""
from typing import Dict, Optional
from sports_reels.core.token_costs import costs_for_role


class TokenGuard:
    """Cost lookups and affordability checks against a cached balance."""

    def __init__(self, role: Optional[str], balance: Optional[int] = None):
        self.role = role
        self.balance = balance

    @property
    def costs(self) -> Dict[str, int]:
        return costs_for_role(self.role)

    def get_cost(self, action: str) -> int:
        """Cost of an action, 0 when the role has no such action."""
        return self.costs.get(action, 0)

    def can_afford(self, action: str) -> bool:
        if self.balance is None:
            return False
        cost = self.costs.get(action)
        if not cost:
            return False
        return self.balance >= cost
