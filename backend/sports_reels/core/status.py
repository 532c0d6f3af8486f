"""
Forward-only status flows.

Each workflow status field (embassy verification, compliance document,
scouting inquiry, ...) is driven through a StatusFlow that knows the allowed
next states. Requests to move a record backwards, to repeat its current
state, or to leave a terminal state raise InvalidTransitionError.
"""
from typing import Dict, FrozenSet, Iterable, Tuple
from sports_reels.core.errors import InvalidTransitionError


class StatusFlow:
    """Allowed transitions for one status field."""

    def __init__(self, name: str, transitions: Dict[str, Iterable[str]]):
        self.name = name
        self.transitions: Dict[str, FrozenSet[str]] = {
            state: frozenset(targets) for state, targets in transitions.items()
        }
        states = set(self.transitions)
        for targets in self.transitions.values():
            states.update(targets)
        self.states: Tuple[str, ...] = tuple(sorted(states))
        self.ranks = self._compute_ranks()

    def _compute_ranks(self) -> Dict[str, int]:
        # Longest distance from an initial state; a cycle would never settle.
        ranks = {state: 0 for state in self.states}
        for _ in range(len(self.states)):
            changed = False
            for state, targets in self.transitions.items():
                for target in targets:
                    if ranks[target] < ranks[state] + 1:
                        ranks[target] = ranks[state] + 1
                        changed = True
            if not changed:
                return ranks
        raise ValueError(f"Status flow '{self.name}' contains a cycle")

    def next_states(self, current: str) -> FrozenSet[str]:
        return self.transitions.get(current, frozenset())

    def is_terminal(self, state: str) -> bool:
        return not self.next_states(state)

    def can_transition(self, current: str, target: str) -> bool:
        return target in self.next_states(current)

    def advance(self, current: str, target: str) -> str:
        """
        Validate a move from current to target.

        Returns:
            The target status

        Raises:
            InvalidTransitionError: if the move is not a declared forward step
        """
        if target not in self.ranks:
            raise InvalidTransitionError(self.name, current, target)
        if not self.can_transition(current, target):
            raise InvalidTransitionError(self.name, current, target)
        return target


EMBASSY_VERIFICATION_FLOW = StatusFlow('verification', {
    'pending': ['under_review'],
    'under_review': ['approved', 'rejected'],
})

COMPLIANCE_DOCUMENT_FLOW = StatusFlow('document', {
    'draft': ['submitted'],
    'submitted': ['verified', 'rejected'],
})

SCOUTING_INQUIRY_FLOW = StatusFlow('inquiry', {
    'inquiry': ['negotiation', 'closed'],
    'negotiation': ['due_diligence', 'closed'],
    'due_diligence': ['closed'],
})

COMPLIANCE_ORDER_FLOW = StatusFlow('order', {
    'pending_payment': ['paid'],
    'paid': ['completed'],
})

TOKEN_PURCHASE_FLOW = StatusFlow('purchase', {
    'pending': ['completed', 'failed'],
})

FEDERATION_REQUEST_FLOW = StatusFlow('federation request', {
    'pending': ['submitted', 'rejected'],
    'submitted': ['processing', 'rejected'],
    'processing': ['issued', 'rejected'],
})

PAYMENT_STATUS_FLOW = StatusFlow('payment', {
    'unpaid': ['paid'],
})
