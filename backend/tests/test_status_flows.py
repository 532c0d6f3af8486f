"""
Tests for forward-only status flows.
"""

import unittest
from sports_reels.core.errors import InvalidTransitionError
from sports_reels.core.status import (
    COMPLIANCE_DOCUMENT_FLOW,
    EMBASSY_VERIFICATION_FLOW,
    FEDERATION_REQUEST_FLOW,
    SCOUTING_INQUIRY_FLOW,
    StatusFlow,
)

ALL_FLOWS = (
    EMBASSY_VERIFICATION_FLOW,
    COMPLIANCE_DOCUMENT_FLOW,
    SCOUTING_INQUIRY_FLOW,
    FEDERATION_REQUEST_FLOW,
)


class TestStatusFlow(unittest.TestCase):

    def test_declared_steps_advance(self):
        self.assertEqual(EMBASSY_VERIFICATION_FLOW.advance("pending", "under_review"), "under_review")
        self.assertEqual(EMBASSY_VERIFICATION_FLOW.advance("under_review", "approved"), "approved")

    def test_cannot_skip_review(self):
        with self.assertRaises(InvalidTransitionError) as ctx:
            EMBASSY_VERIFICATION_FLOW.advance("pending", "approved")
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(ctx.exception.to_dict()["current_status"], "pending")

    def test_cannot_repeat_or_go_back(self):
        for current, target in (("under_review", "under_review"), ("under_review", "pending")):
            with self.subTest(current=current, target=target):
                with self.assertRaises(InvalidTransitionError):
                    EMBASSY_VERIFICATION_FLOW.advance(current, target)

    def test_terminal_states(self):
        for state in ("approved", "rejected"):
            self.assertTrue(EMBASSY_VERIFICATION_FLOW.is_terminal(state))
        self.assertTrue(SCOUTING_INQUIRY_FLOW.is_terminal("closed"))
        self.assertFalse(FEDERATION_REQUEST_FLOW.is_terminal("processing"))

    def test_unknown_target(self):
        with self.assertRaises(InvalidTransitionError):
            COMPLIANCE_DOCUMENT_FLOW.advance("draft", "archived")

    def test_every_step_increases_rank(self):
        for flow in ALL_FLOWS:
            for state, targets in flow.transitions.items():
                for target in targets:
                    with self.subTest(flow=flow.name, step=f"{state}->{target}"):
                        self.assertGreater(flow.ranks[target], flow.ranks[state])

    def test_cycles_are_rejected(self):
        with self.assertRaises(ValueError):
            StatusFlow("loop", {"a": ["b"], "b": ["a"]})


if __name__ == "__main__":
    unittest.main()
