"""Report status state machine tests."""

import pytest

from ecopulse.reports.lifecycle import (
    STATUS_AFFORDANCES,
    VALID_TRANSITIONS,
    InvalidTransitionError,
    affordance_for,
    is_terminal,
    normalize_status,
    validate_transition,
)


class TestNormalizeStatus:
    @pytest.mark.parametrize("status", ["pending", "investigating", "verified", "resolved"])
    def test_known_statuses_pass_through(self, status):
        assert normalize_status(status) == status

    @pytest.mark.parametrize("status", [None, "", "closed", "PENDING", 0, {"status": "verified"}])
    def test_unknown_status_reads_as_pending(self, status):
        assert normalize_status(status) == "pending"


class TestAffordances:
    def test_every_status_has_affordance(self):
        assert set(STATUS_AFFORDANCES) == set(VALID_TRANSITIONS)

    def test_unknown_status_uses_pending_icon_and_color(self):
        assert affordance_for("archived") == STATUS_AFFORDANCES["pending"]
        assert affordance_for(None).icon == "clock"

    def test_verified_is_green(self):
        assert "green" in affordance_for("verified").color
        assert affordance_for("verified").icon == "check-circle"


class TestTransitions:
    def test_pending_to_investigating(self):
        validate_transition("pending", "investigating")

    @pytest.mark.parametrize("target", ["verified", "resolved"])
    def test_investigating_to_terminal(self, target):
        validate_transition("investigating", target)

    def test_cannot_skip_investigation(self):
        with pytest.raises(InvalidTransitionError, match="pending -> verified"):
            validate_transition("pending", "verified")

    @pytest.mark.parametrize("current", ["verified", "resolved"])
    def test_terminal_states_have_no_exit(self, current):
        assert is_terminal(current)
        with pytest.raises(InvalidTransitionError):
            validate_transition(current, "investigating")

    def test_unknown_current_status_behaves_as_pending(self):
        validate_transition("garbage", "investigating")
        with pytest.raises(InvalidTransitionError):
            validate_transition("garbage", "resolved")

    def test_invalid_transition_is_a_value_error(self):
        assert issubclass(InvalidTransitionError, ValueError)
