"""Community report lifecycle: status state machine and display affordances.

State progression: pending -> investigating -> verified | resolved
``verified`` and ``resolved`` are terminal. Unknown stored statuses are read
as ``pending``; they are never rejected or left undefined.
"""

from __future__ import annotations

from dataclasses import dataclass

from ecopulse.taxonomy import DEFAULT_STATUS, REPORT_STATUSES

VALID_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["investigating"],
    "investigating": ["verified", "resolved"],
    "verified": [],
    "resolved": [],
}


class InvalidTransitionError(ValueError):
    """A moderation action asked for a move the state machine does not allow."""


@dataclass(frozen=True)
class StatusAffordance:
    """Icon and colour classes the dashboard renders for a status."""

    icon: str
    color: str


STATUS_AFFORDANCES: dict[str, StatusAffordance] = {
    "pending": StatusAffordance("clock", "bg-yellow-500/20 text-yellow-300 border-yellow-500/30"),
    "investigating": StatusAffordance("alert-circle", "bg-blue-500/20 text-blue-300 border-blue-500/30"),
    "verified": StatusAffordance("check-circle", "bg-green-500/20 text-green-300 border-green-500/30"),
    "resolved": StatusAffordance("check-circle", "bg-gray-500/20 text-gray-300 border-gray-500/30"),
}


def normalize_status(value: object) -> str:
    """Coerce a stored status to one of the four known values."""
    if isinstance(value, str) and value in REPORT_STATUSES:
        return value
    return DEFAULT_STATUS


def affordance_for(status: object) -> StatusAffordance:
    return STATUS_AFFORDANCES[normalize_status(status)]


def is_terminal(status: object) -> bool:
    return not VALID_TRANSITIONS[normalize_status(status)]


def validate_transition(current_status: object, target_status: str) -> None:
    """Validate a state transition. Raises InvalidTransitionError if invalid."""
    current = normalize_status(current_status)
    valid = VALID_TRANSITIONS[current]
    if target_status not in valid:
        raise InvalidTransitionError(
            f"Invalid transition: {current} -> {target_status}. "
            f"Valid transitions: {valid}"
        )
