"""Closed vocabularies shared by the store schema and every component.

Values are the exact strings stored in the record store. Lookups keyed by
these strings always go through a helper with an explicit fallback, since
rows written by other clients may carry values outside these sets.
"""

from __future__ import annotations

SEVERITIES: tuple[str, ...] = ("low", "medium", "high", "critical")
CRITICAL = "critical"

REPORT_TYPES: tuple[str, ...] = ("pollution", "deforestation", "wildlife", "water", "other")

REPORT_STATUSES: tuple[str, ...] = ("pending", "investigating", "verified", "resolved")
DEFAULT_STATUS = "pending"

USER_ROLES: tuple[str, ...] = ("researcher", "activist", "policy_maker", "citizen")
DEFAULT_ROLE = "citizen"

# Environmental data categories exposed as map layers.
DATA_CATEGORIES: tuple[str, ...] = ("deforestation", "air_quality", "water_quality", "temperature")

ACTION_REPORT_SUBMITTED = "report_submitted"

# Collection names issued to the record store.
ENVIRONMENTAL_DATA = "environmental_data"
COMMUNITY_REPORTS = "community_reports"
PREDICTIONS = "predictions"
USER_ACTIONS = "user_actions"
USER_PROFILES = "user_profiles"


def severity_rank(value: object) -> int:
    """Sort key: critical > high > medium > low > anything else (0)."""
    if isinstance(value, str) and value in SEVERITIES:
        return SEVERITIES.index(value) + 1
    return 0
