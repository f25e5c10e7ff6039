"""Achievement definitions and evaluation.

Achievements are pure predicates over the action ledger and the profile,
re-evaluated on every read. Nothing is persisted, so an achievement is
earned exactly when the current ledger satisfies it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

ACTIVE_MONITOR_THRESHOLD = 5
CHAMPION_SCORE = 100


def sum_impact(actions: Iterable[Mapping[str, Any]]) -> int:
    """Total of ``impact_score`` over ledger rows (negative or missing count as 0)."""
    return sum(max(int(action.get("impact_score") or 0), 0) for action in actions)


@dataclass(frozen=True)
class AchievementContext:
    action_count: int
    total_score: int


@dataclass(frozen=True)
class Achievement:
    id: int
    slug: str
    name: str
    description: str
    icon: str
    predicate: Callable[[AchievementContext], bool]


def _never(_ctx: AchievementContext) -> bool:
    # "Dedicated" has no activity-span rule defined yet; it stays locked.
    return False


ACHIEVEMENTS: list[Achievement] = [
    Achievement(
        1, "first_report", "First Report",
        "Submitted your first environmental report", "map-pin",
        lambda ctx: ctx.action_count >= 1,
    ),
    Achievement(
        2, "active_monitor", "Active Monitor",
        "Submitted 5+ reports", "activity",
        lambda ctx: ctx.action_count >= ACTIVE_MONITOR_THRESHOLD,
    ),
    Achievement(
        3, "champion", "Champion",
        "Earned 100+ impact points", "award",
        lambda ctx: ctx.total_score >= CHAMPION_SCORE,
    ),
    Achievement(
        4, "dedicated", "Dedicated",
        "Active for 7+ days", "calendar",
        _never,
    ),
]


def evaluate_achievements(
    actions: Sequence[Mapping[str, Any]],
    profile: Mapping[str, Any] | None,
) -> list[dict[str, Any]]:
    """Evaluate every achievement, in definition order.

    The score comes from ``actions``; the profile's cached
    ``total_impact_score`` is ignored.
    """
    ctx = AchievementContext(action_count=len(actions), total_score=sum_impact(actions))
    return [
        {
            "id": achievement.id,
            "slug": achievement.slug,
            "name": achievement.name,
            "description": achievement.description,
            "icon": achievement.icon,
            "earned": achievement.predicate(ctx),
        }
        for achievement in ACHIEVEMENTS
    ]
