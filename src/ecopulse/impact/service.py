"""Impact score service.

The score is derived from the append-only ``user_actions`` ledger on every
read. ``user_profiles.total_impact_score`` is only a cache: it is written by
``reconcile_profile_score`` when it drifted from the ledger, never
incremented on its own.

The read endpoints never fail on store errors. An unreadable ledger scores
0, an unreadable or unwritable profile is replaced by an unsaved default,
and a failed cache refresh is logged and retried on the next read.
"""

from __future__ import annotations

import logging

from ecopulse.impact.achievements import evaluate_achievements, sum_impact
from ecopulse.impact.schemas import (
    AchievementResponse,
    ActionResponse,
    ImpactSummaryResponse,
    ProfileResponse,
)
from ecopulse.store.base import RecordStore, Row, StoreError
from ecopulse.taxonomy import DEFAULT_ROLE, USER_ACTIONS, USER_PROFILES, USER_ROLES

logger = logging.getLogger(__name__)

ACTION_ICONS: dict[str, str] = {
    "report_submitted": "map-pin",
    "data_verified": "award",
    "tree_planted": "activity",
    "cleanup_attended": "target",
}
DEFAULT_ACTION_ICON = "activity"


def icon_for_action(action_type: object) -> str:
    if isinstance(action_type, str):
        return ACTION_ICONS.get(action_type, DEFAULT_ACTION_ICON)
    return DEFAULT_ACTION_ICON


def _default_profile(user_id: str) -> Row:
    return {"id": user_id, "role": DEFAULT_ROLE, "total_impact_score": 0}


async def get_or_create_profile(store: RecordStore, user_id: str) -> Row:
    """Get the user's profile, creating it with score 0 and role citizen if absent.

    If the store cannot be read or written, an unsaved default profile is
    returned and creation is retried on the next call.
    """
    try:
        rows = await store.select(USER_PROFILES, filters={"id": user_id}, limit=1)
    except StoreError:
        logger.warning("Profile read failed for user %s", user_id, exc_info=True)
        return _default_profile(user_id)
    if rows:
        return rows[0]

    try:
        profile = await store.insert(USER_PROFILES, _default_profile(user_id))
    except StoreError:
        logger.warning("Profile creation failed for user %s", user_id, exc_info=True)
        return _default_profile(user_id)
    logger.info("Created profile for user %s", user_id)
    return profile


async def fetch_user_actions(store: RecordStore, user_id: str, limit: int | None = None) -> list[Row]:
    """The user's ledger rows, newest first. Raises StoreError."""
    return await store.select(
        USER_ACTIONS,
        filters={"user_id": user_id},
        order_by="created_at",
        ascending=False,
        limit=limit,
    )


async def _read_ledger(store: RecordStore, user_id: str) -> list[Row] | None:
    """Ledger rows, or None when the ledger cannot be read."""
    try:
        return await fetch_user_actions(store, user_id)
    except StoreError:
        logger.warning("Action ledger unavailable for user %s", user_id, exc_info=True)
        return None


async def compute_score(store: RecordStore, user_id: str) -> int:
    """Sum of the user's ledger impact scores, recomputed on every call.

    Lazily creates the profile first, so a brand-new user scores 0 and
    ends up with a profile row. An unreadable ledger scores 0.
    """
    await get_or_create_profile(store, user_id)
    return sum_impact(await _read_ledger(store, user_id) or [])


async def _sync_cached_score(store: RecordStore, profile: Row, score: int) -> Row:
    """Rewrite the cached score if it drifted; on write failure keep the ledger value in memory."""
    if int(profile.get("total_impact_score") or 0) == score:
        return profile
    logger.info(
        "Reconciling impact score for user %s: %s -> %s",
        profile["id"], profile.get("total_impact_score"), score,
    )
    try:
        return await store.update(USER_PROFILES, str(profile["id"]), {"total_impact_score": score})
    except StoreError:
        logger.warning("Cached score refresh failed for user %s", profile["id"], exc_info=True)
        return {**profile, "total_impact_score": score}


async def reconcile_profile_score(store: RecordStore, user_id: str) -> Row:
    """Refresh the cached ``total_impact_score`` from the ledger if it drifted.

    Raises StoreError if the ledger cannot be read, so an outage never
    overwrites the cache with 0.
    """
    profile = await get_or_create_profile(store, user_id)
    return await _sync_cached_score(store, profile, sum_impact(await fetch_user_actions(store, user_id)))


async def get_impact_summary(
    store: RecordStore,
    user_id: str,
    recent_limit: int = 10,
) -> ImpactSummaryResponse:
    """Profile, ledger-derived score, recent activity and achievements.

    If the ledger cannot be read the summary shows no actions, a score of 0
    and ``ledger_available=False``; the cached profile score is left as is.
    """
    profile = await get_or_create_profile(store, user_id)
    actions = await _read_ledger(store, user_id)
    ledger_available = actions is not None
    actions = actions or []
    score = sum_impact(actions)
    if ledger_available:
        profile = await _sync_cached_score(store, profile, score)

    return ImpactSummaryResponse(
        profile=ProfileResponse(
            id=str(profile["id"]),
            full_name=profile.get("full_name"),
            organization=profile.get("organization"),
            role=profile["role"] if profile.get("role") in USER_ROLES else DEFAULT_ROLE,
            regions_of_interest=profile.get("regions_of_interest") or [],
            notification_preferences=profile.get("notification_preferences") or {},
            total_impact_score=score,
        ),
        action_count=len(actions),
        ledger_available=ledger_available,
        recent_actions=[
            ActionResponse(
                id=str(action["id"]),
                action_type=action.get("action_type") or "",
                action_details=action.get("action_details") or {},
                impact_score=int(action.get("impact_score") or 0),
                icon=icon_for_action(action.get("action_type")),
                created_at=action.get("created_at"),
            )
            for action in actions[:recent_limit]
        ],
        achievements=[AchievementResponse(**a) for a in evaluate_achievements(actions, profile)],
    )
