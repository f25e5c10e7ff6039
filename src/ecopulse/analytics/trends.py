"""Day-bucketed trend statistics and histograms.

Pure functions over environmental rows. A record belongs to a day bucket
when the ISO date prefix of its ``recorded_at`` equals the bucket date;
no rolling 24h windows.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any

from ecopulse.taxonomy import CRITICAL, severity_rank


def recorded_date_prefix(value: Any) -> str:  # noqa: ANN401
    """ISO text of a ``recorded_at`` value, aware datetimes normalised to UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value if isinstance(value, str) else ""


def bucket_label(day: date) -> str:
    """Short chart label, e.g. ``Oct 18``."""
    return f"{day.strftime('%b')} {day.day}"


def build_trend(
    records: Iterable[Mapping[str, Any]],
    today: date,
    days: int = 7,
) -> list[dict[str, Any]]:
    """One bucket per calendar day, oldest first, ending at ``today``.

    Always returns exactly ``days`` buckets; empty days report zero counts.
    """
    prefixes = [
        (recorded_date_prefix(record.get("recorded_at")), record.get("severity_level"))
        for record in records
    ]

    buckets = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = day.isoformat()
        matching = [severity for prefix, severity in prefixes if prefix.startswith(key)]
        buckets.append({
            "date": key,
            "label": bucket_label(day),
            "total_count": len(matching),
            "critical_count": sum(1 for severity in matching if severity == CRITICAL),
        })
    return buckets


def histogram(records: Iterable[Mapping[str, Any]], field: str) -> dict[str, int]:
    """Count of records per value of ``field``; missing values count under ``unknown``."""
    return dict(Counter(str(record.get(field) or "unknown") for record in records))


def severity_histogram(records: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    """Severity counts, most severe first; unknown values last."""
    counts = histogram(records, "severity_level")
    return dict(sorted(counts.items(), key=lambda item: severity_rank(item[0]), reverse=True))


def category_histogram(records: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    return histogram(records, "data_type")
