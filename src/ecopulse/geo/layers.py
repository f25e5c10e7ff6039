"""Map layer selection and severity colouring."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from ecopulse.taxonomy import DATA_CATEGORIES

ALL_LAYERS = "all"

SEVERITY_COLORS: dict[str, str] = {
    "critical": "#ef4444",
    "high": "#f59e0b",
    "medium": "#eab308",
    "low": "#10b981",
}
FALLBACK_COLOR = "#6b7280"

_LAYER_LABELS: dict[str, str] = {
    "deforestation": "Deforestation",
    "air_quality": "Air Quality",
    "water_quality": "Water Quality",
    "temperature": "Temperature",
}

LAYER_OPTIONS: list[dict[str, str]] = [
    {"id": ALL_LAYERS, "label": "All Data"},
    *({"id": category, "label": _LAYER_LABELS[category]} for category in DATA_CATEGORIES),
]

T = TypeVar("T")


def color_for(severity: object) -> str:
    """Marker colour for a severity; unknown values get the neutral gray."""
    if isinstance(severity, str):
        return SEVERITY_COLORS.get(severity, FALLBACK_COLOR)
    return FALLBACK_COLOR


class LayerSelection:
    """The set of active layer keys, starting from ``{"all"}``.

    ``all`` and specific categories are mutually exclusive. Turning the last
    category off leaves the set empty: nothing is visible until the user
    picks a layer again.
    """

    def __init__(self, active: Iterable[str] | None = None) -> None:
        self._active: set[str] = set(active) if active is not None else {ALL_LAYERS}
        if ALL_LAYERS in self._active:
            self._active = {ALL_LAYERS}

    @property
    def active(self) -> frozenset[str]:
        return frozenset(self._active)

    def toggle(self, key: str) -> frozenset[str]:
        """Flip one layer key and return the new active set."""
        if key == ALL_LAYERS:
            self._active = {ALL_LAYERS}
        else:
            self._active.discard(ALL_LAYERS)
            if key in self._active:
                self._active.remove(key)
            else:
                self._active.add(key)
        return self.active

    def is_visible(self, category: object) -> bool:
        return ALL_LAYERS in self._active or category in self._active

    def __repr__(self) -> str:
        return f"LayerSelection({sorted(self._active)!r})"


def filter_visible(
    records: Iterable[T],
    active: Iterable[str],
    category_of: Any = None,  # noqa: ANN401
) -> list[T]:
    """Return the records visible under ``active``.

    ``category_of`` extracts the category; by default records are mappings
    carrying ``data_type`` or objects with a ``category`` attribute.
    """
    active = set(active)
    if ALL_LAYERS in active:
        return list(records)

    if category_of is None:
        category_of = _default_category
    return [record for record in records if category_of(record) in active]


def _default_category(record: Any) -> object:  # noqa: ANN401
    if isinstance(record, Mapping):
        return record.get("data_type")
    return getattr(record, "category", None)
