"""Merge persisted overrides and lookup suggestions into an InputModel."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from roicalc.models.parameters import PARAMETERS, InputModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeEntry:
    """Records how one field was resolved during a merge."""

    field_name: str
    base_value: Optional[float]
    incoming_value: Any
    chosen_value: Optional[float]
    resolution: str


def _as_number(value: Any) -> Optional[float]:
    """Finite float, or None when the value cannot be used."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def merge_inputs(
    defaults: Mapping[str, float],
    persisted: Optional[Mapping[str, Any]],
) -> tuple[InputModel, list[MergeEntry]]:
    """Overlay a persisted InputModel on a preset's defaults.

    Rules:
    - Persisted values win for keys present in both.
    - Keys missing from the persisted blob fall back to defaults.
    - Persisted keys unknown to the parameter registry are dropped.
    - Non-numeric or non-finite persisted values are ignored.

    Returns:
        Tuple of (merged InputModel, list of MergeEntry for every override
        considered).
    """
    merged: InputModel = {key: float(value) for key, value in defaults.items()}
    entries: list[MergeEntry] = []
    if not persisted:
        return merged, entries
    if not isinstance(persisted, Mapping):
        logger.warning(f"Ignoring persisted inputs of type {type(persisted).__name__}")
        return merged, entries

    for key, raw in persisted.items():
        base = merged.get(key)
        if key not in merged and key not in PARAMETERS:
            entries.append(MergeEntry(key, base, raw, None, "dropped unknown parameter"))
            continue

        value = _as_number(raw)
        if value is None:
            entries.append(MergeEntry(key, base, raw, base, "ignored non-numeric value"))
            continue

        merged[key] = value
        entries.append(MergeEntry(key, base, raw, value, "persisted value wins"))

    ignored = [e.field_name for e in entries if e.resolution != "persisted value wins"]
    if ignored:
        logger.warning(f"Ignored persisted fields during merge: {ignored}")
    return merged, entries


def merge_suggestions(
    inputs: Mapping[str, float],
    suggestions: Mapping[str, Optional[float]],
) -> tuple[InputModel, list[MergeEntry]]:
    """Apply confirmed lookup suggestions.

    Only present, numeric suggestions overwrite the InputModel; absent
    fields leave the existing value untouched.
    """
    merged: InputModel = dict(inputs)
    entries: list[MergeEntry] = []
    for key, raw in suggestions.items():
        if raw is None:
            continue
        value = _as_number(raw)
        if value is None or key not in PARAMETERS:
            continue
        base = merged.get(key)
        merged[key] = value
        entries.append(MergeEntry(key, base, raw, value, "lookup suggestion applied"))
    return merged, entries
