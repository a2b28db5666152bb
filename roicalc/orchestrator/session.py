"""Calculator session -- the InputModel lifecycle for one user.

Coordinates preset selection, field edits, driver toggles and lookup
suggestions, persisting each change through an injected KeyValueStore.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Optional

from roicalc.catalog.loader import get_catalog
from roicalc.catalog.schema import ModelPreset
from roicalc.engine.calculator import evaluate
from roicalc.errors import InvalidInput
from roicalc.models.enums import DriverId
from roicalc.models.parameters import PARAMETERS, InputModel
from roicalc.models.results import AggregateResult
from roicalc.storage.store import KeyValueStore, drivers_key, inputs_key

from .merge import MergeEntry, merge_inputs, merge_suggestions

logger = logging.getLogger(__name__)


class CalculatorSession:
    """Holds the active preset, its InputModel and enabled drivers."""

    def __init__(
        self,
        store: KeyValueStore,
        catalog: Optional[Mapping[str, ModelPreset]] = None,
    ):
        self._store = store
        self._catalog = dict(catalog) if catalog is not None else get_catalog()
        self.preset: Optional[ModelPreset] = None
        self.inputs: InputModel = {}
        self.enabled_drivers: list[DriverId] = []
        self.merge_log: list[MergeEntry] = []

    @property
    def catalog(self) -> dict[str, ModelPreset]:
        return dict(self._catalog)

    def select_preset(self, preset_id: str) -> ModelPreset:
        """Switch to a preset, restoring any persisted override for it."""
        preset = self._catalog.get(preset_id)
        if preset is None:
            raise KeyError(f"Unknown preset '{preset_id}'")

        merged, entries = merge_inputs(preset.defaults, self._store.get(inputs_key(preset_id)))
        self.preset = preset
        self.inputs = merged
        self.enabled_drivers = self._load_drivers(preset)
        self.merge_log = entries
        logger.info(
            f"Selected preset '{preset_id}' ({len(entries)} persisted overrides considered)"
        )
        return preset

    def _load_drivers(self, preset: ModelPreset) -> list[DriverId]:
        persisted = self._store.get(drivers_key(preset.id))
        if not isinstance(persisted, list):
            return list(preset.enabled_drivers)
        drivers: list[DriverId] = []
        for raw in persisted:
            try:
                driver_id = DriverId(raw)
            except ValueError:
                logger.warning(f"Ignoring unknown persisted driver '{raw}' for '{preset.id}'")
                continue
            drivers.append(driver_id)
        return [d for d in preset.enabled_drivers if d in drivers]

    def _require_preset(self) -> ModelPreset:
        if self.preset is None:
            raise InvalidInput("No preset selected", field="preset")
        return self.preset

    def set_input(self, key: str, value: float) -> InputModel:
        """Update one field. The previous InputModel is kept on failure."""
        self.update_inputs({key: value})
        return self.inputs

    def update_inputs(self, updates: Mapping[str, Any]) -> InputModel:
        """Validate every update first, then apply them all and persist."""
        preset = self._require_preset()
        staged: InputModel = {}
        for key, raw in updates.items():
            if key not in PARAMETERS:
                raise InvalidInput(f"Unknown parameter '{key}'", field=key)
            try:
                value = float(raw)
            except (TypeError, ValueError):
                raise InvalidInput(f"Value for '{key}' is not numeric: {raw!r}", field=key) from None
            if not math.isfinite(value):
                raise InvalidInput(f"Value for '{key}' must be finite", field=key)
            staged[key] = value

        self.inputs = {**self.inputs, **staged}
        self._persist_inputs(preset)
        return self.inputs

    def set_enabled_drivers(self, drivers: Iterable[DriverId | str]) -> list[DriverId]:
        """Enable a subset of the preset's drivers, kept in preset order."""
        preset = self._require_preset()
        requested: set[DriverId] = set()
        for raw in drivers:
            try:
                driver_id = DriverId(raw)
            except ValueError:
                raise InvalidInput(f"Unknown value driver '{raw}'", field="enabled_drivers") from None
            if driver_id not in preset.enabled_drivers:
                raise InvalidInput(
                    f"Driver '{driver_id.value}' is not available in preset '{preset.id}'",
                    field="enabled_drivers",
                )
            requested.add(driver_id)

        self.enabled_drivers = [d for d in preset.enabled_drivers if d in requested]
        self._store.set(drivers_key(preset.id), [d.value for d in self.enabled_drivers])
        return self.enabled_drivers

    def toggle_driver(self, driver_id: DriverId | str) -> list[DriverId]:
        try:
            driver_id = DriverId(driver_id)
        except ValueError:
            raise InvalidInput(f"Unknown value driver '{driver_id}'", field="enabled_drivers") from None
        current = set(self.enabled_drivers)
        current.symmetric_difference_update({driver_id})
        return self.set_enabled_drivers(current)

    def apply_suggestions(self, suggestions: Mapping[str, Optional[float]]) -> list[MergeEntry]:
        """Merge confirmed lookup suggestions; absent fields are untouched."""
        preset = self._require_preset()
        merged, entries = merge_suggestions(self.inputs, suggestions)
        self.inputs = merged
        if entries:
            self._persist_inputs(preset)
        logger.info(f"Applied {len(entries)} lookup suggestions to '{preset.id}'")
        return entries

    def replace_inputs(self, inputs: Mapping[str, float]) -> InputModel:
        """Overwrite matching fields (e.g. from a CSV import) and persist."""
        return self.update_inputs(inputs)

    def reset(self) -> InputModel:
        """Forget persisted state for the active preset and restore defaults."""
        preset = self._require_preset()
        self._store.delete(inputs_key(preset.id))
        self._store.delete(drivers_key(preset.id))
        self.select_preset(preset.id)
        return self.inputs

    def _persist_inputs(self, preset: ModelPreset) -> None:
        self._store.set(inputs_key(preset.id), dict(self.inputs))

    def evaluate(
        self,
        attribution_factor: float = 1.0,
        horizon_years: int = 3,
    ) -> AggregateResult:
        preset = self._require_preset()
        return evaluate(
            self.inputs,
            self.enabled_drivers,
            attribution_factor=attribution_factor,
            horizon_years=horizon_years,
            cx_variant=preset.cx_variant,
            cost_model=preset.cost_model,
        )
