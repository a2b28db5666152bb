"""Pydantic models for model preset validation."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from roicalc.models.enums import CostModel, CXVariant, DriverId

_INVESTMENT_INPUTS = ("implementation_cost", "implementation_time", "annual_license_cost")


class ModelPreset(BaseModel):
    """A named bundle of enabled drivers and default inputs."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(pattern=r"^[a-z][a-z0-9-]*$")
    name: str
    description: str = ""
    enabled_drivers: list[DriverId] = Field(min_length=1)
    cx_variant: CXVariant = CXVariant.DAMPENED
    cost_model: CostModel = CostModel.STANDARD
    defaults: dict[str, float]

    @field_validator("enabled_drivers")
    @classmethod
    def drivers_unique(cls, v: list[DriverId]) -> list[DriverId]:
        if len(set(v)) != len(v):
            raise ValueError(f"enabled_drivers contains duplicates: {[d.value for d in v]}")
        return v

    @field_validator("defaults")
    @classmethod
    def defaults_are_known_and_finite(cls, v: dict[str, float]) -> dict[str, float]:
        from roicalc.models.parameters import PARAMETERS

        unknown = sorted(set(v) - set(PARAMETERS))
        if unknown:
            raise ValueError(f"Unknown parameters in defaults: {unknown}")
        for key, value in v.items():
            if not math.isfinite(value):
                raise ValueError(f"Default for '{key}' must be finite, got {value}")
        return v

    @model_validator(mode="after")
    def defaults_cover_required_inputs(self) -> ModelPreset:
        required = set(self.required_inputs())
        missing = sorted(required - set(self.defaults))
        if missing:
            raise ValueError(f"Preset '{self.id}' defaults are missing inputs: {missing}")
        return self

    def required_inputs(self) -> list[str]:
        """Every InputModel key read by the enabled drivers and the cost model."""
        from roicalc.drivers.formulas import required_inputs_for

        keys: list[str] = []
        for driver_id in self.enabled_drivers:
            for key in required_inputs_for(driver_id, self.cx_variant):
                if key not in keys:
                    keys.append(key)
        for key in _INVESTMENT_INPUTS:
            if key not in keys:
                keys.append(key)
        if self.cost_model is CostModel.TCO and "annual_maintenance_cost" not in keys:
            keys.append("annual_maintenance_cost")
        return keys


class PresetSummary(BaseModel):
    """Listing view of a preset."""

    id: str
    name: str
    description: str
    enabled_drivers: list[DriverId]

    @classmethod
    def from_preset(cls, preset: ModelPreset) -> PresetSummary:
        return cls(
            id=preset.id,
            name=preset.name,
            description=preset.description,
            enabled_drivers=list(preset.enabled_drivers),
        )
