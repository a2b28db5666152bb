"""Core calculation engine.

Takes an InputModel + enabled drivers -> produces an AggregateResult with a
per-driver breakdown. Every evaluation recomputes all drivers from scratch.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

# Ensure all drivers are registered on import
import roicalc.drivers.formulas  # noqa: F401
from roicalc.catalog.schema import ModelPreset
from roicalc.drivers.registry import get_driver
from roicalc.errors import DivisionByZeroError, InvalidInput
from roicalc.models.enums import VALID_HORIZONS, CostModel, CXVariant, DriverId
from roicalc.models.parameters import require
from roicalc.models.results import (
    AggregateResult,
    DonationResult,
    DriverContribution,
    DriverResult,
)

logger = logging.getLogger(__name__)


def run_driver(
    driver_id: DriverId | str,
    inputs: Mapping[str, float],
    cx_variant: CXVariant = CXVariant.DAMPENED,
) -> DriverResult:
    """Run a single registered driver over the inputs."""
    definition = get_driver(driver_id)
    if definition is None:
        raise InvalidInput(f"Unknown value driver '{driver_id}'", field="enabled_drivers")
    if definition.id is DriverId.CX:
        result = definition.formula_fn(inputs, variant=cx_variant)
    else:
        result = definition.formula_fn(inputs)

    for name, value in result.figures().items():
        if not math.isfinite(value):
            raise InvalidInput(
                f"{definition.label} overflowed computing '{name}'; inputs are too large",
                field=definition.id.value,
            )
    return result


def _ensure_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidInput(f"{name} overflowed; inputs are too large", field=name)
    return value


def total_cost(
    inputs: Mapping[str, float],
    horizon_years: int,
    cost_model: CostModel = CostModel.STANDARD,
) -> float:
    """implementation + recurring cost over the horizon."""
    annual = require(inputs, "annual_license_cost")
    if cost_model is CostModel.TCO:
        annual += require(inputs, "annual_maintenance_cost")
    return require(inputs, "implementation_cost") + annual * horizon_years


def payback_months(inputs: Mapping[str, float], annual_benefit: float) -> float:
    """Lead time plus months of benefit needed to recover the implementation cost."""
    if annual_benefit == 0:
        raise DivisionByZeroError(
            "Annual benefit is zero; payback period is undefined",
            field="annual_benefit",
        )
    return require(inputs, "implementation_time") + require(inputs, "implementation_cost") / (
        annual_benefit / 12
    )


def evaluate(
    inputs: Mapping[str, float],
    enabled_drivers: Iterable[DriverId | str],
    attribution_factor: float = 1.0,
    horizon_years: int = 3,
    cx_variant: CXVariant = CXVariant.DAMPENED,
    cost_model: CostModel = CostModel.STANDARD,
) -> AggregateResult:
    """Evaluate the enabled drivers and combine them into ROI figures.

    Revenue and CX totals are scaled by ``attribution_factor``. The donation
    driver is reported in ``donations`` and never enters a monetary field.

    Raises:
        InvalidInput: bad horizon, attribution factor, driver id or input,
            or inputs large enough to overflow a figure.
        DivisionByZeroError: total cost is zero.

    A zero or negative annual benefit leaves ``payback_months`` as None and
    records the reason in ``undefined``.
    """
    if horizon_years not in VALID_HORIZONS:
        raise InvalidInput(
            f"horizon_years must be one of {VALID_HORIZONS}, got {horizon_years}",
            field="horizon_years",
        )
    if not (math.isfinite(attribution_factor) and 0 <= attribution_factor <= 1.0):
        raise InvalidInput(
            f"attribution_factor must be 0-1.0, got {attribution_factor}",
            field="attribution_factor",
        )

    ordered: list[DriverId] = []
    for raw in enabled_drivers:
        definition = get_driver(raw)
        if definition is None:
            raise InvalidInput(f"Unknown value driver '{raw}'", field="enabled_drivers")
        if definition.id not in ordered:
            ordered.append(definition.id)

    drivers: dict[DriverId, DriverResult] = {}
    contributions: list[DriverContribution] = []
    donations: DonationResult | None = None
    warnings: list[str] = []

    for driver_id in ordered:
        definition = get_driver(driver_id)
        result = run_driver(driver_id, inputs, cx_variant=cx_variant)
        drivers[driver_id] = result

        if not definition.monetary:
            # Volumetric drivers are reported on their own
            if isinstance(result, DonationResult):
                donations = result
            continue

        factor = attribution_factor if definition.attributable else 1.0
        contributions.append(
            DriverContribution(
                driver_id=driver_id,
                driver_total=result.total,
                attribution_applied=factor,
                contribution=result.total * factor,
            )
        )

    if not contributions:
        warnings.append("No monetary value drivers are enabled.")

    annual_benefit = _ensure_finite("annual_benefit", sum(c.contribution for c in contributions))
    horizon_benefit = _ensure_finite("horizon_benefit", annual_benefit * horizon_years)
    cost = _ensure_finite("total_cost", total_cost(inputs, horizon_years, cost_model))
    net_benefit = _ensure_finite("net_benefit", horizon_benefit - cost)

    if cost == 0:
        raise DivisionByZeroError("Total cost is zero; ROI is undefined", field="total_cost")
    roi_percent = _ensure_finite("roi_percent", (net_benefit / cost) * 100)

    undefined: dict[str, str] = {}
    payback: float | None = None
    if annual_benefit < 0:
        # Cumulative benefit never reaches the implementation cost
        undefined["payback_months"] = "negative_benefit"
        warnings.append("Annual benefit is negative; the investment never pays back.")
    else:
        try:
            payback = _ensure_finite("payback_months", payback_months(inputs, annual_benefit))
        except DivisionByZeroError as e:
            undefined["payback_months"] = e.kind
            warnings.append(str(e))

    logger.debug(
        "Evaluated %d drivers: annual=%.2f roi=%.2f%%",
        len(drivers),
        annual_benefit,
        roi_percent,
    )

    return AggregateResult(
        horizon_years=horizon_years,
        attribution_factor=attribution_factor,
        cost_model=cost_model,
        annual_benefit=annual_benefit,
        horizon_benefit=horizon_benefit,
        total_cost=cost,
        net_benefit=net_benefit,
        roi_percent=roi_percent,
        payback_months=payback,
        contributions=contributions,
        drivers=drivers,
        donations=donations,
        warnings=warnings,
        undefined=undefined,
    )


class CalculationEngine:
    """Stateless engine that evaluates a preset's inputs."""

    def calculate(
        self,
        preset: ModelPreset,
        inputs: Mapping[str, float] | None = None,
        enabled_drivers: Iterable[DriverId | str] | None = None,
        attribution_factor: float = 1.0,
        horizon_years: int = 3,
    ) -> AggregateResult:
        """Evaluate with the preset's CX variant and cost model.

        ``inputs`` and ``enabled_drivers`` default to the preset's own.
        """
        return evaluate(
            inputs if inputs is not None else preset.defaults,
            enabled_drivers if enabled_drivers is not None else preset.enabled_drivers,
            attribution_factor=attribution_factor,
            horizon_years=horizon_years,
            cx_variant=preset.cx_variant,
            cost_model=preset.cost_model,
        )
