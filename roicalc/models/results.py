"""Immutable driver and aggregate result structures."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, ClassVar, Optional

from roicalc.models.enums import CostModel, CXVariant, DriverId


@dataclass(frozen=True)
class DriverResult:
    """Base for every driver result.

    ``component_fields`` names the additive sub-components whose sum is
    ``total``; the remaining fields are context figures.
    """

    driver_id: ClassVar[DriverId]
    component_fields: ClassVar[tuple[str, ...]] = ()

    def components(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in self.component_fields}

    def figures(self) -> dict[str, float]:
        """Every numeric field, context figures included."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: v for name, v in values.items() if isinstance(v, (int, float))}

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["driver_id"] = self.driver_id.value
        return data


@dataclass(frozen=True)
class RevenueResult(DriverResult):
    driver_id: ClassVar[DriverId] = DriverId.REVENUE
    component_fields: ClassVar[tuple[str, ...]] = ("conversion_lift", "time_to_market_value")

    current_revenue: float
    new_revenue: float
    conversion_lift: float
    time_to_market_value: float
    total: float


@dataclass(frozen=True)
class EfficiencyResult(DriverResult):
    driver_id: ClassVar[DriverId] = DriverId.EFFICIENCY
    component_fields: ClassVar[tuple[str, ...]] = (
        "dev_cost_savings",
        "cms_consolidation_savings",
        "marketing_productivity_gain",
    )

    current_dev_cost: float
    dev_cost_savings: float
    cms_consolidation_savings: float
    marketing_productivity_gain: float
    total: float


@dataclass(frozen=True)
class RiskResult(DriverResult):
    driver_id: ClassVar[DriverId] = DriverId.RISK
    component_fields: ClassVar[tuple[str, ...]] = (
        "downtime_savings",
        "security_savings",
        "compliance_efficiency",
    )

    current_downtime_cost: float
    downtime_savings: float
    security_savings: float
    compliance_efficiency: float
    total: float


@dataclass(frozen=True)
class CXResult(DriverResult):
    driver_id: ClassVar[DriverId] = DriverId.CX
    component_fields: ClassVar[tuple[str, ...]] = (
        "bounce_impact",
        "engagement_lift",
        "repeat_customer_lift",
    )

    variant: CXVariant
    base_revenue: float
    bounce_impact: float
    engagement_lift: float
    repeat_customer_lift: float
    total: float


@dataclass(frozen=True)
class DonationResult(DriverResult):
    """Additional donations per year. ``total`` is a volume, not money."""

    driver_id: ClassVar[DriverId] = DriverId.DONATIONS
    component_fields: ClassVar[tuple[str, ...]] = (
        "retention_donations",
        "acquisition_donations",
        "increase_donations",
    )

    retention_donations: float
    acquisition_donations: float
    increase_donations: float
    total: float
    retention_litres: float
    acquisition_litres: float
    increase_litres: float
    total_litres: float


@dataclass(frozen=True)
class TCOResult(DriverResult):
    driver_id: ClassVar[DriverId] = DriverId.TCO
    component_fields: ClassVar[tuple[str, ...]] = ("total_legacy_cost", "replacement_cost_offset")

    total_legacy_cost: float
    replacement_annual_cost: float
    total: float

    @property
    def replacement_cost_offset(self) -> float:
        return -self.replacement_annual_cost

    @property
    def annual_savings(self) -> float:
        return self.total


@dataclass(frozen=True)
class DriverContribution:
    """How much one enabled driver adds to the annual benefit."""

    driver_id: DriverId
    driver_total: float
    attribution_applied: float
    contribution: float


@dataclass(frozen=True)
class AggregateResult:
    """Top-level result object for a complete ROI evaluation."""

    horizon_years: int
    attribution_factor: float
    cost_model: CostModel
    annual_benefit: float
    horizon_benefit: float
    total_cost: float
    net_benefit: float
    roi_percent: float
    payback_months: Optional[float]
    contributions: list[DriverContribution]
    drivers: dict[DriverId, DriverResult]
    donations: Optional[DonationResult] = None
    warnings: list[str] = field(default_factory=list)
    # aggregate field -> error kind, for figures that could not be computed
    undefined: dict[str, str] = field(default_factory=dict)

    def contribution_of(self, driver_id: DriverId) -> float:
        for entry in self.contributions:
            if entry.driver_id is driver_id:
                return entry.contribution
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "horizon_years": self.horizon_years,
            "attribution_factor": self.attribution_factor,
            "cost_model": self.cost_model.value,
            "annual_benefit": self.annual_benefit,
            "horizon_benefit": self.horizon_benefit,
            "total_cost": self.total_cost,
            "net_benefit": self.net_benefit,
            "roi_percent": self.roi_percent,
            "payback_months": self.payback_months,
            "contributions": [
                {
                    "driver_id": c.driver_id.value,
                    "driver_total": c.driver_total,
                    "attribution_applied": c.attribution_applied,
                    "contribution": c.contribution,
                }
                for c in self.contributions
            ],
            "drivers": {d.value: r.to_dict() for d, r in self.drivers.items()},
            "donations": self.donations.to_dict() if self.donations else None,
            "warnings": list(self.warnings),
            "undefined": dict(self.undefined),
        }
