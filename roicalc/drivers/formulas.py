"""Value-driver formula implementations.

Each function is a pure calculation over an InputModel with no side effects.
Monetary values are in the currency of the inputs; rates are percentages
(2.5 means 2.5%).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from roicalc.drivers.registry import get_driver, register_driver
from roicalc.errors import DivisionByZeroError, InvalidInput
from roicalc.models.enums import CXVariant, DriverId
from roicalc.models.parameters import require
from roicalc.models.results import (
    CXResult,
    DonationResult,
    EfficiencyResult,
    RevenueResult,
    RiskResult,
    TCOResult,
)

# Fully-loaded annual salary of a marketer, and the share of it recovered.
MARKETER_ANNUAL_COST = 80_000
MARKETING_PRODUCTIVITY_SHARE = 0.3

SECURITY_INCIDENT_AVOIDANCE = 0.75
COMPLIANCE_EFFICIENCY = 0.4

AVERAGE_DONATION_VOLUME_LITRES = 0.5

LEGACY_COST_KEYS = [
    f"legacy{n}_{item}_cost"
    for n in (1, 2)
    for item in ("license", "hosting", "maintenance", "dev")
]
REPLACEMENT_COST_KEYS = ["replacement_license_cost", "replacement_maintenance_cost"]


@dataclass(frozen=True)
class CXVariantParams:
    """Constants of one customer-experience formula variant.

    ``bounce_factor_key`` / ``repeat_key`` name the InputModel entry used; a
    ``None`` bounce key means ``fixed_bounce_factor`` applies.
    """

    bounce_factor_key: str | None
    fixed_bounce_factor: float
    engagement_dampening: float
    repeat_key: str
    repeat_dampening: float


CX_VARIANTS: dict[CXVariant, CXVariantParams] = {
    CXVariant.SIMPLE: CXVariantParams(
        bounce_factor_key=None,
        fixed_bounce_factor=0.3,
        engagement_dampening=1.0,
        repeat_key="repeat_customer_rate",
        repeat_dampening=0.4,
    ),
    CXVariant.DAMPENED: CXVariantParams(
        bounce_factor_key="bounce_rate_reduction",
        fixed_bounce_factor=0.0,
        engagement_dampening=0.5,
        repeat_key="repeat_customer_rate_increase",
        repeat_dampening=0.5,
    ),
}


@register_driver(
    driver_id=DriverId.REVENUE,
    label="Revenue Growth",
    description=(
        "Incremental revenue from a higher conversion rate plus the value of "
        "launching campaigns sooner."
    ),
    required_inputs=[
        "monthly_visitors",
        "current_conversion_rate",
        "avg_revenue_per_conversion",
        "campaign_launch_time",
        "campaigns_per_year",
        "conversion_rate_increase",
        "time_to_market_reduction",
    ],
    attributable=True,
    benchmark="Customers report conversion rate increases of 25-78% and time-to-market reductions of 60-80%.",
)
def calc_revenue(inputs: Mapping[str, float]) -> RevenueResult:
    """Conversion lift + time-to-market value.

    A negative conversion_rate_increase is allowed and yields a negative lift.
    """
    annual_visitors = require(inputs, "monthly_visitors") * 12
    conversion_rate = require(inputs, "current_conversion_rate")
    revenue_per_conversion = require(inputs, "avg_revenue_per_conversion")

    current_revenue = annual_visitors * (conversion_rate / 100) * revenue_per_conversion
    new_conversion_rate = conversion_rate * (1 + require(inputs, "conversion_rate_increase") / 100)
    new_revenue = annual_visitors * (new_conversion_rate / 100) * revenue_per_conversion
    conversion_lift = new_revenue - current_revenue

    days_saved = require(inputs, "campaign_launch_time") * require(inputs, "time_to_market_reduction") / 100
    time_to_market_value = (current_revenue / 365) * days_saved * require(inputs, "campaigns_per_year")

    return RevenueResult(
        current_revenue=current_revenue,
        new_revenue=new_revenue,
        conversion_lift=conversion_lift,
        time_to_market_value=time_to_market_value,
        total=conversion_lift + time_to_market_value,
    )


@register_driver(
    driver_id=DriverId.EFFICIENCY,
    label="Operational Efficiency",
    description=(
        "Developer time saved on content changes, CMS consolidation and "
        "marketing team productivity."
    ),
    required_inputs=[
        "monthly_dev_hours_on_content",
        "developer_hourly_rate",
        "dev_efficiency_gain",
        "number_of_cms",
        "cms_maintenance_cost_per_year",
        "marketing_team_size",
    ],
    benchmark="Customers report operational cost savings of 30-50%.",
)
def calc_efficiency(inputs: Mapping[str, float]) -> EfficiencyResult:
    dev_hours = require(inputs, "monthly_dev_hours_on_content")
    hourly_rate = require(inputs, "developer_hourly_rate")
    number_of_cms = require(inputs, "number_of_cms")
    if number_of_cms == 0:
        raise DivisionByZeroError(
            "number_of_cms must be non-zero to compute consolidation savings",
            field="number_of_cms",
        )

    current_dev_cost = dev_hours * hourly_rate * 12
    dev_cost_savings = dev_hours * (require(inputs, "dev_efficiency_gain") / 100) * hourly_rate * 12
    cms_consolidation_savings = require(inputs, "cms_maintenance_cost_per_year") * (
        (number_of_cms - 1) / number_of_cms
    )
    marketing_productivity_gain = (
        require(inputs, "marketing_team_size") * MARKETER_ANNUAL_COST * MARKETING_PRODUCTIVITY_SHARE
    )

    return EfficiencyResult(
        current_dev_cost=current_dev_cost,
        dev_cost_savings=dev_cost_savings,
        cms_consolidation_savings=cms_consolidation_savings,
        marketing_productivity_gain=marketing_productivity_gain,
        total=dev_cost_savings + cms_consolidation_savings + marketing_productivity_gain,
    )


@register_driver(
    driver_id=DriverId.RISK,
    label="Risk Mitigation",
    description="Avoided downtime, security incidents and compliance effort.",
    required_inputs=[
        "downtime_hours_per_year",
        "hourly_revenue_loss",
        "downtime_reduction",
        "security_incidents_per_year",
        "incident_cost",
        "compliance_audit_cost",
    ],
    benchmark="Customers run on enterprise-grade 99.99% uptime with ISO 27001 and SOC 2 Type II certification.",
)
def calc_risk(inputs: Mapping[str, float]) -> RiskResult:
    current_downtime_cost = require(inputs, "downtime_hours_per_year") * require(inputs, "hourly_revenue_loss")
    downtime_savings = current_downtime_cost * (require(inputs, "downtime_reduction") / 100)
    security_savings = (
        require(inputs, "security_incidents_per_year")
        * require(inputs, "incident_cost")
        * SECURITY_INCIDENT_AVOIDANCE
    )
    compliance_efficiency = require(inputs, "compliance_audit_cost") * COMPLIANCE_EFFICIENCY

    return RiskResult(
        current_downtime_cost=current_downtime_cost,
        downtime_savings=downtime_savings,
        security_savings=security_savings,
        compliance_efficiency=compliance_efficiency,
        total=downtime_savings + security_savings + compliance_efficiency,
    )


@register_driver(
    driver_id=DriverId.CX,
    label="Customer Experience",
    description=(
        "Revenue recovered from lower bounce, deeper engagement and more "
        "repeat customers."
    ),
    required_inputs=[
        "monthly_visitors",
        "current_conversion_rate",
        "avg_revenue_per_conversion",
        "current_bounce_rate",
        "cx_improvement",
    ],
    attributable=True,
    benchmark="Customers use native personalization and experimentation to lift engagement and repeat visits.",
)
def calc_cx(
    inputs: Mapping[str, float],
    variant: CXVariant = CXVariant.DAMPENED,
) -> CXResult:
    """bounce_impact + engagement_lift + repeat_customer_lift for one variant."""
    params = CX_VARIANTS[CXVariant(variant)]
    base_revenue = (
        require(inputs, "monthly_visitors")
        * 12
        * (require(inputs, "current_conversion_rate") / 100)
        * require(inputs, "avg_revenue_per_conversion")
    )

    if params.bounce_factor_key is None:
        bounce_factor = params.fixed_bounce_factor
    else:
        bounce_factor = require(inputs, params.bounce_factor_key)
    bounce_impact = base_revenue * (require(inputs, "current_bounce_rate") * bounce_factor / 100) / 100

    engagement_lift = base_revenue * (require(inputs, "cx_improvement") / 100) * params.engagement_dampening
    repeat_customer_lift = base_revenue * (require(inputs, params.repeat_key) / 100) * params.repeat_dampening

    return CXResult(
        variant=CXVariant(variant),
        base_revenue=base_revenue,
        bounce_impact=bounce_impact,
        engagement_lift=engagement_lift,
        repeat_customer_lift=repeat_customer_lift,
        total=bounce_impact + engagement_lift + repeat_customer_lift,
    )


@register_driver(
    driver_id=DriverId.DONATIONS,
    label="Donation Volume",
    description=(
        "Additional donations per year from better retention, acquisition "
        "and overall growth, also expressed in litres."
    ),
    required_inputs=[
        "current_annual_donations",
        "donor_retention_improvement",
        "new_donor_acquisition_increase",
        "donation_increase_percent",
    ],
    unit="donations",
)
def calc_donations(inputs: Mapping[str, float]) -> DonationResult:
    current = require(inputs, "current_annual_donations")
    retention = current * (require(inputs, "donor_retention_improvement") / 100)
    acquisition = current * (require(inputs, "new_donor_acquisition_increase") / 100)
    increase = current * (require(inputs, "donation_increase_percent") / 100)
    total = retention + acquisition + increase

    return DonationResult(
        retention_donations=retention,
        acquisition_donations=acquisition,
        increase_donations=increase,
        total=total,
        retention_litres=retention * AVERAGE_DONATION_VOLUME_LITRES,
        acquisition_litres=acquisition * AVERAGE_DONATION_VOLUME_LITRES,
        increase_litres=increase * AVERAGE_DONATION_VOLUME_LITRES,
        total_litres=total * AVERAGE_DONATION_VOLUME_LITRES,
    )


@register_driver(
    driver_id=DriverId.TCO,
    label="Total Cost of Ownership",
    description="Annual running cost of the legacy estate minus the replacement platform.",
    required_inputs=LEGACY_COST_KEYS + REPLACEMENT_COST_KEYS,
)
def calc_tco(inputs: Mapping[str, float]) -> TCOResult:
    total_legacy_cost = sum(require(inputs, key) for key in LEGACY_COST_KEYS)
    replacement_annual_cost = sum(require(inputs, key) for key in REPLACEMENT_COST_KEYS)
    return TCOResult(
        total_legacy_cost=total_legacy_cost,
        replacement_annual_cost=replacement_annual_cost,
        total=total_legacy_cost - replacement_annual_cost,
    )


def required_inputs_for(
    driver_id: DriverId | str,
    cx_variant: CXVariant = CXVariant.DAMPENED,
) -> list[str]:
    """All InputModel keys a driver reads, including its CX variant keys."""
    definition = get_driver(driver_id)
    if definition is None:
        raise InvalidInput(f"Unknown value driver '{driver_id}'", field="enabled_drivers")
    keys = list(definition.required_inputs)
    if definition.id is DriverId.CX:
        params = CX_VARIANTS[CXVariant(cx_variant)]
        if params.bounce_factor_key is not None:
            keys.append(params.bounce_factor_key)
        keys.append(params.repeat_key)
    return keys
