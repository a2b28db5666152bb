"""Parameter registry for the InputModel.

An InputModel is a flat ``dict[str, float]``. Each key is declared here with
its display label and slider domain. The domain is a UI affordance only; the
calculators accept any finite value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

from roicalc.errors import InvalidInput
from roicalc.models.enums import ParameterGroup

InputModel = dict[str, float]


@dataclass(frozen=True)
class ParameterSpec:
    """Declared domain and label of a single input parameter."""

    key: str
    label: str
    group: ParameterGroup
    min: float
    max: float
    step: float
    unit: str = ""


def _spec(key, label, group, lo, hi, step, unit=""):
    return ParameterSpec(key=key, label=label, group=group, min=lo, max=hi, step=step, unit=unit)


_G = ParameterGroup

PARAMETERS: dict[str, ParameterSpec] = {
    p.key: p
    for p in (
        # Traffic / conversion
        _spec("monthly_visitors", "Monthly Website Visitors", _G.TRAFFIC, 1000, 5_000_000, 1000, "visitors"),
        _spec("current_conversion_rate", "Current Conversion Rate (%)", _G.TRAFFIC, 0.01, 20, 0.01, "%"),
        _spec("avg_revenue_per_conversion", "Average Revenue per Conversion", _G.TRAFFIC, 10, 100_000, 10, "currency"),
        _spec("current_bounce_rate", "Current Bounce Rate (%)", _G.TRAFFIC, 10, 90, 1, "%"),
        _spec("avg_session_duration", "Average Session Duration (minutes)", _G.TRAFFIC, 0.5, 20, 0.1, "minutes"),
        _spec("campaign_launch_time", "Campaign Launch Time (days)", _G.TRAFFIC, 1, 120, 1, "days"),
        _spec("campaigns_per_year", "Campaigns per Year", _G.TRAFFIC, 0, 52, 1),
        # Operational
        _spec("developer_hourly_rate", "Developer Hourly Rate", _G.OPERATIONAL, 50, 400, 5, "currency"),
        _spec("monthly_dev_hours_on_content", "Monthly Dev Hours on Content", _G.OPERATIONAL, 0, 2000, 10, "hours"),
        _spec("number_of_cms", "Number of CMS Platforms", _G.OPERATIONAL, 1, 20, 1),
        _spec("cms_maintenance_cost_per_year", "CMS Maintenance Cost per Year", _G.OPERATIONAL, 0, 2_000_000, 5000, "currency"),
        _spec("marketing_team_size", "Marketing Team Size", _G.OPERATIONAL, 0, 200, 1, "people"),
        # Risk
        _spec("downtime_hours_per_year", "Downtime Hours per Year", _G.RISK, 0, 500, 1, "hours"),
        _spec("hourly_revenue_loss", "Revenue Loss per Hour of Downtime", _G.RISK, 0, 1_000_000, 1000, "currency"),
        _spec("compliance_audit_cost", "Compliance Audit Cost per Year", _G.RISK, 0, 1_000_000, 5000, "currency"),
        _spec("security_incidents_per_year", "Security Incidents per Year", _G.RISK, 0, 50, 1),
        _spec("incident_cost", "Average Cost per Security Incident", _G.RISK, 0, 5_000_000, 10_000, "currency"),
        # Experience
        _spec("customer_satisfaction_score", "Customer Satisfaction Score", _G.EXPERIENCE, 0, 100, 1),
        _spec("repeat_customer_rate", "Repeat Customer Rate (%)", _G.EXPERIENCE, 0, 100, 1, "%"),
        # Donations
        _spec("current_annual_donations", "Current Annual Donations", _G.DONATIONS, 0, 5_000_000, 1000, "donations"),
        # Improvement assumptions
        _spec("conversion_rate_increase", "Conversion Rate Increase (%)", _G.IMPROVEMENT, 0, 100, 1, "%"),
        _spec("time_to_market_reduction", "Time-to-Market Reduction (%)", _G.IMPROVEMENT, 0, 100, 1, "%"),
        _spec("dev_efficiency_gain", "Developer Efficiency Gain (%)", _G.IMPROVEMENT, 0, 100, 1, "%"),
        _spec("downtime_reduction", "Downtime Reduction (%)", _G.IMPROVEMENT, 0, 100, 1, "%"),
        _spec("cx_improvement", "Customer Experience Improvement (%)", _G.IMPROVEMENT, 0, 100, 1, "%"),
        _spec("bounce_rate_reduction", "Bounce Rate Reduction (%)", _G.IMPROVEMENT, 0, 100, 1, "%"),
        _spec("repeat_customer_rate_increase", "Repeat Customer Rate Increase (%)", _G.IMPROVEMENT, 0, 100, 1, "%"),
        _spec("donor_retention_improvement", "Donor Retention Improvement (%)", _G.IMPROVEMENT, 0, 50, 0.5, "%"),
        _spec("new_donor_acquisition_increase", "New Donor Acquisition Increase (%)", _G.IMPROVEMENT, 0, 50, 0.5, "%"),
        _spec("donation_increase_percent", "Overall Donation Increase (%)", _G.IMPROVEMENT, 0, 50, 0.5, "%"),
        # Investment
        _spec("implementation_cost", "Implementation Cost", _G.INVESTMENT, 0, 5_000_000, 10_000, "currency"),
        _spec("implementation_time", "Implementation Time (months)", _G.INVESTMENT, 0, 36, 1, "months"),
        _spec("annual_license_cost", "Annual License Cost", _G.INVESTMENT, 0, 2_000_000, 5000, "currency"),
        _spec("annual_maintenance_cost", "Annual Maintenance Cost", _G.INVESTMENT, 0, 2_000_000, 5000, "currency"),
        # TCO line items
        _spec("legacy1_license_cost", "Legacy Platform 1 License Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("legacy1_hosting_cost", "Legacy Platform 1 Hosting Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("legacy1_maintenance_cost", "Legacy Platform 1 Maintenance Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("legacy1_dev_cost", "Legacy Platform 1 Development Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("legacy2_license_cost", "Legacy Platform 2 License Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("legacy2_hosting_cost", "Legacy Platform 2 Hosting Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("legacy2_maintenance_cost", "Legacy Platform 2 Maintenance Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("legacy2_dev_cost", "Legacy Platform 2 Development Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("replacement_license_cost", "Replacement Platform License Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
        _spec("replacement_maintenance_cost", "Replacement Platform Maintenance Cost", _G.TCO, 0, 2_000_000, 5000, "currency"),
    )
}


def get_parameter(key: str) -> Optional[ParameterSpec]:
    """Look up a parameter declaration by key."""
    return PARAMETERS.get(key)


def label_for(key: str) -> str:
    spec = PARAMETERS.get(key)
    return spec.label if spec else key.replace("_", " ").title()


def require(inputs: Mapping[str, float], key: str) -> float:
    """Return ``inputs[key]`` as a finite float or raise InvalidInput."""
    if key not in inputs:
        raise InvalidInput(f"Missing required input '{key}'", field=key)
    try:
        value = float(inputs[key])
    except (TypeError, ValueError):
        raise InvalidInput(f"Input '{key}' is not numeric: {inputs[key]!r}", field=key) from None
    if not math.isfinite(value):
        raise InvalidInput(f"Input '{key}' must be finite, got {value}", field=key)
    return value
