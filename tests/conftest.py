"""Shared test fixtures for the ROI calculator test suite."""

import pytest

from roicalc.catalog.loader import get_catalog, get_preset
from roicalc.orchestrator.session import CalculatorSession
from roicalc.storage.store import InMemoryStore


@pytest.fixture
def scenario_inputs() -> dict[str, float]:
    """The worked revenue example: 100k visitors at 2.5% and $2,000."""
    return {
        "monthly_visitors": 100_000,
        "current_conversion_rate": 2.5,
        "avg_revenue_per_conversion": 2000,
        "conversion_rate_increase": 15,
        "campaign_launch_time": 21,
        "time_to_market_reduction": 65,
        "campaigns_per_year": 6,
    }


@pytest.fixture
def full_inputs(scenario_inputs) -> dict[str, float]:
    """Inputs covering every driver and both cost models."""
    return {
        **scenario_inputs,
        "current_bounce_rate": 45,
        "cx_improvement": 20,
        "bounce_rate_reduction": 30,
        "repeat_customer_rate": 30,
        "repeat_customer_rate_increase": 10,
        "developer_hourly_rate": 150,
        "monthly_dev_hours_on_content": 160,
        "dev_efficiency_gain": 50,
        "number_of_cms": 3,
        "cms_maintenance_cost_per_year": 90_000,
        "marketing_team_size": 10,
        "downtime_hours_per_year": 24,
        "hourly_revenue_loss": 50_000,
        "downtime_reduction": 90,
        "security_incidents_per_year": 2,
        "incident_cost": 100_000,
        "compliance_audit_cost": 75_000,
        "current_annual_donations": 1_000_000,
        "donor_retention_improvement": 5,
        "new_donor_acquisition_increase": 3,
        "donation_increase_percent": 2,
        "legacy1_license_cost": 100_000,
        "legacy1_hosting_cost": 20_000,
        "legacy1_maintenance_cost": 30_000,
        "legacy1_dev_cost": 50_000,
        "legacy2_license_cost": 40_000,
        "legacy2_hosting_cost": 10_000,
        "legacy2_maintenance_cost": 10_000,
        "legacy2_dev_cost": 20_000,
        "replacement_license_cost": 60_000,
        "replacement_maintenance_cost": 20_000,
        "implementation_cost": 150_000,
        "implementation_time": 4,
        "annual_license_cost": 75_000,
        "annual_maintenance_cost": 25_000,
    }


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def marketing_preset():
    return get_preset("marketing")


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def session(store) -> CalculatorSession:
    s = CalculatorSession(store)
    s.select_preset("marketing")
    return s
