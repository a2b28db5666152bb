"""Unit tests for each value-driver formula."""

import math

import pytest

from roicalc.drivers.formulas import (
    AVERAGE_DONATION_VOLUME_LITRES,
    calc_cx,
    calc_donations,
    calc_efficiency,
    calc_revenue,
    calc_risk,
    calc_tco,
    required_inputs_for,
)
from roicalc.drivers.registry import get_all_drivers, get_driver
from roicalc.errors import DivisionByZeroError, InvalidInput
from roicalc.models.enums import CXVariant, DriverId


class TestRevenueDriver:
    def test_worked_example(self, scenario_inputs):
        result = calc_revenue(scenario_inputs)
        assert result.current_revenue == pytest.approx(60_000_000)
        assert result.new_revenue == pytest.approx(69_000_000)
        assert result.conversion_lift == pytest.approx(9_000_000)
        # (60M / 365) * (21 * 0.65) * 6
        assert result.time_to_market_value == pytest.approx(60_000_000 / 365 * 13.65 * 6)
        assert result.time_to_market_value == pytest.approx(13_463_013.70, rel=1e-9)
        assert result.total == pytest.approx(9_000_000 + 60_000_000 / 365 * 13.65 * 6)

    def test_no_improvement_means_no_lift(self, scenario_inputs):
        inputs = {**scenario_inputs, "conversion_rate_increase": 0, "time_to_market_reduction": 0}
        result = calc_revenue(inputs)
        assert result.conversion_lift == 0.0
        assert result.time_to_market_value == 0.0
        assert result.total == 0.0

    def test_zero_campaigns_removes_time_to_market_value(self, scenario_inputs):
        result = calc_revenue({**scenario_inputs, "campaigns_per_year": 0})
        assert result.time_to_market_value == 0.0
        assert result.total == pytest.approx(result.conversion_lift)

    def test_negative_increase_is_not_clamped(self, scenario_inputs):
        result = calc_revenue({**scenario_inputs, "conversion_rate_increase": -10})
        assert result.conversion_lift == pytest.approx(-6_000_000)

    def test_missing_input_raises(self, scenario_inputs):
        inputs = dict(scenario_inputs)
        del inputs["monthly_visitors"]
        with pytest.raises(InvalidInput, match="monthly_visitors") as exc_info:
            calc_revenue(inputs)
        assert exc_info.value.field == "monthly_visitors"

    def test_non_finite_input_raises(self, scenario_inputs):
        with pytest.raises(InvalidInput, match="must be finite"):
            calc_revenue({**scenario_inputs, "avg_revenue_per_conversion": math.inf})


class TestEfficiencyDriver:
    def test_basic_calculation(self, full_inputs):
        result = calc_efficiency(full_inputs)
        # 160h * 50% * $150 * 12
        assert result.dev_cost_savings == pytest.approx(144_000)
        # $90k * (2/3)
        assert result.cms_consolidation_savings == pytest.approx(60_000)
        # 10 * $80k * 0.3
        assert result.marketing_productivity_gain == pytest.approx(240_000)
        assert result.current_dev_cost == pytest.approx(288_000)
        assert result.total == pytest.approx(444_000)

    def test_single_cms_has_no_consolidation_savings(self, full_inputs):
        result = calc_efficiency({**full_inputs, "number_of_cms": 1})
        assert result.cms_consolidation_savings == 0.0

    def test_zero_cms_raises_division_by_zero(self, full_inputs):
        with pytest.raises(DivisionByZeroError) as exc_info:
            calc_efficiency({**full_inputs, "number_of_cms": 0})
        assert exc_info.value.field == "number_of_cms"
        assert isinstance(exc_info.value, InvalidInput)

    def test_values_outside_slider_range_are_accepted(self, full_inputs):
        result = calc_efficiency({**full_inputs, "number_of_cms": 500, "dev_efficiency_gain": 250})
        assert math.isfinite(result.total)


class TestRiskDriver:
    def test_basic_calculation(self, full_inputs):
        result = calc_risk(full_inputs)
        assert result.current_downtime_cost == pytest.approx(1_200_000)
        assert result.downtime_savings == pytest.approx(1_080_000)
        assert result.security_savings == pytest.approx(150_000)
        assert result.compliance_efficiency == pytest.approx(30_000)
        assert result.total == pytest.approx(1_260_000)

    def test_all_zero(self, full_inputs):
        keys = required_inputs_for(DriverId.RISK)
        result = calc_risk({**full_inputs, **{k: 0 for k in keys}})
        assert result.total == 0.0


class TestCXDriver:
    def test_simple_variant(self, full_inputs):
        result = calc_cx(full_inputs, variant=CXVariant.SIMPLE)
        assert result.base_revenue == pytest.approx(60_000_000)
        assert result.bounce_impact == pytest.approx(81_000)
        assert result.engagement_lift == pytest.approx(12_000_000)
        assert result.repeat_customer_lift == pytest.approx(7_200_000)
        assert result.total == pytest.approx(19_281_000)
        assert result.variant is CXVariant.SIMPLE

    def test_dampened_variant(self, full_inputs):
        result = calc_cx(full_inputs, variant=CXVariant.DAMPENED)
        assert result.bounce_impact == pytest.approx(8_100_000)
        assert result.engagement_lift == pytest.approx(6_000_000)
        assert result.repeat_customer_lift == pytest.approx(3_000_000)
        assert result.total == pytest.approx(17_100_000)

    def test_variant_accepts_string(self, full_inputs):
        assert calc_cx(full_inputs, variant="simple").variant is CXVariant.SIMPLE

    def test_dampened_requires_its_own_inputs(self, full_inputs):
        inputs = dict(full_inputs)
        del inputs["bounce_rate_reduction"]
        calc_cx(inputs, variant=CXVariant.SIMPLE)
        with pytest.raises(InvalidInput, match="bounce_rate_reduction"):
            calc_cx(inputs, variant=CXVariant.DAMPENED)


class TestDonationDriver:
    def test_basic_calculation(self, full_inputs):
        result = calc_donations(full_inputs)
        assert result.retention_donations == pytest.approx(50_000)
        assert result.acquisition_donations == pytest.approx(30_000)
        assert result.increase_donations == pytest.approx(20_000)
        assert result.total == pytest.approx(100_000)

    def test_litres_use_average_volume(self, full_inputs):
        result = calc_donations(full_inputs)
        assert AVERAGE_DONATION_VOLUME_LITRES == 0.5
        assert result.total_litres == pytest.approx(50_000)
        assert result.retention_litres == pytest.approx(25_000)
        assert result.total_litres == pytest.approx(
            result.retention_litres + result.acquisition_litres + result.increase_litres
        )

    def test_registered_as_non_monetary(self):
        assert get_driver(DriverId.DONATIONS).monetary is False


class TestTCODriver:
    def test_basic_calculation(self, full_inputs):
        result = calc_tco(full_inputs)
        assert result.total_legacy_cost == pytest.approx(280_000)
        assert result.replacement_annual_cost == pytest.approx(80_000)
        assert result.annual_savings == pytest.approx(200_000)

    def test_replacement_dearer_than_legacy_is_negative(self, full_inputs):
        result = calc_tco({**full_inputs, "replacement_license_cost": 500_000})
        assert result.total < 0


class TestTotalsMatchComponents:
    @pytest.mark.parametrize(
        "fn",
        [calc_revenue, calc_efficiency, calc_risk, calc_cx, calc_donations, calc_tco],
    )
    def test_total_is_sum_of_components(self, fn, full_inputs):
        result = fn(full_inputs)
        assert result.total == pytest.approx(sum(result.components().values()), rel=1e-12)


class TestAllDriversRegistered:
    def test_six_drivers_registered(self):
        assert len(get_all_drivers()) == 6

    def test_expected_ids_present(self):
        assert set(get_all_drivers()) == set(DriverId)

    def test_only_revenue_and_cx_are_attributable(self):
        attributable = {d for d, definition in get_all_drivers().items() if definition.attributable}
        assert attributable == {DriverId.REVENUE, DriverId.CX}

    def test_unknown_driver_lookup(self):
        assert get_driver("nonexistent") is None

    def test_required_inputs_include_cx_variant_keys(self):
        simple = required_inputs_for(DriverId.CX, CXVariant.SIMPLE)
        dampened = required_inputs_for(DriverId.CX, CXVariant.DAMPENED)
        assert "repeat_customer_rate" in simple
        assert "bounce_rate_reduction" not in simple
        assert {"bounce_rate_reduction", "repeat_customer_rate_increase"} <= set(dampened)

    def test_donations_are_the_only_non_monetary_driver(self):
        volumetric = {d for d, definition in get_all_drivers().items() if not definition.monetary}
        assert volumetric == {DriverId.DONATIONS}

    def test_benchmarks_on_framework_drivers(self):
        with_benchmark = {d for d, definition in get_all_drivers().items() if definition.benchmark}
        assert with_benchmark == {DriverId.REVENUE, DriverId.EFFICIENCY, DriverId.RISK, DriverId.CX}
