"""Tests for EV adoption curves, target resolution and price feedback."""

from __future__ import annotations

import math

import pytest

from duty_engine.engine.adoption import (
    adjusted_target,
    custom_adoption,
    exponential_adoption,
    linear_adoption,
    price_effect,
    project_ev_count,
    project_fleet_composition,
    resolve_target,
    s_curve_adoption,
)

ALL_CURVES = ["linear", "exponential", "sCurve", "custom"]


# ═══════════════════════════════════════════════════════════════════════════
# Curve shapes
# ═══════════════════════════════════════════════════════════════════════════

class TestCurveShapes:

    def test_linear_midpoint(self):
        assert linear_adoption(1_000, 5_000, 5, 10) == pytest.approx(3_000)

    def test_linear_zero_horizon_returns_base(self):
        assert linear_adoption(1_000, 5_000, 3, 0) == 1_000

    def test_exponential_constant_ratio(self):
        # 1,000 → 4,000 over two years doubles each year
        assert exponential_adoption(1_000, 4_000, 1, 2) == pytest.approx(2_000)
        assert exponential_adoption(1_000, 4_000, 2, 2) == pytest.approx(4_000)

    def test_exponential_offset_zero_returns_base(self):
        assert exponential_adoption(1_000, 4_000, 0, 2) == 1_000

    def test_exponential_from_zero_base_falls_back_to_linear(self):
        assert exponential_adoption(0, 1_000, 5, 10) == pytest.approx(500)

    def test_exponential_to_zero_target_falls_back_to_linear(self):
        assert exponential_adoption(1_000, 0, 1, 2) == pytest.approx(500)
        assert exponential_adoption(1_000, 0, -1, 2) == pytest.approx(1_500)

    def test_s_curve_hits_base_and_target_exactly(self):
        assert s_curve_adoption(1_500, 13_000, 0, 6, 65_000) == 1_500
        assert s_curve_adoption(1_500, 13_000, 6, 6, 65_000) == pytest.approx(13_000)

    def test_s_curve_slow_start(self):
        early = s_curve_adoption(1_500, 13_000, 1, 6, 65_000)
        assert 1_500 < early < 1_500 + (13_000 - 1_500) / 6

    def test_s_curve_capped_at_95_percent_of_fleet(self):
        assert s_curve_adoption(0, 100_000, 10, 10, 10_000) == pytest.approx(9_500)

    def test_custom_exact_year(self):
        assert custom_adoption({2026: 3_000, 2030: 7_000}, 2026, 1_000) == 3_000

    def test_custom_interpolates(self):
        assert custom_adoption({2026: 3_000, 2030: 7_000}, 2028, 1_000) == pytest.approx(5_000)

    def test_custom_single_bound(self):
        targets = {2026: 3_000, 2030: 7_000}
        assert custom_adoption(targets, 2025, 1_000) == 3_000
        assert custom_adoption(targets, 2033, 1_000) == 7_000

    def test_custom_without_entries_returns_base(self):
        assert custom_adoption({}, 2028, 1_000) == 1_000


# ═══════════════════════════════════════════════════════════════════════════
# Target resolution and price effect
# ═══════════════════════════════════════════════════════════════════════════

class TestTargetResolution:

    def test_2030_entry_anchored_at_2030(self, baseline, s_curve_scenario):
        assert resolve_target(s_curve_scenario, baseline) == (13_000, 2030)

    def test_end_year_entry_when_no_2030_entry(self, baseline, scenario_factory):
        scenario = scenario_factory(targets={2035: 20_000})
        assert resolve_target(scenario, baseline) == (20_000, 2035)

    def test_government_target_when_no_entries(self, baseline, scenario_factory):
        scenario = scenario_factory(targets={})
        assert resolve_target(scenario, baseline) == (13_000, 2030)

    def test_2030_outside_timeline_uses_government_target(self, baseline, scenario_factory):
        scenario = scenario_factory(start_year=2031, end_year=2040, targets={2030: 15_000})
        assert resolve_target(scenario, baseline) == (13_000, 2040)

    def test_end_year_entry_wins_when_2030_outside_timeline(self, baseline, scenario_factory):
        scenario = scenario_factory(start_year=2031, end_year=2040, targets={2040: 20_000})
        assert resolve_target(scenario, baseline) == (20_000, 2040)


class TestPriceEffect:

    def test_unchanged_duty_is_neutral(self):
        assert price_effect(65, 65, -0.3) == pytest.approx(1.0)

    def test_doubled_duty_with_negative_elasticity(self):
        assert price_effect(130, 65, -0.3) == pytest.approx(2 ** -0.3)

    def test_zero_elasticity(self):
        assert price_effect(500, 65, 0.0) == 1.0

    def test_zero_baseline_duty(self):
        assert price_effect(100, 0, -0.3) == 1.0

    def test_free_ev_duty(self):
        assert math.isinf(price_effect(0, 65, -0.3))
        assert price_effect(0, 65, 0.3) == 0.0

    def test_higher_duty_never_raises_adjusted_target(self, baseline, scenario_factory):
        unchanged = scenario_factory()
        raised = scenario_factory(ev_duty={2024: 65.0, 2027: 130.0})
        for year in range(2024, 2036):
            assert adjusted_target(year, raised, baseline) <= adjusted_target(year, unchanged, baseline)
        assert adjusted_target(2028, raised, baseline) < adjusted_target(2028, unchanged, baseline)

    def test_adjusted_target_capped_at_90_percent(self, baseline, scenario_factory):
        scenario = scenario_factory(ev_duty={2024: 0.0})
        assert adjusted_target(2025, scenario, baseline) == pytest.approx(0.9 * 65_000)

    def test_zero_nominal_target(self, baseline, scenario_factory):
        scenario = scenario_factory(targets={2030: 0})
        assert adjusted_target(2028, scenario, baseline) == 0.0


# ═══════════════════════════════════════════════════════════════════════════
# Projection
# ═══════════════════════════════════════════════════════════════════════════

class TestProjection:

    @pytest.mark.parametrize("curve", ALL_CURVES)
    def test_start_year_equals_baseline_count(self, baseline, scenario_factory, curve):
        scenario = scenario_factory(curve, targets={2026: 5_000, 2030: 13_000})
        assert project_ev_count(2024, scenario, baseline) == 1_500

    @pytest.mark.parametrize("curve", ALL_CURVES)
    def test_within_floor_and_fleet(self, baseline, scenario_factory, curve):
        scenario = scenario_factory(curve, targets={2026: 500, 2030: 80_000})
        for year in range(2024, 2036):
            ev = project_ev_count(year, scenario, baseline)
            assert 1_500 <= ev <= 65_000

    @pytest.mark.parametrize("curve", ["linear", "exponential"])
    def test_monotonic_when_target_above_base(self, baseline, scenario_factory, curve):
        scenario = scenario_factory(curve)
        counts = [project_ev_count(y, scenario, baseline) for y in range(2024, 2036)]
        assert counts == sorted(counts)

    def test_linear_midpoint_scenario(self, small_baseline, scenario_factory):
        scenario = scenario_factory("linear", end_year=2034, targets={2034: 5_000}, elasticity=0.0)
        assert project_ev_count(2029, scenario, small_baseline) == pytest.approx(3_000)

    def test_s_curve_reaches_2030_target(self, baseline, s_curve_scenario):
        assert project_ev_count(2030, s_curve_scenario, baseline) == pytest.approx(13_000)

    def test_custom_is_not_price_adjusted(self, small_baseline, scenario_factory):
        scenario = scenario_factory(
            "custom", end_year=2032, targets={2026: 3_000, 2030: 7_000}, ev_duty={2024: 300.0},
        )
        assert project_ev_count(2028, scenario, small_baseline) == pytest.approx(5_000)

    def test_composition_sums_to_fleet(self, baseline, s_curve_scenario):
        comp = project_fleet_composition(2028, s_curve_scenario, baseline)
        assert comp.ev + comp.ice == pytest.approx(65_000)
        assert comp.ev_percentage == pytest.approx(comp.ev / 65_000 * 100)


class TestAfterAnchorYear:
    """Years past the anchor hold at the target instead of extrapolating."""

    @pytest.mark.parametrize("curve", ["linear", "exponential", "sCurve"])
    def test_count_holds_at_adjusted_target(self, baseline, scenario_factory, curve):
        scenario = scenario_factory(curve)
        for year in range(2031, 2036):
            ev = project_ev_count(year, scenario, baseline)
            target = adjusted_target(year, scenario, baseline)
            assert ev <= target + 1e-6
            assert ev == pytest.approx(target)
            assert ev <= 0.9 * 65_000

    @pytest.mark.parametrize("curve", ["linear", "exponential", "sCurve"])
    def test_count_follows_price_effect_after_anchor(self, baseline, scenario_factory, curve):
        scenario = scenario_factory(curve, ev_duty={2024: 65.0, 2033: 130.0})
        assert project_ev_count(2032, scenario, baseline) == pytest.approx(13_000)
        assert project_ev_count(2033, scenario, baseline) == pytest.approx(13_000 * 2 ** -0.3)

    @pytest.mark.parametrize("curve", ALL_CURVES)
    def test_years_before_start_give_baseline_count(self, baseline, scenario_factory, curve):
        scenario = scenario_factory(curve, start_year=2031, end_year=2035, targets={2030: 13_000, 2035: 20_000})
        assert project_ev_count(2030, scenario, baseline) == 1_500
        assert project_ev_count(2025, scenario, baseline) == 1_500

    @pytest.mark.parametrize("curve", ALL_CURVES)
    def test_zero_adjusted_target_after_2030_start(self, baseline, scenario_factory, curve):
        # Positive elasticity with free EV duty drives the adjusted target to 0.
        scenario = scenario_factory(
            curve, start_year=2031, end_year=2035, elasticity=0.3, ev_duty={2024: 0.0},
        )
        assert adjusted_target(2033, scenario, baseline) == 0.0
        for year in range(2030, 2036):
            assert project_ev_count(year, scenario, baseline) >= 1_500
