"""Pydantic validation tests — ensure invalid inputs are rejected.

Covers config model constraints, the baseline composition invariant, year-key
coercion, and the caller-side ``validate_scenario`` gate.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from duty_engine.api.validation import MAX_HORIZON_YEARS, ScenarioValidationError, validate_scenario
from duty_engine.config import (
    AdoptionModelConfig,
    BaselineData,
    CategoryAdjustment,
    DutyRates,
    ScenarioConfig,
    Timeline,
    WeightBasedMechanism,
)
from duty_engine.config.baseline import CurrentComposition, FleetBaseline, default_baseline
from duty_engine.config.mechanisms import DistanceBasedMechanism


# ═══════════════════════════════════════════════════════════════════════════
# Baseline
# ═══════════════════════════════════════════════════════════════════════════

class TestBaselineValidation:

    def test_defaults_are_valid(self):
        b = BaselineData()
        assert b.fleet.total_vehicles == 65_000
        assert b.fleet.current_composition.ev + b.fleet.current_composition.ice == 65_000

    def test_composition_must_sum_to_total(self):
        with pytest.raises(ValidationError):
            FleetBaseline(
                total_vehicles=65_000,
                current_composition=CurrentComposition(ev=2_000, ice=63_500),
            )

    def test_negative_ev_count_rejected(self):
        with pytest.raises(ValidationError):
            CurrentComposition(ev=-1, ice=65_001)

    def test_default_snapshot_figures(self):
        b = default_baseline()
        assert (b.fleet.current_composition.ev, b.fleet.current_composition.ice) == (1_500, 63_500)
        assert b.financial.vehicle_duty_revenue.current == 14_702_500
        assert b.revenue_model.current_annual_revenue == 14_702_500
        assert b.fleet.projections.government_target_2030 == 13_000
        assert b.fleet.projections.low_ambition_2030 == 10_000
        assert b.fleet.projections.target_ev_percentage_2030 == 20

    def test_unsourced_figures_default_to_zero(self):
        b = default_baseline()
        assert b.fleet.charging_infrastructure.charging_points == 0
        assert b.fleet.charging_infrastructure.vehicles_per_charging_point == 0
        assert b.financial.roads_budget.total == 0

    def test_baseline_is_frozen(self):
        b = BaselineData()
        with pytest.raises(ValidationError):
            b.fleet = FleetBaseline()


# ═══════════════════════════════════════════════════════════════════════════
# Scenario inputs
# ═══════════════════════════════════════════════════════════════════════════

class TestScenarioValidation:

    def test_defaults_are_valid(self):
        s = ScenarioConfig()
        assert s.parameters.timeline.start_year == 2024
        assert s.parameters.adoption_model.type == "sCurve"
        assert s.id.startswith("scenario_")

    def test_timeline_years_inclusive(self):
        assert Timeline(start_year=2024, end_year=2026).years == range(2024, 2027)
        assert list(Timeline(start_year=2030, end_year=2029).years) == []

    def test_ids_are_unique(self):
        assert ScenarioConfig().id != ScenarioConfig().id

    def test_string_year_keys_coerced(self):
        rates = DutyRates(ev={"2030": 120, "2024": 65})
        assert rates.ev == {2024: 65.0, 2030: 120.0}
        assert list(rates.ev) == [2024, 2030]

    def test_ice_band_year_keys_coerced(self):
        rates = DutyRates(ice_bands={"H": {"2026": 250}})
        assert rates.ice_bands["H"] == {2026: 250.0}

    def test_negative_ev_duty_rejected(self):
        with pytest.raises(ValidationError):
            DutyRates(ev={2024: -5})

    def test_unknown_curve_rejected(self):
        with pytest.raises(ValidationError):
            AdoptionModelConfig(type="quadratic")

    def test_elasticity_bounds(self):
        with pytest.raises(ValidationError):
            AdoptionModelConfig(price_elasticity=-1.5)
        with pytest.raises(ValidationError):
            AdoptionModelConfig(price_elasticity=1.01)

    def test_negative_target_rejected(self):
        with pytest.raises(ValidationError):
            AdoptionModelConfig(target_ev_count={2030: -1})

    def test_negative_mechanism_rates_rejected(self):
        with pytest.raises(ValidationError):
            WeightBasedMechanism(rate_per_kg=-0.1)
        with pytest.raises(ValidationError):
            DistanceBasedMechanism(rate_per_mile=-0.1)

    def test_category_adjustment_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            CategoryAdjustment(type="lift", value=10, start_year=2030, end_year=2028)

    def test_category_adjustment_apply(self):
        lift = CategoryAdjustment(type="lift", value=10, start_year=2025, end_year=2027)
        assert lift.apply(100) == pytest.approx(110)
        assert lift.applies_to(2026)
        assert not lift.applies_to(2028)
        assert CategoryAdjustment(type="reduce", value=150, start_year=2025).apply(100) == 0.0
        assert CategoryAdjustment(type="absolute", value=40, start_year=2025).apply(100) == 40
        assert CategoryAdjustment(type="hold", start_year=2025).apply(100) == 100


# ═══════════════════════════════════════════════════════════════════════════
# validate_scenario
# ═══════════════════════════════════════════════════════════════════════════

class TestValidateScenario:

    def test_valid_dict(self):
        scenario = validate_scenario({"name": "ok"})
        assert isinstance(scenario, ScenarioConfig)
        assert scenario.name == "ok"

    def test_valid_model_passes_through(self):
        scenario = ScenarioConfig()
        assert validate_scenario(scenario) is scenario

    def test_end_before_start(self):
        payload = {"parameters": {"timeline": {"start_year": 2030, "end_year": 2025}}}
        with pytest.raises(ScenarioValidationError) as exc_info:
            validate_scenario(payload)
        err = exc_info.value
        assert err.kind == "validation_failure"
        assert err.errors[0]["loc"] == ["parameters", "timeline", "end_year"]

    def test_horizon_too_long(self):
        payload = {"parameters": {"timeline": {"start_year": 2024, "end_year": 2024 + MAX_HORIZON_YEARS + 1}}}
        with pytest.raises(ScenarioValidationError):
            validate_scenario(payload)

    def test_field_errors_collected(self):
        payload = {
            "parameters": {
                "adoption_model": {"type": "quadratic", "price_elasticity": 5},
            },
        }
        with pytest.raises(ScenarioValidationError) as exc_info:
            validate_scenario(payload)
        body = exc_info.value.to_dict()
        assert body["kind"] == "validation_failure"
        assert len(body["errors"]) == 2
        assert all("loc" in e and "msg" in e for e in body["errors"])
