"""Shared test fixtures — baseline and scenarios matching scenarios/*.yaml."""

from __future__ import annotations

from pathlib import Path

import pytest

from duty_engine.config import (
    AdoptionModelConfig,
    BaselineData,
    DutyRates,
    ScenarioConfig,
    ScenarioParameters,
    Timeline,
    default_baseline,
)
from duty_engine.config.baseline import CurrentComposition, FleetBaseline
from duty_engine.engine.calculator import RevenueCalculator

SCENARIO_DIR = Path(__file__).parent.parent / "scenarios"


@pytest.fixture
def scenario_dir() -> Path:
    return SCENARIO_DIR


@pytest.fixture
def baseline() -> BaselineData:
    """Isle of Man 2024: 65,000 vehicles, 1,500 EVs, £65 / £230 duty."""
    return default_baseline()


@pytest.fixture
def small_baseline() -> BaselineData:
    """1,000 EVs in a 10,000-vehicle fleet, for hand-checkable arithmetic."""
    return BaselineData(
        fleet=FleetBaseline(
            total_vehicles=10_000,
            current_composition=CurrentComposition(ev=1_000, ice=9_000, ev_percentage=10.0, year=2024),
        ),
    )


@pytest.fixture
def calculator(baseline) -> RevenueCalculator:
    return RevenueCalculator(baseline)


def make_scenario(
    adoption_type: str = "sCurve",
    start_year: int = 2024,
    end_year: int = 2035,
    targets: dict[int, float] | None = None,
    elasticity: float = -0.3,
    ev_duty: dict[int, float] | None = None,
) -> ScenarioConfig:
    return ScenarioConfig(
        name=f"{adoption_type} test",
        parameters=ScenarioParameters(
            timeline=Timeline(start_year=start_year, end_year=end_year),
            duty_rates=DutyRates(ev=ev_duty if ev_duty is not None else {2024: 65.0}),
            adoption_model=AdoptionModelConfig(
                type=adoption_type,
                target_ev_count=targets if targets is not None else {2030: 13_000},
                price_elasticity=elasticity,
            ),
        ),
    )


@pytest.fixture
def s_curve_scenario() -> ScenarioConfig:
    """S-curve to 13,000 EVs by 2030, constant £65 EV duty, 2024–2035."""
    return make_scenario("sCurve")


@pytest.fixture
def linear_scenario() -> ScenarioConfig:
    return make_scenario("linear")


@pytest.fixture
def scenario_factory():
    """``make_scenario`` as a fixture, for tests that need several variants."""
    return make_scenario
