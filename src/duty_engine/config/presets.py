"""Preset policy scenarios analysts start from.

All presets share the same base: 2024–2035, S-curve adoption toward the
13,000-EV 2030 target, elasticity −0.3, no add-on mechanisms.
"""

from __future__ import annotations

from typing import Callable

from duty_engine.config.builder import ScenarioBuilder
from duty_engine.config.duty_rates import AVERAGE_EV_DUTY, AVERAGE_ICE_DUTY
from duty_engine.config.scenario import ScenarioConfig

START_YEAR = 2024
END_YEAR = 2035
CURRENT_EV_DUTY = AVERAGE_EV_DUTY


def _base() -> ScenarioBuilder:
    return (
        ScenarioBuilder()
        .timeline(START_YEAR, END_YEAR)
        .adoption_type("sCurve")
        .targets({2030: 13_000})
        .price_elasticity(-0.3)
        .ev_duty_schedule({})
    )


def status_quo() -> ScenarioConfig:
    return (
        _base()
        .named("Status Quo", "No changes to current duty rates - natural EV growth only")
        .ev_duty(START_YEAR, CURRENT_EV_DUTY)
        .price_elasticity(0.0)
        .build()
    )


def gradual_transition() -> ScenarioConfig:
    # +£15 a year from £65 until the ICE average is reached
    schedule = {
        year: min(CURRENT_EV_DUTY + (year - START_YEAR) * 15, AVERAGE_ICE_DUTY)
        for year in range(START_YEAR, END_YEAR + 1)
    }
    return (
        _base()
        .named("Gradual Transition", "Phased increase in EV duty over 12 years to match ICE average")
        .ev_duty_schedule(schedule)
        .price_elasticity(-0.15)
        .build()
    )


def revenue_neutral() -> ScenarioConfig:
    return (
        _base()
        .named("Revenue Neutral", "Higher EV duty to hold revenue near current levels")
        .ev_duty(START_YEAR, 150.0)
        .price_elasticity(-0.2)
        .targets({2030: 10_000})
        .build()
    )


def aggressive_incentive() -> ScenarioConfig:
    return (
        _base()
        .named("Aggressive EV Incentive", "Keep EV duty low, implement weight-based mechanism for fairness")
        .ev_duty(START_YEAR, 30.0)
        .price_elasticity(-0.4)
        .targets({2030: 18_000})
        .weight_based(rate_per_kg=0.08, start_year=2026)
        .build()
    )


def usage_based() -> ScenarioConfig:
    return (
        _base()
        .named("Usage-Based System", "Distance-based charging for EVs from 2028")
        .ev_duty_schedule({START_YEAR: CURRENT_EV_DUTY, 2028: 20.0})
        .price_elasticity(-0.1)
        .targets({2030: 15_000})
        .distance_based(rate_per_mile=0.015, start_year=2028, average_miles_per_vehicle=8_500)
        .build()
    )


PRESETS: dict[str, Callable[[], ScenarioConfig]] = {
    "statusQuo": status_quo,
    "gradualTransition": gradual_transition,
    "revenueNeutral": revenue_neutral,
    "aggressiveIncentive": aggressive_incentive,
    "usageBased": usage_based,
}


def get_preset(key: str) -> ScenarioConfig:
    """Fresh ``ScenarioConfig`` for preset ``key``.  Raises ``KeyError`` if unknown."""
    try:
        factory = PRESETS[key]
    except KeyError:
        raise KeyError(f"Unknown preset '{key}'. Available: {', '.join(PRESETS)}") from None
    return factory()


def list_presets() -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for key, factory in PRESETS.items():
        scenario = factory()
        out.append({"key": key, "name": scenario.name, "description": scenario.description})
    return out
