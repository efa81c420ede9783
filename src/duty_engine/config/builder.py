"""Typed scenario builder.

Every nested setting has an explicit setter, so callers never address
fields through dotted path strings.  The builder owns a private copy of the
scenario; ``build()`` re-validates it and hands out an independent copy, so
one builder can stamp out several variants safely.

Example::

    scenario = (
        ScenarioBuilder()
        .named("Gradual EV duty")
        .timeline(2024, 2035)
        .ev_duty(2026, 120)
        .adoption_type("linear")
        .target(2030, 13_000)
        .build()
    )
"""

from __future__ import annotations

from typing import Any

from duty_engine.config.adjustments import CategoryAdjustments
from duty_engine.config.adoption import AdoptionCurve
from duty_engine.config.scenario import ScenarioConfig


class ScenarioBuilder:
    """Fluent, validated construction of :class:`ScenarioConfig`."""

    def __init__(self, base: ScenarioConfig | None = None) -> None:
        self._scenario = (base or ScenarioConfig()).model_copy(deep=True)

    @property
    def _params(self):
        return self._scenario.parameters

    # ── Identity ────────────────────────────────────────────────────────

    def named(self, name: str, description: str | None = None) -> ScenarioBuilder:
        self._scenario.name = name
        if description is not None:
            self._scenario.description = description
        return self

    # ── Timeline ────────────────────────────────────────────────────────

    def timeline(self, start_year: int, end_year: int) -> ScenarioBuilder:
        self._params.timeline.start_year = start_year
        self._params.timeline.end_year = end_year
        return self

    # ── Duty rates ──────────────────────────────────────────────────────

    def ev_duty(self, year: int, rate: float) -> ScenarioBuilder:
        self._params.duty_rates.ev[year] = rate
        return self

    def ev_duty_schedule(self, schedule: dict[int, float], replace: bool = True) -> ScenarioBuilder:
        """Set many EV duty years at once; ``replace=False`` merges."""
        if replace:
            self._params.duty_rates.ev = dict(schedule)
        else:
            self._params.duty_rates.ev.update(schedule)
        return self

    def ice_band_rate(self, band: str, year: int, rate: float) -> ScenarioBuilder:
        self._params.duty_rates.ice_bands.setdefault(band, {})[year] = rate
        return self

    # ── Adoption ────────────────────────────────────────────────────────

    def adoption_type(self, curve: AdoptionCurve) -> ScenarioBuilder:
        self._params.adoption_model.type = curve
        return self

    def price_elasticity(self, elasticity: float) -> ScenarioBuilder:
        self._params.adoption_model.price_elasticity = elasticity
        return self

    def target(self, year: int, ev_count: float) -> ScenarioBuilder:
        self._params.adoption_model.target_ev_count[year] = ev_count
        return self

    def targets(self, counts: dict[int, float]) -> ScenarioBuilder:
        """Replace all adoption targets."""
        self._params.adoption_model.target_ev_count = dict(counts)
        return self

    # ── Mechanisms ──────────────────────────────────────────────────────

    def weight_based(
        self,
        rate_per_kg: float,
        start_year: int,
        enabled: bool = True,
    ) -> ScenarioBuilder:
        wb = self._params.policy_mechanisms.weight_based
        wb.enabled = enabled
        wb.rate_per_kg = rate_per_kg
        wb.start_year = start_year
        return self

    def distance_based(
        self,
        rate_per_mile: float,
        start_year: int,
        average_miles_per_vehicle: float | None = None,
        enabled: bool = True,
    ) -> ScenarioBuilder:
        db = self._params.policy_mechanisms.distance_based
        db.enabled = enabled
        db.rate_per_mile = rate_per_mile
        db.start_year = start_year
        if average_miles_per_vehicle is not None:
            db.average_miles_per_vehicle = average_miles_per_vehicle
        return self

    def category_adjustments(self, adjustments: CategoryAdjustments | None) -> ScenarioBuilder:
        self._params.category_adjustments = adjustments
        return self

    # ── Output ──────────────────────────────────────────────────────────

    def build(self) -> ScenarioConfig:
        """Validate and return an independent ``ScenarioConfig``.

        Raises ``pydantic.ValidationError`` if any setter stored a value that
        violates a field constraint.
        """
        return ScenarioConfig.model_validate(self._scenario.model_dump())


def with_parameters(scenario: ScenarioConfig, **updates: Any) -> ScenarioConfig:
    """Copy of ``scenario`` with top-level parameter sections replaced.

    ``with_parameters(s, timeline=Timeline(start_year=2025, end_year=2030))``
    """
    params = scenario.parameters.model_copy(update=updates, deep=True)
    data = scenario.model_dump()
    data["parameters"] = params.model_dump()
    return ScenarioConfig.model_validate(data)
