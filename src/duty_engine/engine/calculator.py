"""Projection engine — year-by-year revenue, fleet and target outcomes.

Each year in the timeline follows this sequence:
  fleet composition → adoption rate → scenario revenue
  → counterfactual revenue → gap / cumulative / peak → duty by type
  → break-even check

The calculator holds only the baseline it was built with.  ``calculate`` is a
pure function of that baseline and the scenario: it mutates neither, keeps no
state between calls, and can be called concurrently.

Entry points: ``RevenueCalculator(baseline).calculate(scenario)`` or
``calculate_scenario(baseline, scenario)``.
"""

from __future__ import annotations

import logging

from duty_engine.config.baseline import BaselineData
from duty_engine.config.scenario import ScenarioConfig
from duty_engine.engine.adoption import REFERENCE_YEAR, project_fleet_composition
from duty_engine.engine.counterfactual import counterfactual_revenue
from duty_engine.engine.mechanisms import other_mechanisms_revenue
from duty_engine.engine.schedule import resolve_ev_duty, resolve_ice_duty
from duty_engine.models.results import (
    DutyByType,
    FleetComposition,
    FleetResults,
    ImpactResults,
    MetricsResults,
    RevenueResults,
    ScenarioResults,
    YearRevenue,
)

logger = logging.getLogger(__name__)

BREAK_EVEN_TOLERANCE = 0.01
"""|gap| below this share of baseline revenue counts as break-even."""


class RevenueCalculator:
    """Projects a scenario against a fixed baseline snapshot."""

    def __init__(self, baseline: BaselineData) -> None:
        self._baseline = baseline

    @property
    def baseline(self) -> BaselineData:
        return self._baseline

    # ═══════════════════════════════════════════════════════════════════
    # Public entry point
    # ═══════════════════════════════════════════════════════════════════

    def calculate(self, scenario: ScenarioConfig) -> ScenarioResults:
        """Run the full projection for ``scenario``.

        ``end_year < start_year`` yields empty year mappings and zeroed
        metrics rather than an error.
        """
        timeline = scenario.parameters.timeline
        years = list(timeline.years)

        if not years:
            logger.debug(
                "Empty timeline %s–%s for scenario %s",
                timeline.start_year, timeline.end_year, scenario.id,
            )
            return ScenarioResults()

        revenue = RevenueResults()
        fleet = FleetResults()
        impacts = ImpactResults()

        cumulative_impact = 0.0
        peak_gap = 0.0

        for year in years:
            # ── 1. Fleet composition ────────────────────────────────────
            composition = project_fleet_composition(year, scenario, self._baseline)
            fleet.composition_by_year[year] = composition

            # ── 2. Adoption rate ────────────────────────────────────────
            fleet.adoption_rate[year] = self._adoption_rate(year, composition, scenario)

            # ── 3. Scenario revenue ─────────────────────────────────────
            year_revenue = self._year_revenue(year, composition, scenario)
            revenue.by_year[year] = year_revenue

            # ── 4. Counterfactual revenue ───────────────────────────────
            baseline_revenue = counterfactual_revenue(year, self._baseline)
            revenue.baseline_by_year[year] = baseline_revenue

            # ── 5. Gap, cumulative impact, peak ─────────────────────────
            gap = baseline_revenue - year_revenue.total
            impacts.revenue_gap[year] = gap
            cumulative_impact += gap
            if abs(gap) > abs(peak_gap):
                peak_gap = gap

            # ── 6. Duty by type ─────────────────────────────────────────
            ev_duty = resolve_ev_duty(scenario.parameters.duty_rates, year, self._baseline)
            ice_duty = resolve_ice_duty(scenario.parameters.duty_rates, year, self._baseline)
            impacts.average_duty_by_type[year] = DutyByType(
                ev=ev_duty,
                ice=ice_duty,
                ratio=ev_duty / ice_duty if ice_duty > 0 else 0.0,
            )

            # ── 7. Break-even (first qualifying year only) ──────────────
            if (
                revenue.break_even_year is None
                and abs(gap) < baseline_revenue * BREAK_EVEN_TOLERANCE
            ):
                revenue.break_even_year = year

        revenue.cumulative_impact = cumulative_impact

        # ── Target achievement against the 2030 reference year ──────────
        target = self._reference_target(scenario)
        reference_ev = self._reference_ev_count(scenario, fleet)
        impacts.meets_targets = reference_ev >= target

        achievement_year: int | None = None
        if impacts.meets_targets:
            achievement_year = next(
                (y for y in years if fleet.composition_by_year[y].ev >= target),
                None,
            )

        metrics = MetricsResults(
            total_revenue_change=cumulative_impact,
            peak_revenue_gap=peak_gap,
            target_achievement_year=achievement_year,
        )

        logger.debug(
            "Scenario %s: %d years, cumulative impact %.2f, peak gap %.2f, "
            "meets 2030 target %s",
            scenario.id, len(years), cumulative_impact, peak_gap, impacts.meets_targets,
        )

        return ScenarioResults(revenue=revenue, fleet=fleet, impacts=impacts, metrics=metrics)

    # ═══════════════════════════════════════════════════════════════════
    # Helpers
    # ═══════════════════════════════════════════════════════════════════

    def _adoption_rate(
        self,
        year: int,
        composition: FleetComposition,
        scenario: ScenarioConfig,
    ) -> float:
        if year == scenario.parameters.timeline.start_year:
            return 0.0
        previous = project_fleet_composition(year - 1, scenario, self._baseline)
        return composition.ev - previous.ev

    def _year_revenue(
        self,
        year: int,
        composition: FleetComposition,
        scenario: ScenarioConfig,
    ) -> YearRevenue:
        params = scenario.parameters
        from_ev = composition.ev * resolve_ev_duty(params.duty_rates, year, self._baseline)
        from_ice = composition.ice * resolve_ice_duty(params.duty_rates, year, self._baseline)
        from_other = other_mechanisms_revenue(params.policy_mechanisms, year, composition.ev)
        return YearRevenue(
            year=year,
            total=from_ev + from_ice + from_other,
            from_ev=from_ev,
            from_ice=from_ice,
            from_other_mechanisms=from_other,
        )

    def _reference_target(self, scenario: ScenarioConfig) -> float:
        """Scenario's 2030 target, else the baseline government target."""
        targets = scenario.parameters.adoption_model.target_ev_count
        if REFERENCE_YEAR in targets:
            return targets[REFERENCE_YEAR]
        return float(self._baseline.fleet.projections.government_target_2030)

    def _reference_ev_count(self, scenario: ScenarioConfig, fleet: FleetResults) -> float:
        """EV count in 2030, projected directly if 2030 is outside the timeline."""
        if REFERENCE_YEAR in fleet.composition_by_year:
            return fleet.composition_by_year[REFERENCE_YEAR].ev
        return project_fleet_composition(REFERENCE_YEAR, scenario, self._baseline).ev


def calculate_scenario(baseline: BaselineData, scenario: ScenarioConfig) -> ScenarioResults:
    """Functional form of ``RevenueCalculator(baseline).calculate(scenario)``."""
    return RevenueCalculator(baseline).calculate(scenario)
