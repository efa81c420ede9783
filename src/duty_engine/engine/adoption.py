"""EV adoption projection — the four curve shapes and price feedback.

For a given year the projection:
  1. Picks the nominal target and the year it should be reached (anchor).
  2. Scales it by the price effect ``(EV duty / baseline EV duty) ** elasticity``
     and caps it at 90% of the fleet.
  3. Interpolates from the baseline EV count with the chosen curve.
  4. Clamps the result to ``[baseline EV count, total vehicles]``.

Every year is computed independently from the baseline and the year offset,
so the projection for any year can be recomputed in isolation.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from duty_engine.config.baseline import BaselineData
from duty_engine.config.scenario import ScenarioConfig
from duty_engine.engine.schedule import resolve_ev_duty
from duty_engine.models.results import FleetComposition

REFERENCE_YEAR = 2030
"""Policy deadline the government EV target refers to."""

MAX_TARGET_SHARE = 0.90
"""Price-adjusted targets never exceed this share of the fleet."""

S_CURVE_MAX_SHARE = 0.95
S_CURVE_STEEPNESS = 8.0
S_CURVE_MIDPOINT = 0.6
"""Inflection point as a fraction of the curve horizon."""


# ═══════════════════════════════════════════════════════════════════════════
# Curve shapes
# ═══════════════════════════════════════════════════════════════════════════

def linear_adoption(base: float, target: float, offset: int, horizon: int) -> float:
    """Constant absolute growth: ``base + (target − base) / horizon × offset``."""
    if horizon <= 0:
        return base
    return base + (target - base) / horizon * offset


def exponential_adoption(base: float, target: float, offset: int, horizon: int) -> float:
    """Constant-ratio growth: ``base × (target / base) ** (offset / horizon)``."""
    if offset == 0 or horizon <= 0:
        return base
    if base <= 0 or target <= 0:
        # No ratio exists to or from an empty EV fleet.
        return linear_adoption(base, target, offset, horizon)
    return base * (target / base) ** (offset / horizon)


def _logistic(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


def s_curve_adoption(
    base: float,
    target: float,
    offset: int,
    horizon: int,
    total_vehicles: float,
) -> float:
    """Logistic growth with the inflection at 60% of the horizon.

    The logistic is rescaled so ``offset == 0`` gives exactly ``base`` and
    ``offset == horizon`` gives exactly ``target``; later years plateau just
    above it.  Capped at 95% of the fleet.
    """
    if offset == 0 or horizon <= 0:
        return base

    def z(t: float) -> float:
        return S_CURVE_STEEPNESS * (t - S_CURVE_MIDPOINT * horizon) / horizon

    start = _logistic(z(0))
    end = _logistic(z(horizon))
    progress = (_logistic(z(offset)) - start) / (end - start)

    return min(base + (target - base) * progress, S_CURVE_MAX_SHARE * total_vehicles)


def custom_adoption(targets: Mapping[int, float], year: int, base: float) -> float:
    """Follow the user's year → count trajectory.

    Exact entry if present, else linear interpolation between the nearest
    listed years either side; a single neighbour is used as-is.
    """
    if year in targets:
        return targets[year]
    if not targets:
        return base

    lower = max((y for y in targets if y < year), default=None)
    upper = min((y for y in targets if y > year), default=None)

    if lower is None:
        return targets[upper]
    if upper is None:
        return targets[lower]

    ratio = (year - lower) / (upper - lower)
    return targets[lower] + (targets[upper] - targets[lower]) * ratio


# ═══════════════════════════════════════════════════════════════════════════
# Target and price effect
# ═══════════════════════════════════════════════════════════════════════════

def resolve_target(scenario: ScenarioConfig, baseline: BaselineData) -> tuple[float, int]:
    """Nominal EV target and the year it should be reached.

    Preference order: the scenario's 2030 entry (when 2030 is inside the
    timeline), the scenario's final-year entry, then the baseline's
    government target at 2030 (or at the final year if 2030 is outside).
    """
    timeline = scenario.parameters.timeline
    targets = scenario.parameters.adoption_model.target_ev_count
    government = float(baseline.fleet.projections.government_target_2030)
    reference_in_range = timeline.start_year < REFERENCE_YEAR <= timeline.end_year

    if reference_in_range and REFERENCE_YEAR in targets:
        return targets[REFERENCE_YEAR], REFERENCE_YEAR
    if timeline.end_year in targets:
        return targets[timeline.end_year], timeline.end_year
    if reference_in_range:
        return government, REFERENCE_YEAR
    return government, timeline.end_year


def price_effect(ev_duty: float, baseline_ev_duty: float, elasticity: float) -> float:
    """Adoption multiplier ``(ev_duty / baseline_ev_duty) ** elasticity``."""
    if baseline_ev_duty <= 0 or elasticity == 0:
        return 1.0
    ratio = ev_duty / baseline_ev_duty
    if ratio <= 0:
        # Free EV duty: limit of the power law.
        return math.inf if elasticity < 0 else 0.0
    return ratio ** elasticity


def adjusted_target(year: int, scenario: ScenarioConfig, baseline: BaselineData) -> float:
    """Nominal target scaled by the price effect for ``year``, capped at 90% of the fleet."""
    params = scenario.parameters
    nominal, _ = resolve_target(scenario, baseline)
    if nominal <= 0:
        return 0.0
    effect = price_effect(
        resolve_ev_duty(params.duty_rates, year, baseline),
        baseline.revenue_model.revenue_per_ev,
        params.adoption_model.price_elasticity,
    )
    return min(nominal * effect, MAX_TARGET_SHARE * baseline.fleet.total_vehicles)


# ═══════════════════════════════════════════════════════════════════════════
# Projection
# ═══════════════════════════════════════════════════════════════════════════

def project_ev_count(year: int, scenario: ScenarioConfig, baseline: BaselineData) -> float:
    """Projected EV count in ``year``, clamped to ``[baseline EVs, total vehicles]``.

    Years at or before the timeline start give the baseline count.
    """
    params = scenario.parameters
    model = params.adoption_model
    base = float(baseline.fleet.current_composition.ev)
    total = float(baseline.fleet.total_vehicles)
    offset = year - params.timeline.start_year

    if offset <= 0:
        return base
    if model.type == "custom":
        ev = custom_adoption(model.target_ev_count, year, base)
    else:
        _, anchor_year = resolve_target(scenario, baseline)
        horizon = anchor_year - params.timeline.start_year
        target = adjusted_target(year, scenario, baseline)
        # The count holds at the target once the anchor year is reached.
        offset = min(offset, horizon)

        if model.type == "linear":
            ev = linear_adoption(base, target, offset, horizon)
        elif model.type == "exponential":
            ev = exponential_adoption(base, target, offset, horizon)
        else:
            ev = s_curve_adoption(base, target, offset, horizon, total)

    return max(base, min(ev, total))


def project_fleet_composition(
    year: int,
    scenario: ScenarioConfig,
    baseline: BaselineData,
) -> FleetComposition:
    """EV / ICE split for ``year``."""
    total = baseline.fleet.total_vehicles
    ev = project_ev_count(year, scenario, baseline)
    return FleetComposition(
        year=year,
        ev=ev,
        ice=total - ev,
        ev_percentage=ev / total * 100 if total > 0 else 0.0,
    )
