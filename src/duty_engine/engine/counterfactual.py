"""Counterfactual baseline revenue — the neutral comparison for every scenario.

Current duty rates are held fixed and the EV fleet grows at a natural 5% a
year from the baseline observation year, capped at 15% of the fleet.  Nothing
from the scenario feeds in, so all scenarios are measured against the same
yardstick.
"""

from __future__ import annotations

from duty_engine.config.baseline import BaselineData

NATURAL_GROWTH_RATE = 0.05
NATURAL_GROWTH_CAP_SHARE = 0.15


def counterfactual_ev_count(year: int, baseline: BaselineData) -> float:
    fleet = baseline.fleet
    elapsed = max(0, year - fleet.current_composition.year)
    grown = fleet.current_composition.ev * (1 + NATURAL_GROWTH_RATE) ** elapsed
    cap = max(NATURAL_GROWTH_CAP_SHARE * fleet.total_vehicles, fleet.current_composition.ev)
    return min(grown, cap)


def counterfactual_revenue(year: int, baseline: BaselineData) -> float:
    """Revenue in ``year`` under natural growth and current duty rates."""
    ev = counterfactual_ev_count(year, baseline)
    ice = baseline.fleet.total_vehicles - ev
    rm = baseline.revenue_model
    return ev * rm.revenue_per_ev + ice * rm.revenue_per_ice
