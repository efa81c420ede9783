"""Sparse year → value resolution for duty schedules.

A schedule lists only the years where a value changes.  Any other year
inherits the most recent earlier entry; years before the first entry use a
caller-supplied default.
"""

from __future__ import annotations

from collections.abc import Mapping

from duty_engine.config.baseline import BaselineData
from duty_engine.config.duty_rates import DutyRates


def resolve_year_value(schedule: Mapping[int, float], year: int, default: float) -> float:
    """Value in force in ``year``.

    Parameters
    ----------
    schedule : Mapping[int, float]
        Sparse year → value mapping (any key order).
    year : int
        Year to resolve.
    default : float
        Returned when no entry exists at or before ``year``.
    """
    if year in schedule:
        return schedule[year]

    prior = [y for y in schedule if y < year]
    if not prior:
        return default
    return schedule[max(prior)]


def resolve_ev_duty(duty_rates: DutyRates, year: int, baseline: BaselineData) -> float:
    """Annual EV duty in ``year``, falling back to the baseline average per EV."""
    return resolve_year_value(duty_rates.ev, year, baseline.revenue_model.revenue_per_ev)


def resolve_ice_duty(duty_rates: DutyRates, year: int, baseline: BaselineData) -> float:
    """Annual ICE duty in ``year``.

    Always the baseline average per ICE vehicle.  ``duty_rates.ice_bands`` is
    not priced because the fleet's distribution across emission bands is not
    part of the baseline.
    """
    return baseline.revenue_model.revenue_per_ice
