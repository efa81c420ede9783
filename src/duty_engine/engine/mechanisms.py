"""Add-on revenue from the weight- and distance-based EV mechanisms."""

from __future__ import annotations

from duty_engine.config.mechanisms import PolicyMechanisms

ASSUMED_EV_WEIGHT_KG = 1_500.0
"""Average EV kerb weight; the baseline carries no per-vehicle weights."""


def weight_based_revenue(mechanisms: PolicyMechanisms, year: int, ev_count: float) -> float:
    wb = mechanisms.weight_based
    if not wb.enabled or year < wb.start_year:
        return 0.0
    return ev_count * ASSUMED_EV_WEIGHT_KG * wb.rate_per_kg


def distance_based_revenue(mechanisms: PolicyMechanisms, year: int, ev_count: float) -> float:
    db = mechanisms.distance_based
    if not db.enabled or year < db.start_year:
        return 0.0
    return ev_count * db.average_miles_per_vehicle * db.rate_per_mile


def other_mechanisms_revenue(mechanisms: PolicyMechanisms, year: int, ev_count: float) -> float:
    """Total add-on revenue for ``year``.  Both mechanisms apply to EVs only."""
    return (
        weight_based_revenue(mechanisms, year, ev_count)
        + distance_based_revenue(mechanisms, year, ev_count)
    )
