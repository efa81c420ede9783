"""Engine — deterministic revenue and fleet projection."""

from duty_engine.engine.schedule import resolve_year_value, resolve_ev_duty, resolve_ice_duty
from duty_engine.engine.adoption import (
    REFERENCE_YEAR,
    project_ev_count,
    project_fleet_composition,
)
from duty_engine.engine.mechanisms import other_mechanisms_revenue
from duty_engine.engine.counterfactual import counterfactual_revenue
from duty_engine.engine.calculator import RevenueCalculator, calculate_scenario

__all__ = [
    "resolve_year_value",
    "resolve_ev_duty",
    "resolve_ice_duty",
    "REFERENCE_YEAR",
    "project_ev_count",
    "project_fleet_composition",
    "other_mechanisms_revenue",
    "counterfactual_revenue",
    "RevenueCalculator",
    "calculate_scenario",
]
