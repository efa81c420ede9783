"""Result models — projection output contracts."""

from duty_engine.models.results import (
    DutyByType,
    FleetComposition,
    FleetResults,
    ImpactResults,
    KeyMetrics,
    MetricsResults,
    RevenueResults,
    ScenarioResults,
    ScenarioSummary,
    YearRevenue,
)

__all__ = [
    "DutyByType",
    "FleetComposition",
    "FleetResults",
    "ImpactResults",
    "KeyMetrics",
    "MetricsResults",
    "RevenueResults",
    "ScenarioResults",
    "ScenarioSummary",
    "YearRevenue",
]
