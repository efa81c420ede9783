"""Result types — the contract between the projection engine and its consumers.

Every year-keyed mapping uses integer years in ascending order.  Monetary
values are in the baseline currency and are not rounded.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ═══════════════════════════════════════════════════════════════════════════
# Per-year records
# ═══════════════════════════════════════════════════════════════════════════

class YearRevenue(BaseModel):
    """Scenario revenue for one year."""

    year: int
    total: float
    """from_ev + from_ice + from_other_mechanisms."""
    from_ev: float
    """EV count × resolved EV duty."""
    from_ice: float
    """ICE count × baseline average ICE duty."""
    from_other_mechanisms: float
    """Weight- and distance-based add-ons (EV fleet only)."""


class FleetComposition(BaseModel):
    """Projected fleet split for one year.  ``ev + ice == total_vehicles``."""

    year: int
    ev: float
    ice: float
    ev_percentage: float
    """ev / total_vehicles × 100."""


class DutyByType(BaseModel):
    ev: float
    ice: float
    ratio: float
    """ev / ice (0 when ICE duty is 0)."""


# ═══════════════════════════════════════════════════════════════════════════
# Result sections
# ═══════════════════════════════════════════════════════════════════════════

class RevenueResults(BaseModel):
    by_year: dict[int, YearRevenue] = Field(default_factory=dict)

    baseline_by_year: dict[int, float] = Field(default_factory=dict)
    """Counterfactual revenue (natural growth, current duty) per year."""

    cumulative_impact: float = 0.0
    """Σ (baseline revenue − scenario revenue) over all years."""

    break_even_year: int | None = None
    """First year with |gap| < 1% of that year's baseline revenue."""


class FleetResults(BaseModel):
    composition_by_year: dict[int, FleetComposition] = Field(default_factory=dict)

    adoption_rate: dict[int, float] = Field(default_factory=dict)
    """EV count change versus the previous year; 0 in the first year."""


class ImpactResults(BaseModel):
    average_duty_by_type: dict[int, DutyByType] = Field(default_factory=dict)

    revenue_gap: dict[int, float] = Field(default_factory=dict)
    """Baseline − scenario revenue.  Positive = scenario raises less."""

    meets_targets: bool = False
    """Projected 2030 EV count ≥ the 2030 target."""


class MetricsResults(BaseModel):
    total_revenue_change: float = 0.0
    """Equal to ``revenue.cumulative_impact``."""

    peak_revenue_gap: float = 0.0
    """Signed gap with the largest magnitude across all years."""

    target_achievement_year: int | None = None
    """First timeline year whose EV count reaches the 2030 target."""


class ScenarioResults(BaseModel):
    """Complete output of one ``calculate`` call."""

    revenue: RevenueResults = Field(default_factory=RevenueResults)
    fleet: FleetResults = Field(default_factory=FleetResults)
    impacts: ImpactResults = Field(default_factory=ImpactResults)
    metrics: MetricsResults = Field(default_factory=MetricsResults)

    @property
    def years(self) -> list[int]:
        return list(self.revenue.by_year)


# ═══════════════════════════════════════════════════════════════════════════
# Scenario listing summary
# ═══════════════════════════════════════════════════════════════════════════

class KeyMetrics(BaseModel):
    total_revenue_change: float
    peak_gap: float
    target_year: int | None


class ScenarioSummary(BaseModel):
    """Compact card for scenario lists and comparisons."""

    id: str
    name: str
    description: str
    created_at: datetime
    key_metrics: KeyMetrics
