"""Narrative generator — plain-English interpretation of scenario results.

Converts raw ``ScenarioResults`` into warnings, headline insights, a text
report, and a compact ``ScenarioSummary`` for scenario lists.
"""

from __future__ import annotations

from duty_engine.config.scenario import ScenarioConfig
from duty_engine.models.results import KeyMetrics, ScenarioResults, ScenarioSummary

REVENUE_LOSS_WARNING_THRESHOLD = 2_000_000.0
LATE_BREAK_EVEN_YEAR = 2040


def generate_warnings(results: ScenarioResults) -> list[str]:
    """Policy risks a reviewer should see before anything else."""
    warnings: list[str] = []

    if results.metrics.peak_revenue_gap > REVENUE_LOSS_WARNING_THRESHOLD:
        warnings.append("Revenue loss exceeds £2M annually - consider policy adjustments")

    if not results.impacts.meets_targets:
        warnings.append("Scenario does not meet 2030 EV adoption targets")

    be = results.revenue.break_even_year
    if be is not None and be > LATE_BREAK_EVEN_YEAR:
        warnings.append("Revenue stabilization takes longer than expected")

    return warnings


def generate_insights(results: ScenarioResults) -> list[str]:
    """Positive findings worth highlighting."""
    insights: list[str] = []

    if results.revenue.break_even_year is not None:
        insights.append(f"Revenue stabilizes by {results.revenue.break_even_year}")

    if results.metrics.peak_revenue_gap < 0:
        insights.append("Policy generates net revenue gain")

    if results.impacts.meets_targets and results.metrics.target_achievement_year is not None:
        insights.append(f"EV targets achieved by {results.metrics.target_achievement_year}")

    return insights


def summarize_scenario(scenario: ScenarioConfig, results: ScenarioResults) -> ScenarioSummary:
    return ScenarioSummary(
        id=scenario.id,
        name=scenario.name,
        description=scenario.description,
        created_at=scenario.created_at,
        key_metrics=KeyMetrics(
            total_revenue_change=results.metrics.total_revenue_change,
            peak_gap=results.metrics.peak_revenue_gap,
            target_year=results.metrics.target_achievement_year,
        ),
    )


def generate_narrative(scenario: ScenarioConfig, results: ScenarioResults) -> str:
    """Plain-text report covering the scenario, revenue, fleet and risks."""
    params = scenario.parameters
    timeline = params.timeline
    years = results.years

    sections: list[str] = []

    # ── 1. Scenario ──
    sections.append("=" * 60)
    sections.append(f"SCENARIO: {scenario.name}")
    sections.append("=" * 60)
    if scenario.description:
        sections.append(scenario.description)
    sections.append(
        f"Timeline: {timeline.start_year}–{timeline.end_year}\n"
        f"Adoption model: {params.adoption_model.type} "
        f"(elasticity {params.adoption_model.price_elasticity:+.2f})"
    )
    mech = params.policy_mechanisms
    if mech.weight_based.enabled:
        sections.append(
            f"Weight-based charge: £{mech.weight_based.rate_per_kg:.3f}/kg from {mech.weight_based.start_year}"
        )
    if mech.distance_based.enabled:
        sections.append(
            f"Distance-based charge: £{mech.distance_based.rate_per_mile:.3f}/mile "
            f"from {mech.distance_based.start_year}"
        )

    if not years:
        sections.append("\nNo years to project.")
        return "\n".join(sections)

    first, last = years[0], years[-1]
    first_rev = results.revenue.by_year[first]
    last_rev = results.revenue.by_year[last]
    last_fleet = results.fleet.composition_by_year[last]

    # ── 2. Revenue ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("REVENUE")
    sections.append("=" * 60)
    sections.append(
        f"Revenue {first}: £{first_rev.total:,.0f}\n"
        f"Revenue {last}: £{last_rev.total:,.0f}\n"
        f"  of which EV duty £{last_rev.from_ev:,.0f}, ICE duty £{last_rev.from_ice:,.0f}, "
        f"other mechanisms £{last_rev.from_other_mechanisms:,.0f}\n"
        f"Cumulative gap vs current policy: £{results.revenue.cumulative_impact:,.0f}\n"
        f"Peak annual gap: £{results.metrics.peak_revenue_gap:,.0f}\n"
        f"Break-even year: {results.revenue.break_even_year or 'NONE (within timeline)'}"
    )

    # ── 3. Fleet ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("FLEET")
    sections.append("=" * 60)
    sections.append(
        f"EVs in {last}: {last_fleet.ev:,.0f} ({last_fleet.ev_percentage:.1f}% of fleet)\n"
        f"2030 target met: {'YES' if results.impacts.meets_targets else 'NO'}"
    )
    if results.metrics.target_achievement_year is not None:
        sections.append(f"Target first reached: {results.metrics.target_achievement_year}")

    # ── 4. Warnings & insights ──
    warnings = generate_warnings(results)
    insights = generate_insights(results)
    if warnings or insights:
        sections.append("")
        sections.append("=" * 60)
        sections.append("FINDINGS")
        sections.append("=" * 60)
        for w in warnings:
            sections.append(f"  ! {w}")
        for i in insights:
            sections.append(f"  + {i}")

    return "\n".join(sections)


def generate_comparison_narrative(
    scenarios: list[ScenarioConfig],
    results: list[ScenarioResults],
) -> str:
    """Side-by-side table of several scenarios, smallest revenue loss first."""
    if not results:
        return "No results to compare."
    if len(results) < 2:
        return generate_narrative(scenarios[0], results[0])

    rows = sorted(
        zip(scenarios, results),
        key=lambda pair: pair[1].metrics.total_revenue_change,
    )

    sections: list[str] = []
    sections.append("=" * 60)
    sections.append("SCENARIO COMPARISON")
    sections.append("=" * 60)

    header = f"{'Scenario':28s}  {'Cumulative gap':>16s}  {'Peak gap':>14s}  {'Target':>7s}"
    sections.append(header)
    sections.append("-" * len(header))
    for scenario, r in rows:
        target = str(r.metrics.target_achievement_year) if r.metrics.target_achievement_year else "-"
        sections.append(
            f"{scenario.name[:28]:28s}  £{r.metrics.total_revenue_change:>14,.0f}  "
            f"£{r.metrics.peak_revenue_gap:>12,.0f}  {target:>7s}"
        )

    best_scenario, best = rows[0]
    sections.append(
        f"\nSmallest revenue loss: {best_scenario.name} "
        f"(£{best.metrics.total_revenue_change:,.0f} cumulative)"
    )
    return "\n".join(sections)
