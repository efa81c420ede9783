"""Context manifest generator — makes the policy engine self-describing.

Produces structured context at two detail levels:
  - ``compact``: parameter schemas + descriptions
  - ``full``:    adds the policy model, formulas and an interpretation guide

A client reads ``GET /context`` once, then knows what it can configure and
how to read the results.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from duty_engine.config import (
    AdoptionModelConfig,
    DistanceBasedMechanism,
    DutyRates,
    ScenarioConfig,
    Timeline,
    WeightBasedMechanism,
)


# ═══════════════════════════════════════════════════════════════════════════
# Public response models
# ═══════════════════════════════════════════════════════════════════════════

class ParameterInfo(BaseModel):
    """One configurable parameter, machine-readable."""
    name: str
    type: str
    default: Any
    description: str
    constraints: dict[str, Any] = Field(default_factory=dict)


class SectionSchema(BaseModel):
    section: str
    description: str
    parameters: list[ParameterInfo]


class OutputFieldInfo(BaseModel):
    name: str
    type: str
    description: str
    unit: str = ""


class EndpointInfo(BaseModel):
    method: str
    path: str
    description: str


class EngineContext(BaseModel):
    """Full self-describing context."""
    engine_name: str
    version: str
    description: str
    policy_model: str
    key_formulas: list[dict[str, str]]
    input_sections: list[SectionSchema]
    key_outputs: list[OutputFieldInfo]
    endpoints: list[EndpointInfo]
    interpretation_guide: str


# ═══════════════════════════════════════════════════════════════════════════
# Schema extraction from Pydantic models
# ═══════════════════════════════════════════════════════════════════════════

def _extract_params(model_cls: type[BaseModel]) -> list[ParameterInfo]:
    """Extract parameter info from a Pydantic model class."""
    params: list[ParameterInfo] = []
    for name, field_info in model_cls.model_fields.items():
        constraints: dict[str, Any] = {}
        for attr in ("ge", "gt", "le", "lt"):
            meta_val = _get_field_metadata(field_info, attr)
            if meta_val is not None:
                constraints[attr] = meta_val

        if field_info.default_factory is not None:
            default_val = field_info.default_factory()
        else:
            default_val = field_info.default
        if isinstance(default_val, BaseModel) or callable(default_val):
            default_val = None

        type_str = str(field_info.annotation) if field_info.annotation else "Any"
        type_str = type_str.replace("typing.", "").replace("<class '", "").replace("'>", "")

        params.append(ParameterInfo(
            name=name,
            type=type_str,
            default=default_val,
            description=field_info.description or "",
            constraints=constraints,
        ))
    return params


def _get_field_metadata(field_info: Any, attr: str) -> Any:
    for m in getattr(field_info, "metadata", []):
        if hasattr(m, attr):
            return getattr(m, attr)
    return None


# ═══════════════════════════════════════════════════════════════════════════
# Static content
# ═══════════════════════════════════════════════════════════════════════════

_POLICY_MODEL = """
VEHICLE DUTY POLICY ENGINE

WHAT IT DOES:
Projects annual vehicle-duty revenue as the fleet electrifies. EVs pay a flat
duty far below the average combustion-vehicle duty, so every conversion
lowers revenue unless policy changes. For each year in the timeline the engine
computes:
  - Fleet composition: EV count from one of four adoption curves, adjusted
    for how the EV duty compares with today's rate (price elasticity)
  - Revenue: EV duty + average ICE duty + optional weight/distance charges
  - Revenue gap: counterfactual revenue (current rates, natural 5%/yr EV
    growth capped at 15% of the fleet) minus scenario revenue
  - Target achievement: whether the 2030 EV target is met, and when

THE LEVERS:
  - duty_rates.ev: EV duty by year (unlisted years inherit the previous one)
  - adoption_model: curve shape, 2030 target, price elasticity
  - policy_mechanisms: weight-based (per kg, 1,500 kg assumed) and
    distance-based (per mile) charges on EVs
"""

_INTERPRETATION_GUIDE = """
HOW TO INTERPRET RESULTS:

1. REVENUE GAP:
   Positive = the scenario raises less than the counterfactual. Negative =
   the policy raises more. cumulative_impact sums the gap over all years.

2. PEAK REVENUE GAP:
   The single worst (largest magnitude) year, sign preserved.

3. BREAK-EVEN YEAR:
   First year scenario and counterfactual revenue are within 1%. It need not
   hold in later years.

4. MEETS TARGETS:
   True when the projected 2030 EV count reaches the 2030 target.
   target_achievement_year is the first year the count reaches it.
"""

_KEY_FORMULAS = [
    {
        "name": "Price effect",
        "formula": "(ev_duty(year) / baseline_ev_duty) ** price_elasticity",
        "meaning": "Multiplies the EV target; higher EV duty with negative elasticity lowers adoption",
    },
    {
        "name": "Adjusted target",
        "formula": "min(target × price_effect, 0.9 × total_vehicles)",
        "meaning": "The count the adoption curve heads toward",
    },
    {
        "name": "Scenario revenue",
        "formula": "ev × ev_duty + ice × average_ice_duty + weight/distance add-ons",
        "meaning": "Annual duty raised under the scenario",
    },
    {
        "name": "Revenue gap",
        "formula": "counterfactual_revenue − scenario_revenue",
        "meaning": "Shortfall (positive) or surplus (negative) against current policy",
    },
]

_KEY_OUTPUTS = [
    OutputFieldInfo(name="revenue.by_year", type="dict[int, YearRevenue]", description="Total, EV, ICE and add-on revenue per year", unit="£"),
    OutputFieldInfo(name="revenue.baseline_by_year", type="dict[int, float]", description="Counterfactual revenue per year", unit="£"),
    OutputFieldInfo(name="revenue.cumulative_impact", type="float", description="Sum of revenue gaps", unit="£"),
    OutputFieldInfo(name="revenue.break_even_year", type="int|None", description="First year within 1% of counterfactual", unit="year"),
    OutputFieldInfo(name="fleet.composition_by_year", type="dict[int, FleetComposition]", description="EV / ICE counts and EV share", unit="vehicles"),
    OutputFieldInfo(name="fleet.adoption_rate", type="dict[int, float]", description="EV count change from previous year", unit="vehicles/yr"),
    OutputFieldInfo(name="impacts.average_duty_by_type", type="dict[int, DutyByType]", description="EV duty, ICE duty and their ratio", unit="£"),
    OutputFieldInfo(name="impacts.revenue_gap", type="dict[int, float]", description="Counterfactual minus scenario revenue", unit="£"),
    OutputFieldInfo(name="impacts.meets_targets", type="bool", description="2030 EV target met"),
    OutputFieldInfo(name="metrics.peak_revenue_gap", type="float", description="Largest-magnitude yearly gap", unit="£"),
    OutputFieldInfo(name="metrics.target_achievement_year", type="int|None", description="First year target reached", unit="year"),
]

_ENDPOINTS = [
    EndpointInfo(method="GET", path="/context", description="This manifest."),
    EndpointInfo(method="GET", path="/schema", description="JSON schema for ScenarioConfig."),
    EndpointInfo(method="GET", path="/scenario/defaults", description="Default scenario as JSON."),
    EndpointInfo(method="GET", path="/baseline", description="Baseline snapshot the engine projects from."),
    EndpointInfo(method="GET", path="/reference/duty-rates", description="Current emission-band duty table."),
    EndpointInfo(method="GET", path="/presets", description="Available preset scenarios."),
    EndpointInfo(method="GET", path="/presets/{key}", description="One preset scenario in full."),
    EndpointInfo(method="POST", path="/calculate", description="Run one scenario; returns results, warnings and insights."),
    EndpointInfo(method="POST", path="/calculate/compare", description="Run several scenarios and rank by cumulative impact."),
    EndpointInfo(method="POST", path="/calculate/narrative", description="Run one scenario; returns a plain-text report."),
]

_INPUT_SECTIONS = [
    ("timeline", Timeline, "Inclusive projection window"),
    ("duty_rates", DutyRates, "EV duty schedule and (informational) ICE band schedules"),
    ("adoption_model", AdoptionModelConfig, "Adoption curve, targets and price elasticity"),
    ("policy_mechanisms.weight_based", WeightBasedMechanism, "Per-kg charge on EVs"),
    ("policy_mechanisms.distance_based", DistanceBasedMechanism, "Per-mile charge on EVs"),
]


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def build_context(detail_level: Literal["compact", "full"] = "full") -> EngineContext:
    """Build the self-describing context manifest."""
    sections = [
        SectionSchema(section=name, description=desc, parameters=_extract_params(model_cls))
        for name, model_cls, desc in _INPUT_SECTIONS
    ]
    full = detail_level == "full"

    return EngineContext(
        engine_name="Vehicle Duty Policy Engine",
        version="1.0",
        description=(
            "Projects vehicle-duty revenue, fleet composition and EV target "
            "achievement for what-if duty policies as EV adoption grows."
        ),
        policy_model=_POLICY_MODEL.strip() if full else "",
        key_formulas=_KEY_FORMULAS if full else [],
        input_sections=sections,
        key_outputs=_KEY_OUTPUTS,
        endpoints=_ENDPOINTS,
        interpretation_guide=_INTERPRETATION_GUIDE.strip() if full else "",
    )


def get_scenario_schema() -> dict:
    """Return the full JSON Schema for ScenarioConfig."""
    return ScenarioConfig.model_json_schema()


def get_default_scenario() -> dict:
    """Return the default ScenarioConfig as a JSON-serializable dict."""
    return ScenarioConfig().model_dump(mode="json")
