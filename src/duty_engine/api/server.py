"""FastAPI server — HTTP access to the vehicle duty policy engine.

Run with:
    uvicorn duty_engine.api.server:app --reload --port 8000

Or:
    python -m duty_engine.api.server

Endpoints:
    GET  /context              — self-describing manifest (policy model + schemas)
    GET  /schema               — full JSON Schema for ScenarioConfig
    GET  /scenario/defaults    — complete default scenario as JSON
    GET  /baseline             — baseline snapshot the engine projects from
    GET  /reference/duty-rates — current emission-band duty table
    GET  /presets              — preset scenario keys, names, descriptions
    GET  /presets/{key}        — one preset scenario in full
    POST /calculate            — run one scenario (partial or full ScenarioConfig)
    POST /calculate/compare    — run several scenarios, rank by cumulative impact
    POST /calculate/narrative  — run + plain-English report
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Literal

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from duty_engine.config.baseline import default_baseline
from duty_engine.config.duty_rates import reference_schedule
from duty_engine.config.presets import get_preset, list_presets
from duty_engine.config.scenario import ScenarioConfig
from duty_engine.engine.calculator import RevenueCalculator
from duty_engine.api.context import build_context, get_scenario_schema, get_default_scenario
from duty_engine.api.narrative import (
    generate_comparison_narrative,
    generate_insights,
    generate_narrative,
    generate_warnings,
    summarize_scenario,
)
from duty_engine.api.validation import ScenarioValidationError, validate_scenario

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Vehicle Duty Policy Engine API",
    version="1.0",
    description=(
        "Project vehicle-duty revenue, fleet composition and EV target "
        "achievement for what-if duty policies. Start by calling GET /context."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

calculator = RevenueCalculator(default_baseline())


@app.exception_handler(ScenarioValidationError)
async def _validation_failure(request: Request, exc: ScenarioValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content=exc.to_dict())


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class CalculateRequest(BaseModel):
    """Request body for /calculate. All fields optional — defaults used for missing."""
    scenario: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full ScenarioConfig JSON. Missing fields use defaults. "
                    "Example: {'parameters': {'duty_rates': {'ev': {'2024': 120}}}}",
    )


class CompareRequest(BaseModel):
    """Request body for /calculate/compare."""
    scenarios: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Partial or full ScenarioConfig JSON objects to compare",
    )
    presets: list[str] = Field(
        default_factory=list,
        description="Preset keys to include alongside the explicit scenarios",
    )


class CalculateResponse(BaseModel):
    """Response from /calculate."""
    scenario: dict[str, Any]
    results: dict[str, Any]
    warnings: list[str]
    insights: list[str]
    calculated_at: datetime


class CompareResponse(BaseModel):
    """Response from /calculate/compare."""
    results: list[dict[str, Any]]
    comparison_narrative: str
    ranking: list[dict[str, Any]]


class NarrativeResponse(BaseModel):
    scenario_id: str
    narrative: str
    warnings: list[str]
    insights: list[str]


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_scenario(overrides: dict[str, Any]) -> ScenarioConfig:
    """Build a ScenarioConfig from partial overrides merged onto defaults."""
    defaults = get_default_scenario()
    _deep_merge(defaults, overrides)
    return validate_scenario(defaults)


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def _lookup_preset(key: str) -> ScenarioConfig:
    try:
        return get_preset(key)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown preset '{key}'")


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to /context."""
    return {
        "name": "Vehicle Duty Policy Engine API",
        "version": "1.0",
        "start_here": "GET /context?detail_level=full",
        "docs": "GET /docs (interactive Swagger UI)",
        "description": "What-if modelling of vehicle duty revenue under EV adoption.",
    }


@app.get("/context")
def get_context(
    detail_level: Literal["compact", "full"] = Query(
        default="full",
        description="'compact' for schemas only, 'full' for policy model + formulas + guide",
    ),
):
    """Self-describing context manifest.

    Call this first to learn which parameters exist, what the engine
    computes, and how to read its outputs.
    """
    return build_context(detail_level)


@app.get("/schema")
def get_schema():
    """Full JSON Schema for ScenarioConfig."""
    return get_scenario_schema()


@app.get("/scenario/defaults")
def get_defaults():
    """Complete default ScenarioConfig as JSON. Use as a starting point for modifications."""
    return get_default_scenario()


@app.get("/baseline")
def get_baseline():
    """The baseline snapshot every calculation projects from."""
    return calculator.baseline.model_dump(mode="json")


@app.get("/reference/duty-rates")
def get_reference_duty_rates():
    """Current emission-band duty table, EV flat rate and admin charge."""
    return reference_schedule()


@app.get("/presets")
def get_presets():
    return list_presets()


@app.get("/presets/{key}")
def get_preset_scenario(key: str):
    return _lookup_preset(key).model_dump(mode="json")


@app.post("/calculate", response_model=CalculateResponse)
def calculate(req: CalculateRequest):
    """Run one scenario.

    Send a partial ScenarioConfig (only the fields you want to change).
    Missing fields use defaults.

    Example minimal request:
    ```json
    {"scenario": {"parameters": {"adoption_model": {"type": "linear"}}}}
    ```
    """
    scenario = _build_scenario(req.scenario)
    results = calculator.calculate(scenario)
    logger.info("Calculated scenario %s (%d years)", scenario.id, len(results.years))
    return CalculateResponse(
        scenario=scenario.model_dump(mode="json"),
        results=results.model_dump(mode="json"),
        warnings=generate_warnings(results),
        insights=generate_insights(results),
        calculated_at=datetime.now(timezone.utc),
    )


@app.post("/calculate/compare", response_model=CompareResponse)
def calculate_compare(req: CompareRequest):
    """Run several scenarios and rank them by cumulative revenue impact.

    Smallest cumulative impact (least revenue lost) ranks first.
    """
    scenarios = [_build_scenario(s) for s in req.scenarios]
    scenarios.extend(_lookup_preset(key) for key in req.presets)

    results = [calculator.calculate(s) for s in scenarios]

    ranking: list[dict[str, Any]] = []
    for scenario, r in zip(scenarios, results):
        summary = summarize_scenario(scenario, r)
        ranking.append({
            "id": summary.id,
            "name": summary.name,
            "cumulative_impact": round(r.revenue.cumulative_impact, 2),
            "peak_revenue_gap": round(r.metrics.peak_revenue_gap, 2),
            "break_even_year": r.revenue.break_even_year,
            "meets_targets": r.impacts.meets_targets,
            "target_achievement_year": summary.key_metrics.target_year,
        })
    ranking.sort(key=lambda x: x["cumulative_impact"])

    logger.info("Compared %d scenarios", len(scenarios))
    return CompareResponse(
        results=[r.model_dump(mode="json") for r in results],
        comparison_narrative=generate_comparison_narrative(scenarios, results),
        ranking=ranking,
    )


@app.post("/calculate/narrative", response_model=NarrativeResponse)
def calculate_narrative(req: CalculateRequest):
    """Run one scenario and return a plain-text report."""
    scenario = _build_scenario(req.scenario)
    results = calculator.calculate(scenario)
    return NarrativeResponse(
        scenario_id=scenario.id,
        narrative=generate_narrative(scenario, results),
        warnings=generate_warnings(results),
        insights=generate_insights(results),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Direct execution
# ═══════════════════════════════════════════════════════════════════════════

def main(host: str = "0.0.0.0", port: int = 8000) -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
