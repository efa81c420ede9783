"""Top-level scenario — bundles every policy input for one calculation."""

import secrets
import time
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from duty_engine.config.adjustments import CategoryAdjustments
from duty_engine.config.adoption import AdoptionModelConfig
from duty_engine.config.duty_rates import DutyRates
from duty_engine.config.mechanisms import PolicyMechanisms


class Timeline(BaseModel):
    """Inclusive projection window.

    ``end_year < start_year`` is accepted here; the engine returns empty
    results for it and the API layer rejects it before calculation.
    """

    start_year: int = Field(default=2024, description="First projected year")
    end_year: int = Field(default=2035, description="Last projected year (inclusive)")

    @property
    def years(self) -> range:
        return range(self.start_year, self.end_year + 1)


class ScenarioParameters(BaseModel):
    timeline: Timeline = Field(default_factory=Timeline)
    duty_rates: DutyRates = Field(default_factory=DutyRates)
    adoption_model: AdoptionModelConfig = Field(default_factory=AdoptionModelConfig)
    policy_mechanisms: PolicyMechanisms = Field(default_factory=PolicyMechanisms)
    category_adjustments: CategoryAdjustments | None = Field(
        default=None,
        description="Manual per-category adjustments. Recorded with the scenario; "
                    "not used in revenue calculations.",
    )


def _new_scenario_id() -> str:
    return f"scenario_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScenarioConfig(BaseModel):
    """Complete input bundle for one calculation."""

    id: str = Field(default_factory=_new_scenario_id, description="Opaque identifier")
    name: str = Field(default="Untitled scenario")
    description: str = Field(default="")
    created_at: datetime = Field(default_factory=_utcnow)
    parameters: ScenarioParameters = Field(default_factory=ScenarioParameters)
