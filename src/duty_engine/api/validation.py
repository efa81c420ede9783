"""Caller-side scenario validation.

The engine trusts its input.  Everything structurally wrong with a scenario
is rejected here, before calculation, with a ``validation_failure`` error
that lists every problem found.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from duty_engine.config.scenario import ScenarioConfig

logger = logging.getLogger(__name__)

MAX_HORIZON_YEARS = 100


class ScenarioValidationError(Exception):
    """Raised when a scenario payload cannot be calculated."""

    kind = "validation_failure"

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in errors))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "errors": self.errors}


def _timeline_errors(scenario: ScenarioConfig) -> list[dict[str, Any]]:
    timeline = scenario.parameters.timeline
    loc = ["parameters", "timeline"]
    if timeline.end_year < timeline.start_year:
        return [{
            "loc": loc + ["end_year"],
            "msg": f"end_year ({timeline.end_year}) must not precede start_year ({timeline.start_year})",
        }]
    if timeline.end_year - timeline.start_year > MAX_HORIZON_YEARS:
        return [{
            "loc": loc,
            "msg": f"timeline spans more than {MAX_HORIZON_YEARS} years",
        }]
    return []


def validate_scenario(payload: dict[str, Any] | ScenarioConfig) -> ScenarioConfig:
    """Return a calculable ``ScenarioConfig`` or raise ``ScenarioValidationError``."""
    if isinstance(payload, ScenarioConfig):
        scenario = payload
    else:
        try:
            scenario = ScenarioConfig.model_validate(payload)
        except ValidationError as exc:
            errors = [
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors()
            ]
            logger.warning("Rejected scenario payload: %d field error(s)", len(errors))
            raise ScenarioValidationError(errors) from exc

    errors = _timeline_errors(scenario)
    if errors:
        logger.warning("Rejected scenario %s: %s", scenario.id, errors[0]["msg"])
        raise ScenarioValidationError(errors)
    return scenario
