"""EV adoption model — curve shape, targets, and price sensitivity."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from duty_engine.config.duty_rates import sort_by_year

AdoptionCurve = Literal["linear", "exponential", "sCurve", "custom"]


class AdoptionModelConfig(BaseModel):
    """How the EV fleet grows from the baseline count.

    - **linear**: equal absolute additions every year.
    - **exponential**: constant compounding ratio.
    - **sCurve**: slow start, fast middle, plateau (logistic).
    - **custom**: follows ``target_ev_count`` year by year, interpolating
      between the listed years.
    """

    type: AdoptionCurve = Field(
        default="sCurve",
        description="Curve shape: 'linear', 'exponential', 'sCurve' or 'custom'.",
    )
    target_ev_count: dict[int, float] = Field(
        default_factory=lambda: {2030: 13_000},
        description="Year → EV count. For the curve models only the 2030 "
                    "(or final-year) entry matters; 'custom' uses every entry.",
    )
    price_elasticity: float = Field(
        default=-0.3, ge=-1.0, le=1.0,
        description="Exponent applied to (EV duty / baseline EV duty). Negative "
                    "values suppress adoption when EV duty rises.",
    )

    @field_validator("target_ev_count")
    @classmethod
    def _non_negative_sorted(cls, v: dict[int, float]) -> dict[int, float]:
        for year, count in v.items():
            if count < 0:
                raise ValueError(f"target EV count for {year} must be non-negative, got {count}")
        return sort_by_year(v)
