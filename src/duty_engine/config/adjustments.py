"""Per-category manual duty adjustments.

Captured alongside a scenario so analysts can record intended changes to
motorcycles, goods vehicles, emission bands and special categories.  The
projection engine does not read them; ``CategoryAdjustment.apply`` exists so
callers can preview the adjusted rate.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class CategoryAdjustment(BaseModel):
    """One adjustment to a category's duty from ``start_year`` onwards."""

    type: Literal["lift", "hold", "reduce", "absolute"] = Field(
        default="hold",
        description="'lift'/'reduce' move the rate by ``value`` percent, "
                    "'hold' freezes it, 'absolute' replaces it with ``value``.",
    )
    value: float = Field(default=0.0, ge=0, description="Percentage, or amount (£) for 'absolute'")
    start_year: int
    end_year: int | None = Field(default=None, description="Last year applied; None = indefinitely")
    description: str | None = None

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "CategoryAdjustment":
        if self.end_year is not None and self.end_year < self.start_year:
            raise ValueError("end_year must not precede start_year")
        return self

    def applies_to(self, year: int) -> bool:
        if year < self.start_year:
            return False
        return self.end_year is None or year <= self.end_year

    def apply(self, rate: float) -> float:
        """Adjusted rate given the unadjusted ``rate``."""
        if self.type == "lift":
            return rate * (1 + self.value / 100)
        if self.type == "reduce":
            return max(0.0, rate * (1 - self.value / 100))
        if self.type == "absolute":
            return self.value
        return rate


YearAdjustments = dict[int, CategoryAdjustment]


class GoodsVehicleAdjustments(BaseModel):
    light: YearAdjustments = Field(default_factory=dict, description="Up to 7.5t (C1)")
    medium: YearAdjustments = Field(default_factory=dict, description="7.5–12t (C)")
    heavy: YearAdjustments = Field(default_factory=dict, description="12t and above")


class SpecialCategoryAdjustments(BaseModel):
    veteran: YearAdjustments = Field(default_factory=dict, description="Vehicles 30+ years old")
    welfare: YearAdjustments = Field(default_factory=dict, description="Disabled drivers")
    agricultural: YearAdjustments = Field(default_factory=dict)
    police: YearAdjustments = Field(default_factory=dict)


class CategoryAdjustments(BaseModel):
    ev: YearAdjustments = Field(default_factory=dict)
    motorcycles: YearAdjustments = Field(default_factory=dict)
    goods_vehicles: GoodsVehicleAdjustments = Field(default_factory=GoodsVehicleAdjustments)
    emission_bands: dict[str, YearAdjustments] = Field(
        default_factory=dict,
        description="Emission band ('A', 'B', ...) → year → adjustment",
    )
    special_categories: SpecialCategoryAdjustments = Field(default_factory=SpecialCategoryAdjustments)
