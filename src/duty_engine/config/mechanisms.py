"""Alternative EV revenue mechanisms — flat add-ons charged on the EV fleet."""

from pydantic import BaseModel, Field


class WeightBasedMechanism(BaseModel):
    """Per-kilogram charge on every EV."""

    enabled: bool = Field(default=False)
    rate_per_kg: float = Field(default=0.0, ge=0, description="Annual charge per kg of vehicle weight (£)")
    start_year: int = Field(default=2024, description="First year the charge applies")


class DistanceBasedMechanism(BaseModel):
    """Per-mile road-user charge on every EV."""

    enabled: bool = Field(default=False)
    rate_per_mile: float = Field(default=0.0, ge=0, description="Charge per mile driven (£)")
    start_year: int = Field(default=2024, description="First year the charge applies")
    average_miles_per_vehicle: float = Field(
        default=10_000.0, ge=0,
        description="Assumed annual mileage of one EV",
    )


class PolicyMechanisms(BaseModel):
    """Both mechanisms are independent and disabled by default."""

    weight_based: WeightBasedMechanism = Field(default_factory=WeightBasedMechanism)
    distance_based: DistanceBasedMechanism = Field(default_factory=DistanceBasedMechanism)
