"""Baseline reference snapshot — fleet, duty revenue, and adoption targets.

The baseline is supplied once per calculator and never mutated, so every
model here is frozen.  ``default_baseline()`` returns the Isle of Man 2024
figures the engine is calibrated against.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BaselineMetadata(BaseModel):
    """Provenance of the snapshot."""

    model_config = ConfigDict(frozen=True)

    last_updated: str = Field(default="2024-01-01", description="Date the figures were compiled")
    currency: str = Field(default="GBP", description="Currency of every monetary field")
    sources: list[str] = Field(default_factory=list, description="Citations for the figures")


class DutyRevenueFigures(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: float = Field(default=14_702_500.0, ge=0, description="Current annual vehicle-duty revenue")
    pre_increase_2023: float = Field(
        default=0.0, ge=0,
        description="Annual revenue before the April 2023 duty increase",
    )
    note: str = Field(default="", description="Free-text remark")


class RoadsBudget(BaseModel):
    model_config = ConfigDict(frozen=True)

    maintenance: float = Field(default=0.0, ge=0)
    structural: float = Field(default=0.0, ge=0)
    total: float = Field(default=0.0, ge=0)
    year: str = Field(default="")


class FinancialBaseline(BaseModel):
    """Informational financial context.  Not read by the engine."""

    model_config = ConfigDict(frozen=True)

    vehicle_duty_revenue: DutyRevenueFigures = Field(default_factory=DutyRevenueFigures)
    roads_budget: RoadsBudget = Field(default_factory=RoadsBudget)
    revenue_destination: str = Field(
        default="",
        description="Where duty revenue is paid",
    )
    roads_as_percent_of_revenue: float = Field(default=0.0, ge=0)


class CurrentComposition(BaseModel):
    """EV / ICE split of the fleet in the snapshot year."""

    model_config = ConfigDict(frozen=True)

    ev: int = Field(default=1_500, ge=0, description="Electric vehicles registered")
    ice: int = Field(default=63_500, ge=0, description="Combustion vehicles registered")
    ev_percentage: float = Field(default=2.3, ge=0, le=100, description="EV share of fleet (%)")
    year: int = Field(default=2024, description="Year the composition was observed")


class FleetProjections(BaseModel):
    model_config = ConfigDict(frozen=True)

    government_target_2030: int = Field(
        default=13_000, ge=0,
        description="Government EV target for the 2030 reference year",
    )
    low_ambition_2030: int = Field(default=10_000, ge=0, description="Low-ambition 2030 EV count")
    target_ev_percentage_2030: float = Field(default=20.0, ge=0, le=100)


class ChargingInfrastructure(BaseModel):
    model_config = ConfigDict(frozen=True)

    charging_points: int = Field(default=0, ge=0)
    vehicles_per_charging_point: float = Field(default=0.0, ge=0)
    year: int = Field(default=2024)


class FleetBaseline(BaseModel):
    """Fleet size, composition and targets."""

    model_config = ConfigDict(frozen=True)

    total_vehicles: int = Field(default=65_000, ge=0, description="Total registered vehicles")
    current_composition: CurrentComposition = Field(default_factory=CurrentComposition)
    projections: FleetProjections = Field(default_factory=FleetProjections)
    charging_infrastructure: ChargingInfrastructure = Field(default_factory=ChargingInfrastructure)

    @model_validator(mode="after")
    def _composition_sums_to_fleet(self) -> "FleetBaseline":
        comp = self.current_composition
        if comp.ev + comp.ice != self.total_vehicles:
            raise ValueError(
                f"current_composition.ev + current_composition.ice "
                f"({comp.ev} + {comp.ice}) must equal total_vehicles ({self.total_vehicles})"
            )
        return self


class RevenueBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_evs: float = Field(default=97_500.0, ge=0)
    from_ices: float = Field(default=14_605_000.0, ge=0)


class RevenueModel(BaseModel):
    """Per-vehicle averages the engine prices the fleet with."""

    model_config = ConfigDict(frozen=True)

    current_annual_revenue: float = Field(default=14_702_500.0, ge=0)
    revenue_per_ev: float = Field(
        default=65.0, ge=0,
        description="Average annual duty per EV — fallback EV duty for unspecified years",
    )
    revenue_per_ice: float = Field(
        default=230.0, ge=0,
        description="Average annual duty per ICE vehicle — flat ICE duty used for every year",
    )
    loss_per_conversion: float = Field(
        default=-165.0,
        description="Revenue change when one ICE vehicle is replaced by an EV",
    )
    loss_per_percent_fleet: float = Field(
        default=107_250.0,
        description="Revenue lost per percentage point of fleet converting to EV",
    )
    breakdown_current: RevenueBreakdown = Field(default_factory=RevenueBreakdown)


class BaselineData(BaseModel):
    """Immutable reference snapshot bound to a calculator at construction."""

    model_config = ConfigDict(frozen=True)

    metadata: BaselineMetadata = Field(default_factory=BaselineMetadata)
    financial: FinancialBaseline = Field(default_factory=FinancialBaseline)
    fleet: FleetBaseline = Field(default_factory=FleetBaseline)
    revenue_model: RevenueModel = Field(default_factory=RevenueModel)


def default_baseline() -> BaselineData:
    """Isle of Man 2024 snapshot: 65,000 vehicles, 1,500 of them electric."""
    return BaselineData(
        metadata=BaselineMetadata(
            last_updated="2024-01-01",
            currency="GBP",
            sources=[
                "Vehicle Duty Order 2023",
                "iomtoday.co.im - April 24, 2025",
                "Manx Radio - Various dates",
            ],
        ),
    )
