"""Configuration models — baseline snapshot and scenario inputs."""

from duty_engine.config.baseline import BaselineData, default_baseline
from duty_engine.config.duty_rates import DutyRates
from duty_engine.config.adoption import AdoptionModelConfig
from duty_engine.config.mechanisms import (
    DistanceBasedMechanism,
    PolicyMechanisms,
    WeightBasedMechanism,
)
from duty_engine.config.adjustments import CategoryAdjustment, CategoryAdjustments
from duty_engine.config.scenario import ScenarioConfig, ScenarioParameters, Timeline
from duty_engine.config.builder import ScenarioBuilder, with_parameters

__all__ = [
    "BaselineData",
    "default_baseline",
    "DutyRates",
    "AdoptionModelConfig",
    "WeightBasedMechanism",
    "DistanceBasedMechanism",
    "PolicyMechanisms",
    "CategoryAdjustment",
    "CategoryAdjustments",
    "Timeline",
    "ScenarioParameters",
    "ScenarioConfig",
    "ScenarioBuilder",
    "with_parameters",
]
