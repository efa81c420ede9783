"""YAML loading for baseline snapshots and scenario files."""

from __future__ import annotations

from pathlib import Path

import yaml

from duty_engine.config.baseline import BaselineData
from duty_engine.config.scenario import ScenarioConfig


def _read_yaml(path: str | Path) -> dict:
    with open(path) as f:
        data = yaml.safe_load(f)
    return data or {}


def load_baseline(path: str | Path) -> BaselineData:
    """Load and validate a baseline snapshot from YAML."""
    return BaselineData(**_read_yaml(path))


def load_scenario(path: str | Path) -> ScenarioConfig:
    """Load and validate a scenario from YAML.

    Year keys may be written as plain integers or quoted strings.
    """
    return ScenarioConfig(**_read_yaml(path))
