"""Tests for weight- and distance-based add-on revenue."""

from __future__ import annotations

import pytest

from duty_engine.config import DistanceBasedMechanism, PolicyMechanisms, WeightBasedMechanism
from duty_engine.engine.mechanisms import (
    ASSUMED_EV_WEIGHT_KG,
    distance_based_revenue,
    other_mechanisms_revenue,
    weight_based_revenue,
)


class TestMechanisms:

    def test_disabled_by_default(self):
        mech = PolicyMechanisms()
        for year in range(2024, 2036):
            assert other_mechanisms_revenue(mech, year, 10_000) == 0.0

    def test_weight_based_before_and_after_start(self):
        mech = PolicyMechanisms(
            weight_based=WeightBasedMechanism(enabled=True, rate_per_kg=0.05, start_year=2026),
        )
        assert weight_based_revenue(mech, 2025, 4_000) == 0.0
        assert weight_based_revenue(mech, 2026, 4_000) == pytest.approx(4_000 * 1_500 * 0.05)
        assert weight_based_revenue(mech, 2030, 4_000) == pytest.approx(4_000 * ASSUMED_EV_WEIGHT_KG * 0.05)

    def test_disabled_ignores_rate(self):
        mech = PolicyMechanisms(
            weight_based=WeightBasedMechanism(enabled=False, rate_per_kg=1.0, start_year=2024),
        )
        assert weight_based_revenue(mech, 2030, 4_000) == 0.0

    def test_distance_based(self):
        mech = PolicyMechanisms(
            distance_based=DistanceBasedMechanism(
                enabled=True, rate_per_mile=0.015, start_year=2028, average_miles_per_vehicle=8_500,
            ),
        )
        assert distance_based_revenue(mech, 2027, 2_000) == 0.0
        assert distance_based_revenue(mech, 2028, 2_000) == pytest.approx(2_000 * 8_500 * 0.015)

    def test_both_mechanisms_add(self):
        mech = PolicyMechanisms(
            weight_based=WeightBasedMechanism(enabled=True, rate_per_kg=0.1, start_year=2024),
            distance_based=DistanceBasedMechanism(enabled=True, rate_per_mile=0.01, start_year=2024),
        )
        expected = 1_000 * 1_500 * 0.1 + 1_000 * 10_000 * 0.01
        assert other_mechanisms_revenue(mech, 2024, 1_000) == pytest.approx(expected)
