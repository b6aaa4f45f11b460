"""Tests for engine/estimator.py — bill → usage inversion."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from solar_quote.config import EstimatorConfig, TariffConfig
from solar_quote.engine.estimator import estimate_usage_from_bill
from solar_quote.engine.tariff import calculate_bill


class TestNonPositiveBills:
    def test_zero_bill(self, tariff: TariffConfig):
        assert estimate_usage_from_bill(0.0, 0.0, tariff) == 0.0

    def test_negative_bill_clamped(self, tariff: TariffConfig):
        assert estimate_usage_from_bill(-120.0, 0.0, tariff) == 0.0

    def test_nan_bill_clamped(self, tariff: TariffConfig):
        assert estimate_usage_from_bill(float("nan"), 0.0, tariff) == 0.0


class TestRoundTrip:
    """bill(usage) → estimate → usage, away from and on the jump boundaries."""

    @pytest.mark.parametrize("afa_rate", [-0.02, 0.0, 0.10])
    @pytest.mark.parametrize(
        "usage",
        [0.5, 50, 150, 199.5, 333.3, 450, 599.9, 601, 750, 1000, 1200, 1499.9, 1501, 2500, 8000],
    )
    def test_recovers_usage(self, tariff: TariffConfig, usage: float, afa_rate: float):
        target = calculate_bill(usage, afa_rate, tariff).total_bill
        assert estimate_usage_from_bill(target, afa_rate, tariff) == pytest.approx(usage, abs=1e-4)

    @pytest.mark.parametrize("usage", [200, 600, 1000, 1500])
    def test_recovers_boundary_usage(self, tariff: TariffConfig, usage: float):
        """Band edges belong to the lower side, so the exact edge is recoverable."""
        target = calculate_bill(usage, 0.0, tariff).total_bill
        assert estimate_usage_from_bill(target, 0.0, tariff) == pytest.approx(usage, abs=1e-4)

    def test_reproduces_bill(self, tariff: TariffConfig):
        usage = estimate_usage_from_bill(300.0, 0.0, tariff)
        assert calculate_bill(usage, 0.0, tariff).total_bill == pytest.approx(300.0, abs=1e-4)

    def test_random_usages(self, tariff: TariffConfig):
        rng = np.random.default_rng(7)
        for usage in rng.uniform(1, 4_000, size=50):
            target = calculate_bill(usage, 0.0, tariff).total_bill
            assert estimate_usage_from_bill(target, 0.0, tariff) == pytest.approx(usage, abs=1e-4)

    def test_large_bill_brackets_without_ceiling(self, tariff: TariffConfig):
        target = calculate_bill(250_000, 0.0, tariff).total_bill
        assert estimate_usage_from_bill(target, 0.0, tariff) == pytest.approx(250_000, rel=1e-9)


class TestJumpGap:
    """Targets inside the retail-fee jump at 600 kWh have no exact inverse.

    bill(600)  = 216.84528
    bill(600⁺) ≈ 266.58 + 10 + 4.26528 − 0.075 × 600 = 235.84528
    """

    def test_closer_to_lower_side_resolves_to_600(self, tariff: TariffConfig):
        usage = estimate_usage_from_bill(226.0, 0.0, tariff)
        assert usage <= 600
        assert usage == pytest.approx(600, abs=1e-3)
        assert calculate_bill(usage, 0.0, tariff).retail_charge == 0

    def test_closer_to_upper_side_resolves_just_above_600(self, tariff: TariffConfig):
        usage = estimate_usage_from_bill(235.0, 0.0, tariff)
        assert usage > 600
        assert usage == pytest.approx(600, abs=1e-3)
        assert calculate_bill(usage, 0.0, tariff).retail_charge == 10.0

    def test_deterministic(self, tariff: TariffConfig):
        runs = {estimate_usage_from_bill(226.0, 0.0, tariff) for _ in range(5)}
        assert len(runs) == 1

    def test_gap_at_high_tier(self, tariff: TariffConfig):
        low = calculate_bill(1500, 0.0, tariff).total_bill
        high = calculate_bill(1500.000001, 0.0, tariff).total_bill
        usage = estimate_usage_from_bill(low + (high - low) * 0.25, 0.0, tariff)
        assert usage == pytest.approx(1500, abs=1e-3)
        assert calculate_bill(usage, 0.0, tariff).energy_unit_rate == tariff.base_energy_rate


class TestSafetyFuses:
    def test_iteration_fuse_returns_best_effort(self, tariff: TariffConfig, caplog):
        cfg = EstimatorConfig(max_iterations=3)
        with caplog.at_level(logging.WARNING, logger="solar_quote.engine.estimator"):
            usage = estimate_usage_from_bill(300.0, 0.0, tariff, cfg)
        assert 0 < usage < 1_600
        assert "fuse" in caplog.text

    def test_unbracketable_target(self, tariff: TariffConfig, caplog):
        """An AFA rebate larger than every charge makes the bill fall with usage."""
        cfg = EstimatorConfig(seed_upper_kwh=100, max_bracket_doublings=5)
        with caplog.at_level(logging.WARNING, logger="solar_quote.engine.estimator"):
            usage = estimate_usage_from_bill(100.0, -1.0, tariff, cfg)
        assert usage == 3_200
        assert "Could not bracket" in caplog.text

    def test_default_configs(self):
        target = calculate_bill(720, 0.0).total_bill
        assert estimate_usage_from_bill(target) == pytest.approx(720, abs=1e-4)
