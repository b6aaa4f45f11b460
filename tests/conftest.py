"""Shared test fixtures — default residential tariff and quote inputs."""

from __future__ import annotations

import pytest

from solar_quote.config import (
    EstimatorConfig,
    FinancingConfig,
    PricingConfig,
    Scenario,
    SolarConfig,
    TariffConfig,
)


@pytest.fixture
def tariff() -> TariffConfig:
    return TariffConfig()


@pytest.fixture
def estimator() -> EstimatorConfig:
    return EstimatorConfig()


@pytest.fixture
def solar() -> SolarConfig:
    # 620 W × 3.4 h × 30 d / 1000 = 63.24 kWh per panel per month
    return SolarConfig(panel_wattage_w=620, peak_sun_hours=3.4)


@pytest.fixture
def pricing() -> PricingConfig:
    return PricingConfig()


@pytest.fixture
def financing() -> FinancingConfig:
    return FinancingConfig(bank="MBB (Maybank)", duration_months=60)


@pytest.fixture
def scenario(
    tariff: TariffConfig,
    solar: SolarConfig,
    pricing: PricingConfig,
    financing: FinancingConfig,
) -> Scenario:
    return Scenario(
        bill_amount=300.0,
        afa_rate=0.0,
        self_consumption_pct=30,
        tariff=tariff,
        solar=solar,
        pricing=pricing,
        financing=financing,
    )
