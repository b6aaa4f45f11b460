"""Configuration models — tariff tables and quote inputs."""

from solar_quote.config.tariff import AFA_PRESETS, EEIBand, TariffConfig
from solar_quote.config.estimator import EstimatorConfig
from solar_quote.config.solar import PEAK_SUN_HOUR_OPTIONS, SolarConfig
from solar_quote.config.pricing import PricingConfig
from solar_quote.config.financing import FinancingConfig
from solar_quote.config.scenario import SELF_CONSUMPTION_OPTIONS, Scenario

__all__ = [
    "AFA_PRESETS",
    "EEIBand",
    "TariffConfig",
    "EstimatorConfig",
    "PEAK_SUN_HOUR_OPTIONS",
    "SolarConfig",
    "PricingConfig",
    "FinancingConfig",
    "SELF_CONSUMPTION_OPTIONS",
    "Scenario",
]
