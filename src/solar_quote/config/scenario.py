"""Top-level scenario — bundles every input of one quote."""

from pydantic import BaseModel, Field, field_validator

from solar_quote.config.tariff import TariffConfig
from solar_quote.config.estimator import EstimatorConfig
from solar_quote.config.solar import SolarConfig
from solar_quote.config.pricing import PricingConfig
from solar_quote.config.financing import FinancingConfig

# Selectable daytime self-consumption shares: 10%, 20%, ... 100%
SELF_CONSUMPTION_OPTIONS: list[int] = list(range(10, 101, 10))


class Scenario(BaseModel):
    """Complete input bundle for one quote.

    ``bill_amount`` is deliberately unconstrained: negative or NaN amounts
    are clamped to zero usage by the estimator rather than rejected.
    """

    bill_amount: float = Field(default=0.0, description="Monthly electricity bill (RM)")
    afa_rate: float = Field(
        default=0.0,
        description="AFA / ICPT pass-through (RM/kWh, signed; negative = rebate)",
    )
    self_consumption_pct: int = Field(
        default=30,
        description="Share of usage consumed directly from solar in daytime (%, 10–100 step 10)",
    )

    tariff: TariffConfig = Field(default_factory=TariffConfig)
    estimator: EstimatorConfig = Field(default_factory=EstimatorConfig)
    solar: SolarConfig = Field(default_factory=SolarConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    financing: FinancingConfig = Field(default_factory=FinancingConfig)

    @field_validator("self_consumption_pct")
    @classmethod
    def _on_percent_grid(cls, v: int) -> int:
        if v not in SELF_CONSUMPTION_OPTIONS:
            raise ValueError(f"self_consumption_pct must be one of {SELF_CONSUMPTION_OPTIONS}, got {v}")
        return v
