"""Easy Payment Plan (EPP) rate table and plan selection."""

from pydantic import BaseModel, Field, field_validator, model_validator


def _default_epp_rates() -> dict[str, dict[int, float]]:
    """Bank → {duration months: flat interest %}."""
    return {
        "MBB (Maybank)": {6: 2.50, 12: 3.50, 24: 5.50, 36: 7.50, 48: 9.50, 60: 11.50},
        "PBB (Public Bank)": {6: 2.50, 12: 3.50, 24: 5.50, 36: 7.50, 48: 9.50, 60: 11.50},
        "HLB (Hong Leong)": {6: 2.50, 12: 3.50, 24: 5.50, 36: 7.50, 48: 9.50, 60: 11.50},
        "CIMB": {6: 2.50, 12: 3.50, 24: 5.50, 36: 7.50},
        "AmBank": {6: 3.00, 12: 4.00, 24: 6.00},
        "UOB": {6: 2.50, 12: 3.50, 24: 5.50, 36: 7.50, 48: 9.50},
    }


class FinancingConfig(BaseModel):
    """Instalment plan inputs.

    ``duration_months`` is a *request*: if the selected bank does not offer
    it, the engine falls back to the bank's longest duration.
    """

    epp_rates: dict[str, dict[int, float]] = Field(
        default_factory=_default_epp_rates,
        description="Bank name → duration (months) → flat interest rate (%)",
    )
    bank: str = Field(default="MBB (Maybank)", description="Selected bank")
    duration_months: int = Field(default=60, ge=0, description="Requested tenure (months)")
    deposit_pct: float = Field(
        default=0.05, ge=0, le=1.0,
        description="Upfront deposit as a fraction of the final system price",
    )

    @field_validator("epp_rates")
    @classmethod
    def _rates_well_formed(cls, rates: dict[str, dict[int, float]]) -> dict[str, dict[int, float]]:
        if not rates:
            raise ValueError("epp_rates must contain at least one bank")
        for bank, table in rates.items():
            if not table:
                raise ValueError(f"bank {bank!r} offers no durations")
            if any(d <= 0 for d in table):
                raise ValueError(f"bank {bank!r} has a non-positive duration")
            if any(r < 0 for r in table.values()):
                raise ValueError(f"bank {bank!r} has a negative interest rate")
        return rates

    @model_validator(mode="after")
    def _bank_in_table(self) -> "FinancingConfig":
        if self.bank not in self.epp_rates:
            raise ValueError(f"bank {self.bank!r} not in epp_rates ({sorted(self.epp_rates)})")
        return self
