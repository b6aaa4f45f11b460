"""Residential tariff tables — energy tiers, flat charges, levies, EEI bands."""

from pydantic import BaseModel, Field, field_validator


class EEIBand(BaseModel):
    """One Energy Efficiency Incentive band.

    The rate applies to the *whole* usage when usage falls in the band
    (upper bound inclusive).  Rates are rebates, so never positive.
    """

    upper_kwh: float = Field(gt=0, description="Band upper bound (kWh, inclusive)")
    rate_per_kwh: float = Field(le=0, description="Rebate per kWh (RM, ≤ 0)")


def _default_eei_bands() -> list[EEIBand]:
    return [
        EEIBand(upper_kwh=200, rate_per_kwh=-0.25),
        EEIBand(upper_kwh=250, rate_per_kwh=-0.245),
        EEIBand(upper_kwh=300, rate_per_kwh=-0.225),
        EEIBand(upper_kwh=350, rate_per_kwh=-0.21),
        EEIBand(upper_kwh=400, rate_per_kwh=-0.17),
        EEIBand(upper_kwh=450, rate_per_kwh=-0.145),
        EEIBand(upper_kwh=500, rate_per_kwh=-0.12),
        EEIBand(upper_kwh=550, rate_per_kwh=-0.105),
        EEIBand(upper_kwh=600, rate_per_kwh=-0.09),
        EEIBand(upper_kwh=650, rate_per_kwh=-0.075),
        EEIBand(upper_kwh=700, rate_per_kwh=-0.055),
        EEIBand(upper_kwh=750, rate_per_kwh=-0.045),
        EEIBand(upper_kwh=800, rate_per_kwh=-0.04),
        EEIBand(upper_kwh=850, rate_per_kwh=-0.025),
        EEIBand(upper_kwh=900, rate_per_kwh=-0.01),
        EEIBand(upper_kwh=1000, rate_per_kwh=-0.005),
    ]


class TariffConfig(BaseModel):
    """Static tariff data.  Injected, never computed by the engine."""

    # --- Energy charge (whole-usage tier, not marginal brackets) ---
    base_energy_rate: float = Field(default=0.2703, ge=0, description="Energy rate at or below the high-usage threshold (RM/kWh)")
    high_energy_rate: float = Field(
        default=0.3703, ge=0,
        description="Energy rate applied to ALL units once usage exceeds "
                    "high_usage_threshold_kwh (RM/kWh)",
    )
    high_usage_threshold_kwh: float = Field(default=1_500.0, gt=0, description="Tier threshold (kWh, strict >)")

    # --- Flat per-kWh charges ---
    capacity_rate: float = Field(default=0.0455, ge=0, description="Capacity charge (RM/kWh)")
    network_rate: float = Field(default=0.1285, ge=0, description="Network charge (RM/kWh)")

    # --- Retail fee (step function) ---
    retail_charge: float = Field(default=10.0, ge=0, description="Flat retail fee (RM/month)")
    retail_threshold_kwh: float = Field(default=600.0, ge=0, description="Retail fee applies when usage > this")

    # --- Levies and tax ---
    kwtbb_pct: float = Field(
        default=0.016, ge=0, le=1.0,
        description="KWTBB levy on energy + capacity + network (fraction)",
    )
    sst_pct: float = Field(default=0.08, ge=0, le=1.0, description="Service tax (fraction)")
    sst_threshold_kwh: float = Field(
        default=600.0, ge=0,
        description="Only the share of charges attributable to usage above "
                    "this threshold is taxed",
    )

    # --- EEI rebate ---
    eei_bands: list[EEIBand] = Field(
        default_factory=_default_eei_bands,
        description="Usage bands, ascending by upper_kwh.  Usage above the "
                    "last band receives no rebate.",
    )

    @field_validator("eei_bands")
    @classmethod
    def _bands_ascending(cls, bands: list[EEIBand]) -> list[EEIBand]:
        uppers = [b.upper_kwh for b in bands]
        if any(lo >= hi for lo, hi in zip(uppers, uppers[1:])):
            raise ValueError("eei_bands must be strictly ascending by upper_kwh")
        return bands


# Quick-select AFA rates for residential customers (RM/kWh).
AFA_PRESETS: dict[str, float] = {
    "Rebate (≤ 600kWh)": -0.02,
    "No Surcharge (601-1500kWh)": 0.0,
    "Surcharge (> 1500kWh)": 0.10,
}
