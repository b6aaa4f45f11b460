"""Panel model, irradiance assumption and system price table."""

from pydantic import BaseModel, Field, field_validator

# Selectable daily peak sun hours: 3.0, 3.1, ... 4.0
PEAK_SUN_HOUR_OPTIONS: list[float] = [round(h / 10, 1) for h in range(30, 41)]


def _default_system_prices() -> dict[int, float]:
    """Turnkey system price (RM) keyed by panel count."""
    return {
        8: 26_000.0,
        9: 28_750.0,
        10: 31_500.0,
        11: 34_250.0,
        12: 37_000.0,
        13: 39_750.0,
        14: 42_500.0,
        15: 45_250.0,
        16: 48_000.0,
        17: 50_750.0,
        18: 53_500.0,
        19: 56_250.0,
        20: 59_000.0,
        21: 61_600.0,
        22: 64_200.0,
        23: 66_800.0,
        24: 69_400.0,
        25: 72_000.0,
        26: 74_600.0,
        27: 77_200.0,
        28: 79_800.0,
        29: 82_400.0,
        30: 85_000.0,
        31: 87_600.0,
        32: 90_200.0,
        33: 92_800.0,
        34: 95_400.0,
        35: 98_000.0,
        36: 100_600.0,
        37: 103_200.0,
        38: 105_800.0,
        39: 108_400.0,
        40: 111_000.0,
        41: 113_600.0,
        42: 116_200.0,
        43: 118_800.0,
        44: 121_400.0,
        45: 124_000.0,
        46: 126_600.0,
        47: 129_200.0,
        48: 131_800.0,
    }


class SolarConfig(BaseModel):
    """Solar sizing inputs."""

    panel_name: str = Field(default="JINKO SOLAR TIGER NEO N-TYPE", description="Human label")
    panel_wattage_w: float = Field(default=620.0, gt=0, description="Rated power per panel (W)")
    peak_sun_hours: float = Field(default=3.4, description="Average daily peak sun hours (3.0–4.0, 0.1 steps)")
    days_per_month: int = Field(default=30, ge=1, le=31, description="Days used for monthly generation")

    # --- Pricing table ---
    system_prices: dict[int, float] = Field(
        default_factory=_default_system_prices,
        description="Sparse panel count → system price (RM).  Counts outside "
                    "[min_priced_panels, max_priced_panels] are never priced.",
    )
    min_priced_panels: int = Field(default=8, ge=1, description="Smallest quotable system (panels)")
    max_priced_panels: int = Field(default=48, ge=1, description="Largest quotable system (panels)")

    @field_validator("peak_sun_hours")
    @classmethod
    def _on_peak_hour_grid(cls, v: float) -> float:
        snapped = round(v, 1)
        if abs(v - snapped) > 1e-9 or snapped not in PEAK_SUN_HOUR_OPTIONS:
            raise ValueError(
                f"peak_sun_hours must be one of {PEAK_SUN_HOUR_OPTIONS}, got {v}"
            )
        return snapped

    @field_validator("system_prices")
    @classmethod
    def _prices_non_negative(cls, prices: dict[int, float]) -> dict[int, float]:
        if any(p < 0 for p in prices.values()):
            raise ValueError("system_prices must be non-negative")
        return prices
