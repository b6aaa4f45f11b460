"""Solar sizing — required usage → discrete panel count.

  kWh per panel per month = wattage × peak_sun_hours × days / 1000
  panels                  = ceil(required / kWh per panel)
  capacity (kWp)          = panels × wattage / 1000

Rounding up guarantees generation ≥ required usage.
"""

from __future__ import annotations

import math

from solar_quote.config.solar import SolarConfig
from solar_quote.models.results import SolarConfiguration

# Absorbs float noise so an exact multiple never rounds up an extra panel.
_CEIL_EPSILON = 1e-9


def monthly_kwh_per_panel(solar: SolarConfig) -> float:
    """Monthly generation of one panel (kWh)."""
    return solar.panel_wattage_w * solar.peak_sun_hours * solar.days_per_month / 1_000


def size_solar_system(required_kwh: float, solar: SolarConfig | None = None) -> SolarConfiguration:
    """Smallest panel count whose generation covers ``required_kwh``."""
    solar = solar or SolarConfig()
    per_panel = monthly_kwh_per_panel(solar)

    if math.isnan(required_kwh) or required_kwh <= 0:
        return SolarConfiguration(
            panel_count=0, system_size_kwp=0.0,
            monthly_generation_kwh=0.0, monthly_kwh_per_panel=per_panel,
        )

    panels = math.ceil(required_kwh / per_panel - _CEIL_EPSILON)
    # The epsilon must never leave the system short.
    if panels * per_panel < required_kwh:
        panels += 1

    return SolarConfiguration(
        panel_count=panels,
        system_size_kwp=panels * solar.panel_wattage_w / 1_000,
        monthly_generation_kwh=panels * per_panel,
        monthly_kwh_per_panel=per_panel,
    )


def lookup_system_price(panel_count: int, solar: SolarConfig | None = None) -> float | None:
    """System price for ``panel_count`` panels, or ``None`` if unavailable.

    Counts outside the quotable range are never extrapolated, and a count
    missing from the sparse table is likewise unavailable.
    """
    solar = solar or SolarConfig()
    if panel_count < solar.min_priced_panels or panel_count > solar.max_priced_panels:
        return None
    return solar.system_prices.get(panel_count)
