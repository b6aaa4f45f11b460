"""Forward tariff — usage (kWh) + AFA rate → itemised bill.

Pure arithmetic, total for any input:

  energy   = rate(usage) × usage          rate jumps for ALL units above 1500 kWh
  capacity = capacity_rate × usage
  network  = network_rate × usage
  afa      = afa_rate × usage             signed
  retail   = fee if usage > 600 else 0
  kwtbb    = 1.6% × (energy + capacity + network)
  sst      = 8% × (energy + capacity + network + afa + retail) × (usage − 600) / usage
  eei      = −band_rate(usage) × usage
"""

from __future__ import annotations

import math

from solar_quote.config.tariff import TariffConfig
from solar_quote.models.results import TariffBreakdown

_DEFAULT_TARIFF = TariffConfig()


def _clamp_usage(usage_kwh: float) -> float:
    if math.isnan(usage_kwh) or usage_kwh < 0:
        return 0.0
    return usage_kwh


def energy_rate_for(usage_kwh: float, tariff: TariffConfig | None = None) -> float:
    """Whole-usage energy rate: base at or below the threshold, high above it."""
    tariff = tariff or _DEFAULT_TARIFF
    if usage_kwh > tariff.high_usage_threshold_kwh:
        return tariff.high_energy_rate
    return tariff.base_energy_rate


def eei_rate_for(usage_kwh: float, tariff: TariffConfig | None = None) -> float:
    """EEI rebate rate (≤ 0) for the band containing ``usage_kwh``."""
    tariff = tariff or _DEFAULT_TARIFF
    for band in tariff.eei_bands:
        if usage_kwh <= band.upper_kwh:
            return band.rate_per_kwh
    return 0.0


def calculate_bill(
    usage_kwh: float,
    afa_rate: float = 0.0,
    tariff: TariffConfig | None = None,
) -> TariffBreakdown:
    """Compute the full bill for one month of usage.

    Negative or NaN usage is treated as zero.  No rounding happens here —
    callers that display the result use ``TariffBreakdown.rounded()``.
    """
    tariff = tariff or _DEFAULT_TARIFF
    usage = _clamp_usage(usage_kwh)

    # ── Per-kWh charges ────────────────────────────────────────────────
    unit_rate = energy_rate_for(usage, tariff)
    usage_cost = unit_rate * usage
    capacity_cost = tariff.capacity_rate * usage
    network_cost = tariff.network_rate * usage
    afa_cost = afa_rate * usage

    # ── Retail fee: step at the threshold, not prorated ────────────────
    retail_charge = tariff.retail_charge if usage > tariff.retail_threshold_kwh else 0.0

    # ── KWTBB: energy + capacity + network only ────────────────────────
    kwtbb_cost = (usage_cost + capacity_cost + network_cost) * tariff.kwtbb_pct

    # ── SST: only the share of charges attributable to usage above the
    #    threshold is taxable ─────────────────────────────────────────────
    if usage > 0:
        taxable_fraction = max(0.0, usage - tariff.sst_threshold_kwh) / usage
    else:
        taxable_fraction = 0.0
    pre_tax_subtotal = usage_cost + capacity_cost + network_cost + afa_cost + retail_charge
    sst_cost = pre_tax_subtotal * taxable_fraction * tariff.sst_pct

    # ── EEI rebate ─────────────────────────────────────────────────────
    eei_cost = eei_rate_for(usage, tariff) * usage

    total_bill = (
        usage_cost + capacity_cost + network_cost + afa_cost
        + retail_charge + kwtbb_cost + sst_cost + eei_cost
    )

    return TariffBreakdown(
        usage_kwh=usage,
        energy_unit_rate=unit_rate,
        is_high_usage_tier=usage > tariff.high_usage_threshold_kwh,
        usage_cost=usage_cost,
        capacity_cost=capacity_cost,
        network_cost=network_cost,
        afa_cost=afa_cost,
        retail_charge=retail_charge,
        kwtbb_cost=kwtbb_cost,
        sst_cost=sst_cost,
        eei_cost=eei_cost,
        total_bill=total_bill,
        effective_unit_rate=total_bill / usage if usage > 0 else 0.0,
    )
