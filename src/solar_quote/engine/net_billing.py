"""Net billing — day/night split with export capped at night import.

  self_consumed  = required × fraction                (daytime, never billed)
  night_usage    = max(0, required − self_consumed)
  raw_export     = max(0, generation − self_consumed)
  exportable     = min(raw_export, night_usage)       (cap: offset only)
  unused_surplus = max(0, raw_export − night_usage)   (forfeited)
  export_value   = exportable × tier rate of the NIGHT usage
  net_bill       = bill(night_usage) − export_value   (may be negative)

The export rate is the high tier when night usage is at or above the tier
threshold (inclusive), unlike the import tier which switches strictly above.
"""

from __future__ import annotations

import math

from solar_quote.config.tariff import TariffConfig
from solar_quote.engine.tariff import calculate_bill
from solar_quote.models.results import NetBillingResult


def export_rate_for(night_usage_kwh: float, tariff: TariffConfig) -> float:
    """Per-kWh credit for exported energy, from the night-only usage tier."""
    if night_usage_kwh >= tariff.high_usage_threshold_kwh:
        return tariff.high_energy_rate
    return tariff.base_energy_rate


def project_net_bill(
    required_kwh: float,
    generation_kwh: float,
    self_consumption_fraction: float,
    afa_rate: float = 0.0,
    tariff: TariffConfig | None = None,
) -> NetBillingResult:
    """Project the post-solar monthly bill."""
    tariff = tariff or TariffConfig()

    if math.isnan(required_kwh) or required_kwh <= 0:
        return NetBillingResult(
            self_consumed_kwh=0, exportable_kwh=0, unused_surplus_kwh=0,
            export_value=0, night_usage_kwh=0, night_bill=0, net_bill=0,
            export_unit_rate=0,
        )

    fraction = min(max(self_consumption_fraction, 0.0), 1.0)
    generation = max(generation_kwh, 0.0)

    self_consumed = required_kwh * fraction
    night_usage = max(0.0, required_kwh - self_consumed)

    raw_export = max(0.0, generation - self_consumed)
    exportable = min(raw_export, night_usage)
    unused_surplus = max(0.0, raw_export - night_usage)

    export_rate = export_rate_for(night_usage, tariff)
    export_value = exportable * export_rate
    night_bill = calculate_bill(night_usage, afa_rate, tariff).total_bill

    return NetBillingResult(
        self_consumed_kwh=self_consumed,
        exportable_kwh=exportable,
        unused_surplus_kwh=unused_surplus,
        export_value=export_value,
        night_usage_kwh=night_usage,
        night_bill=night_bill,
        net_bill=night_bill - export_value,
        export_unit_rate=export_rate,
    )


def monthly_savings(original_bill: float, net_bill: float) -> float:
    """Savings versus the pre-solar bill, floored at zero."""
    return max(0.0, original_bill - net_bill)
