"""Engine — tariff, inversion, sizing and net-billing computation logic."""

from solar_quote.engine.tariff import calculate_bill, energy_rate_for, eei_rate_for
from solar_quote.engine.estimator import estimate_usage_from_bill
from solar_quote.engine.solar import lookup_system_price, monthly_kwh_per_panel, size_solar_system
from solar_quote.engine.net_billing import export_rate_for, monthly_savings, project_net_bill
from solar_quote.engine.curve import compute_bill_curve
from solar_quote.engine.orchestrator import build_quote

__all__ = [
    "calculate_bill",
    "energy_rate_for",
    "eei_rate_for",
    "estimate_usage_from_bill",
    "lookup_system_price",
    "monthly_kwh_per_panel",
    "size_solar_system",
    "export_rate_for",
    "monthly_savings",
    "project_net_bill",
    "compute_bill_curve",
    # Full pipeline
    "build_quote",
]
