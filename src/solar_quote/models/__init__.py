"""Result models — engine output contracts."""

from solar_quote.models.results import (
    BillCurve,
    LoanPlan,
    NetBillingResult,
    PricingBreakdown,
    QuoteResult,
    SolarConfiguration,
    TariffBreakdown,
)

__all__ = [
    "BillCurve",
    "LoanPlan",
    "NetBillingResult",
    "PricingBreakdown",
    "QuoteResult",
    "SolarConfiguration",
    "TariffBreakdown",
]
