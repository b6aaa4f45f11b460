"""Easy Payment Plan — flat-interest instalments on the final price.

Key formulas:
  deposit      = final_price × 5%
  principal    = final_price − deposit
  repayment    = principal × (1 + rate / 100)      flat, applied once
  installment  = repayment / duration              0 when duration is 0

If the requested duration is not offered by the bank, the bank's longest
duration is used instead.
"""

from __future__ import annotations

import logging

from solar_quote.config.financing import FinancingConfig
from solar_quote.models.results import LoanPlan

logger = logging.getLogger(__name__)


class UnknownBankError(KeyError):
    """Bank is not present in the EPP rate table."""


def available_durations(bank: str, epp_rates: dict[str, dict[int, float]]) -> list[int]:
    """Durations offered by ``bank``, ascending."""
    try:
        table = epp_rates[bank]
    except KeyError:
        raise UnknownBankError(bank) from None
    return sorted(table)


def resolve_duration(bank: str, requested_months: int, epp_rates: dict[str, dict[int, float]]) -> int:
    """Requested duration if offered, else the bank's longest duration."""
    durations = available_durations(bank, epp_rates)
    if requested_months in durations:
        return requested_months
    fallback = durations[-1]
    logger.info(
        "%s does not offer %d months; using %d months",
        bank, requested_months, fallback,
    )
    return fallback


def build_loan_plan(final_price: float, financing: FinancingConfig | None = None) -> LoanPlan:
    """Split ``final_price`` into deposit + flat-interest instalments."""
    financing = financing or FinancingConfig()
    price = max(final_price, 0.0)

    duration = resolve_duration(financing.bank, financing.duration_months, financing.epp_rates)
    rate_pct = financing.epp_rates[financing.bank][duration]

    deposit = price * financing.deposit_pct
    principal = price - deposit
    total_repayment = principal * (1 + rate_pct / 100)
    installment = total_repayment / duration if duration > 0 else 0.0

    return LoanPlan(
        bank=financing.bank,
        duration_months=duration,
        interest_rate_pct=rate_pct,
        deposit_amount=deposit,
        principal_after_deposit=principal,
        interest_amount=total_repayment - principal,
        total_repayment=total_repayment,
        monthly_installment=installment,
    )
