"""Inverse tariff — bill amount (RM) → estimated usage (kWh).

The forward bill is piecewise linear with upward jumps (retail fee at
600 kWh, whole-usage tier switch at 1500 kWh, EEI band edges) but is
non-decreasing in usage for any fixed AFA rate.  That is the only property
the search relies on, so the inversion is a plain bisection:

  1. target ≤ 0 (or NaN)  → 0 kWh, no search
  2. bracket: double ``upper`` from a seed until bill(upper) ≥ target
  3. bisect for the smallest usage whose bill reaches the target
  4. return whichever bracket end has the smaller residual; ties go to
     the smaller usage

A target that falls inside a jump has no exact inverse.  Step 4 then
resolves deterministically to the jump boundary on the closer side.
"""

from __future__ import annotations

import logging
import math

from solar_quote.config.estimator import EstimatorConfig
from solar_quote.config.tariff import TariffConfig
from solar_quote.engine.tariff import calculate_bill

logger = logging.getLogger(__name__)

_DEFAULT_ESTIMATOR = EstimatorConfig()


def estimate_usage_from_bill(
    bill_amount: float,
    afa_rate: float = 0.0,
    tariff: TariffConfig | None = None,
    estimator: EstimatorConfig | None = None,
) -> float:
    """Find the usage whose forward bill reproduces ``bill_amount``.

    Parameters
    ----------
    bill_amount : float
        Target monthly bill (RM).  Negative and NaN amounts clamp to zero
        usage instead of raising.
    afa_rate : float
        AFA / ICPT rate (RM/kWh) the bill was issued under.
    tariff : TariffConfig | None
        Tariff tables; defaults to the standard residential tariff.
    estimator : EstimatorConfig | None
        Search tolerances and fuses.

    Returns
    -------
    float
        Estimated usage (kWh), never negative.
    """
    cfg = estimator or _DEFAULT_ESTIMATOR

    if math.isnan(bill_amount) or bill_amount <= 0:
        return 0.0

    def bill_at(usage: float) -> float:
        return calculate_bill(usage, afa_rate, tariff).total_bill

    # ── Bracket ────────────────────────────────────────────────────────
    lo = 0.0
    hi = cfg.seed_upper_kwh
    doublings = 0
    while bill_at(hi) < bill_amount and doublings < cfg.max_bracket_doublings:
        lo = hi
        hi *= 2
        doublings += 1
    if bill_at(hi) < bill_amount:
        logger.warning(
            "Could not bracket bill %.2f after %d doublings (upper=%.1f kWh); "
            "returning upper bound",
            bill_amount, doublings, hi,
        )
        return hi
    logger.debug("Bracketed bill %.2f in [%.1f, %.1f] kWh", bill_amount, lo, hi)

    # ── Bisect ─────────────────────────────────────────────────────────
    # Invariant: bill(lo) < target ≤ bill(hi)
    iterations = 0
    while hi - lo > cfg.kwh_tolerance:
        if iterations >= cfg.max_iterations:
            logger.warning(
                "Bisection fuse tripped after %d iterations for bill %.2f "
                "(bracket [%.6f, %.6f] kWh); check tariff data for "
                "non-monotonic bands",
                iterations, bill_amount, lo, hi,
            )
            break
        iterations += 1

        mid = (lo + hi) / 2
        mid_bill = bill_at(mid)
        if abs(mid_bill - bill_amount) <= cfg.bill_tolerance:
            logger.debug("Converged on residual after %d iterations: %.6f kWh", iterations, mid)
            return mid
        if mid_bill < bill_amount:
            lo = mid
        else:
            hi = mid

    logger.debug("Converged on width after %d iterations: [%.6f, %.6f] kWh", iterations, lo, hi)

    # ── Tie-break ──────────────────────────────────────────────────────
    lo_residual = abs(bill_at(lo) - bill_amount)
    hi_residual = abs(bill_at(hi) - bill_amount)
    return lo if lo_residual <= hi_residual else hi
