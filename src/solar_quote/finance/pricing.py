"""Discount stacking — base system price → final price.

Order is fixed and matters:
  1. percentage discount, capped by the BASE price tier
  2. fixed rebate, capped by the POST-DISCOUNT price tier
  3. campaign deduction, uncapped
  final = max(0, base − discount − rebate − campaign)
"""

from __future__ import annotations

from solar_quote.config.pricing import PricingConfig
from solar_quote.models.results import PricingBreakdown


def max_discount_pct(base_price: float, pricing: PricingConfig) -> float:
    """Discount ceiling (%) for a base price."""
    if base_price > pricing.discount_upper_threshold:
        return pricing.discount_cap_upper_pct
    if base_price >= pricing.discount_mid_threshold:
        return pricing.discount_cap_mid_pct
    return pricing.discount_cap_lower_pct


def max_fixed_rebate(base_price: float, price_after_discount: float, pricing: PricingConfig) -> float:
    """Rebate ceiling (RM).  Nothing to rebate on an unpriced system."""
    if base_price <= 0:
        return 0.0
    if price_after_discount < pricing.rebate_threshold:
        return pricing.rebate_cap_below
    return pricing.rebate_cap_above


def apply_discounts(base_price: float | None, pricing: PricingConfig | None = None) -> PricingBreakdown:
    """Apply the capped discount, capped rebate and campaign deduction.

    ``base_price=None`` (price unavailable) is priced as zero.
    """
    pricing = pricing or PricingConfig()
    base = max(base_price or 0.0, 0.0)

    effective_pct = min(pricing.discount_pct, max_discount_pct(base, pricing))
    discount_amount = base * effective_pct / 100
    price_after_discount = base - discount_amount

    effective_rebate = min(pricing.fixed_rebate, max_fixed_rebate(base, price_after_discount, pricing))
    final_price = max(0.0, price_after_discount - effective_rebate - pricing.campaign_deduction)

    return PricingBreakdown(
        base_price=base,
        effective_discount_pct=effective_pct,
        discount_amount=discount_amount,
        price_after_discount=price_after_discount,
        effective_fixed_rebate=effective_rebate,
        campaign_deduction=pricing.campaign_deduction,
        final_price=final_price,
    )
