"""System pricing — requested discounts and the caps that bound them."""

from pydantic import BaseModel, Field


class PricingConfig(BaseModel):
    """Sales inputs plus the price-tier policy that caps them.

    Discount cap is tiered on the *base* price; the fixed-rebate cap is
    tiered on the price *after* the percentage discount.  The campaign
    deduction is uncapped.
    """

    # --- Requested by the consultant ---
    discount_pct: float = Field(default=0.0, ge=0, description="Requested special discount (%)")
    fixed_rebate: float = Field(default=0.0, ge=0, description="Requested fixed rebate (RM)")
    campaign_deduction: float = Field(
        default=0.0, ge=0,
        description="Roadshow / campaign deduction (RM), applied uncapped",
    )

    # --- Discount cap policy (on base price) ---
    discount_upper_threshold: float = Field(default=50_000.0, ge=0, description="Base price above this → upper cap")
    discount_mid_threshold: float = Field(default=30_000.0, ge=0, description="Base price at/above this → mid cap")
    discount_cap_upper_pct: float = Field(default=7.0, ge=0, le=100, description="Cap when base > upper threshold (%)")
    discount_cap_mid_pct: float = Field(default=6.0, ge=0, le=100, description="Cap when base ≥ mid threshold (%)")
    discount_cap_lower_pct: float = Field(default=5.0, ge=0, le=100, description="Cap otherwise (%)")

    # --- Fixed rebate cap policy (on post-discount price) ---
    rebate_threshold: float = Field(default=30_000.0, ge=0, description="Post-discount price threshold (RM)")
    rebate_cap_below: float = Field(default=600.0, ge=0, description="Cap when post-discount price < threshold (RM)")
    rebate_cap_above: float = Field(default=1_000.0, ge=0, description="Cap otherwise (RM)")
