"""Result types — the contract between engine, finance and API.

Every result is an immutable value, recomputed from scratch on each input
change.  Monetary fields keep full precision; ``TariffBreakdown.rounded()``
produces the presentation copy.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


# ═══════════════════════════════════════════════════════════════════════════
# Tariff
# ═══════════════════════════════════════════════════════════════════════════

class TariffBreakdown(BaseModel):
    """Itemised monthly bill for one usage figure."""

    model_config = ConfigDict(frozen=True)

    usage_kwh: float
    energy_unit_rate: float
    """Tier energy rate applied to the whole usage (RM/kWh)."""
    is_high_usage_tier: bool

    usage_cost: float
    capacity_cost: float
    network_cost: float
    afa_cost: float
    """Signed — negative when the AFA rate is a rebate."""
    retail_charge: float
    kwtbb_cost: float
    sst_cost: float
    eei_cost: float
    """Always ≤ 0."""

    total_bill: float
    effective_unit_rate: float
    """total_bill / usage_kwh, or 0 when usage is 0."""

    def rounded(self) -> TariffBreakdown:
        """Copy at presentation precision: 2 dp charges, 4 dp rates."""
        charges = (
            "usage_cost", "capacity_cost", "network_cost", "afa_cost",
            "retail_charge", "kwtbb_cost", "sst_cost", "eei_cost", "total_bill",
        )
        update = {name: round(getattr(self, name), 2) for name in charges}
        update["energy_unit_rate"] = round(self.energy_unit_rate, 4)
        update["effective_unit_rate"] = round(self.effective_unit_rate, 4)
        update["usage_kwh"] = round(self.usage_kwh, 2)
        return self.model_copy(update=update)


class BillCurve(BaseModel):
    """Forward bill sampled over a usage grid."""

    model_config = ConfigDict(frozen=True)

    afa_rate: float
    usage_kwh: list[float]
    total_bill: list[float]
    is_monotonic: bool
    """True when the sampled bill never decreases with usage."""
    first_decrease_kwh: float | None = None
    """Usage at which the bill first drops below the previous sample."""


# ═══════════════════════════════════════════════════════════════════════════
# Solar
# ═══════════════════════════════════════════════════════════════════════════

class SolarConfiguration(BaseModel):
    """Recommended system.  Zero panels means nothing to size."""

    model_config = ConfigDict(frozen=True)

    panel_count: int
    system_size_kwp: float
    monthly_generation_kwh: float
    monthly_kwh_per_panel: float


class NetBillingResult(BaseModel):
    """Day/night split with export capped at night import."""

    model_config = ConfigDict(frozen=True)

    self_consumed_kwh: float
    """Daytime usage served directly by solar."""
    exportable_kwh: float
    """Surplus exported, capped at night_usage_kwh."""
    unused_surplus_kwh: float
    """Surplus beyond the cap — forfeited."""
    export_value: float
    night_usage_kwh: float
    night_bill: float
    net_bill: float
    """night_bill − export_value.  May be negative (net credit)."""
    export_unit_rate: float


# ═══════════════════════════════════════════════════════════════════════════
# Pricing & financing
# ═══════════════════════════════════════════════════════════════════════════

class PricingBreakdown(BaseModel):
    """Base price → final price after capped discounts."""

    model_config = ConfigDict(frozen=True)

    base_price: float
    effective_discount_pct: float
    discount_amount: float
    price_after_discount: float
    effective_fixed_rebate: float
    campaign_deduction: float
    final_price: float
    """Never negative."""


class LoanPlan(BaseModel):
    """Flat-interest instalment plan."""

    model_config = ConfigDict(frozen=True)

    bank: str
    duration_months: int
    """Resolved tenure — may differ from the requested one (fallback)."""
    interest_rate_pct: float
    deposit_amount: float
    principal_after_deposit: float
    interest_amount: float
    total_repayment: float
    monthly_installment: float


# ═══════════════════════════════════════════════════════════════════════════
# Full quote
# ═══════════════════════════════════════════════════════════════════════════

class QuoteResult(BaseModel):
    """Everything derived from one bill amount."""

    model_config = ConfigDict(frozen=True)

    bill_amount: float
    afa_rate: float
    usage_kwh: float
    """Estimated monthly usage reconstructed from the bill."""
    bill: TariffBreakdown
    solar: SolarConfiguration
    base_price: float | None
    """None when the panel count is outside the price table."""
    net_billing: NetBillingResult
    original_bill: float
    monthly_savings: float
    pricing: PricingBreakdown
    loan: LoanPlan
