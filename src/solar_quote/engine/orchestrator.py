"""Quote pipeline — one bill amount → every derived figure.

Dependency graph (acyclic, recomputed in full on any input change):

  bill amount ─► usage ─┬─► tariff breakdown (original bill)
                        ├─► solar sizing ─┬─► price lookup ─► discounts ─► loan plan
                        │                 └─► net billing ─► monthly savings
                        └─────────────────────┘

Entry point: ``build_quote(scenario)``
"""

from __future__ import annotations

import logging

from solar_quote.config.scenario import Scenario
from solar_quote.engine.estimator import estimate_usage_from_bill
from solar_quote.engine.net_billing import monthly_savings, project_net_bill
from solar_quote.engine.solar import lookup_system_price, size_solar_system
from solar_quote.engine.tariff import calculate_bill
from solar_quote.finance.financing import build_loan_plan
from solar_quote.finance.pricing import apply_discounts
from solar_quote.models.results import QuoteResult

logger = logging.getLogger(__name__)


def build_quote(scenario: Scenario) -> QuoteResult:
    """Run the full pipeline for one scenario."""
    tariff = scenario.tariff

    usage = estimate_usage_from_bill(
        scenario.bill_amount, scenario.afa_rate, tariff, scenario.estimator,
    )
    bill = calculate_bill(usage, scenario.afa_rate, tariff)

    solar = size_solar_system(usage, scenario.solar)
    base_price = lookup_system_price(solar.panel_count, scenario.solar)
    if base_price is None and solar.panel_count > 0:
        logger.info(
            "No system price for %d panels (quotable range %d–%d)",
            solar.panel_count, scenario.solar.min_priced_panels, scenario.solar.max_priced_panels,
        )

    net = project_net_bill(
        usage,
        solar.monthly_generation_kwh,
        scenario.self_consumption_pct / 100,
        scenario.afa_rate,
        tariff,
    )

    pricing = apply_discounts(base_price, scenario.pricing)
    loan = build_loan_plan(pricing.final_price, scenario.financing)

    return QuoteResult(
        bill_amount=scenario.bill_amount,
        afa_rate=scenario.afa_rate,
        usage_kwh=usage,
        bill=bill,
        solar=solar,
        base_price=base_price,
        net_billing=net,
        original_bill=bill.total_bill,
        monthly_savings=monthly_savings(bill.total_bill, net.net_bill),
        pricing=pricing,
        loan=loan,
    )
