"""Serialization tests — result models survive JSON encode/decode.

The API returns these shapes directly, so they must stay stable and
serializable for downstream consumers.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from solar_quote.config import Scenario
from solar_quote.engine.orchestrator import build_quote
from solar_quote.engine.tariff import calculate_bill
from solar_quote.models.results import QuoteResult, TariffBreakdown


def test_quote_round_trip(scenario: Scenario):
    """QuoteResult → JSON → QuoteResult preserves all fields."""
    original = build_quote(scenario)
    restored = QuoteResult.model_validate_json(original.model_dump_json())
    assert restored == original


def test_quote_without_price_round_trip():
    """A quote outside the price table keeps ``base_price`` as null."""
    original = build_quote(Scenario(bill_amount=5_000))
    data = json.loads(original.model_dump_json())
    assert data["base_price"] is None
    assert QuoteResult.model_validate(data) == original


def test_rounded_breakdown():
    b = calculate_bill(1_234.567, 0.10).rounded()
    assert b.total_bill == round(b.total_bill, 2)
    assert b.usage_kwh == 1_234.57
    assert b.effective_unit_rate == round(b.effective_unit_rate, 4)


def test_results_are_frozen():
    b = calculate_bill(300)
    with pytest.raises(ValidationError):
        b.total_bill = 0.0  # type: ignore[misc]
    assert isinstance(b, TariffBreakdown)
