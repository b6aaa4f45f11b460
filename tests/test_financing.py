"""Tests for finance/financing.py — flat-interest EPP plans."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from solar_quote.config import FinancingConfig
from solar_quote.finance.financing import (
    UnknownBankError,
    available_durations,
    build_loan_plan,
    resolve_duration,
)


class TestLoanPlan:
    def test_maybank_60_months(self, financing: FinancingConfig):
        plan = build_loan_plan(54_300, financing)
        # deposit 5% = 2,715; principal 51,585; × 1.115 = 57,517.275
        assert plan.deposit_amount == pytest.approx(2_715)
        assert plan.principal_after_deposit == pytest.approx(51_585)
        assert plan.interest_rate_pct == 11.5
        assert plan.total_repayment == pytest.approx(57_517.275)
        assert plan.interest_amount == pytest.approx(5_932.275)
        assert plan.monthly_installment == pytest.approx(57_517.275 / 60)
        assert plan.duration_months == 60

    def test_interest_is_flat(self):
        short = build_loan_plan(10_000, FinancingConfig(bank="CIMB", duration_months=12))
        # 9,500 × 1.035, not compounded monthly
        assert short.total_repayment == pytest.approx(9_832.5)

    def test_zero_price(self, financing: FinancingConfig):
        plan = build_loan_plan(0, financing)
        assert plan.deposit_amount == 0
        assert plan.monthly_installment == 0

    def test_zero_duration_guard(self):
        cfg = FinancingConfig.model_construct(
            epp_rates={"Test Bank": {0: 5.0}}, bank="Test Bank",
            duration_months=0, deposit_pct=0.05,
        )
        plan = build_loan_plan(10_000, cfg)
        assert plan.duration_months == 0
        assert plan.monthly_installment == 0
        assert plan.total_repayment == pytest.approx(9_975)


class TestDurationFallback:
    def test_offered_duration_kept(self):
        rates = FinancingConfig().epp_rates
        assert resolve_duration("CIMB", 24, rates) == 24

    def test_missing_duration_falls_back_to_longest(self):
        plan = build_loan_plan(20_000, FinancingConfig(bank="AmBank", duration_months=60))
        assert plan.duration_months == 24
        assert plan.interest_rate_pct == 6.0

    def test_fallback_is_longest_not_nearest(self):
        rates = {"X": {6: 1.0, 12: 2.0, 36: 4.0}}
        assert resolve_duration("X", 13, rates) == 36

    def test_available_durations_sorted(self):
        rates = {"X": {36: 4.0, 6: 1.0, 12: 2.0}}
        assert available_durations("X", rates) == [6, 12, 36]

    def test_unknown_bank(self):
        with pytest.raises(UnknownBankError):
            available_durations("Nope", FinancingConfig().epp_rates)
        assert issubclass(UnknownBankError, KeyError)


class TestFinancingValidation:
    def test_defaults_are_valid(self):
        cfg = FinancingConfig()
        assert cfg.bank in cfg.epp_rates
        assert cfg.deposit_pct == 0.05

    def test_bank_not_in_table_rejected(self):
        with pytest.raises(ValidationError):
            FinancingConfig(bank="Nope")

    def test_empty_table_rejected(self):
        with pytest.raises(ValidationError):
            FinancingConfig(epp_rates={})

    def test_bank_without_durations_rejected(self):
        with pytest.raises(ValidationError):
            FinancingConfig(epp_rates={"X": {}}, bank="X")

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            FinancingConfig(epp_rates={"X": {12: -1.0}}, bank="X")
