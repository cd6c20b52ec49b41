# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the historical pass-through.

Test Coverage:
1. P&L and balance sheet copied from actuals
2. Indirect cash flow against the prior actual year
3. Implied opening cash for the first actual year
4. Revenue split resolution
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from leasecast.core.primitives import ZERO, PeriodTypeEnum
from leasecast.periods import HistoricalProfitLoss, calculate_historical_period


class TestHistoricalPeriod:
    def test_profit_loss_passes_through(self, historical_periods):
        period = calculate_historical_period(historical_periods[1], historical_periods[0])
        pl = period.profit_loss
        assert period.period_type == PeriodTypeEnum.HISTORICAL
        assert pl.total_revenue == Decimal("55000000")
        assert pl.tuition_revenue == Decimal("52250000")
        assert pl.other_revenue == Decimal("2750000")
        assert pl.ebitda == Decimal("19100000")
        assert pl.net_income == Decimal("17770000")
        assert pl.interest_income == ZERO

    def test_balance_sheet_balances(self, historical_periods):
        period = calculate_historical_period(historical_periods[1], historical_periods[0])
        bs = period.balance_sheet
        assert bs.balance_difference == ZERO
        assert bs.net_ppe == Decimal("15000000")
        assert bs.retained_earnings == Decimal("22000000")

    def test_cash_flow_reconciles_against_prior_year(self, historical_periods):
        period = calculate_historical_period(historical_periods[1], historical_periods[0])
        cf = period.cash_flow
        assert cf.beginning_cash == Decimal("10000000")
        assert cf.operating_cash_flow == Decimal("19070000")
        assert cf.capex == Decimal("1000000")
        assert cf.investing_cash_flow == Decimal("-1000000")
        assert cf.financing_cash_flow == ZERO
        assert cf.ending_cash == Decimal("28070000")
        assert cf.cash_reconciliation_diff == ZERO

    def test_first_year_uses_implied_opening_cash(self, historical_periods):
        period = calculate_historical_period(historical_periods[0])
        cf = period.cash_flow
        assert cf.change_in_receivables == ZERO
        assert cf.net_change_in_cash == Decimal("16700000")
        assert cf.beginning_cash == Decimal("-6700000")
        assert cf.cash_reconciliation_diff == ZERO

    def test_historical_periods_carry_no_solver_diagnostics(self, historical_periods):
        assert calculate_historical_period(historical_periods[0]).solver is None


class TestRevenueSplit:
    def test_all_revenue_is_tuition_when_unsplit(self):
        pl = HistoricalProfitLoss(revenue=Decimal("100"))
        assert pl.resolved_tuition_revenue == Decimal("100")
        assert pl.resolved_other_revenue == ZERO

    def test_other_revenue_implies_tuition(self):
        pl = HistoricalProfitLoss(revenue=Decimal("100"), other_revenue=Decimal("10"))
        assert pl.resolved_tuition_revenue == Decimal("90")

    def test_inconsistent_split_is_rejected(self):
        with pytest.raises(ValidationError):
            HistoricalProfitLoss(
                revenue=Decimal("100"),
                tuition_revenue=Decimal("80"),
                other_revenue=Decimal("10"),
            )
