# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal

from leasecast.core.primitives import ZERO
from leasecast.periods import HistoricalBalanceSheet, HistoricalPeriodInput, HistoricalProfitLoss
from leasecast.working_capital import (
    WorkingCapitalRatios,
    derive_working_capital_ratios,
    resolve_working_capital_ratios,
)


class TestDerivation:
    def test_ratios_measured_on_base_year(self, historical_periods):
        ratios = derive_working_capital_ratios(historical_periods[1])
        tuition = Decimal("52250000")
        assert ratios.ar_percent == Decimal("2200000") / tuition
        assert ratios.ap_percent == Decimal("1650000") / tuition
        assert ratios.deferred_revenue_percent == Decimal("3300000") / Decimal("55000000")
        assert ratios.other_revenue_ratio == Decimal("2750000") / tuition
        assert ratios.locked
        assert ratios.calculated_from_base_year

    def test_zero_revenue_base_gives_zero_ratios(self):
        base_year = HistoricalPeriodInput(
            year=2023,
            profit_loss=HistoricalProfitLoss(revenue=ZERO),
            balance_sheet=HistoricalBalanceSheet(
                cash=Decimal("10"), accounts_receivable=Decimal("5"), equity=Decimal("15")
            ),
        )
        ratios = derive_working_capital_ratios(base_year)
        assert ratios.ar_percent == ZERO
        assert ratios.other_revenue_ratio == ZERO


class TestResolution:
    def test_locked_ratios_are_used_verbatim(self, historical_periods):
        supplied = WorkingCapitalRatios(ar_percent=Decimal("0.1"), locked=True)
        assert resolve_working_capital_ratios(supplied, historical_periods[1]) is supplied

    def test_unlocked_ratios_are_rederived(self, historical_periods):
        supplied = WorkingCapitalRatios(ar_percent=Decimal("0.1"))
        resolved = resolve_working_capital_ratios(supplied, historical_periods[1])
        assert resolved.ar_percent != Decimal("0.1")
        assert resolved.calculated_from_base_year


def test_apply_uses_tuition_and_total_bases():
    ratios = WorkingCapitalRatios(
        ar_percent=Decimal("0.04"),
        prepaid_percent=Decimal("0.01"),
        ap_percent=Decimal("0.03"),
        accrued_percent=Decimal("0.02"),
        deferred_revenue_percent=Decimal("0.05"),
    )
    balances = ratios.apply(Decimal("1000000"), Decimal("1200000"))
    assert balances.accounts_receivable == Decimal("40000")
    assert balances.prepaid_expenses == Decimal("10000")
    assert balances.accounts_payable == Decimal("30000")
    assert balances.accrued_expenses == Decimal("20000")
    assert balances.deferred_revenue == Decimal("60000")
    assert balances.net_working_capital == Decimal("-60000")
