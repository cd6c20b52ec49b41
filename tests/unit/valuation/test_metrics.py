# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for projection metrics on hand-built period sequences.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from leasecast.core.calculations import FinancialCalculations
from leasecast.core.primitives import SystemConfiguration
from leasecast.periods import calculate_historical_period
from leasecast.valuation import ProjectionValuation


@pytest.fixture
def periods(historical_periods):
    first = calculate_historical_period(historical_periods[0])
    second = calculate_historical_period(historical_periods[1], historical_periods[0])
    return [first, second]


class TestProjectionValuation:
    def test_empty_periods_rejected(self):
        with pytest.raises(ValueError):
            ProjectionValuation.calculate([], SystemConfiguration(), 2025, 2054)

    def test_full_run_totals(self, periods):
        metrics = ProjectionValuation.calculate(periods, SystemConfiguration(), 2023, 2023)
        assert metrics.total_rent == Decimal("16400000")
        assert metrics.total_net_income == Decimal("33470000")
        assert metrics.total_ebitda == Decimal("36100000")
        assert metrics.average_ebitda == Decimal("18050000")
        assert metrics.peak_debt == Decimal("0")
        assert metrics.final_cash == Decimal("28070000")

    def test_contract_window_metrics(self, periods):
        config = SystemConfiguration(discount_rate=Decimal("0.10"))
        metrics = ProjectionValuation.calculate(periods, config, 2023, 2023)
        assert metrics.contract_years == 1
        assert metrics.contract_total_rent == Decimal("8400000")
        # Single-year window: NPV equals the undiscounted value and the factor is 1 + r
        assert metrics.contract_rent_npv == Decimal("8400000")
        assert metrics.contract_net_tenant_surplus == Decimal("19100000") - Decimal("8400000")
        assert metrics.annualization_factor == FinancialCalculations.calculate_annualization_factor(
            Decimal("0.10"), 1
        )
        assert metrics.contract_nav == (
            metrics.contract_annualized_ebitda - metrics.contract_annualized_rent
        )

    def test_contract_periods_filter(self, periods):
        assert [p.year for p in ProjectionValuation.contract_periods(periods, 2023, 2030)] == [2023]

    def test_discount_rate_defaults_to_debt_rate(self, periods):
        metrics = ProjectionValuation.calculate(periods, SystemConfiguration(), 2022, 2023)
        assert metrics.discount_rate == Decimal("0.05")
        expected_npv = FinancialCalculations.calculate_npv(
            [p.cash_flow.net_change_in_cash for p in periods], Decimal("0.05")
        )
        assert metrics.npv == expected_npv
