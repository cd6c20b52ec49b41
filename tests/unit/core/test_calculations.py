# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for FinancialCalculations.

Test Coverage:
1. NPV with the first flow undiscounted
2. Annualization factor (zero rate, zero periods, standard formula)
3. IRR via pyxirr, including undefined series
4. Payback period interpolation
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from leasecast.core.calculations import FinancialCalculations
from leasecast.core.primitives import ZERO


class TestNPV:
    def test_first_flow_is_not_discounted(self):
        npv = FinancialCalculations.calculate_npv([Decimal("100")], Decimal("0.10"))
        assert npv == Decimal("100")

    def test_two_flows(self):
        npv = FinancialCalculations.calculate_npv(
            [Decimal("100"), Decimal("110")], Decimal("0.10")
        )
        assert npv == Decimal("200")

    def test_empty_series(self):
        assert FinancialCalculations.calculate_npv([], Decimal("0.10")) == ZERO


class TestAnnualization:
    def test_zero_rate_is_straight_average(self):
        factor = FinancialCalculations.calculate_annualization_factor(ZERO, 4)
        assert factor == Decimal("0.25")

    def test_zero_periods(self):
        assert FinancialCalculations.calculate_annualization_factor(Decimal("0.1"), 0) == ZERO

    def test_capital_recovery_factor(self):
        factor = FinancialCalculations.calculate_annualization_factor(Decimal("0.10"), 1)
        assert float(factor) == pytest.approx(1.10)

    def test_annualized_npv_round_trip(self):
        rate = Decimal("0.08")
        flows = [Decimal("1000")] * 5
        npv = FinancialCalculations.calculate_npv(flows, rate)
        annualized = FinancialCalculations.annualize(npv, rate, 5)
        # An even series annualizes to a value close to itself (first flow undiscounted)
        assert float(annualized) == pytest.approx(1080.0)


class TestIRR:
    def test_simple_irr(self):
        irr = FinancialCalculations.calculate_irr([Decimal("-100"), Decimal("110")])
        assert irr == pytest.approx(0.10, abs=1e-6)

    @pytest.mark.parametrize(
        "flows",
        [[], [Decimal("1"), Decimal("2")], [Decimal("-1"), Decimal("-2")]],
    )
    def test_undefined_irr_returns_none(self, flows):
        assert FinancialCalculations.calculate_irr(flows) is None


class TestPayback:
    def test_interpolated_payback(self):
        flows = [Decimal("-100"), Decimal("50"), Decimal("100")]
        assert FinancialCalculations.calculate_payback_period(flows) == Decimal("2.5")

    def test_never_recovered(self):
        flows = [Decimal("-100"), Decimal("10")]
        assert FinancialCalculations.calculate_payback_period(flows) is None

    def test_positive_from_start(self):
        assert FinancialCalculations.calculate_payback_period([Decimal("5")]) == ZERO
