# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the decimal arithmetic policy.

Covers the bound numeric context, currency and half-up rounding, safe
division and step escalation.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from leasecast.core.primitives import (
    ZERO,
    NumericContext,
    escalation_steps,
    round_currency,
    round_half_up,
    safe_divide,
    step_escalation_factor,
    to_decimal,
)


class TestNumericContext:
    def test_bind_sets_precision_and_rounding(self):
        with NumericContext(precision=30).bind() as ctx:
            assert decimal.getcontext().prec == 30
            assert ctx.rounding == decimal.ROUND_HALF_UP

    def test_bind_restores_previous_context(self):
        before = decimal.getcontext().prec
        with NumericContext(precision=50).bind():
            pass
        assert decimal.getcontext().prec == before


class TestRounding:
    def test_round_currency_half_up(self):
        assert round_currency(Decimal("1.005")) == Decimal("1.01")
        assert round_currency(Decimal("2.345"), places=1) == Decimal("2.3")

    def test_round_half_up_for_counts(self):
        assert round_half_up(Decimal("2.5")) == 3
        assert round_half_up(Decimal("2.4999")) == 2

    def test_to_decimal_routes_floats_through_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(3) == Decimal("3")


def test_safe_divide_returns_zero_for_zero_denominator():
    assert safe_divide(Decimal("10"), ZERO) == ZERO
    assert safe_divide(Decimal("10"), Decimal("4")) == Decimal("2.5")


class TestEscalation:
    def test_no_steps_before_or_at_anchor(self):
        assert escalation_steps(0, 1) == 0
        assert escalation_steps(-3, 1) == 0

    def test_steps_are_whole_blocks(self):
        assert escalation_steps(2, 3) == 0
        assert escalation_steps(3, 3) == 1
        assert escalation_steps(7, 3) == 2

    def test_factor_is_constant_within_block(self):
        rate = Decimal("0.10")
        assert step_escalation_factor(rate, 1, 3) == Decimal("1")
        assert step_escalation_factor(rate, 3, 3) == Decimal("1.10")
        assert step_escalation_factor(rate, 6, 3) == Decimal("1.2100")
