# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial calculation functions.

Contains static methods for the discounting and return metrics used by
valuation and analysis. These functions are pure (math-only) and operate on
year-ordered sequences of Decimals; other modules delegate to these to keep a
single source of truth for financial calculations.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from pyxirr import InvalidPaymentsError, irr

from .primitives.numeric import ONE, ZERO

logger = logging.getLogger(__name__)


class FinancialCalculations:
    """
    Pure mathematical functions for annual cash-flow series.

    Index 0 of every series is the first year and is not discounted.
    """

    @staticmethod
    def calculate_npv(cash_flows: Sequence[Decimal], discount_rate: Decimal) -> Decimal:
        """
        Net present value of an annual series, first flow undiscounted.

        Example:
            ```python
            FinancialCalculations.calculate_npv(
                [Decimal("100"), Decimal("100")], Decimal("0.10")
            )  # 190.909...
            ```
        """
        total = ZERO
        factor = ONE
        growth = ONE + discount_rate
        for flow in cash_flows:
            total += flow / factor
            factor *= growth
        return total

    @staticmethod
    def calculate_annualization_factor(discount_rate: Decimal, periods: int) -> Decimal:
        """
        Capital recovery factor r / (1 - (1 + r)^-n).

        Converts an NPV into the equal annual amount with the same present
        value over `periods` years. With a zero rate this is simply 1 / n.
        """
        if periods <= 0:
            return ZERO
        if discount_rate == ZERO:
            return ONE / Decimal(periods)
        return discount_rate / (ONE - (ONE + discount_rate) ** -periods)

    @staticmethod
    def annualize(npv: Decimal, discount_rate: Decimal, periods: int) -> Decimal:
        return npv * FinancialCalculations.calculate_annualization_factor(
            discount_rate, periods
        )

    @staticmethod
    def calculate_irr(cash_flows: Sequence[Decimal]) -> Optional[float]:
        """
        Calculate the Internal Rate of Return of an annual series using PyXIRR.

        Returns:
            IRR as decimal (e.g., 0.15 for 15%) or None if cannot calculate

        Edge Cases Handled:
            - Empty series → None
            - All negative flows → None
            - All positive flows → None
            - Solver does not converge → None
        """
        if not cash_flows:
            return None

        has_negative = any(flow < ZERO for flow in cash_flows)
        has_positive = any(flow > ZERO for flow in cash_flows)
        if not (has_negative and has_positive):
            return None  # Need both investments and returns

        try:
            result = irr([float(flow) for flow in cash_flows])
        except InvalidPaymentsError as exc:
            logger.debug(f"IRR undefined for series: {exc}")
            return None
        return float(result) if result is not None else None

    @staticmethod
    def calculate_payback_period(cash_flows: Sequence[Decimal]) -> Optional[Decimal]:
        """
        Years until cumulative cash flow first turns non-negative.

        The crossing year is interpolated linearly, so a payback halfway through
        year index 3 is reported as 3.5. Returns None when the cumulative
        position never recovers within the series.
        """
        cumulative = ZERO
        for index, flow in enumerate(cash_flows):
            prior = cumulative
            cumulative += flow
            if cumulative >= ZERO:
                if flow == ZERO:
                    return Decimal(index)
                fraction = (abs(prior) / abs(flow)).quantize(Decimal("0.0001"))
                return Decimal(index) + fraction
        return None
