# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Working-capital ratio derivation and projection.

Ratios are measured once on the final historical year and then applied to
each projected year's own revenue base, so balances track revenue rather than
carrying forward a constant amount.

Revenue bases:
    - receivables, prepaid, payables, accrued: tuition revenue
    - deferred revenue: total revenue (tuition + other)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import Field

from ..core.primitives import ZERO, Model, NonNegativeDecimal, safe_divide

if TYPE_CHECKING:
    from ..periods.inputs import HistoricalPeriodInput

logger = logging.getLogger(__name__)


class WorkingCapitalBalances(Model):
    """Projected working-capital balances for one fiscal year."""

    accounts_receivable: Decimal
    prepaid_expenses: Decimal
    accounts_payable: Decimal
    accrued_expenses: Decimal
    deferred_revenue: Decimal

    @property
    def net_working_capital(self) -> Decimal:
        return (self.accounts_receivable + self.prepaid_expenses) - (
            self.accounts_payable + self.accrued_expenses + self.deferred_revenue
        )


class WorkingCapitalRatios(Model):
    """
    Working-capital ratios plus the other-revenue ratio.

    `locked` ratios are used verbatim. Unlocked ratios are re-derived from the
    final historical year when the run starts and then held constant.
    """

    ar_percent: NonNegativeDecimal = Field(
        default=ZERO, description="Accounts receivable / tuition revenue."
    )
    prepaid_percent: NonNegativeDecimal = Field(
        default=ZERO, description="Prepaid expenses / tuition revenue."
    )
    ap_percent: NonNegativeDecimal = Field(
        default=ZERO, description="Accounts payable / tuition revenue."
    )
    accrued_percent: NonNegativeDecimal = Field(
        default=ZERO, description="Accrued expenses / tuition revenue."
    )
    deferred_revenue_percent: NonNegativeDecimal = Field(
        default=ZERO, description="Deferred revenue / total revenue."
    )
    other_revenue_ratio: NonNegativeDecimal = Field(
        default=ZERO, description="Other revenue as a fraction of tuition revenue."
    )
    locked: bool = Field(
        default=False,
        description="When True the ratios are used as given and never re-derived.",
    )
    calculated_from_base_year: bool = Field(
        default=False,
        description="Provenance: True when the ratios were measured on a historical year.",
    )

    def apply(
        self, tuition_revenue: Decimal, total_revenue: Decimal
    ) -> WorkingCapitalBalances:
        """Project the five balances onto one year's revenue base."""
        return WorkingCapitalBalances(
            accounts_receivable=tuition_revenue * self.ar_percent,
            prepaid_expenses=tuition_revenue * self.prepaid_percent,
            accounts_payable=tuition_revenue * self.ap_percent,
            accrued_expenses=tuition_revenue * self.accrued_percent,
            deferred_revenue=total_revenue * self.deferred_revenue_percent,
        )


def derive_working_capital_ratios(base_year: HistoricalPeriodInput) -> WorkingCapitalRatios:
    """
    Measure the ratios on a historical year and lock them.

    A zero revenue base yields a zero ratio rather than an error.
    """
    tuition = base_year.profit_loss.resolved_tuition_revenue
    other = base_year.profit_loss.resolved_other_revenue
    total = tuition + other
    balance = base_year.balance_sheet

    ratios = WorkingCapitalRatios(
        ar_percent=safe_divide(balance.accounts_receivable, tuition),
        prepaid_percent=safe_divide(balance.prepaid_expenses, tuition),
        ap_percent=safe_divide(balance.accounts_payable, tuition),
        accrued_percent=safe_divide(balance.accrued_expenses, tuition),
        deferred_revenue_percent=safe_divide(balance.deferred_revenue, total),
        other_revenue_ratio=safe_divide(other, tuition),
        locked=True,
        calculated_from_base_year=True,
    )
    logger.debug(
        f"Derived working-capital ratios from {base_year.year}: "
        f"AR {ratios.ar_percent}, prepaid {ratios.prepaid_percent}, "
        f"AP {ratios.ap_percent}, accrued {ratios.accrued_percent}, "
        f"deferred {ratios.deferred_revenue_percent}, "
        f"other revenue {ratios.other_revenue_ratio}"
    )
    return ratios


def resolve_working_capital_ratios(
    supplied: WorkingCapitalRatios, base_year: HistoricalPeriodInput
) -> WorkingCapitalRatios:
    """Return the ratios a run should use: supplied if locked, else re-derived."""
    if supplied.locked:
        return supplied
    logger.info(
        f"Working-capital ratios unlocked; re-deriving from base year {base_year.year}"
    )
    return derive_working_capital_ratios(base_year)
