# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period validation.

Checks every emitted period for:
    - the balance identity: |assets - (liabilities + equity)| <= tolerance
    - cash reconciliation: |beginning + CFO + CFI + CFF - ending| <= tolerance,
      and the cash-flow ending cash equals balance-sheet cash
    - linkage: years increase by one, and each projected period opens on the
      prior period's closing cash and equity

Violations become ValidationWarning records on the summary. The validator
reports; it never adjusts a period.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Literal, Sequence

from pydantic import Field

from ..core.primitives import ZERO, Model, ValidationSettings
from .models import Period

logger = logging.getLogger(__name__)

WarningKind = Literal["balance", "cash_reconciliation", "linkage"]


class ValidationWarning(Model):
    """A period that failed a check; recorded, never raised."""

    year: int
    kind: WarningKind
    message: str
    difference: Decimal = ZERO


class ValidationSummary(Model):
    all_periods_balanced: bool
    all_cash_flows_reconciled: bool
    all_periods_linked: bool = True
    max_balance_difference: Decimal = ZERO
    max_cash_difference: Decimal = ZERO
    warnings: List[ValidationWarning] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return (
            self.all_periods_balanced
            and self.all_cash_flows_reconciled
            and self.all_periods_linked
        )


def check_balance(period: Period, tolerance: Decimal) -> List[ValidationWarning]:
    difference = period.balance_sheet.balance_difference
    if abs(difference) <= tolerance:
        return []
    return [
        ValidationWarning(
            year=period.year,
            kind="balance",
            message=(
                f"Balance sheet out of balance by {difference} "
                f"(assets {period.balance_sheet.total_assets})"
            ),
            difference=difference,
        )
    ]


def check_cash_reconciliation(period: Period, tolerance: Decimal) -> List[ValidationWarning]:
    flows = period.cash_flow
    warnings: List[ValidationWarning] = []
    difference = (
        flows.beginning_cash
        + flows.operating_cash_flow
        + flows.investing_cash_flow
        + flows.financing_cash_flow
        - flows.ending_cash
    )
    if abs(difference) > tolerance:
        warnings.append(
            ValidationWarning(
                year=period.year,
                kind="cash_reconciliation",
                message=f"Cash flow does not reconcile: difference {difference}",
                difference=difference,
            )
        )
    statement_gap = flows.ending_cash - period.balance_sheet.cash
    if abs(statement_gap) > tolerance:
        warnings.append(
            ValidationWarning(
                year=period.year,
                kind="cash_reconciliation",
                message=f"Ending cash differs from balance-sheet cash by {statement_gap}",
                difference=statement_gap,
            )
        )
    return warnings


def check_linkage(prior: Period, period: Period) -> List[ValidationWarning]:
    warnings: List[ValidationWarning] = []
    if period.year != prior.year + 1:
        warnings.append(
            ValidationWarning(
                year=period.year,
                kind="linkage",
                message=f"Year {period.year} does not follow {prior.year}",
            )
        )
    if not period.is_projected:
        return warnings

    before = prior.balance_sheet
    after = period.balance_sheet
    opening_checks = (
        ("beginning cash", period.cash_flow.beginning_cash, before.cash),
        ("equity brought forward", after.retained_earnings, before.total_equity),
    )
    for label, opening, closing in opening_checks:
        if opening != closing:
            warnings.append(
                ValidationWarning(
                    year=period.year,
                    kind="linkage",
                    message=f"{label} {opening} differs from prior closing {closing}",
                    difference=opening - closing,
                )
            )
    return warnings


def validate_periods(
    periods: Sequence[Period], settings: ValidationSettings
) -> ValidationSummary:
    """Run every check over a year-ordered sequence of periods."""
    warnings: List[ValidationWarning] = []
    max_balance = ZERO
    max_cash = ZERO

    for index, period in enumerate(periods):
        max_balance = max(max_balance, abs(period.balance_sheet.balance_difference))
        max_cash = max(max_cash, abs(period.cash_flow.cash_reconciliation_diff))
        warnings.extend(check_balance(period, settings.balance_tolerance))
        warnings.extend(check_cash_reconciliation(period, settings.cash_tolerance))
        if index > 0:
            warnings.extend(check_linkage(periods[index - 1], period))

    for warning in warnings:
        logger.warning(f"Validation {warning.kind} {warning.year}: {warning.message}")

    kinds = {warning.kind for warning in warnings}
    return ValidationSummary(
        all_periods_balanced="balance" not in kinds,
        all_cash_flows_reconciled="cash_reconciliation" not in kinds,
        all_periods_linked="linkage" not in kinds,
        max_balance_difference=max_balance,
        max_cash_difference=max_cash,
        warnings=warnings,
    )
