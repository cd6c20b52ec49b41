# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Statement records emitted for every fiscal year.

All amounts are Decimal. Totals are stored alongside their components so a
consumer can check the identities without re-deriving anything.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from pydantic import Field

from ..core.primitives import ZERO, Model, PeriodTypeEnum


class ProfitLossStatement(Model):
    tuition_revenue: Decimal
    other_revenue: Decimal
    total_revenue: Decimal
    rent_expense: Decimal
    staff_costs: Decimal
    other_opex: Decimal
    total_opex: Decimal
    ebitda: Decimal
    depreciation: Decimal
    ebit: Decimal
    interest_expense: Decimal
    interest_income: Decimal
    net_interest: Decimal
    ebt: Decimal
    zakat_expense: Decimal
    net_income: Decimal


class BalanceSheet(Model):
    # Assets
    cash: Decimal
    accounts_receivable: Decimal
    prepaid_expenses: Decimal
    total_current_assets: Decimal
    gross_ppe: Decimal
    accumulated_depreciation: Decimal
    net_ppe: Decimal
    total_non_current_assets: Decimal
    total_assets: Decimal
    # Liabilities
    accounts_payable: Decimal
    accrued_expenses: Decimal
    deferred_revenue: Decimal
    total_current_liabilities: Decimal
    debt_balance: Decimal
    total_liabilities: Decimal
    # Equity
    retained_earnings: Decimal = Field(
        ..., description="Equity brought forward from the prior year."
    )
    net_income_current_year: Decimal
    total_equity: Decimal
    balance_difference: Decimal = Field(
        ..., description="Total assets - (total liabilities + total equity)."
    )


class CashFlowStatement(Model):
    net_income: Decimal
    depreciation: Decimal
    change_in_receivables: Decimal
    change_in_prepaid: Decimal
    change_in_payables: Decimal
    change_in_accrued: Decimal
    change_in_deferred_revenue: Decimal
    operating_cash_flow: Decimal
    capex: Decimal
    investing_cash_flow: Decimal
    debt_issuance: Decimal
    debt_repayment: Decimal
    equity_movements: Decimal = ZERO
    financing_cash_flow: Decimal
    net_change_in_cash: Decimal
    beginning_cash: Decimal
    ending_cash: Decimal
    cash_reconciliation_diff: Decimal = Field(
        ..., description="beginning + CFO + CFI + CFF - ending."
    )


class SolverDiagnostics(Model):
    iterations: int
    converged: bool
    residual: Decimal


class OperatingMetrics(Model):
    """Non-financial drivers behind a projected year."""

    total_students: Optional[int] = None
    students_by_grade: Dict[str, int] = Field(default_factory=dict)
    students_by_program: Dict[str, int] = Field(default_factory=dict)
    fee_by_program: Dict[str, Decimal] = Field(default_factory=dict)


class CapExSummary(Model):
    spending: Decimal = ZERO
    pre_contract_depreciation: Decimal = ZERO
    contract_depreciation: Decimal = ZERO
    assets_added: int = 0


class Period(Model):
    """One fiscal year of the projection with its three statements."""

    year: int
    period_type: PeriodTypeEnum
    profit_loss: ProfitLossStatement
    balance_sheet: BalanceSheet
    cash_flow: CashFlowStatement
    solver: Optional[SolverDiagnostics] = None
    operating: OperatingMetrics = Field(default_factory=OperatingMetrics)
    capex: CapExSummary = Field(default_factory=CapExSummary)

    @property
    def is_projected(self) -> bool:
        return self.period_type != PeriodTypeEnum.HISTORICAL
