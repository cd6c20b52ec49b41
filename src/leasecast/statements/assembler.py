# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Statement assembler for projected years.

Lays the converged solver values, the operating draft, the capex result and
the working-capital balances out as the three statements. Totals are derived
from their components here; nothing is adjusted to force an identity.
"""

from __future__ import annotations

from ..capex.scheduler import CapExYearResult
from ..periods.draft import OperatingDraft
from ..solver.circular import OpeningPosition, SolverResult
from ..working_capital.ratios import WorkingCapitalBalances
from .models import (
    BalanceSheet,
    CapExSummary,
    CashFlowStatement,
    Period,
    ProfitLossStatement,
    SolverDiagnostics,
)


def assemble_period(
    draft: OperatingDraft,
    capex: CapExYearResult,
    working_capital: WorkingCapitalBalances,
    opening: OpeningPosition,
    solved: SolverResult,
) -> Period:
    """Build the emitted Period for one projected year."""
    ebitda = draft.ebitda
    ebit = ebitda - capex.depreciation
    profit_loss = ProfitLossStatement(
        tuition_revenue=draft.tuition_revenue,
        other_revenue=draft.other_revenue,
        total_revenue=draft.total_revenue,
        rent_expense=draft.rent_expense,
        staff_costs=draft.staff_costs,
        other_opex=draft.other_opex,
        total_opex=draft.total_opex,
        ebitda=ebitda,
        depreciation=capex.depreciation,
        ebit=ebit,
        interest_expense=solved.interest_expense,
        interest_income=solved.interest_income,
        net_interest=solved.interest_income - solved.interest_expense,
        ebt=solved.ebt,
        zakat_expense=solved.zakat_expense,
        net_income=solved.net_income,
    )

    gross_ppe = opening.gross_ppe + capex.spending
    accumulated = opening.accumulated_depreciation + capex.depreciation
    net_ppe = gross_ppe - accumulated
    total_current_assets = (
        solved.closing_cash
        + working_capital.accounts_receivable
        + working_capital.prepaid_expenses
    )
    total_assets = total_current_assets + net_ppe
    total_current_liabilities = (
        working_capital.accounts_payable
        + working_capital.accrued_expenses
        + working_capital.deferred_revenue
    )
    total_liabilities = total_current_liabilities + solved.closing_debt
    total_equity = opening.equity + solved.net_income
    balance_sheet = BalanceSheet(
        cash=solved.closing_cash,
        accounts_receivable=working_capital.accounts_receivable,
        prepaid_expenses=working_capital.prepaid_expenses,
        total_current_assets=total_current_assets,
        gross_ppe=gross_ppe,
        accumulated_depreciation=accumulated,
        net_ppe=net_ppe,
        total_non_current_assets=net_ppe,
        total_assets=total_assets,
        accounts_payable=working_capital.accounts_payable,
        accrued_expenses=working_capital.accrued_expenses,
        deferred_revenue=working_capital.deferred_revenue,
        total_current_liabilities=total_current_liabilities,
        debt_balance=solved.closing_debt,
        total_liabilities=total_liabilities,
        retained_earnings=opening.equity,
        net_income_current_year=solved.net_income,
        total_equity=total_equity,
        balance_difference=total_assets - (total_liabilities + total_equity),
    )

    net_change = (
        solved.operating_cash_flow
        + solved.investing_cash_flow
        + solved.financing_cash_flow
    )
    cash_flow = CashFlowStatement(
        net_income=solved.net_income,
        depreciation=capex.depreciation,
        change_in_receivables=solved.change_in_receivables,
        change_in_prepaid=solved.change_in_prepaid,
        change_in_payables=solved.change_in_payables,
        change_in_accrued=solved.change_in_accrued,
        change_in_deferred_revenue=solved.change_in_deferred_revenue,
        operating_cash_flow=solved.operating_cash_flow,
        capex=capex.spending,
        investing_cash_flow=solved.investing_cash_flow,
        debt_issuance=solved.debt_issuance,
        debt_repayment=solved.debt_repayment,
        financing_cash_flow=solved.financing_cash_flow,
        net_change_in_cash=net_change,
        beginning_cash=opening.cash,
        ending_cash=solved.closing_cash,
        cash_reconciliation_diff=opening.cash + net_change - solved.closing_cash,
    )

    return Period(
        year=draft.year,
        period_type=draft.period_type,
        profit_loss=profit_loss,
        balance_sheet=balance_sheet,
        cash_flow=cash_flow,
        solver=SolverDiagnostics(
            iterations=solved.iterations,
            converged=solved.converged,
            residual=solved.residual,
        ),
        operating=draft.operating,
        capex=CapExSummary(
            spending=capex.spending,
            pre_contract_depreciation=capex.pre_contract_depreciation,
            contract_depreciation=capex.contract_depreciation,
            assets_added=capex.assets_added,
        ),
    )
