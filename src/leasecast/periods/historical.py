# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Historical period pass-through.

Actual years are never recomputed: the P&L and balance sheet are copied from
the reported snapshot. The cash-flow statement is derived by the indirect
method from balance-sheet movements against the prior actual year:

    operating = net income + depreciation - increase in AR/prepaid
                + increase in AP/accrued/deferred revenue
    investing = -(increase in gross PP&E)
    financing = increase in debt + (increase in equity - net income)

The first actual year has no prior snapshot, so its working-capital and
balance movements are zero and its beginning cash is the implied opening
cash (ending cash less the year's flows).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..core.primitives import ZERO, PeriodTypeEnum
from ..statements.models import (
    BalanceSheet,
    CashFlowStatement,
    OperatingMetrics,
    Period,
    ProfitLossStatement,
)
from .inputs import HistoricalPeriodInput

logger = logging.getLogger(__name__)


def _profit_loss(period_input: HistoricalPeriodInput) -> ProfitLossStatement:
    pl = period_input.profit_loss
    tuition = pl.resolved_tuition_revenue
    other = pl.resolved_other_revenue
    total_opex = pl.rent + pl.staff_costs + pl.other_opex
    ebitda = pl.revenue - total_opex
    ebit = ebitda - pl.depreciation
    ebt = ebit - pl.interest
    return ProfitLossStatement(
        tuition_revenue=tuition,
        other_revenue=other,
        total_revenue=pl.revenue,
        rent_expense=pl.rent,
        staff_costs=pl.staff_costs,
        other_opex=pl.other_opex,
        total_opex=total_opex,
        ebitda=ebitda,
        depreciation=pl.depreciation,
        ebit=ebit,
        interest_expense=pl.interest,
        interest_income=ZERO,
        net_interest=-pl.interest,
        ebt=ebt,
        zakat_expense=pl.zakat,
        net_income=ebt - pl.zakat,
    )


def _balance_sheet(period_input: HistoricalPeriodInput, net_income: Decimal) -> BalanceSheet:
    bs = period_input.balance_sheet
    total_current_assets = bs.cash + bs.accounts_receivable + bs.prepaid_expenses
    net_ppe = bs.gross_ppe - bs.accumulated_depreciation
    total_assets = total_current_assets + net_ppe
    total_current_liabilities = (
        bs.accounts_payable + bs.accrued_expenses + bs.deferred_revenue
    )
    total_liabilities = total_current_liabilities + bs.debt
    return BalanceSheet(
        cash=bs.cash,
        accounts_receivable=bs.accounts_receivable,
        prepaid_expenses=bs.prepaid_expenses,
        total_current_assets=total_current_assets,
        gross_ppe=bs.gross_ppe,
        accumulated_depreciation=bs.accumulated_depreciation,
        net_ppe=net_ppe,
        total_non_current_assets=net_ppe,
        total_assets=total_assets,
        accounts_payable=bs.accounts_payable,
        accrued_expenses=bs.accrued_expenses,
        deferred_revenue=bs.deferred_revenue,
        total_current_liabilities=total_current_liabilities,
        debt_balance=bs.debt,
        total_liabilities=total_liabilities,
        retained_earnings=bs.equity - net_income,
        net_income_current_year=net_income,
        total_equity=bs.equity,
        balance_difference=total_assets - (total_liabilities + bs.equity),
    )


def _cash_flow(
    period_input: HistoricalPeriodInput,
    prior: Optional[HistoricalPeriodInput],
    net_income: Decimal,
) -> CashFlowStatement:
    bs = period_input.balance_sheet
    depreciation = period_input.profit_loss.depreciation

    if prior is None:
        change_ar = change_prepaid = change_ap = change_accrued = change_deferred = ZERO
        capex = debt_change = equity_movements = ZERO
    else:
        before = prior.balance_sheet
        change_ar = bs.accounts_receivable - before.accounts_receivable
        change_prepaid = bs.prepaid_expenses - before.prepaid_expenses
        change_ap = bs.accounts_payable - before.accounts_payable
        change_accrued = bs.accrued_expenses - before.accrued_expenses
        change_deferred = bs.deferred_revenue - before.deferred_revenue
        capex = bs.gross_ppe - before.gross_ppe
        debt_change = bs.debt - before.debt
        equity_movements = (bs.equity - before.equity) - net_income

    operating = (
        net_income
        + depreciation
        - change_ar
        - change_prepaid
        + change_ap
        + change_accrued
        + change_deferred
    )
    investing = -capex
    financing = debt_change + equity_movements
    net_change = operating + investing + financing
    beginning_cash = (
        prior.balance_sheet.cash if prior is not None else bs.cash - net_change
    )

    return CashFlowStatement(
        net_income=net_income,
        depreciation=depreciation,
        change_in_receivables=change_ar,
        change_in_prepaid=change_prepaid,
        change_in_payables=change_ap,
        change_in_accrued=change_accrued,
        change_in_deferred_revenue=change_deferred,
        operating_cash_flow=operating,
        capex=capex,
        investing_cash_flow=investing,
        debt_issuance=max(debt_change, ZERO),
        debt_repayment=max(-debt_change, ZERO),
        equity_movements=equity_movements,
        financing_cash_flow=financing,
        net_change_in_cash=net_change,
        beginning_cash=beginning_cash,
        ending_cash=bs.cash,
        cash_reconciliation_diff=beginning_cash + net_change - bs.cash,
    )


def calculate_historical_period(
    period_input: HistoricalPeriodInput,
    prior: Optional[HistoricalPeriodInput] = None,
) -> Period:
    """Emit the statements for one actual year."""
    profit_loss = _profit_loss(period_input)
    balance_sheet = _balance_sheet(period_input, profit_loss.net_income)
    cash_flow = _cash_flow(period_input, prior, profit_loss.net_income)
    logger.debug(
        f"Historical {period_input.year}: revenue {profit_loss.total_revenue}, "
        f"net income {profit_loss.net_income}, cash {balance_sheet.cash}"
    )
    return Period(
        year=period_input.year,
        period_type=PeriodTypeEnum.HISTORICAL,
        profit_loss=profit_loss,
        balance_sheet=balance_sheet,
        cash_flow=cash_flow,
        operating=OperatingMetrics(),
    )
