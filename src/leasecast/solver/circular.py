# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Circular Solver - Interest, Cash and Plug Debt

Within a fiscal year the financing lines depend on each other:

    interest expense -> net income -> ending cash -> plug debt -> interest expense
    deposit income   -> net income -> ending cash -> cash surplus -> deposit income

The relationship is piecewise (minimum cash floor, debt cannot go negative,
deposit income only on surplus cash) so it is resolved as an explicit bounded
fixed-point iteration rather than algebraically.

## Iteration

Estimates of interest expense and deposit income start from the prior year's
values. Each iteration:

1. EBT = EBITDA - depreciation - interest expense + interest income
2. Zakat = rate x max(0, opening equity + EBT - closing net PP&E)
3. Net income = EBT - zakat
4. Operating cash flow = net income + depreciation + working-capital release
5. Pre-financing cash = opening cash + operating + investing
6. Closing debt = max(0, opening debt + minimum cash - pre-financing cash):
   shortfalls below the floor are drawn, surplus above it repays debt
7. Closing cash = pre-financing cash + change in debt
8. Recompute interest expense = debt rate x average debt and
   deposit income = deposit rate x max(0, average cash - minimum cash)
9. Converged when both recomputed values are within tolerance of the
   estimates and closing debt moved by no more than the tolerance since the
   previous iteration; otherwise relax: estimate += factor x (computed - estimate)

Exhausting the iteration budget raises ConvergenceError; an unconverged
result is never returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.deadline import Deadline
from ..core.errors import ConvergenceError
from ..core.primitives import (
    ZERO,
    CircularSolverConfig,
    Model,
    SystemConfiguration,
    average,
)
from ..statements.models import Period
from ..working_capital.ratios import WorkingCapitalBalances

logger = logging.getLogger(__name__)


class OpeningPosition(Model):
    """Closing snapshot of the prior period: the only state that crosses years."""

    year: int
    cash: Decimal
    accounts_receivable: Decimal
    prepaid_expenses: Decimal
    accounts_payable: Decimal
    accrued_expenses: Decimal
    deferred_revenue: Decimal
    debt: Decimal
    equity: Decimal
    gross_ppe: Decimal
    accumulated_depreciation: Decimal
    interest_expense: Decimal = ZERO
    interest_income: Decimal = ZERO

    @classmethod
    def from_period(cls, period: Period) -> "OpeningPosition":
        bs = period.balance_sheet
        pl = period.profit_loss
        return cls(
            year=period.year,
            cash=bs.cash,
            accounts_receivable=bs.accounts_receivable,
            prepaid_expenses=bs.prepaid_expenses,
            accounts_payable=bs.accounts_payable,
            accrued_expenses=bs.accrued_expenses,
            deferred_revenue=bs.deferred_revenue,
            debt=bs.debt_balance,
            equity=bs.total_equity,
            gross_ppe=bs.gross_ppe,
            accumulated_depreciation=bs.accumulated_depreciation,
            interest_expense=pl.interest_expense,
            interest_income=pl.interest_income,
        )


class SolverResult(Model):
    """Converged financing values for one year."""

    year: int
    interest_expense: Decimal
    interest_income: Decimal
    ebt: Decimal
    zakat_expense: Decimal
    net_income: Decimal
    change_in_receivables: Decimal
    change_in_prepaid: Decimal
    change_in_payables: Decimal
    change_in_accrued: Decimal
    change_in_deferred_revenue: Decimal
    operating_cash_flow: Decimal
    investing_cash_flow: Decimal
    debt_issuance: Decimal
    debt_repayment: Decimal
    financing_cash_flow: Decimal
    closing_cash: Decimal
    closing_debt: Decimal
    iterations: int
    converged: bool
    residual: Decimal


@dataclass
class CircularSolver:
    """
    Per-year fixed-point solver.

    Holds only read-only configuration; every `solve()` call is independent
    apart from the explicit opening position passed in.
    """

    system: SystemConfiguration
    config: CircularSolverConfig
    deadline: Optional[Deadline] = None
    log_iterations: bool = False

    def solve(
        self,
        year: int,
        ebitda: Decimal,
        depreciation: Decimal,
        capex: Decimal,
        working_capital: WorkingCapitalBalances,
        opening: OpeningPosition,
    ) -> SolverResult:
        """
        Resolve interest, zakat, cash and debt for one year.

        Args:
            year: Fiscal year being solved
            ebitda: Pre-financing EBITDA from the period calculator
            depreciation: Total depreciation from the capex scheduler
            capex: Capital spending booked in the year
            working_capital: Closing working-capital balances
            opening: Prior period's closing position

        Returns:
            SolverResult with the converged values and diagnostics

        Raises:
            ConvergenceError: If `max_iterations` pass without convergence
            CalculationTimeoutError: If the run's deadline expires mid-solve
        """
        system = self.system
        tolerance = self.config.convergence_tolerance
        relaxation = self.config.relaxation_factor
        min_cash = system.min_cash_balance

        change_ar = working_capital.accounts_receivable - opening.accounts_receivable
        change_prepaid = working_capital.prepaid_expenses - opening.prepaid_expenses
        change_ap = working_capital.accounts_payable - opening.accounts_payable
        change_accrued = working_capital.accrued_expenses - opening.accrued_expenses
        change_deferred = working_capital.deferred_revenue - opening.deferred_revenue
        working_capital_release = (
            change_ap + change_accrued + change_deferred - change_ar - change_prepaid
        )

        closing_net_ppe = (opening.gross_ppe + capex) - (
            opening.accumulated_depreciation + depreciation
        )
        investing = -capex

        interest_expense = opening.interest_expense
        interest_income = opening.interest_income
        previous_debt = opening.debt
        residual = ZERO

        for iteration in range(1, self.config.max_iterations + 1):
            if self.deadline is not None:
                self.deadline.check(f"solver {year} iteration {iteration}")

            ebt = ebitda - depreciation - interest_expense + interest_income
            zakat_base = opening.equity + ebt - closing_net_ppe
            zakat = system.zakat_rate * max(ZERO, zakat_base)
            net_income = ebt - zakat

            operating = net_income + depreciation + working_capital_release
            pre_financing_cash = opening.cash + operating + investing
            closing_debt = max(ZERO, opening.debt + min_cash - pre_financing_cash)
            debt_change = closing_debt - opening.debt
            closing_cash = pre_financing_cash + debt_change

            computed_expense = system.debt_interest_rate * average(
                opening.debt, closing_debt
            )
            surplus = average(opening.cash, closing_cash) - min_cash
            computed_income = system.deposit_interest_rate * max(ZERO, surplus)

            residual = max(
                abs(computed_expense - interest_expense),
                abs(computed_income - interest_income),
                abs(closing_debt - previous_debt),
            )
            if self.log_iterations:
                logger.debug(
                    f"Solver {year} iteration {iteration}: interest {interest_expense}, "
                    f"income {interest_income}, debt {closing_debt}, residual {residual}"
                )

            if residual <= tolerance:
                logger.debug(
                    f"Solver {year} converged in {iteration} iterations "
                    f"(residual {residual})"
                )
                return SolverResult(
                    year=year,
                    interest_expense=interest_expense,
                    interest_income=interest_income,
                    ebt=ebt,
                    zakat_expense=zakat,
                    net_income=net_income,
                    change_in_receivables=change_ar,
                    change_in_prepaid=change_prepaid,
                    change_in_payables=change_ap,
                    change_in_accrued=change_accrued,
                    change_in_deferred_revenue=change_deferred,
                    operating_cash_flow=operating,
                    investing_cash_flow=investing,
                    debt_issuance=max(debt_change, ZERO),
                    debt_repayment=max(-debt_change, ZERO),
                    financing_cash_flow=debt_change,
                    closing_cash=closing_cash,
                    closing_debt=closing_debt,
                    iterations=iteration,
                    converged=True,
                    residual=residual,
                )

            previous_debt = closing_debt
            interest_expense += relaxation * (computed_expense - interest_expense)
            interest_income += relaxation * (computed_income - interest_income)

        logger.error(
            f"Solver {year} failed to converge after {self.config.max_iterations} "
            f"iterations (residual {residual})"
        )
        raise ConvergenceError(
            year=year,
            iterations=self.config.max_iterations,
            residual=residual,
            tolerance=tolerance,
        )
