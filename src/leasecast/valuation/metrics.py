# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Projection metrics and contract valuation.

Full-run metrics summarise every emitted period. Contract metrics restrict
to the contract window and value it with the deal's discount rate:

    rent NPV, EBITDA NPV   discounted with the first contract year undiscounted
    annualization factor   r / (1 - (1 + r)^-n), n = contract years in the window
    annualized value       NPV x annualization factor
    NAV                    annualized EBITDA - annualized rent
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import ZERO, Model, SystemConfiguration, decimal_sum, safe_divide
from ..statements.models import Period

logger = logging.getLogger(__name__)


class ProjectionMetrics(Model):
    # Full run
    total_net_income: Decimal
    total_rent: Decimal
    total_ebitda: Decimal
    average_ebitda: Decimal
    average_roe: Decimal = Field(..., description="Sum of net income / sum of closing equity.")
    peak_debt: Decimal
    final_cash: Decimal
    npv: Decimal = Field(..., description="NPV of net change in cash over every period.")
    irr: Optional[float] = Field(
        default=None, description="IRR of net change in cash over every period."
    )
    payback_period: Optional[Decimal] = Field(
        default=None, description="Years until cumulative net change in cash turns non-negative."
    )
    # Contract window
    discount_rate: Decimal
    contract_start_year: int
    contract_end_year: int
    contract_years: int
    contract_total_rent: Decimal
    contract_total_ebitda: Decimal
    contract_rent_npv: Decimal
    contract_ebitda_npv: Decimal
    contract_net_tenant_surplus: Decimal = Field(
        ..., description="EBITDA NPV - rent NPV over the contract window."
    )
    annualization_factor: Decimal
    contract_annualized_ebitda: Decimal
    contract_annualized_rent: Decimal
    contract_nav: Decimal = Field(
        ..., description="Net Annualized Value: annualized EBITDA - annualized rent."
    )
    contract_irr: Optional[float] = None
    contract_final_cash: Decimal


class ProjectionValuation:
    """Static helpers turning a period sequence into ProjectionMetrics."""

    @staticmethod
    def contract_periods(
        periods: Sequence[Period], start_year: int, end_year: int
    ) -> List[Period]:
        return [p for p in periods if start_year <= p.year <= end_year]

    @staticmethod
    def calculate(
        periods: Sequence[Period],
        system_config: SystemConfiguration,
        contract_start_year: int,
        contract_end_year: int,
    ) -> ProjectionMetrics:
        """
        Compute full-run and contract-window metrics.

        Args:
            periods: Year-ordered emitted periods (at least one)
            system_config: Supplies the discount rate
            contract_start_year: First contract year
            contract_end_year: Last contract year (inclusive)
        """
        if not periods:
            raise ValueError("Cannot compute metrics without periods")

        rate = system_config.effective_discount_rate
        calc = FinancialCalculations

        net_incomes = [p.profit_loss.net_income for p in periods]
        ebitdas = [p.profit_loss.ebitda for p in periods]
        rents = [p.profit_loss.rent_expense for p in periods]
        net_cash = [p.cash_flow.net_change_in_cash for p in periods]
        total_equity = decimal_sum(p.balance_sheet.total_equity for p in periods)

        total_ebitda = decimal_sum(ebitdas)
        average_roe = (
            safe_divide(decimal_sum(net_incomes), total_equity)
            if total_equity > ZERO
            else ZERO
        )

        contract = ProjectionValuation.contract_periods(
            periods, contract_start_year, contract_end_year
        )
        contract_rents = [p.profit_loss.rent_expense for p in contract]
        contract_ebitdas = [p.profit_loss.ebitda for p in contract]
        contract_years = len(contract)

        rent_npv = calc.calculate_npv(contract_rents, rate)
        ebitda_npv = calc.calculate_npv(contract_ebitdas, rate)
        factor = calc.calculate_annualization_factor(rate, contract_years)
        annualized_ebitda = ebitda_npv * factor
        annualized_rent = rent_npv * factor

        metrics = ProjectionMetrics(
            total_net_income=decimal_sum(net_incomes),
            total_rent=decimal_sum(rents),
            total_ebitda=total_ebitda,
            average_ebitda=total_ebitda / Decimal(len(periods)),
            average_roe=average_roe,
            peak_debt=max(p.balance_sheet.debt_balance for p in periods),
            final_cash=periods[-1].balance_sheet.cash,
            npv=calc.calculate_npv(net_cash, rate),
            irr=calc.calculate_irr(net_cash),
            payback_period=calc.calculate_payback_period(net_cash),
            discount_rate=rate,
            contract_start_year=contract_start_year,
            contract_end_year=contract_end_year,
            contract_years=contract_years,
            contract_total_rent=decimal_sum(contract_rents),
            contract_total_ebitda=decimal_sum(contract_ebitdas),
            contract_rent_npv=rent_npv,
            contract_ebitda_npv=ebitda_npv,
            contract_net_tenant_surplus=ebitda_npv - rent_npv,
            annualization_factor=factor,
            contract_annualized_ebitda=annualized_ebitda,
            contract_annualized_rent=annualized_rent,
            contract_nav=annualized_ebitda - annualized_rent,
            contract_irr=calc.calculate_irr(
                [p.cash_flow.net_change_in_cash for p in contract]
            ),
            contract_final_cash=contract[-1].balance_sheet.cash if contract else ZERO,
        )
        logger.debug(
            f"Metrics: NAV {metrics.contract_nav}, rent NPV {rent_npv}, "
            f"EBITDA NPV {ebitda_npv}, peak debt {metrics.peak_debt}"
        )
        return metrics
