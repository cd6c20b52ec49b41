# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared fixtures for Leasecast testing.

The historical actuals below balance (assets = liabilities + equity) and
their depreciation equals the movement in accumulated depreciation, so the
derived historical cash-flow statements reconcile as well. Factory fixtures
return callables so tests can override only what they exercise.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

import pytest

from leasecast.capex import CapExConfig
from leasecast.core.primitives import CircularSolverConfig, SystemConfiguration
from leasecast.engine import CalculationEngineInput
from leasecast.periods import (
    CurriculumConfig,
    CurriculumProgram,
    DynamicPeriodInput,
    EnrollmentConfig,
    HistoricalBalanceSheet,
    HistoricalPeriodInput,
    HistoricalProfitLoss,
    StaffConfig,
    TransitionPeriodInput,
)
from leasecast.rent import FixedEscalationRent
from leasecast.working_capital import WorkingCapitalRatios


@pytest.fixture
def historical_periods() -> List[HistoricalPeriodInput]:
    """Two balanced actual years, 2022 and 2023."""
    year_2022 = HistoricalPeriodInput(
        year=2022,
        profit_loss=HistoricalProfitLoss(
            revenue=Decimal("50000000"),
            tuition_revenue=Decimal("47500000"),
            other_revenue=Decimal("2500000"),
            rent=Decimal("8000000"),
            staff_costs=Decimal("20000000"),
            other_opex=Decimal("5000000"),
            depreciation=Decimal("1000000"),
            zakat=Decimal("300000"),
        ),
        balance_sheet=HistoricalBalanceSheet(
            cash=Decimal("10000000"),
            accounts_receivable=Decimal("2000000"),
            prepaid_expenses=Decimal("500000"),
            gross_ppe=Decimal("20000000"),
            accumulated_depreciation=Decimal("5000000"),
            accounts_payable=Decimal("1500000"),
            accrued_expenses=Decimal("1000000"),
            deferred_revenue=Decimal("3000000"),
            equity=Decimal("22000000"),
        ),
    )
    year_2023 = HistoricalPeriodInput(
        year=2023,
        profit_loss=HistoricalProfitLoss(
            revenue=Decimal("55000000"),
            tuition_revenue=Decimal("52250000"),
            other_revenue=Decimal("2750000"),
            rent=Decimal("8400000"),
            staff_costs=Decimal("22000000"),
            other_opex=Decimal("5500000"),
            depreciation=Decimal("1000000"),
            zakat=Decimal("330000"),
        ),
        balance_sheet=HistoricalBalanceSheet(
            cash=Decimal("28070000"),
            accounts_receivable=Decimal("2200000"),
            prepaid_expenses=Decimal("550000"),
            gross_ppe=Decimal("21000000"),
            accumulated_depreciation=Decimal("6000000"),
            accounts_payable=Decimal("1650000"),
            accrued_expenses=Decimal("1100000"),
            deferred_revenue=Decimal("3300000"),
            equity=Decimal("39770000"),
        ),
    )
    return [year_2022, year_2023]


@pytest.fixture
def make_dynamic_period():
    """Factory for the contract-year template."""

    def _make(
        steady_state_students: int = 1000,
        fee: Decimal = Decimal("50000"),
        fee_growth: Decimal = Decimal("0.03"),
        rent_params=None,
        enrollment: Optional[EnrollmentConfig] = None,
        staff: Optional[StaffConfig] = None,
        other_opex_percent: Optional[Decimal] = Decimal("0.10"),
        capex_config: Optional[CapExConfig] = None,
    ) -> DynamicPeriodInput:
        return DynamicPeriodInput(
            enrollment=enrollment
            or EnrollmentConfig(steady_state_students=steady_state_students),
            curriculum=CurriculumConfig(
                programs=[
                    CurriculumProgram(name="National", base_fee=fee, growth_rate=fee_growth)
                ]
            ),
            staff=staff
            or StaffConfig(
                fixed_cost=Decimal("15000000"),
                variable_cost_per_student=Decimal("3000"),
                cpi_rate=Decimal("0.02"),
            ),
            other_opex_percent=other_opex_percent,
            rent_params=rent_params
            or FixedEscalationRent(base_rent=Decimal("8000000"), growth_rate=Decimal("0.03")),
            capex_config=capex_config,
        )

    return _make


@pytest.fixture
def make_engine_input(historical_periods, make_dynamic_period):
    """
    Factory for a complete input snapshot.

    Defaults: actuals 2022-2023, one transition year 2024, a ten-year
    contract from 2025 with 1,000 students and fixed-escalation rent.
    """

    def _make(
        dynamic_period: Optional[DynamicPeriodInput] = None,
        transition_periods: Optional[List[TransitionPeriodInput]] = None,
        contract_period_years: int = 10,
        working_capital_ratios: Optional[WorkingCapitalRatios] = None,
        solver_config: Optional[CircularSolverConfig] = None,
        system_config: Optional[SystemConfiguration] = None,
        capex_config: Optional[CapExConfig] = None,
        proposal_id: Optional[str] = "proposal-1",
        **template_overrides,
    ) -> CalculationEngineInput:
        if transition_periods is None:
            transition_periods = [
                TransitionPeriodInput(
                    year=2024,
                    revenue_growth_rate=Decimal("0.05"),
                    rent_growth_percent=Decimal("0.05"),
                )
            ]
        return CalculationEngineInput(
            proposal_id=proposal_id,
            system_config=system_config or SystemConfiguration(),
            historical_periods=historical_periods,
            transition_periods=transition_periods,
            working_capital_ratios=working_capital_ratios or WorkingCapitalRatios(),
            dynamic_period=dynamic_period or make_dynamic_period(**template_overrides),
            capex_config=capex_config or CapExConfig(),
            solver_config=solver_config or CircularSolverConfig(),
            contract_period_years=contract_period_years,
        )

    return _make


@pytest.fixture
def engine_input(make_engine_input) -> CalculationEngineInput:
    return make_engine_input()
