# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end projection runs.

Test Coverage:
1. Every period balances and every cash flow reconciles
2. Periods link year to year
3. Determinism of repeated runs
4. Reference scenario revenue and rent figures
5. Rent model behaviour across the full contract
6. Ramp-up enrollment, plug debt and capex flowing through statements
7. Failure modes: configuration, convergence and timeout
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from leasecast.capex import AutoReinvestmentConfig, CapExConfig, VirtualAsset
from leasecast.core import CalculationTimeoutError, ConfigurationError, ConvergenceError
from leasecast.core.primitives import (
    ZERO,
    CircularSolverConfig,
    NumericContext,
    SystemConfiguration,
)
from leasecast.engine import calculate, run_with_timeout, serialize_output
from leasecast.periods import EnrollmentConfig
from leasecast.rent import FixedEscalationRent, PartnerInvestmentRent, RevenueShareRent
from leasecast.working_capital import WorkingCapitalRatios

pytestmark = pytest.mark.integration

TOLERANCE = Decimal("0.01")


def _reference_ratios() -> WorkingCapitalRatios:
    return WorkingCapitalRatios(
        ar_percent=Decimal("0.04"),
        prepaid_percent=Decimal("0.01"),
        ap_percent=Decimal("0.03"),
        accrued_percent=Decimal("0.02"),
        deferred_revenue_percent=Decimal("0.06"),
        other_revenue_ratio=Decimal("0.05"),
        locked=True,
    )


class TestStatementIntegrity:
    def test_every_period_balances_and_reconciles(self, make_engine_input):
        output = calculate(make_engine_input(contract_period_years=30))
        assert output.validation.is_valid
        for period in output.periods:
            assert abs(period.balance_sheet.balance_difference) <= TOLERANCE
            assert abs(period.cash_flow.cash_reconciliation_diff) <= TOLERANCE
            assert period.cash_flow.ending_cash == period.balance_sheet.cash

    def test_periods_link(self, engine_input):
        output = calculate(engine_input)
        # Equity roll-forward is re-added under the engine's rounding policy
        with NumericContext().bind():
            for prior, period in zip(output.periods, output.periods[1:]):
                assert period.year == prior.year + 1
                if period.is_projected:
                    assert period.cash_flow.beginning_cash == prior.balance_sheet.cash
                    assert (
                        period.balance_sheet.retained_earnings
                        == prior.balance_sheet.total_equity
                    )
                    assert period.balance_sheet.total_equity == (
                        prior.balance_sheet.total_equity + period.profit_loss.net_income
                    )

    def test_debt_never_negative_and_cash_floor_holds(self, make_engine_input):
        rent = FixedEscalationRent(base_rent=Decimal("60000000"), growth_rate=Decimal("0.02"))
        output = calculate(make_engine_input(rent_params=rent))
        assert output.metrics.peak_debt > ZERO
        floor = SystemConfiguration().min_cash_balance
        for period in output.transition_periods + output.dynamic_periods:
            assert period.balance_sheet.debt_balance >= ZERO
            if period.balance_sheet.debt_balance > ZERO:
                assert abs(period.balance_sheet.cash - floor) <= TOLERANCE
        assert output.validation.is_valid

    def test_interest_consistent_with_average_debt(self, make_engine_input):
        rent = FixedEscalationRent(base_rent=Decimal("60000000"))
        output = calculate(make_engine_input(rent_params=rent))
        for prior, period in zip(output.periods, output.periods[1:]):
            if not period.is_projected:
                continue
            average_debt = (prior.balance_sheet.debt_balance + period.balance_sheet.debt_balance) / 2
            expected = Decimal("0.05") * average_debt
            assert abs(period.profit_loss.interest_expense - expected) <= TOLERANCE


class TestDeterminism:
    def test_repeated_runs_are_identical(self, engine_input):
        first = serialize_output(calculate(engine_input), include_runtime=False)
        second = serialize_output(calculate(engine_input), include_runtime=False)
        assert first == second


class TestReferenceScenario:
    def test_1900_students_at_40000(self, make_engine_input):
        engine_input = make_engine_input(
            steady_state_students=1900,
            fee=Decimal("40000"),
            fee_growth=Decimal("0"),
            rent_params=FixedEscalationRent(base_rent=Decimal("1000000")),
            working_capital_ratios=_reference_ratios(),
            contract_period_years=30,
        )
        output = calculate(engine_input)
        first_contract_year = output.period(2025)
        pl = first_contract_year.profit_loss
        assert pl.tuition_revenue == Decimal("76000000")
        assert pl.other_revenue == Decimal("3800000")
        assert pl.total_revenue == Decimal("79800000")
        assert pl.rent_expense == Decimal("1000000")
        assert len(output.dynamic_periods) == 30
        assert output.metrics.contract_years == 30
        assert output.metrics.contract_end_year == 2054

    def test_doubling_enrollment_doubles_revenue(self, make_engine_input):
        ratios = _reference_ratios()
        base = calculate(
            make_engine_input(steady_state_students=1200, working_capital_ratios=ratios)
        ).period(2030)
        doubled = calculate(
            make_engine_input(steady_state_students=2400, working_capital_ratios=ratios)
        ).period(2030)
        assert doubled.profit_loss.total_revenue >= 2 * base.profit_loss.total_revenue


class TestRentModels:
    def test_revenue_share_is_exact_every_year(self, make_engine_input):
        share = Decimal("0.08")
        output = calculate(
            make_engine_input(
                rent_params=RevenueShareRent(revenue_share_percent=share),
                working_capital_ratios=_reference_ratios(),
                fee=Decimal("40000"),
                fee_growth=Decimal("0"),
            )
        )
        with NumericContext().bind():
            for period in output.dynamic_periods:
                assert period.profit_loss.rent_expense == period.profit_loss.total_revenue * share

    def test_fixed_escalation_steps(self, make_engine_input):
        rent = FixedEscalationRent(
            base_rent=Decimal("1000000"), growth_rate=Decimal("0.10"), frequency=3
        )
        output = calculate(make_engine_input(rent_params=rent))
        rents = [output.period(year).profit_loss.rent_expense for year in range(2025, 2032)]
        assert rents == [Decimal("1000000")] * 3 + [Decimal("1100000")] * 3 + [Decimal("1210000")]

    def test_partner_investment_rent(self, make_engine_input):
        rent = PartnerInvestmentRent(
            land_size=Decimal("10000"),
            land_price_per_sqm=Decimal("2000"),
            bua_size=Decimal("5000"),
            construction_cost_per_sqm=Decimal("3000"),
            yield_rate=Decimal("0.08"),
        )
        output = calculate(make_engine_input(rent_params=rent))
        assert {p.profit_loss.rent_expense for p in output.dynamic_periods} == {Decimal("2800000")}
        assert output.metrics.contract_total_rent == Decimal("28000000")


class TestContractDrivers:
    def test_ramp_up_is_non_decreasing(self, make_engine_input):
        enrollment = EnrollmentConfig(
            steady_state_students=1500,
            ramp_up_enabled=True,
            ramp_up_start_year=2025,
            ramp_up_end_year=2029,
        )
        output = calculate(make_engine_input(enrollment=enrollment))
        students = [p.operating.total_students for p in output.dynamic_periods]
        assert students == sorted(students)
        assert students[0] == 300
        assert students[-1] == 1500

    def test_single_student_gives_minimal_revenue_path(self, make_engine_input):
        output = calculate(make_engine_input(steady_state_students=1))
        assert output.validation.is_valid
        assert all(period.profit_loss.total_revenue > ZERO for period in output.periods)
        assert {p.operating.total_students for p in output.dynamic_periods} == {1}
        assert output.period(2025).profit_loss.tuition_revenue == Decimal("50000")

    def test_capex_flows_into_balance_sheet(self, make_engine_input):
        capex = CapExConfig(
            virtual_assets=[
                VirtualAsset(year=2026, name="Sports hall", amount=Decimal("5000000"), useful_life_years=10)
            ],
            auto_reinvestment=AutoReinvestmentConfig(
                enabled=True, frequency_years=5, fixed_amount=Decimal("2000000")
            ),
        )
        output = calculate(make_engine_input(capex_config=capex))
        assert output.period(2026).cash_flow.capex == Decimal("5000000")
        assert output.period(2030).cash_flow.capex == Decimal("2000000")
        assert output.period(2026).balance_sheet.gross_ppe == Decimal("26000000")
        assert output.period(2026).capex.contract_depreciation == Decimal("500000")
        assert output.validation.is_valid

    def test_metrics_cover_contract_window(self, engine_input):
        output = calculate(engine_input)
        metrics = output.metrics
        assert metrics.contract_start_year == 2025
        assert metrics.contract_years == 10
        with NumericContext().bind():
            assert metrics.contract_total_rent == sum(
                (p.profit_loss.rent_expense for p in output.dynamic_periods), ZERO
            )
            assert metrics.contract_nav == (
                metrics.contract_annualized_ebitda - metrics.contract_annualized_rent
            )
        assert metrics.final_cash == output.periods[-1].balance_sheet.cash


class TestFailureModes:
    def test_non_positive_enrollment_rejected_before_computation(self, make_engine_input):
        with pytest.raises(ConfigurationError) as excinfo:
            calculate(make_engine_input(steady_state_students=0))
        assert excinfo.value.code == "ENROLLMENT_NON_POSITIVE"

    def test_single_iteration_budget_fails_to_converge(self, make_engine_input):
        engine_input = make_engine_input(solver_config=CircularSolverConfig(max_iterations=1))
        with pytest.raises(ConvergenceError) as excinfo:
            calculate(engine_input)
        assert excinfo.value.year == 2024

    def test_timeout_returns_no_partial_output(self, engine_input):
        with pytest.raises(CalculationTimeoutError):
            run_with_timeout(engine_input, duration_ms=0)
