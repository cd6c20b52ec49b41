# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the projection orchestrator and public entry points.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from leasecast.core import CalculationTimeoutError
from leasecast.core.primitives import ZERO, PeriodTypeEnum
from leasecast.engine import (
    ProjectionEngine,
    calculate,
    calculate_many,
    historical_depreciation_state,
    run_with_timeout,
)


class TestHistoricalDepreciationState:
    def test_state_from_final_actual_year(self, historical_periods):
        state = historical_depreciation_state(historical_periods[1])
        assert state.gross_ppe == Decimal("21000000")
        assert state.annual_depreciation == Decimal("1000000")
        assert state.remaining_to_depreciate == Decimal("15000000")


class TestProjectionEngine:
    def test_period_sequence(self, engine_input):
        output = ProjectionEngine(engine_input).run()
        assert output.years == list(range(2022, 2035))
        assert [p.year for p in output.historical_periods] == [2022, 2023]
        assert [p.year for p in output.transition_periods] == [2024]
        assert len(output.dynamic_periods) == 10
        assert output.period(2030).period_type == PeriodTypeEnum.DYNAMIC
        assert output.period(1999) is None

    def test_performance_record(self, engine_input):
        output = ProjectionEngine(engine_input).run()
        assert output.performance.projected_periods == 11
        assert output.performance.total_iterations >= 11
        assert output.performance.calculation_time_ms >= 0
        assert output.input_fingerprint.startswith("calc:")

    def test_projected_periods_carry_diagnostics(self, engine_input):
        output = calculate(engine_input)
        for period in output.transition_periods + output.dynamic_periods:
            assert period.solver is not None and period.solver.converged
        assert output.period(2025).operating.total_students == 1000

    def test_historical_pool_depreciates_from_cut_over(self, engine_input):
        output = calculate(engine_input)
        transition = output.period(2024)
        assert transition.capex.pre_contract_depreciation == Decimal("1000000")
        assert transition.capex.spending == ZERO
        assert transition.balance_sheet.gross_ppe == Decimal("21000000")
        assert transition.balance_sheet.accumulated_depreciation == Decimal("7000000")


class TestEntryPoints:
    def test_zero_budget_times_out(self, engine_input):
        with pytest.raises(CalculationTimeoutError) as excinfo:
            run_with_timeout(engine_input, duration_ms=0)
        assert excinfo.value.code == "CALCULATION_TIMEOUT"

    def test_generous_budget_completes(self, engine_input):
        output = run_with_timeout(engine_input, duration_ms=60_000)
        assert output.validation.is_valid

    def test_calculate_many_keeps_input_order(self, make_engine_input):
        inputs = [make_engine_input(steady_state_students=n) for n in (800, 1000, 1200)]
        outputs = calculate_many(inputs, max_workers=3)
        students = [o.period(2025).operating.total_students for o in outputs]
        assert students == [800, 1000, 1200]

    def test_calculate_many_empty(self):
        assert calculate_many([]) == []
