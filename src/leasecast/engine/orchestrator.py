# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Projection orchestrator.

Runs one input snapshot end to end:

1. Preflight configuration checks
2. Historical periods (pass-through)
3. Working-capital ratios resolved from the final historical year
4. Transition years, then contract years, each through
   period calculator -> capex scheduler -> working capital -> circular solver
   -> statement assembler
5. Validation, metrics and run metadata

All Decimal arithmetic happens inside the configured numeric context. Every
piece of state is local to one `run()` call, so separate engines can run
concurrently on separate threads.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from ..capex.config import HistoricalDepreciationState
from ..capex.scheduler import CapExScheduler
from ..core.deadline import Deadline
from ..core.primitives import ZERO, EngineSettings, safe_divide
from ..periods.draft import OperatingDraft
from ..periods.dynamic import DynamicPeriodCalculator
from ..periods.historical import calculate_historical_period
from ..periods.inputs import HistoricalPeriodInput
from ..periods.transition import calculate_transition_period
from ..solver.circular import CircularSolver, OpeningPosition
from ..statements.assembler import assemble_period
from ..statements.models import Period
from ..statements.validators import validate_periods
from ..valuation.metrics import ProjectionValuation
from ..working_capital.ratios import WorkingCapitalRatios, resolve_working_capital_ratios
from .inputs import CalculationEngineInput
from .preflight import validate_engine_input
from .results import CalculationEngineOutput, PerformanceRecord
from .serialization import input_fingerprint

logger = logging.getLogger(__name__)


def historical_depreciation_state(
    base_year: HistoricalPeriodInput,
) -> HistoricalDepreciationState:
    """Pre-contract PP&E pool implied by the final historical balance sheet."""
    balance = base_year.balance_sheet
    remaining = balance.gross_ppe - balance.accumulated_depreciation
    return HistoricalDepreciationState(
        gross_ppe=balance.gross_ppe,
        accumulated_depreciation=balance.accumulated_depreciation,
        annual_depreciation=base_year.profit_loss.depreciation,
        remaining_to_depreciate=max(ZERO, remaining),
    )


@dataclass
class ProjectionEngine:
    """
    Runs one projection.

    Attributes:
        engine_input: Complete input snapshot
        settings: Numeric, validation and logging settings
        deadline: Optional cooperative time budget checked between years
    """

    engine_input: CalculationEngineInput
    settings: EngineSettings = field(default_factory=EngineSettings)
    deadline: Optional[Deadline] = None

    def _check_deadline(self, stage: str) -> None:
        if self.deadline is not None:
            self.deadline.check(stage)

    def run(self) -> CalculationEngineOutput:
        started = time.perf_counter()
        engine_input = self.engine_input
        validate_engine_input(engine_input)

        with self.settings.numeric.bind():
            periods = self._historical_periods()
            base_year = engine_input.historical_periods[-1]
            ratios = resolve_working_capital_ratios(
                engine_input.working_capital_ratios, base_year
            )
            projected = self._projected_periods(periods[-1], base_year, ratios)
            periods.extend(projected)

            validation = validate_periods(periods, self.settings.validation)
            metrics = ProjectionValuation.calculate(
                periods,
                engine_input.system_config,
                engine_input.resolved_contract_start_year,
                engine_input.contract_end_year,
            )
            total_iterations = sum(
                p.solver.iterations for p in projected if p.solver is not None
            )
            average_iterations = safe_divide(
                Decimal(total_iterations), Decimal(len(projected))
            )
            fingerprint = input_fingerprint(engine_input, self.settings)

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            f"Projection {engine_input.proposal_id or '<anonymous>'}: "
            f"{len(periods)} periods in {elapsed_ms:.1f} ms, "
            f"{total_iterations} solver iterations, valid={validation.is_valid}"
        )
        return CalculationEngineOutput(
            periods=periods,
            metrics=metrics,
            validation=validation,
            performance=PerformanceRecord(
                calculation_time_ms=elapsed_ms,
                total_iterations=total_iterations,
                average_iterations_per_year=average_iterations,
                projected_periods=len(projected),
            ),
            calculated_at=datetime.now(timezone.utc),
            input_fingerprint=fingerprint,
        )

    def _historical_periods(self) -> List[Period]:
        periods: List[Period] = []
        prior: Optional[HistoricalPeriodInput] = None
        for period_input in self.engine_input.historical_periods:
            periods.append(calculate_historical_period(period_input, prior))
            prior = period_input
        return periods

    def _projected_periods(
        self,
        last_historical: Period,
        base_year: HistoricalPeriodInput,
        ratios: WorkingCapitalRatios,
    ) -> List[Period]:
        engine_input = self.engine_input
        contract_start = engine_input.resolved_contract_start_year

        scheduler = CapExScheduler.from_config(
            engine_input.effective_capex_config,
            contract_start_year=contract_start,
            cut_over_year=engine_input.first_projection_year,
            fallback_state=historical_depreciation_state(base_year),
        )
        solver = CircularSolver(
            system=engine_input.system_config,
            config=engine_input.solver_config,
            deadline=self.deadline,
            log_iterations=self.settings.log_solver_iterations,
        )
        dynamic = DynamicPeriodCalculator(
            template=engine_input.dynamic_period,
            ratios=ratios,
            contract_start_year=contract_start,
            contract_years=engine_input.contract_period_years,
        )

        projected: List[Period] = []
        prior = last_historical
        for transition_input in engine_input.transition_periods:
            self._check_deadline(f"transition {transition_input.year}")
            draft = calculate_transition_period(transition_input, prior, ratios)
            prior = self._close_year(draft, prior, scheduler, solver, ratios, False)
            projected.append(prior)

        for year in range(contract_start, engine_input.contract_end_year + 1):
            self._check_deadline(f"contract year {year}")
            draft = dynamic.calculate(year)
            prior = self._close_year(draft, prior, scheduler, solver, ratios, True)
            projected.append(prior)

        return projected

    @staticmethod
    def _close_year(
        draft: OperatingDraft,
        prior: Period,
        scheduler: CapExScheduler,
        solver: CircularSolver,
        ratios: WorkingCapitalRatios,
        contract_phase: bool,
    ) -> Period:
        capex = scheduler.step(draft.year, draft.total_revenue, contract_phase)
        working_capital = ratios.apply(draft.tuition_revenue, draft.total_revenue)
        opening = OpeningPosition.from_period(prior)
        solved = solver.solve(
            year=draft.year,
            ebitda=draft.ebitda,
            depreciation=capex.depreciation,
            capex=capex.spending,
            working_capital=working_capital,
            opening=opening,
        )
        return assemble_period(draft, capex, working_capital, opening, solved)
