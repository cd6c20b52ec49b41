# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Projection run output.

A flat, immutable record: the year-ordered periods, the metrics computed
over them, the validation summary, and run metadata (timing, iteration
counts, timestamp, input fingerprint). Accessors below only select from the
stored periods; they carry no calculation logic.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from ..core.primitives import Model, PeriodTypeEnum
from ..statements.models import Period
from ..statements.validators import ValidationSummary
from ..valuation.metrics import ProjectionMetrics

if TYPE_CHECKING:
    from ..reporting.interface import ReportingInterface


class PerformanceRecord(Model):
    calculation_time_ms: float
    total_iterations: int
    average_iterations_per_year: Decimal
    projected_periods: int


class CalculationEngineOutput(Model):
    periods: List[Period]
    metrics: ProjectionMetrics
    validation: ValidationSummary
    performance: PerformanceRecord
    calculated_at: datetime
    input_fingerprint: str

    def period(self, year: int) -> Optional[Period]:
        for period in self.periods:
            if period.year == year:
                return period
        return None

    def periods_of_type(self, period_type: PeriodTypeEnum) -> List[Period]:
        return [p for p in self.periods if p.period_type == period_type]

    @property
    def historical_periods(self) -> List[Period]:
        return self.periods_of_type(PeriodTypeEnum.HISTORICAL)

    @property
    def transition_periods(self) -> List[Period]:
        return self.periods_of_type(PeriodTypeEnum.TRANSITION)

    @property
    def dynamic_periods(self) -> List[Period]:
        return self.periods_of_type(PeriodTypeEnum.DYNAMIC)

    @property
    def years(self) -> List[int]:
        return [p.year for p in self.periods]

    @property
    def reporting(self) -> "ReportingInterface":
        """Tabular views of this run (pandas)."""
        # Import at runtime to avoid circular dependencies
        from ..reporting.interface import ReportingInterface  # noqa: PLC0415

        return ReportingInterface(self)
