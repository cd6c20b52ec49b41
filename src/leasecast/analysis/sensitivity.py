# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
One-variable sensitivity sweeps and tornado ranking.

A sweep varies one scenario variable in evenly spaced points and records
one output metric per point:

* percent-of-baseline variables (enrollment, staff costs, other opex) span
  `[100 - range_percent, 100 + range_percent]` percent of baseline
* rate variables (tuition growth, CPI, rent escalation) span the baseline
  rate `+/- rate_range_points` percentage points, floored at zero, so a
  zero-growth baseline still moves

A tornado runs the low and high ends for several variables and ranks them
by the absolute spread of the metric.

Metrics without a value for a run (IRR with no sign change, payback never
reached) are recorded as None and do not contribute to an impact.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import Field

from ..core.primitives import HUNDRED, ZERO, EngineSettings, Model
from ..engine.api import calculate_many
from ..engine.inputs import CalculationEngineInput
from ..engine.results import CalculationEngineOutput
from .scenario import (
    ScenarioVariableEnum,
    ScenarioVariables,
    apply_scenario,
    baseline_rate_percent,
)

logger = logging.getLogger(__name__)

DEFAULT_RATE_RANGE_POINTS = Decimal("2")


class SensitivityMetricEnum(str, Enum):
    NPV = "npv"
    TOTAL_RENT = "total_rent"
    EBITDA = "ebitda"
    IRR = "irr"
    PAYBACK = "payback"
    MAX_DEBT = "max_debt"
    FINAL_CASH = "final_cash"


def extract_metric(
    output: CalculationEngineOutput, metric: SensitivityMetricEnum
) -> Optional[Decimal]:
    metrics = output.metrics
    metric = SensitivityMetricEnum(metric)
    if metric == SensitivityMetricEnum.NPV:
        return metrics.npv
    if metric == SensitivityMetricEnum.TOTAL_RENT:
        return metrics.total_rent
    if metric == SensitivityMetricEnum.EBITDA:
        return metrics.total_ebitda
    if metric == SensitivityMetricEnum.IRR:
        return None if metrics.irr is None else Decimal(repr(metrics.irr))
    if metric == SensitivityMetricEnum.PAYBACK:
        return metrics.payback_period
    if metric == SensitivityMetricEnum.MAX_DEBT:
        return metrics.peak_debt
    return metrics.final_cash


def sweep_points(range_percent: Decimal, data_points: int) -> List[Decimal]:
    """Evenly spaced percent-of-baseline values spanning +/- range_percent."""
    if data_points < 2:
        raise ValueError("A sweep needs at least two data points")
    if range_percent < ZERO or range_percent >= HUNDRED:
        raise ValueError("range_percent must be in [0, 100)")
    low = HUNDRED - range_percent
    step = (range_percent * 2) / (data_points - 1)
    return [low + step * index for index in range(data_points)]


def rate_sweep_points(
    baseline_percent: Decimal, range_points: Decimal, data_points: int
) -> List[Decimal]:
    """Evenly spaced annual rates (percent) from max(0, baseline - range) to baseline + range."""
    if data_points < 2:
        raise ValueError("A sweep needs at least two data points")
    if range_points <= ZERO:
        raise ValueError("range_points must be positive")
    low = max(ZERO, baseline_percent - range_points)
    high = baseline_percent + range_points
    step = (high - low) / (data_points - 1)
    return [low + step * index for index in range(data_points)]


class SensitivityPoint(Model):
    variable_percent: Decimal = Field(
        ...,
        description=(
            "Value handed to the scenario: percent of baseline for multiplier "
            "variables, annual rate in percent for rate variables."
        ),
    )
    deviation_percent: Decimal = Field(
        ..., description="Distance from the baseline value, in the same unit."
    )
    metric_value: Optional[Decimal] = None


class SensitivityResult(Model):
    variable: ScenarioVariableEnum
    metric: SensitivityMetricEnum
    baseline_value: Optional[Decimal] = None
    points: List[SensitivityPoint]
    low_value: Optional[Decimal] = None
    high_value: Optional[Decimal] = None

    @property
    def impact(self) -> Decimal:
        """Absolute metric spread between the low and high ends of the sweep."""
        if self.low_value is None or self.high_value is None:
            return ZERO
        return abs(self.high_value - self.low_value)


def run_sensitivity(
    baseline: CalculationEngineInput,
    variable: ScenarioVariableEnum,
    metric: SensitivityMetricEnum,
    range_percent: Decimal = Decimal("20"),
    data_points: int = 5,
    settings: Optional[EngineSettings] = None,
    max_workers: Optional[int] = None,
    rate_range_points: Decimal = DEFAULT_RATE_RANGE_POINTS,
) -> SensitivityResult:
    """
    Sweep one variable and record one metric per point.

    Args:
        baseline: Baseline snapshot (not mutated)
        variable: Scenario variable to vary
        metric: Output metric to record
        range_percent: Sweep half-width in percent of baseline (multiplier variables)
        data_points: Number of points across the sweep (at least 2)
        rate_range_points: Sweep half-width in percentage points (rate variables)

    Raises:
        ConfigurationError: If a scenario produces an invalid snapshot
        ConvergenceError: If any point fails to converge
    """
    variable = ScenarioVariableEnum(variable)
    metric = SensitivityMetricEnum(metric)
    if variable.is_rate:
        centre = baseline_rate_percent(baseline, variable) or ZERO
        values = rate_sweep_points(centre, Decimal(rate_range_points), data_points)
    else:
        centre = HUNDRED
        values = sweep_points(Decimal(range_percent), data_points)

    scenarios = [baseline] + [
        apply_scenario(baseline, ScenarioVariables.single(variable, value))
        for value in values
    ]
    outputs = calculate_many(scenarios, settings=settings, max_workers=max_workers)
    baseline_value = extract_metric(outputs[0], metric)

    points = [
        SensitivityPoint(
            variable_percent=value,
            deviation_percent=value - centre,
            metric_value=extract_metric(output, metric),
        )
        for value, output in zip(values, outputs[1:])
    ]
    result = SensitivityResult(
        variable=variable,
        metric=metric,
        baseline_value=baseline_value,
        points=points,
        low_value=points[0].metric_value,
        high_value=points[-1].metric_value,
    )
    logger.info(
        f"Sensitivity {variable.value} -> {metric.value}: "
        f"{len(points)} points, impact {result.impact}"
    )
    return result


def run_tornado(
    baseline: CalculationEngineInput,
    variables: Sequence[ScenarioVariableEnum],
    metric: SensitivityMetricEnum,
    range_percent: Decimal = Decimal("20"),
    settings: Optional[EngineSettings] = None,
    max_workers: Optional[int] = None,
    rate_range_points: Decimal = DEFAULT_RATE_RANGE_POINTS,
) -> List[SensitivityResult]:
    """Run a two-point sweep per variable, ranked by descending impact."""
    results = [
        run_sensitivity(
            baseline,
            variable,
            metric,
            range_percent=range_percent,
            data_points=2,
            settings=settings,
            max_workers=max_workers,
            rate_range_points=rate_range_points,
        )
        for variable in variables
    ]
    return sorted(results, key=lambda result: result.impact, reverse=True)
