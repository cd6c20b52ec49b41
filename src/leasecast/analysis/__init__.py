# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
What-if analysis on top of the projection engine: scenario adjustments,
one-variable sensitivity sweeps and tornado ranking.
"""

from .scenario import (
    ScenarioVariableEnum,
    ScenarioVariables,
    apply_scenario,
    baseline_rate_percent,
)
from .sensitivity import (
    SensitivityMetricEnum,
    SensitivityPoint,
    SensitivityResult,
    extract_metric,
    rate_sweep_points,
    run_sensitivity,
    run_tornado,
    sweep_points,
)

__all__ = [
    "ScenarioVariableEnum",
    "ScenarioVariables",
    "SensitivityMetricEnum",
    "SensitivityPoint",
    "SensitivityResult",
    "apply_scenario",
    "baseline_rate_percent",
    "extract_metric",
    "rate_sweep_points",
    "run_sensitivity",
    "run_tornado",
    "sweep_points",
]
