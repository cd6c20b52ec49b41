# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Projection engine: input snapshot, preflight checks, orchestration, output,
serialization and result caching.
"""

from .api import calculate, calculate_many, run_with_timeout
from .cache import CacheStats, CalculationCache
from .inputs import CalculationEngineInput
from .orchestrator import ProjectionEngine, historical_depreciation_state
from .preflight import validate_engine_input
from .results import CalculationEngineOutput, PerformanceRecord
from .serialization import input_fingerprint, output_to_json, serialize_output

__all__ = [
    "CacheStats",
    "CalculationCache",
    "CalculationEngineInput",
    "CalculationEngineOutput",
    "PerformanceRecord",
    "ProjectionEngine",
    "calculate",
    "calculate_many",
    "historical_depreciation_state",
    "input_fingerprint",
    "output_to_json",
    "run_with_timeout",
    "serialize_output",
    "validate_engine_input",
]
