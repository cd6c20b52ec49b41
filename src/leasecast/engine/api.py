# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Public entry points.

`calculate` runs one snapshot; `run_with_timeout` runs it under a cooperative
time budget; `calculate_many` fans independent snapshots out over a thread
pool. Each run owns all of its state, so concurrent runs never interact.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..core.deadline import Deadline
from ..core.primitives import EngineSettings
from .cache import CalculationCache
from .inputs import CalculationEngineInput
from .orchestrator import ProjectionEngine
from .results import CalculationEngineOutput
from .serialization import input_fingerprint

logger = logging.getLogger(__name__)


def calculate(
    engine_input: CalculationEngineInput,
    settings: Optional[EngineSettings] = None,
    cache: Optional[CalculationCache] = None,
) -> CalculationEngineOutput:
    """
    Run one projection.

    Args:
        engine_input: Complete input snapshot
        settings: Engine settings (defaults apply when omitted)
        cache: Optional cache consulted by the input and settings fingerprint

    Raises:
        ConfigurationError: When the snapshot fails preflight checks
        ConvergenceError: When a year's circular solve does not converge

    Example:
        >>> output = calculate(engine_input)
        >>> output.validation.is_valid
        True
    """
    settings = settings or EngineSettings()
    engine = ProjectionEngine(engine_input, settings)
    if cache is None:
        return engine.run()
    return cache.get_or_compute(
        input_fingerprint(engine_input, settings),
        engine.run,
        proposal_id=engine_input.proposal_id,
    )


def run_with_timeout(
    engine_input: CalculationEngineInput,
    duration_ms: float,
    settings: Optional[EngineSettings] = None,
) -> CalculationEngineOutput:
    """
    Run one projection under a wall-clock budget.

    The budget is checked between fiscal years and solver iterations; no
    partial output is returned.

    Raises:
        CalculationTimeoutError: When the budget is exhausted
    """
    deadline = Deadline(budget_ms=duration_ms)
    engine = ProjectionEngine(engine_input, settings or EngineSettings(), deadline=deadline)
    return engine.run()


def calculate_many(
    inputs: Sequence[CalculationEngineInput],
    settings: Optional[EngineSettings] = None,
    max_workers: Optional[int] = None,
) -> List[CalculationEngineOutput]:
    """
    Run independent snapshots concurrently; results keep input order.

    The first failing run's exception propagates.
    """
    if not inputs:
        return []
    resolved = settings or EngineSettings()
    logger.info(f"Running {len(inputs)} projections (max_workers={max_workers})")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(ProjectionEngine(engine_input, resolved).run)
            for engine_input in inputs
        ]
        return [future.result() for future in futures]
