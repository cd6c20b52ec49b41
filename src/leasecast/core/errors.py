# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Engine Exception Classes

Fatal error kinds raised by a projection run. Each carries a machine-readable
`code`, a human-readable `message` and a `details` mapping so callers can
tell a bad input apart from a numerical failure or an exhausted time budget.

Validation shortfalls (an unbalanced period, an unreconciled cash flow) are
not exceptions: they are recorded as `ValidationWarning` entries on the
output's validation summary.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LeasecastError(Exception):
    """Base exception class for all engine errors"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": {key: str(value) for key, value in self.details.items()},
        }


class ConfigurationError(LeasecastError, ValueError):
    """Input snapshot is inconsistent; raised before any period is computed."""


class ConvergenceError(LeasecastError):
    """Circular solver exhausted its iteration budget without meeting tolerance."""

    def __init__(
        self,
        year: int,
        iterations: int,
        residual: Any,
        tolerance: Any,
    ):
        self.year = year
        self.iterations = iterations
        self.residual = residual
        self.tolerance = tolerance
        super().__init__(
            f"Circular solver did not converge for {year} after {iterations} "
            f"iterations (residual {residual}, tolerance {tolerance})",
            code="SOLVER_NOT_CONVERGED",
            details={
                "year": year,
                "iterations": iterations,
                "residual": residual,
                "tolerance": tolerance,
            },
        )


class CalculationTimeoutError(LeasecastError, TimeoutError):
    """Wall-clock budget for a run was exceeded."""

    def __init__(self, budget_ms: float, elapsed_ms: float, stage: str = ""):
        self.budget_ms = budget_ms
        self.elapsed_ms = elapsed_ms
        self.stage = stage
        where = f" during {stage}" if stage else ""
        super().__init__(
            f"Calculation exceeded its {budget_ms:.0f} ms budget{where} "
            f"({elapsed_ms:.0f} ms elapsed)",
            code="CALCULATION_TIMEOUT",
            details={"budget_ms": budget_ms, "elapsed_ms": elapsed_ms, "stage": stage},
        )
