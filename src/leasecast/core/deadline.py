# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from .errors import CalculationTimeoutError


@dataclass
class Deadline:
    """
    Cooperative wall-clock budget for one run.

    The engine calls `check()` between fiscal years and between solver
    iterations; the first check past the budget raises
    CalculationTimeoutError. A budget of None never expires.
    """

    budget_ms: Optional[float] = None
    started_at: float = field(default_factory=time.monotonic)

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * 1000.0

    @property
    def expired(self) -> bool:
        return self.budget_ms is not None and self.elapsed_ms >= self.budget_ms

    def check(self, stage: str = "") -> None:
        if self.expired:
            raise CalculationTimeoutError(self.budget_ms, self.elapsed_ms, stage)
