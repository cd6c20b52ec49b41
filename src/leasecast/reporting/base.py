# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base class for tabular reports.

Reports only select and format values already present on a completed run;
they never perform financial calculations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..engine.results import CalculationEngineOutput


class BaseReport(ABC):
    def __init__(self, output: "CalculationEngineOutput"):
        # Import at runtime to avoid circular dependencies
        from ..engine.results import CalculationEngineOutput  # noqa: PLC0415

        if not isinstance(output, CalculationEngineOutput):
            raise TypeError("Reports require a CalculationEngineOutput object")
        self._output = output

    @abstractmethod
    def generate(self, **kwargs) -> Any:
        """Produce the formatted report."""
