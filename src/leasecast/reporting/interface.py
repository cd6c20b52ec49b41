# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reporting Interface

Fluent access to the tabular reports of a completed run, exposed as
`CalculationEngineOutput.reporting`.

Example:
    output = calculate(engine_input)
    pl = output.reporting.profit_loss()
    metrics = output.reporting.metrics(as_float=True)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import pandas as pd

from ..core.primitives import PeriodTypeEnum
from .statements import MetricsReport, OperatingReport, StatementReport, ValidationReport

if TYPE_CHECKING:
    from ..engine.results import CalculationEngineOutput


class ReportingInterface:
    def __init__(self, output: "CalculationEngineOutput"):
        self._output = output

    def profit_loss(
        self, period_types: Optional[List[PeriodTypeEnum]] = None, as_float: bool = False
    ) -> pd.DataFrame:
        return StatementReport(self._output).generate(
            "profit_loss", period_types=period_types, as_float=as_float
        )

    def balance_sheet(
        self, period_types: Optional[List[PeriodTypeEnum]] = None, as_float: bool = False
    ) -> pd.DataFrame:
        return StatementReport(self._output).generate(
            "balance_sheet", period_types=period_types, as_float=as_float
        )

    def cash_flow(
        self, period_types: Optional[List[PeriodTypeEnum]] = None, as_float: bool = False
    ) -> pd.DataFrame:
        return StatementReport(self._output).generate(
            "cash_flow", period_types=period_types, as_float=as_float
        )

    def operating(self, as_float: bool = False) -> pd.DataFrame:
        return OperatingReport(self._output).generate(as_float=as_float)

    def metrics(self, as_float: bool = False) -> pd.DataFrame:
        return MetricsReport(self._output).generate(as_float=as_float)

    def validation_warnings(self) -> pd.DataFrame:
        return ValidationReport(self._output).generate()
