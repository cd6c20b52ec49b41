# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Statement and metric tables.

Statements are laid out the way a financial model presents them: line items
as rows, fiscal years as columns, in the order the statement declares its
lines. Values are rounded to currency precision here, at the presentation
boundary, and nowhere upstream.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Literal, Optional

import pandas as pd

from ..core.primitives import PeriodTypeEnum, round_currency
from .base import BaseReport

StatementName = Literal["profit_loss", "balance_sheet", "cash_flow"]

STATEMENT_TITLES: Dict[str, str] = {
    "profit_loss": "Profit & Loss",
    "balance_sheet": "Balance Sheet",
    "cash_flow": "Cash Flow Statement",
}


def _present(value: Decimal, as_float: bool):
    rounded = round_currency(value)
    return float(rounded) if as_float else rounded


def _label(field_name: str) -> str:
    return field_name.replace("_", " ").title()


class StatementReport(BaseReport):
    """One financial statement across every emitted year."""

    def generate(
        self,
        statement: StatementName = "profit_loss",
        period_types: Optional[List[PeriodTypeEnum]] = None,
        as_float: bool = False,
        friendly_labels: bool = False,
    ) -> pd.DataFrame:
        """
        Build the statement table.

        Args:
            statement: Which statement to tabulate
            period_types: Restrict columns to these period types
            as_float: Emit floats instead of rounded Decimals
            friendly_labels: Title-case the line item names

        Returns:
            DataFrame indexed by line item with one column per fiscal year;
            `attrs["period_types"]` maps each year to its period type
        """
        if statement not in STATEMENT_TITLES:
            raise ValueError(f"Unknown statement '{statement}'")

        periods = self._output.periods
        if period_types is not None:
            periods = [p for p in periods if p.period_type in period_types]

        columns = {}
        line_items: List[str] = []
        for period in periods:
            section = getattr(period, statement)
            if not line_items:
                line_items = list(type(section).model_fields)
            columns[period.year] = [
                _present(getattr(section, item), as_float) for item in line_items
            ]

        frame = pd.DataFrame(columns, index=line_items)
        frame.index.name = "line_item"
        frame.columns.name = "year"
        if friendly_labels:
            frame.index = [_label(item) for item in line_items]
        frame.attrs["title"] = STATEMENT_TITLES[statement]
        frame.attrs["period_types"] = {p.year: p.period_type.value for p in periods}
        return frame


class OperatingReport(BaseReport):
    """Enrollment, solver and capex diagnostics per year."""

    def generate(self, as_float: bool = False) -> pd.DataFrame:
        rows = []
        for period in self._output.periods:
            rows.append(
                {
                    "year": period.year,
                    "period_type": period.period_type.value,
                    "total_students": period.operating.total_students,
                    "capex_spending": _present(period.capex.spending, as_float),
                    "pre_contract_depreciation": _present(
                        period.capex.pre_contract_depreciation, as_float
                    ),
                    "contract_depreciation": _present(
                        period.capex.contract_depreciation, as_float
                    ),
                    "solver_iterations": period.solver.iterations if period.solver else None,
                    "solver_converged": period.solver.converged if period.solver else None,
                }
            )
        return pd.DataFrame(rows).set_index("year")


class MetricsReport(BaseReport):
    """The metric record as a two-column table."""

    def generate(self, as_float: bool = False) -> pd.DataFrame:
        rows = []
        for name, value in self._output.metrics.model_dump().items():
            if isinstance(value, Decimal):
                value = _present(value, as_float)
            rows.append({"metric": name, "value": value})
        return pd.DataFrame(rows).set_index("metric")


class ValidationReport(BaseReport):
    """Validation warnings, one row each; empty when the run is clean."""

    def generate(self) -> pd.DataFrame:
        columns = ["year", "kind", "message", "difference"]
        rows = [
            {
                "year": warning.year,
                "kind": warning.kind,
                "message": warning.message,
                "difference": warning.difference,
            }
            for warning in self._output.validation.warnings
        ]
        return pd.DataFrame(rows, columns=columns)
