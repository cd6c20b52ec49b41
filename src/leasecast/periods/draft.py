# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from ..core.primitives import Model, PeriodTypeEnum
from ..statements.models import OperatingMetrics


class OperatingDraft(Model):
    """
    Pre-financing operating result for a projected year.

    Produced by the transition and dynamic calculators and handed to the
    circular solver, which adds depreciation, interest, zakat and financing.
    """

    year: int
    period_type: PeriodTypeEnum
    tuition_revenue: Decimal
    other_revenue: Decimal
    rent_expense: Decimal
    staff_costs: Decimal
    other_opex: Decimal
    operating: OperatingMetrics = Field(default_factory=OperatingMetrics)

    @property
    def total_revenue(self) -> Decimal:
        return self.tuition_revenue + self.other_revenue

    @property
    def total_opex(self) -> Decimal:
        return self.rent_expense + self.staff_costs + self.other_opex

    @property
    def ebitda(self) -> Decimal:
        return self.total_revenue - self.total_opex
