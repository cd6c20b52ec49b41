# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Dynamic (contract-period) calculator.

Every contract year is driven by the same template:

    students      = enrollment path for the year
    tuition       = sum over active programs of students x escalated fee
    other revenue = tuition x other_revenue_ratio
    staff costs   = per the staffing method, CPI-stepped from the contract start
    other opex    = other_opex_percent x total revenue
    rent          = per the rent model

Other opex is a share of total revenue *including* other revenue, which is
itself derived from tuition, so other opex scales with (1 + other_revenue_ratio).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from ..core.primitives import (
    ZERO,
    PeriodTypeEnum,
    StaffCostMethodEnum,
    step_escalation_factor,
)
from ..rent.models import calculate_rent_expense
from ..statements.models import OperatingMetrics
from ..working_capital.ratios import WorkingCapitalRatios
from .draft import OperatingDraft
from .enrollment import distribute_by_grade, students_for_year, tuition_revenue
from .inputs import DynamicPeriodInput, StaffConfig

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = Decimal(12)


def calculate_staff_costs(
    staff: StaffConfig,
    total_students: int,
    total_revenue: Decimal,
    year: int,
    contract_start_year: int,
) -> Decimal:
    """
    Staff costs for one contract year.

    Example:
        ```python
        # Fixed + variable: 5,000,000 + 1,000 x 3,000 = 8,000,000 in the start year
        calculate_staff_costs(
            StaffConfig(fixed_cost=Decimal("5000000"),
                        variable_cost_per_student=Decimal("3000")),
            1000, Decimal("0"), 2028, 2028,
        )
        ```
    """
    if staff.method == StaffCostMethodEnum.REVENUE_PERCENT:
        return total_revenue * staff.revenue_percent

    if staff.method == StaffCostMethodEnum.HEADCOUNT:
        teachers = math.ceil(total_students / staff.students_per_teacher)
        non_teachers = math.ceil(total_students / staff.students_per_non_teacher)
        base = (
            Decimal(teachers) * staff.avg_teacher_salary_monthly
            + Decimal(non_teachers) * staff.avg_non_teacher_salary_monthly
        ) * MONTHS_PER_YEAR
    else:
        base = staff.fixed_cost + staff.variable_cost_per_student * Decimal(total_students)

    return base * step_escalation_factor(
        staff.cpi_rate, year - contract_start_year, staff.cpi_frequency
    )


@dataclass
class DynamicPeriodCalculator:
    """
    Applies the contract-year template to successive years.

    Attributes:
        template: Drivers shared by every contract year
        ratios: Resolved working-capital ratios (other-revenue ratio)
        contract_start_year: Anchor for fee, CPI and rent escalation
        contract_years: Contract length (capital recovery horizon)
    """

    template: DynamicPeriodInput
    ratios: WorkingCapitalRatios
    contract_start_year: int
    contract_years: int = 30

    def calculate(self, year: int) -> OperatingDraft:
        template = self.template
        students = students_for_year(template.enrollment, year)

        tuition, by_program, fee_by_program = tuition_revenue(
            template.curriculum, students, year, self.contract_start_year
        )
        other = tuition * self.ratios.other_revenue_ratio
        total_revenue = tuition + other

        staff = calculate_staff_costs(
            template.staff, students, total_revenue, year, self.contract_start_year
        )
        if template.other_opex_percent is not None:
            other_opex = total_revenue * template.other_opex_percent
        else:
            other_opex = template.other_opex or ZERO

        rent = calculate_rent_expense(
            template.rent_params,
            year,
            self.contract_start_year,
            total_revenue,
            contract_years=self.contract_years,
        )

        logger.debug(
            f"Dynamic {year}: {students} students, tuition {tuition}, "
            f"total revenue {total_revenue}, rent {rent}"
        )
        return OperatingDraft(
            year=year,
            period_type=PeriodTypeEnum.DYNAMIC,
            tuition_revenue=tuition,
            other_revenue=other,
            rent_expense=rent,
            staff_costs=staff,
            other_opex=other_opex,
            operating=OperatingMetrics(
                total_students=students,
                students_by_grade=distribute_by_grade(
                    students, template.enrollment.grade_distribution
                ),
                students_by_program=by_program,
                fee_by_program=fee_by_program,
            ),
        )
