# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Input records for the three period phases.

Historical inputs are read-only actuals. Transition inputs bridge the last
actual year to the contract start with a single growth rate. The dynamic
input is a template applied to every contract year: enrollment, curriculum,
staffing, other opex, rent and capex.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import Field, model_validator

from ..capex.config import CapExConfig
from ..core.primitives import (
    ZERO,
    CostLineEnum,
    DecimalBetween0And1,
    GrowthRate,
    Model,
    NonNegativeDecimal,
    RampCurveEnum,
    StaffCostMethodEnum,
    ValidationMixin,
)
from ..rent.models import AnyRentParams

# --------------------------------------------------------------------------- #
# Historical
# --------------------------------------------------------------------------- #


class HistoricalProfitLoss(Model, ValidationMixin):
    """
    Reported P&L for an actual year.

    `revenue` is total revenue. Either component may be given; the other is
    the remainder. With neither, everything is treated as tuition.
    """

    revenue: Decimal
    tuition_revenue: Optional[Decimal] = None
    other_revenue: Optional[Decimal] = None
    rent: Decimal = ZERO
    staff_costs: Decimal = ZERO
    other_opex: Decimal = ZERO
    depreciation: Decimal = ZERO
    interest: Decimal = ZERO
    zakat: Decimal = ZERO

    @model_validator(mode="after")
    def check_revenue_split(self) -> "HistoricalProfitLoss":
        if self.tuition_revenue is not None and self.other_revenue is not None:
            if self.tuition_revenue + self.other_revenue != self.revenue:
                raise ValueError(
                    "tuition_revenue + other_revenue must equal revenue when both are given"
                )
        return self

    @property
    def resolved_tuition_revenue(self) -> Decimal:
        if self.tuition_revenue is not None:
            return self.tuition_revenue
        if self.other_revenue is not None:
            return self.revenue - self.other_revenue
        return self.revenue

    @property
    def resolved_other_revenue(self) -> Decimal:
        return self.revenue - self.resolved_tuition_revenue

    @property
    def net_income(self) -> Decimal:
        return (
            self.revenue
            - self.rent
            - self.staff_costs
            - self.other_opex
            - self.depreciation
            - self.interest
            - self.zakat
        )


class HistoricalBalanceSheet(Model):
    """Reported closing balances for an actual year."""

    cash: Decimal
    accounts_receivable: Decimal = ZERO
    prepaid_expenses: Decimal = ZERO
    gross_ppe: Decimal = ZERO
    accumulated_depreciation: Decimal = ZERO
    accounts_payable: Decimal = ZERO
    accrued_expenses: Decimal = ZERO
    deferred_revenue: Decimal = ZERO
    debt: Decimal = ZERO
    equity: Decimal


class HistoricalPeriodInput(Model):
    """An actual fiscal year, passed through unchanged."""

    year: int
    immutable: bool = True
    profit_loss: HistoricalProfitLoss
    balance_sheet: HistoricalBalanceSheet


# --------------------------------------------------------------------------- #
# Transition
# --------------------------------------------------------------------------- #


class TransitionPeriodInput(Model, ValidationMixin):
    """
    A bridge year between the last actual and the contract start.

    Tuition grows from the prior year by `revenue_growth_rate` (or is set
    directly from a student count and average fee); rent grows by
    `rent_growth_percent`; staff and other opex scale with total revenue
    unless listed in `fixed_cost_lines` or overridden.
    """

    year: int
    pre_fill_from_prior_year: bool = True
    revenue_growth_rate: GrowthRate = ZERO
    rent_growth_percent: GrowthRate = ZERO
    number_of_students: Optional[int] = Field(default=None, ge=0)
    average_tuition_per_student: Optional[NonNegativeDecimal] = None
    fixed_cost_lines: List[CostLineEnum] = Field(default_factory=list)
    staff_costs_ratio: Optional[DecimalBetween0And1] = Field(
        default=None, description="Override: staff costs as a share of total revenue."
    )
    other_opex: Optional[NonNegativeDecimal] = Field(
        default=None, description="Override: absolute other opex for the year."
    )

    @model_validator(mode="after")
    def check_tuition_basis(self) -> "TransitionPeriodInput":
        self.validate_paired_fields("number_of_students", "average_tuition_per_student")
        self.validate_conditional_requirement(
            "pre_fill_from_prior_year",
            False,
            "number_of_students",
            "number_of_students and average_tuition_per_student are required "
            "when pre_fill_from_prior_year is False",
        )
        return self

    @property
    def uses_direct_tuition(self) -> bool:
        return self.number_of_students is not None


# --------------------------------------------------------------------------- #
# Dynamic (contract period)
# --------------------------------------------------------------------------- #


class EnrollmentConfig(Model):
    """
    Student enrollment path for the contract period.

    Non-positive `steady_state_students` is rejected by the engine preflight
    with a ConfigurationError, so it is not constrained here.
    """

    steady_state_students: int
    ramp_up_enabled: bool = False
    ramp_up_start_year: Optional[int] = None
    ramp_up_end_year: Optional[int] = None
    ramp_up_target_students: Optional[int] = Field(
        default=None, description="Ramp target; defaults to steady-state students."
    )
    ramp_up_percentages: Optional[List[NonNegativeDecimal]] = Field(
        default=None,
        description="Share of target enrolled, indexed by years since ramp start.",
    )
    ramp_curve: RampCurveEnum = RampCurveEnum.LINEAR
    ramp_curve_sigma: Optional[float] = Field(
        default=None,
        gt=0,
        description="S-curve steepness in years; defaults to a quarter of the ramp length.",
    )
    grade_distribution: Dict[str, Decimal] = Field(
        default_factory=dict,
        description="Share of students per grade; shares sum to 1 when given.",
    )

    @property
    def ramp_target(self) -> int:
        if self.ramp_up_target_students is not None:
            return self.ramp_up_target_students
        return self.steady_state_students


class CurriculumProgram(Model):
    """
    One curriculum program with its own fee schedule.

    The first program of a curriculum is primary and takes every student not
    allocated to another active program.
    """

    name: str
    base_fee: Decimal = Field(..., description="Annual fee per student in the contract start year.")
    growth_rate: GrowthRate = ZERO
    growth_frequency: int = Field(default=1, description="Years per fee escalation step.")
    start_year: Optional[int] = Field(
        default=None, description="Program contributes nothing before this year."
    )
    student_share: Optional[DecimalBetween0And1] = Field(
        default=None, description="Share of total students (non-primary programs)."
    )
    enabled: bool = True


class CurriculumConfig(Model):
    programs: List[CurriculumProgram]

    @property
    def primary(self) -> CurriculumProgram:
        return self.programs[0]


class StaffConfig(Model):
    """
    Staff cost drivers.

    FIXED_PLUS_VARIABLE and HEADCOUNT costs are CPI-escalated in steps of
    `cpi_frequency` years from the contract start; REVENUE_PERCENT is not.
    """

    method: StaffCostMethodEnum = StaffCostMethodEnum.FIXED_PLUS_VARIABLE
    fixed_cost: NonNegativeDecimal = ZERO
    variable_cost_per_student: NonNegativeDecimal = ZERO
    students_per_teacher: Optional[int] = Field(default=None, gt=0)
    students_per_non_teacher: Optional[int] = Field(default=None, gt=0)
    avg_teacher_salary_monthly: NonNegativeDecimal = ZERO
    avg_non_teacher_salary_monthly: NonNegativeDecimal = ZERO
    revenue_percent: Optional[DecimalBetween0And1] = None
    cpi_rate: GrowthRate = ZERO
    cpi_frequency: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_method_inputs(self) -> "StaffConfig":
        if self.method == StaffCostMethodEnum.HEADCOUNT and (
            self.students_per_teacher is None or self.students_per_non_teacher is None
        ):
            raise ValueError(
                "Headcount staffing needs students_per_teacher and students_per_non_teacher"
            )
        if self.method == StaffCostMethodEnum.REVENUE_PERCENT and self.revenue_percent is None:
            raise ValueError("Revenue-percent staffing needs revenue_percent")
        return self


class DynamicPeriodInput(Model):
    """
    Template for every contract year.

    `year` is stamped per projected year by the engine and may be omitted on
    the template.
    """

    year: Optional[int] = None
    enrollment: EnrollmentConfig
    curriculum: CurriculumConfig
    staff: StaffConfig = Field(default_factory=StaffConfig)
    other_opex_percent: Optional[DecimalBetween0And1] = Field(
        default=None,
        description="Other opex as a share of total revenue (tuition + other).",
    )
    other_opex: Optional[NonNegativeDecimal] = Field(
        default=None, description="Flat other opex, used when no percentage is given."
    )
    rent_params: AnyRentParams
    capex_config: Optional[CapExConfig] = None
