# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Scenario modifier.

Applies what-if adjustments to a baseline input snapshot and returns a new
snapshot; the baseline is never mutated. Variables come in two kinds:

| Variable             | Kind                | Drivers changed                                          |
|----------------------|---------------------|----------------------------------------------------------|
| enrollment           | percent of baseline | steady-state and ramp-up target students (rounded)       |
| staff_costs          | percent of baseline | fixed, per-student, salary and revenue-percent staffing  |
| other_opex           | percent of baseline | other opex percentage and flat amount                    |
| tuition_growth       | annual rate, %      | every curriculum program's fee growth rate               |
| cpi                  | annual rate, %      | staff CPI rate                                           |
| rent_escalation      | annual rate, %      | growth rate of fixed-escalation and partner rent         |

Percent-of-baseline variables default to 100 (unchanged): 80 cuts the
driver by a fifth. Rate variables replace the baseline rate outright, so
`cpi_percent=Decimal("3")` sets CPI to 0.03 whatever the baseline was; left
as None they keep the baseline rate. Escalation step frequencies are never
changed. Revenue-share rent has no escalation rate and is left unchanged by
`rent_escalation`.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field

from ..core.primitives import HUNDRED, ONE, Model, round_half_up
from ..engine.inputs import CalculationEngineInput
from ..periods.inputs import DynamicPeriodInput
from ..rent.models import FixedEscalationRent, PartnerInvestmentRent

logger = logging.getLogger(__name__)


class ScenarioVariableEnum(str, Enum):
    ENROLLMENT = "enrollment"
    TUITION_GROWTH = "tuition_growth"
    CPI = "cpi"
    RENT_ESCALATION = "rent_escalation"
    STAFF_COSTS = "staff_costs"
    OTHER_OPEX = "other_opex"

    @property
    def is_rate(self) -> bool:
        """True for variables set as an absolute annual rate."""
        return self in _RATE_VARIABLES


_RATE_VARIABLES = frozenset(
    {
        ScenarioVariableEnum.TUITION_GROWTH,
        ScenarioVariableEnum.CPI,
        ScenarioVariableEnum.RENT_ESCALATION,
    }
)


class ScenarioVariables(Model):
    """Scenario adjustments; the defaults leave the baseline unchanged."""

    enrollment_percent: Decimal = Field(default=HUNDRED, ge=0)
    staff_costs_percent: Decimal = Field(default=HUNDRED, ge=0)
    other_opex_percent: Decimal = Field(default=HUNDRED, ge=0)
    tuition_growth_percent: Optional[Decimal] = Field(
        default=None, ge=0, description="Annual fee growth rate in percent (5 = 0.05)."
    )
    cpi_percent: Optional[Decimal] = Field(
        default=None, ge=0, description="Annual staff CPI rate in percent."
    )
    rent_escalation_percent: Optional[Decimal] = Field(
        default=None, ge=0, description="Annual rent escalation rate in percent."
    )

    @classmethod
    def single(cls, variable: ScenarioVariableEnum, value: Decimal) -> "ScenarioVariables":
        """Adjust one variable, leaving the others at baseline."""
        return cls(**{f"{ScenarioVariableEnum(variable).value}_percent": value})


def baseline_rate_percent(
    baseline: CalculationEngineInput, variable: ScenarioVariableEnum
) -> Optional[Decimal]:
    """
    The baseline value of a rate variable, in percent.

    Tuition growth reads the primary program. Returns None for revenue-share
    rent, which has no escalation rate, and for non-rate variables.
    """
    template = baseline.dynamic_period
    variable = ScenarioVariableEnum(variable)
    if variable == ScenarioVariableEnum.TUITION_GROWTH:
        return template.curriculum.primary.growth_rate * HUNDRED
    if variable == ScenarioVariableEnum.CPI:
        return template.staff.cpi_rate * HUNDRED
    if variable == ScenarioVariableEnum.RENT_ESCALATION:
        rent = template.rent_params
        if isinstance(rent, (FixedEscalationRent, PartnerInvestmentRent)):
            return rent.growth_rate * HUNDRED
    return None


def _scaled(value: Decimal, percent: Decimal) -> Decimal:
    return value * percent / HUNDRED


def _apply_enrollment(template: DynamicPeriodInput, percent: Decimal) -> DynamicPeriodInput:
    enrollment = template.enrollment
    update = {
        "steady_state_students": round_half_up(
            _scaled(Decimal(enrollment.steady_state_students), percent)
        )
    }
    if enrollment.ramp_up_target_students is not None:
        update["ramp_up_target_students"] = round_half_up(
            _scaled(Decimal(enrollment.ramp_up_target_students), percent)
        )
    return template.model_copy(update={"enrollment": enrollment.model_copy(update=update)})


def _apply_tuition_growth(template: DynamicPeriodInput, rate: Decimal) -> DynamicPeriodInput:
    programs = [
        program.model_copy(update={"growth_rate": rate})
        for program in template.curriculum.programs
    ]
    curriculum = template.curriculum.model_copy(update={"programs": programs})
    return template.model_copy(update={"curriculum": curriculum})


def _apply_cpi(template: DynamicPeriodInput, rate: Decimal) -> DynamicPeriodInput:
    staff = template.staff.model_copy(update={"cpi_rate": rate})
    return template.model_copy(update={"staff": staff})


def _apply_rent_escalation(template: DynamicPeriodInput, rate: Decimal) -> DynamicPeriodInput:
    rent = template.rent_params
    if not isinstance(rent, (FixedEscalationRent, PartnerInvestmentRent)):
        logger.debug(f"Rent model {rent.rent_model} has no escalation rate to adjust")
        return template
    rent = rent.model_copy(update={"growth_rate": rate})
    return template.model_copy(update={"rent_params": rent})


def _apply_staff_costs(template: DynamicPeriodInput, percent: Decimal) -> DynamicPeriodInput:
    staff = template.staff
    update = {
        "fixed_cost": _scaled(staff.fixed_cost, percent),
        "variable_cost_per_student": _scaled(staff.variable_cost_per_student, percent),
        "avg_teacher_salary_monthly": _scaled(staff.avg_teacher_salary_monthly, percent),
        "avg_non_teacher_salary_monthly": _scaled(
            staff.avg_non_teacher_salary_monthly, percent
        ),
    }
    if staff.revenue_percent is not None:
        update["revenue_percent"] = min(ONE, _scaled(staff.revenue_percent, percent))
    return template.model_copy(update={"staff": staff.model_copy(update=update)})


def _apply_other_opex(template: DynamicPeriodInput, percent: Decimal) -> DynamicPeriodInput:
    update = {}
    if template.other_opex_percent is not None:
        update["other_opex_percent"] = min(ONE, _scaled(template.other_opex_percent, percent))
    if template.other_opex is not None:
        update["other_opex"] = _scaled(template.other_opex, percent)
    return template.model_copy(update=update)


def apply_scenario(
    baseline: CalculationEngineInput, variables: ScenarioVariables
) -> CalculationEngineInput:
    """
    Return a copy of `baseline` with the scenario adjustments applied.

    Only the contract-year template changes; historical and transition years
    are actuals and bridge inputs and stay as supplied.

    Example:
        >>> downside = apply_scenario(
        ...     baseline,
        ...     ScenarioVariables(enrollment_percent=Decimal("80"), cpi_percent=Decimal("4")),
        ... )
    """
    template = baseline.dynamic_period

    multipliers = (
        (variables.enrollment_percent, _apply_enrollment),
        (variables.staff_costs_percent, _apply_staff_costs),
        (variables.other_opex_percent, _apply_other_opex),
    )
    for percent, apply in multipliers:
        if percent != HUNDRED:
            template = apply(template, percent)

    rates = (
        (variables.tuition_growth_percent, _apply_tuition_growth),
        (variables.cpi_percent, _apply_cpi),
        (variables.rent_escalation_percent, _apply_rent_escalation),
    )
    for percent, apply in rates:
        if percent is not None:
            template = apply(template, percent / HUNDRED)

    logger.debug(
        f"Scenario applied: enrollment {variables.enrollment_percent}%, "
        f"staff {variables.staff_costs_percent}%, other opex {variables.other_opex_percent}%, "
        f"tuition growth rate {variables.tuition_growth_percent}, "
        f"cpi rate {variables.cpi_percent}, "
        f"rent escalation rate {variables.rent_escalation_percent}"
    )
    return baseline.model_copy(update={"dynamic_period": template})
