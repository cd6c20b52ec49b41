# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Transition period calculator.

Bridges the last actual year to the contract start. Each year pre-fills from
the prior period: tuition grows by one rate, rent grows by a flat percentage,
and staff costs and other opex scale with total revenue unless held fixed.
No rent model applies yet.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from ..core.primitives import ONE, CostLineEnum, PeriodTypeEnum, safe_divide
from ..statements.models import OperatingMetrics, Period
from ..working_capital.ratios import WorkingCapitalRatios
from .draft import OperatingDraft
from .inputs import TransitionPeriodInput

logger = logging.getLogger(__name__)


def _tuition(period_input: TransitionPeriodInput, prior: Period) -> Decimal:
    if period_input.uses_direct_tuition:
        return (
            Decimal(period_input.number_of_students)
            * period_input.average_tuition_per_student
        )
    return prior.profit_loss.tuition_revenue * (ONE + period_input.revenue_growth_rate)


def calculate_transition_period(
    period_input: TransitionPeriodInput,
    prior: Period,
    ratios: WorkingCapitalRatios,
) -> OperatingDraft:
    """
    Pre-financing operating result for one transition year.

    Args:
        period_input: The transition year's drivers
        prior: The immediately preceding emitted period
        ratios: Resolved working-capital ratios (supplies the other-revenue ratio)

    Returns:
        OperatingDraft ready for the circular solver
    """
    prior_pl = prior.profit_loss

    tuition = _tuition(period_input, prior)
    other = tuition * ratios.other_revenue_ratio
    total_revenue = tuition + other
    revenue_scale = safe_divide(total_revenue, prior_pl.total_revenue)

    rent = prior_pl.rent_expense * (ONE + period_input.rent_growth_percent)

    if period_input.staff_costs_ratio is not None:
        staff = total_revenue * period_input.staff_costs_ratio
    elif CostLineEnum.STAFF_COSTS in period_input.fixed_cost_lines:
        staff = prior_pl.staff_costs
    else:
        staff = prior_pl.staff_costs * revenue_scale

    if period_input.other_opex is not None:
        other_opex = period_input.other_opex
    elif CostLineEnum.OTHER_OPEX in period_input.fixed_cost_lines:
        other_opex = prior_pl.other_opex
    else:
        other_opex = prior_pl.other_opex * revenue_scale

    logger.debug(
        f"Transition {period_input.year}: tuition {tuition}, other {other}, "
        f"rent {rent}, staff {staff}, other opex {other_opex}"
    )
    return OperatingDraft(
        year=period_input.year,
        period_type=PeriodTypeEnum.TRANSITION,
        tuition_revenue=tuition,
        other_revenue=other,
        rent_expense=rent,
        staff_costs=staff,
        other_opex=other_opex,
        operating=OperatingMetrics(total_students=period_input.number_of_students),
    )
