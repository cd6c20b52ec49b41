# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Enrollment and curriculum allocation for contract years.

Enrollment comes from, in order of precedence:
    1. Ramp-up disabled: steady-state students every year
    2. Explicit percentage curve: target x percentage for the years since ramp start
    3. Interpolated curve: linear or S-curve progress reaching the target in
       the ramp end year

Before the ramp start there are no students; after the ramp end the school
runs at steady state. Student counts are whole numbers rounded half-up.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.stats import norm

from ..core.primitives import (
    ZERO,
    RampCurveEnum,
    round_half_up,
    step_escalation_factor,
    to_decimal,
)
from .inputs import CurriculumConfig, CurriculumProgram, EnrollmentConfig

logger = logging.getLogger(__name__)


def s_curve_progress(total_steps: int, sigma: Optional[float] = None) -> np.ndarray:
    """
    Cumulative share of the ramp reached after each step, ending at 1.0.

    Uses a normal cumulative distribution centred on the middle of the ramp,
    normalised so that step 0 starts above zero and the last step is exactly 1.
    """
    steps = np.arange(1, total_steps + 1)
    centre = total_steps / 2
    scale = sigma if sigma is not None else max(total_steps / 4, 0.5)
    floor = norm.cdf(0, centre, scale)
    ceiling = norm.cdf(total_steps, centre, scale)
    return (norm.cdf(steps, centre, scale) - floor) / (ceiling - floor)


def ramp_fraction(config: EnrollmentConfig, year: int) -> Decimal:
    """Share of the ramp target enrolled in `year` while inside the ramp window."""
    start = config.ramp_up_start_year
    end = config.ramp_up_end_year
    offset = year - start

    if config.ramp_up_percentages:
        percentages = config.ramp_up_percentages
        return percentages[min(offset, len(percentages) - 1)]

    total_steps = end - start + 1
    if config.ramp_curve == RampCurveEnum.S_CURVE:
        progress = s_curve_progress(total_steps, config.ramp_curve_sigma)
        return to_decimal(round(float(progress[offset]), 10))
    return Decimal(offset + 1) / Decimal(total_steps)


def students_for_year(config: EnrollmentConfig, year: int) -> int:
    """Total enrolled students for a contract year."""
    if not config.ramp_up_enabled:
        return config.steady_state_students

    if year < config.ramp_up_start_year:
        return 0
    if year > config.ramp_up_end_year:
        return config.steady_state_students

    fraction = ramp_fraction(config, year)
    students = round_half_up(Decimal(config.ramp_target) * fraction)
    if students == 0 and fraction > ZERO:
        students = 1
    return students


def distribute_by_grade(total_students: int, grade_distribution: Dict[str, Decimal]) -> Dict[str, int]:
    """
    Split students across grades by share.

    Largest-remainder apportionment: every grade gets the floor of its exact
    share, then the leftover students go one each to the grades with the
    largest fractional parts (earlier grades win ties). Counts are never
    negative and always sum to `total_students`.

    Example:
        >>> distribute_by_grade(2, {"KG1": Decimal("0.5"), "KG2": Decimal("0.5"), "G1": ZERO})
        {'KG1': 1, 'KG2': 1, 'G1': 0}
    """
    share_total = sum(grade_distribution.values(), ZERO)
    if total_students <= 0 or share_total <= ZERO:
        return {grade: 0 for grade in grade_distribution}

    exact = {
        grade: Decimal(total_students) * share / share_total
        for grade, share in grade_distribution.items()
    }
    counts = {grade: int(value) for grade, value in exact.items()}
    by_fraction = sorted(
        grade_distribution, key=lambda grade: exact[grade] - counts[grade], reverse=True
    )

    leftover = total_students - sum(counts.values())
    for grade in by_fraction[:max(leftover, 0)]:
        counts[grade] += 1
    # Precision drift can push the floors one over the total
    for grade in reversed(by_fraction):
        if leftover >= 0:
            break
        if counts[grade] > 0:
            counts[grade] -= 1
            leftover += 1
    return counts


def program_fee(program: CurriculumProgram, year: int, contract_start_year: int) -> Decimal:
    """Growth-escalated fee, stepping every `growth_frequency` years from the contract start."""
    return program.base_fee * step_escalation_factor(
        program.growth_rate, year - contract_start_year, program.growth_frequency
    )


def allocate_students(
    curriculum: CurriculumConfig, total_students: int, year: int
) -> List[Tuple[CurriculumProgram, int]]:
    """
    Assign students to the programs active in `year`.

    Secondary programs take round(total x share); the primary program takes
    the rest, including the share of any program not yet started.
    """
    primary = curriculum.primary
    allocations: List[Tuple[CurriculumProgram, int]] = []
    allocated = 0
    for program in curriculum.programs[1:]:
        active = program.enabled and (
            program.start_year is None or year >= program.start_year
        )
        if not active:
            continue
        share = program.student_share if program.student_share is not None else ZERO
        count = round_half_up(Decimal(total_students) * share)
        count = min(count, total_students - allocated)
        allocations.append((program, count))
        allocated += count

    primary_active = primary.start_year is None or year >= primary.start_year
    primary_count = total_students - allocated if primary_active else 0
    return [(primary, primary_count)] + allocations


def tuition_revenue(
    curriculum: CurriculumConfig,
    total_students: int,
    year: int,
    contract_start_year: int,
) -> Tuple[Decimal, Dict[str, int], Dict[str, Decimal]]:
    """
    Tuition summed over active programs.

    Returns:
        Tuple of (tuition revenue, students by program, fee by program)
    """
    revenue = ZERO
    students_by_program: Dict[str, int] = {}
    fee_by_program: Dict[str, Decimal] = {}
    for program, count in allocate_students(curriculum, total_students, year):
        fee = program_fee(program, year, contract_start_year)
        revenue += Decimal(count) * fee
        students_by_program[program.name] = count
        fee_by_program[program.name] = fee
    return revenue, students_by_program, fee_by_program


def enrollment_path(config: EnrollmentConfig, years: List[int]) -> Dict[int, int]:
    """Students per year over a list of contract years."""
    path = {year: students_for_year(config, year) for year in years}
    logger.debug(f"Enrollment path: {path}")
    return path
