# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Fail-fast configuration checks run before any period is computed.

Each check raises ConfigurationError with a machine-readable code:

    HISTORICAL_PERIODS_MISSING   no actual years to anchor the projection
    YEAR_SEQUENCE                years are not consecutive across phases
    CONTRACT_PERIOD              contract length outside 1..60 years
    ENROLLMENT_NON_POSITIVE      steady-state students <= 0
    RAMP_UP_RANGE_INVALID        ramp enabled without a valid year window or target
    CURRICULUM_PROGRAM_COUNT     not one or two programs
    CURRICULUM_FEE_NON_POSITIVE  enabled program with a fee <= 0
    PROGRAM_SHARE_OUT_OF_RANGE   secondary shares missing or summing above 1
    GRADE_DISTRIBUTION_SUM       grade shares do not sum to 1
    ESCALATION_FREQUENCY         a fee, rent or CPI step frequency below 1
    CAPEX_USEFUL_LIFE            a useful life below 1 year
    CAPEX_CATEGORY_UNKNOWN       transition capex naming an undefined category
    REINVESTMENT_FREQUENCY       an enabled reinvestment with frequency below 1
    SOLVER_CONFIG                iteration budget, tolerance or relaxation out of range
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import NoReturn

from ..core.errors import ConfigurationError
from ..core.primitives import ONE, ZERO, decimal_sum
from ..rent.models import FixedEscalationRent, PartnerInvestmentRent
from .inputs import CalculationEngineInput

logger = logging.getLogger(__name__)

GRADE_SHARE_TOLERANCE = Decimal("0.0001")
MAX_CONTRACT_YEARS = 60


def _fail(code: str, message: str, **details) -> NoReturn:
    logger.error(f"Configuration rejected [{code}]: {message}")
    raise ConfigurationError(message, code=code, details=details)


def _check_years(engine_input: CalculationEngineInput) -> None:
    if not engine_input.historical_periods:
        _fail("HISTORICAL_PERIODS_MISSING", "At least one historical period is required")

    if not 1 <= engine_input.contract_period_years <= MAX_CONTRACT_YEARS:
        _fail(
            "CONTRACT_PERIOD",
            f"Contract period must be 1-{MAX_CONTRACT_YEARS} years, "
            f"got {engine_input.contract_period_years}",
            contract_period_years=engine_input.contract_period_years,
        )

    years = [p.year for p in engine_input.historical_periods] + [
        p.year for p in engine_input.transition_periods
    ]
    years.append(engine_input.resolved_contract_start_year)
    for before, after in zip(years, years[1:]):
        if after != before + 1:
            _fail(
                "YEAR_SEQUENCE",
                f"Years must increase by one across historical, transition and "
                f"contract periods: {after} follows {before}",
                previous_year=before,
                year=after,
            )


def _check_enrollment(engine_input: CalculationEngineInput) -> None:
    enrollment = engine_input.dynamic_period.enrollment
    if enrollment.steady_state_students <= 0:
        _fail(
            "ENROLLMENT_NON_POSITIVE",
            f"Steady-state students must be positive, got {enrollment.steady_state_students}",
            steady_state_students=enrollment.steady_state_students,
        )

    if enrollment.ramp_up_enabled:
        start = enrollment.ramp_up_start_year
        end = enrollment.ramp_up_end_year
        if start is None or end is None or end < start:
            _fail(
                "RAMP_UP_RANGE_INVALID",
                f"Ramp-up needs a start and end year with end >= start (got {start}-{end})",
                ramp_up_start_year=start,
                ramp_up_end_year=end,
            )
        if enrollment.ramp_target <= 0:
            _fail(
                "RAMP_UP_RANGE_INVALID",
                "Ramp-up target students must be positive",
                ramp_up_target_students=enrollment.ramp_target,
            )

    if enrollment.grade_distribution:
        total = decimal_sum(enrollment.grade_distribution.values())
        if abs(total - ONE) > GRADE_SHARE_TOLERANCE:
            _fail(
                "GRADE_DISTRIBUTION_SUM",
                f"Grade distribution shares must sum to 1, got {total}",
                total=total,
            )


def _check_curriculum(engine_input: CalculationEngineInput) -> None:
    programs = engine_input.dynamic_period.curriculum.programs
    if not 1 <= len(programs) <= 2:
        _fail(
            "CURRICULUM_PROGRAM_COUNT",
            f"A curriculum has one or two programs, got {len(programs)}",
            programs=len(programs),
        )

    for program in programs:
        if program.enabled and program.base_fee <= ZERO:
            _fail(
                "CURRICULUM_FEE_NON_POSITIVE",
                f"Program '{program.name}' fee must be positive, got {program.base_fee}",
                program=program.name,
            )
        if program.growth_frequency < 1:
            _fail(
                "ESCALATION_FREQUENCY",
                f"Program '{program.name}' growth frequency must be at least 1 year",
                program=program.name,
            )

    secondary = [p for p in programs[1:] if p.enabled]
    if any(p.student_share is None for p in secondary):
        _fail(
            "PROGRAM_SHARE_OUT_OF_RANGE",
            "Secondary programs need a student_share",
        )
    shares = decimal_sum(p.student_share for p in secondary)
    if shares > ONE:
        _fail(
            "PROGRAM_SHARE_OUT_OF_RANGE",
            f"Secondary program shares sum to {shares}, above 1",
            total=shares,
        )


def _check_escalation(engine_input: CalculationEngineInput) -> None:
    rent = engine_input.dynamic_period.rent_params
    if isinstance(rent, (FixedEscalationRent, PartnerInvestmentRent)) and rent.frequency < 1:
        _fail(
            "ESCALATION_FREQUENCY",
            f"Rent escalation frequency must be at least 1 year, got {rent.frequency}",
            rent_model=rent.rent_model,
        )


def _check_capex(engine_input: CalculationEngineInput) -> None:
    capex = engine_input.effective_capex_config
    lives = [(c.name, c.useful_life_years) for c in capex.categories]
    lives += [(v.name, v.useful_life_years) for v in capex.virtual_assets]
    if capex.auto_reinvestment is not None and capex.auto_reinvestment.enabled:
        auto = capex.auto_reinvestment
        lives.append((auto.category, auto.useful_life_years))
        if auto.frequency_years < 1:
            _fail(
                "REINVESTMENT_FREQUENCY",
                f"Auto-reinvestment frequency must be at least 1 year, got {auto.frequency_years}",
            )
    for name, life in lives:
        if life < 1:
            _fail(
                "CAPEX_USEFUL_LIFE",
                f"Asset '{name}' useful life must be at least 1 year, got {life}",
                asset=name,
            )

    for category in capex.categories:
        frequency = category.reinvest_frequency_years
        if frequency is not None and frequency < 0:
            _fail(
                "REINVESTMENT_FREQUENCY",
                f"Category '{category.name}' reinvestment frequency cannot be negative",
                category=category.name,
            )

    known = {c.name for c in capex.categories}
    for entry in capex.transition_capex:
        if entry.category not in known:
            _fail(
                "CAPEX_CATEGORY_UNKNOWN",
                f"Transition capex in {entry.year} references unknown category '{entry.category}'",
                year=entry.year,
                category=entry.category,
            )


def _check_solver(engine_input: CalculationEngineInput) -> None:
    solver = engine_input.solver_config
    if solver.max_iterations < 1:
        _fail("SOLVER_CONFIG", "max_iterations must be at least 1")
    if solver.convergence_tolerance <= ZERO:
        _fail("SOLVER_CONFIG", "convergence_tolerance must be positive")
    if not ZERO < solver.relaxation_factor <= ONE:
        _fail(
            "SOLVER_CONFIG",
            f"relaxation_factor must be in (0, 1], got {solver.relaxation_factor}",
        )


def validate_engine_input(engine_input: CalculationEngineInput) -> None:
    """
    Reject an inconsistent snapshot before computation.

    Raises:
        ConfigurationError: On the first failed check
    """
    _check_years(engine_input)
    _check_enrollment(engine_input)
    _check_curriculum(engine_input)
    _check_escalation(engine_input)
    _check_capex(engine_input)
    _check_solver(engine_input)
