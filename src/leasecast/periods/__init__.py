# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period calculators: historical pass-through, transition bridge and
enrollment-driven contract years.
"""

from .draft import OperatingDraft
from .dynamic import DynamicPeriodCalculator, calculate_staff_costs
from .enrollment import (
    allocate_students,
    distribute_by_grade,
    enrollment_path,
    program_fee,
    students_for_year,
    tuition_revenue,
)
from .historical import calculate_historical_period
from .inputs import (
    CurriculumConfig,
    CurriculumProgram,
    DynamicPeriodInput,
    EnrollmentConfig,
    HistoricalBalanceSheet,
    HistoricalPeriodInput,
    HistoricalProfitLoss,
    StaffConfig,
    TransitionPeriodInput,
)
from .transition import calculate_transition_period

__all__ = [
    "CurriculumConfig",
    "CurriculumProgram",
    "DynamicPeriodCalculator",
    "DynamicPeriodInput",
    "EnrollmentConfig",
    "HistoricalBalanceSheet",
    "HistoricalPeriodInput",
    "HistoricalProfitLoss",
    "OperatingDraft",
    "StaffConfig",
    "TransitionPeriodInput",
    "allocate_students",
    "calculate_historical_period",
    "calculate_staff_costs",
    "calculate_transition_period",
    "distribute_by_grade",
    "enrollment_path",
    "program_fee",
    "students_for_year",
    "tuition_revenue",
]
