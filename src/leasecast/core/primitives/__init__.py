# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Leasecast Core Primitives

Essential building blocks for every projection: the immutable model base,
decimal arithmetic policy, enums, constrained types and run settings.
"""

from .enums import (
    CostLineEnum,
    DepreciationRegimeEnum,
    PeriodTypeEnum,
    RampCurveEnum,
    RentModelEnum,
    StaffCostMethodEnum,
)
from .model import Model
from .numeric import (
    HUNDRED,
    ONE,
    TWO,
    ZERO,
    NumericContext,
    average,
    decimal_sum,
    escalation_steps,
    round_currency,
    round_half_up,
    safe_divide,
    step_escalation_factor,
    to_decimal,
)
from .settings import (
    CircularSolverConfig,
    EngineSettings,
    SystemConfiguration,
    ValidationSettings,
)
from .types import (
    DecimalBetween0And1,
    FiscalYear,
    GrowthRate,
    NonNegativeDecimal,
    PositiveInt,
    PositiveIntGt0,
)
from .validation import ValidationMixin

__all__ = [
    "CircularSolverConfig",
    "CostLineEnum",
    "DecimalBetween0And1",
    "DepreciationRegimeEnum",
    "EngineSettings",
    "FiscalYear",
    "GrowthRate",
    "HUNDRED",
    "Model",
    "NonNegativeDecimal",
    "NumericContext",
    "ONE",
    "PeriodTypeEnum",
    "PositiveInt",
    "PositiveIntGt0",
    "RampCurveEnum",
    "RentModelEnum",
    "StaffCostMethodEnum",
    "SystemConfiguration",
    "TWO",
    "ValidationMixin",
    "ValidationSettings",
    "ZERO",
    "average",
    "decimal_sum",
    "escalation_steps",
    "round_currency",
    "round_half_up",
    "safe_divide",
    "step_escalation_factor",
    "to_decimal",
]
