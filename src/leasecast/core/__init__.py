# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Core engine infrastructure: primitives, errors and pure financial math.
"""

from .calculations import FinancialCalculations
from .deadline import Deadline
from .errors import (
    CalculationTimeoutError,
    ConfigurationError,
    ConvergenceError,
    LeasecastError,
)

__all__ = [
    "CalculationTimeoutError",
    "ConfigurationError",
    "ConvergenceError",
    "Deadline",
    "FinancialCalculations",
    "LeasecastError",
]
