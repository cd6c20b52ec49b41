# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Working-capital ratio deriver: AR, prepaid, AP, accrued and deferred revenue
as constant fractions of each year's revenue.
"""

from .ratios import (
    WorkingCapitalBalances,
    WorkingCapitalRatios,
    derive_working_capital_ratios,
    resolve_working_capital_ratios,
)

__all__ = [
    "WorkingCapitalBalances",
    "WorkingCapitalRatios",
    "derive_working_capital_ratios",
    "resolve_working_capital_ratios",
]
