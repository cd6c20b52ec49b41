# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Rent models: fixed escalation, revenue share and partner investment yield.
"""

from .models import (
    AnyRentParams,
    FixedEscalationRent,
    PartnerInvestmentRent,
    RevenueShareRent,
    calculate_rent_expense,
    rent_model_of,
)

__all__ = [
    "AnyRentParams",
    "FixedEscalationRent",
    "PartnerInvestmentRent",
    "RevenueShareRent",
    "calculate_rent_expense",
    "rent_model_of",
]
