# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class PeriodTypeEnum(str, Enum):
    """
    Phase of the projection a fiscal year belongs to.

    Periods are always emitted in this order: every historical year first,
    then the transition bridge, then the contract (dynamic) years.
    """

    HISTORICAL = "historical"  # Actuals, passed through unchanged
    TRANSITION = "transition"  # Pre-filled from the prior year and grown
    DYNAMIC = "dynamic"  # Contract years driven by enrollment and curriculum


class RentModelEnum(str, Enum):
    """Rent-payment structures available during the contract period."""

    FIXED_ESCALATION = "fixed_escalation"
    REVENUE_SHARE = "revenue_share"
    PARTNER_INVESTMENT = "partner_investment"


class DepreciationRegimeEnum(str, Enum):
    """
    Depreciation regime of a ledger asset.

    PRE_CONTRACT assets decay from a seeded run-rate and remaining balance;
    CONTRACT assets depreciate straight-line over their own useful life from
    the acquisition year.
    """

    PRE_CONTRACT = "pre_contract"
    CONTRACT = "contract"


class RampCurveEnum(str, Enum):
    """Shape of the interpolated enrollment ramp when no explicit curve is given."""

    LINEAR = "linear"
    S_CURVE = "s_curve"


class StaffCostMethodEnum(str, Enum):
    """How staff costs are derived for contract years."""

    FIXED_PLUS_VARIABLE = "fixed_plus_variable"  # Fixed base + cost per student
    HEADCOUNT = "headcount"  # Students-per-staff ratios x average salaries
    REVENUE_PERCENT = "revenue_percent"  # Share of total revenue


class CostLineEnum(str, Enum):
    """Transition-period cost lines that may be held fixed instead of scaled."""

    STAFF_COSTS = "staff_costs"
    OTHER_OPEX = "other_opex"
