# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from ..core.primitives import (
    DecimalBetween0And1,
    DepreciationRegimeEnum,
    Model,
    NonNegativeDecimal,
    ValidationMixin,
)


class CapExCategory(Model):
    """
    Asset category with its depreciation regime and useful life.

    A category may carry its own periodic reinvestment (e.g. IT equipment
    refreshed every 5 years), independent of deal-level auto-reinvestment.
    """

    name: str
    regime: DepreciationRegimeEnum = DepreciationRegimeEnum.CONTRACT
    useful_life_years: int = Field(
        ..., description="Straight-line life in years; checked by the engine preflight."
    )
    reinvest_frequency_years: Optional[int] = Field(
        default=None, description="Years between category refreshes; None disables."
    )
    reinvest_amount: Optional[NonNegativeDecimal] = None
    reinvest_start_year: Optional[int] = Field(
        default=None,
        description="Anchor year for refreshes; defaults to the contract start year.",
    )


class HistoricalDepreciationState(Model):
    """PP&E position at the cut-over from actuals to projections."""

    gross_ppe: NonNegativeDecimal
    accumulated_depreciation: NonNegativeDecimal
    annual_depreciation: NonNegativeDecimal = Field(
        ..., description="Run-rate charge applied each year until the balance is exhausted."
    )
    remaining_to_depreciate: NonNegativeDecimal = Field(
        ..., description="Book value still to be charged at cut-over."
    )

    @property
    def net_book_value(self) -> Decimal:
        return self.gross_ppe - self.accumulated_depreciation


class TransitionCapExEntry(Model):
    """A capex event in a transition year, depreciated per its category."""

    year: int
    category: str
    amount: NonNegativeDecimal
    description: Optional[str] = None


class VirtualAsset(Model):
    """A manually entered one-off asset purchase."""

    year: int
    name: str
    amount: NonNegativeDecimal
    useful_life_years: int
    regime: DepreciationRegimeEnum = DepreciationRegimeEnum.CONTRACT
    category: Optional[str] = None


class AutoReinvestmentConfig(Model, ValidationMixin):
    """
    Periodic reinvestment injected as new contract-regime assets.

    The injected amount is either fixed or a share of that year's total
    revenue. Injections fall on years strictly after the anchor year that are
    a whole number of `frequency_years` from it.
    """

    enabled: bool = False
    frequency_years: int = Field(default=5, description="Years between injections.")
    fixed_amount: Optional[NonNegativeDecimal] = None
    revenue_percent: Optional[DecimalBetween0And1] = None
    useful_life_years: int = Field(default=10, description="Life of each injected asset.")
    start_year: Optional[int] = Field(
        default=None, description="Anchor year; defaults to the contract start year."
    )
    category: str = "Auto-Reinvestment"

    @model_validator(mode="after")
    def check_amount_basis(self) -> "AutoReinvestmentConfig":
        if self.enabled:
            self.validate_either_or_required(
                "fixed_amount",
                "revenue_percent",
                "Auto-reinvestment needs exactly one of fixed_amount or revenue_percent",
            )
        return self


class CapExConfig(Model):
    """Complete capital-expenditure configuration for a run."""

    categories: List[CapExCategory] = Field(default_factory=list)
    historical_state: Optional[HistoricalDepreciationState] = Field(
        default=None,
        description=(
            "Cut-over PP&E position. When omitted it is read from the final "
            "historical year (run-rate = that year's depreciation)."
        ),
    )
    transition_capex: List[TransitionCapExEntry] = Field(default_factory=list)
    virtual_assets: List[VirtualAsset] = Field(default_factory=list)
    auto_reinvestment: Optional[AutoReinvestmentConfig] = None

    def category(self, name: str) -> Optional[CapExCategory]:
        for category in self.categories:
            if category.name == name:
                return category
        return None
