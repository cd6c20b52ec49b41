# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Single depreciable-asset abstraction shared by both regimes.

PRE_CONTRACT assets charge a run-rate each year until their depreciable base
is exhausted, and never restart. CONTRACT assets charge cost / useful life for
`useful_life_years` years starting in the acquisition year. In both cases the
charge is capped at the remaining net book value, which is floored at zero.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.primitives import ZERO, DepreciationRegimeEnum, Model
from .config import HistoricalDepreciationState


class DepreciableAsset(Model):
    name: str
    regime: DepreciationRegimeEnum
    acquisition_year: int
    cost: Decimal
    depreciable_base: Decimal
    useful_life_years: Optional[int] = None
    run_rate: Optional[Decimal] = None
    category: Optional[str] = None
    capitalized: bool = True  # False for the pool already carried in historical PP&E

    @classmethod
    def acquired(
        cls,
        name: str,
        year: int,
        amount: Decimal,
        useful_life_years: int,
        regime: DepreciationRegimeEnum = DepreciationRegimeEnum.CONTRACT,
        category: Optional[str] = None,
    ) -> "DepreciableAsset":
        run_rate = None
        if regime == DepreciationRegimeEnum.PRE_CONTRACT:
            run_rate = amount / Decimal(useful_life_years)
        return cls(
            name=name,
            regime=regime,
            acquisition_year=year,
            cost=amount,
            depreciable_base=amount,
            useful_life_years=useful_life_years,
            run_rate=run_rate,
            category=category,
        )

    @classmethod
    def from_historical_state(
        cls, state: HistoricalDepreciationState, cut_over_year: int
    ) -> "DepreciableAsset":
        """Seed the pre-contract pool from the cut-over PP&E position."""
        return cls(
            name="Historical PP&E",
            regime=DepreciationRegimeEnum.PRE_CONTRACT,
            acquisition_year=cut_over_year,
            cost=state.gross_ppe,
            depreciable_base=state.remaining_to_depreciate,
            run_rate=state.annual_depreciation,
            capitalized=False,
        )

    def scheduled_charge(self, year: int) -> Decimal:
        """Charge for `year` before the net-book-value cap."""
        if year < self.acquisition_year:
            return ZERO
        if self.regime == DepreciationRegimeEnum.PRE_CONTRACT:
            if self.run_rate is not None:
                return self.run_rate
            return self.depreciable_base / Decimal(self.useful_life_years)
        age = year - self.acquisition_year
        if self.useful_life_years and 0 <= age < self.useful_life_years:
            return self.depreciable_base / Decimal(self.useful_life_years)
        return ZERO

    def net_book_value(self, accumulated: Decimal) -> Decimal:
        return max(ZERO, self.depreciable_base - accumulated)

    def charge(self, year: int, accumulated: Decimal) -> Decimal:
        return min(self.scheduled_charge(year), self.net_book_value(accumulated))
