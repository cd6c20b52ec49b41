# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Year-by-year capex and depreciation scheduler.

The scheduler owns the mutable asset ledger for one run. Each call to
`step()` books the year's additions (transition events, manual assets,
category refreshes, auto-reinvestment) and returns the year's spending and
depreciation split by regime. Years must be stepped in increasing order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from ..core.errors import ConfigurationError
from ..core.primitives import ZERO, DepreciationRegimeEnum, Model, decimal_sum
from .assets import DepreciableAsset
from .config import CapExConfig, HistoricalDepreciationState

logger = logging.getLogger(__name__)


class CapExYearResult(Model):
    """Capex outcome for one fiscal year."""

    year: int
    spending: Decimal
    depreciation: Decimal
    pre_contract_depreciation: Decimal
    contract_depreciation: Decimal
    assets_added: int = 0
    net_book_value: Decimal = ZERO


def reinvestment_due(year: int, anchor_year: int, frequency_years: Optional[int]) -> bool:
    """True on years strictly after the anchor that are a multiple of the frequency from it."""
    if not frequency_years or frequency_years <= 0:
        return False
    elapsed = year - anchor_year
    return elapsed > 0 and elapsed % frequency_years == 0


@dataclass
class CapExScheduler:
    """
    Mutable asset ledger for a single run.

    Attributes:
        config: Capex configuration for the deal
        contract_start_year: First contract year; anchors refresh schedules
        assets: Every asset booked so far, including the historical pool
        accumulated: Accumulated depreciation per asset (parallel to `assets`)
    """

    config: CapExConfig
    contract_start_year: int
    assets: List[DepreciableAsset] = field(default_factory=list)
    accumulated: List[Decimal] = field(default_factory=list)
    last_year: Optional[int] = None

    @classmethod
    def from_config(
        cls,
        config: CapExConfig,
        contract_start_year: int,
        cut_over_year: int,
        fallback_state: Optional[HistoricalDepreciationState] = None,
    ) -> "CapExScheduler":
        """
        Build a scheduler seeded with the historical PP&E pool.

        Args:
            config: Capex configuration
            contract_start_year: First contract year
            cut_over_year: First projected year; the pool starts charging here
            fallback_state: Used when the config carries no historical state
        """
        scheduler = cls(config=config, contract_start_year=contract_start_year)
        state = config.historical_state or fallback_state
        if state is not None and state.remaining_to_depreciate > ZERO:
            scheduler._book(DepreciableAsset.from_historical_state(state, cut_over_year))
        return scheduler

    def _book(self, asset: DepreciableAsset) -> None:
        self.assets.append(asset)
        self.accumulated.append(ZERO)

    def _additions_for(
        self, year: int, total_revenue: Decimal, contract_phase: bool
    ) -> List[DepreciableAsset]:
        additions: List[DepreciableAsset] = []

        for entry in self.config.transition_capex:
            if entry.year != year:
                continue
            category = self.config.category(entry.category)
            if category is None:
                raise ConfigurationError(
                    f"Transition capex in {year} references unknown category '{entry.category}'",
                    code="CAPEX_CATEGORY_UNKNOWN",
                    details={"year": year, "category": entry.category},
                )
            additions.append(
                DepreciableAsset.acquired(
                    name=entry.description or f"{category.name} {year}",
                    year=year,
                    amount=entry.amount,
                    useful_life_years=category.useful_life_years,
                    regime=category.regime,
                    category=category.name,
                )
            )

        for virtual in self.config.virtual_assets:
            if virtual.year == year:
                additions.append(
                    DepreciableAsset.acquired(
                        name=virtual.name,
                        year=year,
                        amount=virtual.amount,
                        useful_life_years=virtual.useful_life_years,
                        regime=virtual.regime,
                        category=virtual.category,
                    )
                )

        if not contract_phase:
            return additions

        for category in self.config.categories:
            anchor = category.reinvest_start_year or self.contract_start_year
            if category.reinvest_amount and reinvestment_due(
                year, anchor, category.reinvest_frequency_years
            ):
                additions.append(
                    DepreciableAsset.acquired(
                        name=f"{category.name} refresh {year}",
                        year=year,
                        amount=category.reinvest_amount,
                        useful_life_years=category.useful_life_years,
                        regime=DepreciationRegimeEnum.CONTRACT,
                        category=category.name,
                    )
                )

        auto = self.config.auto_reinvestment
        if auto is not None and auto.enabled:
            anchor = auto.start_year or self.contract_start_year
            if reinvestment_due(year, anchor, auto.frequency_years):
                if auto.fixed_amount is not None:
                    amount = auto.fixed_amount
                else:
                    amount = total_revenue * auto.revenue_percent
                additions.append(
                    DepreciableAsset.acquired(
                        name=f"{auto.category} {year}",
                        year=year,
                        amount=amount,
                        useful_life_years=auto.useful_life_years,
                        regime=DepreciationRegimeEnum.CONTRACT,
                        category=auto.category,
                    )
                )

        return additions

    def step(
        self, year: int, total_revenue: Decimal = ZERO, contract_phase: bool = False
    ) -> CapExYearResult:
        """
        Book one fiscal year.

        Args:
            year: Fiscal year, strictly greater than the previous step
            total_revenue: Year's total revenue (basis for percentage reinvestment)
            contract_phase: Whether the year lies in the contract period

        Returns:
            CapExYearResult with spending and depreciation by regime
        """
        if self.last_year is not None and year <= self.last_year:
            raise ValueError(
                f"CapEx years must increase: {year} after {self.last_year}"
            )
        self.last_year = year

        additions = self._additions_for(year, total_revenue, contract_phase)
        for asset in additions:
            self._book(asset)

        by_regime: Dict[DepreciationRegimeEnum, Decimal] = {
            DepreciationRegimeEnum.PRE_CONTRACT: ZERO,
            DepreciationRegimeEnum.CONTRACT: ZERO,
        }
        for index, asset in enumerate(self.assets):
            charge = asset.charge(year, self.accumulated[index])
            if charge > ZERO:
                self.accumulated[index] += charge
                by_regime[asset.regime] += charge

        spending = decimal_sum(asset.cost for asset in additions if asset.capitalized)
        depreciation = decimal_sum(by_regime.values())
        result = CapExYearResult(
            year=year,
            spending=spending,
            depreciation=depreciation,
            pre_contract_depreciation=by_regime[DepreciationRegimeEnum.PRE_CONTRACT],
            contract_depreciation=by_regime[DepreciationRegimeEnum.CONTRACT],
            assets_added=len(additions),
            net_book_value=self.net_book_value,
        )
        logger.debug(
            f"CapEx {year}: spending {spending}, depreciation {depreciation} "
            f"({len(additions)} assets added)"
        )
        return result

    @property
    def net_book_value(self) -> Decimal:
        return decimal_sum(
            asset.net_book_value(accumulated)
            for asset, accumulated in zip(self.assets, self.accumulated)
        )
