# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Rent models for the contract period"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from ..core.primitives import (
    ZERO,
    DecimalBetween0And1,
    GrowthRate,
    Model,
    NonNegativeDecimal,
    RentModelEnum,
    step_escalation_factor,
)

logger = logging.getLogger(__name__)


class FixedEscalationRent(Model):
    """
    Base rent escalated in steps.

    Rent for year y is base_rent x (1 + growth_rate) ** floor((y - start) / frequency),
    so it is constant within each `frequency`-year block and jumps by exactly
    (1 + growth_rate) at each block boundary.

    Example:
        >>> rent = FixedEscalationRent(
        ...     base_rent=Decimal("1000000"), growth_rate=Decimal("0.03"), frequency=2
        ... )
        >>> rent.calculate(2030, contract_start_year=2028)
        Decimal('1030000.00')
    """

    rent_model: Literal["fixed_escalation"] = "fixed_escalation"
    base_rent: NonNegativeDecimal = Field(..., description="Rent in the contract start year.")
    growth_rate: GrowthRate = Field(default=ZERO, description="Growth applied per step.")
    frequency: int = Field(default=1, description="Years per escalation step.")

    def calculate(
        self, year: int, contract_start_year: int, total_revenue: Decimal = ZERO
    ) -> Decimal:
        return self.base_rent * step_escalation_factor(
            self.growth_rate, year - contract_start_year, self.frequency
        )


class RevenueShareRent(Model):
    """
    Rent as a share of the year's total revenue.

    No floor or cap: rent tracks revenue exactly, including in near-zero or
    very large revenue years.
    """

    rent_model: Literal["revenue_share"] = "revenue_share"
    revenue_share_percent: DecimalBetween0And1 = Field(
        ..., description="Fraction of total revenue (tuition + other) paid as rent."
    )

    def calculate(
        self, year: int, contract_start_year: int, total_revenue: Decimal = ZERO
    ) -> Decimal:
        return total_revenue * self.revenue_share_percent


class PartnerInvestmentRent(Model):
    """
    Yield on the partner's land and construction investment.

    Base rent is (land_size x land_price_per_sqm + bua_size x construction_cost_per_sqm)
    x yield_rate, escalated on the same step schedule as fixed escalation.
    With a zero yield the partner instead recovers its capital in equal
    instalments over `recovery_years` (the contract length by default), still
    subject to escalation.
    """

    rent_model: Literal["partner_investment"] = "partner_investment"
    land_size: NonNegativeDecimal = Field(..., description="Land area in sqm.")
    land_price_per_sqm: NonNegativeDecimal
    bua_size: NonNegativeDecimal = Field(..., description="Built-up area in sqm.")
    construction_cost_per_sqm: NonNegativeDecimal
    yield_rate: DecimalBetween0And1
    growth_rate: GrowthRate = ZERO
    frequency: int = 1
    recovery_years: Optional[int] = Field(
        default=None,
        gt=0,
        description="Capital recovery horizon when yield_rate is zero.",
    )

    @property
    def total_investment(self) -> Decimal:
        return (
            self.land_size * self.land_price_per_sqm
            + self.bua_size * self.construction_cost_per_sqm
        )

    def base_rent(self, contract_years: int) -> Decimal:
        if self.yield_rate == ZERO:
            horizon = self.recovery_years or contract_years
            return self.total_investment / Decimal(horizon)
        return self.total_investment * self.yield_rate

    def calculate(
        self,
        year: int,
        contract_start_year: int,
        total_revenue: Decimal = ZERO,
        contract_years: int = 30,
    ) -> Decimal:
        return self.base_rent(contract_years) * step_escalation_factor(
            self.growth_rate, year - contract_start_year, self.frequency
        )


AnyRentParams = Annotated[
    Union[FixedEscalationRent, RevenueShareRent, PartnerInvestmentRent],
    Field(discriminator="rent_model"),
]


def rent_model_of(params: AnyRentParams) -> RentModelEnum:
    return RentModelEnum(params.rent_model)


def calculate_rent_expense(
    params: AnyRentParams,
    year: int,
    contract_start_year: int,
    total_revenue: Decimal,
    contract_years: int = 30,
) -> Decimal:
    """
    Dispatch to the rent model for one contract year.

    Raises:
        TypeError: If `params` is not one of the three rent shapes
    """
    if isinstance(params, FixedEscalationRent):
        rent = params.calculate(year, contract_start_year)
    elif isinstance(params, RevenueShareRent):
        rent = params.calculate(year, contract_start_year, total_revenue)
    elif isinstance(params, PartnerInvestmentRent):
        rent = params.calculate(
            year, contract_start_year, contract_years=contract_years
        )
    else:
        raise TypeError(f"Unsupported rent parameters: {type(params).__name__}")
    logger.debug(f"Rent {year} ({params.rent_model}): {rent}")
    return rent
