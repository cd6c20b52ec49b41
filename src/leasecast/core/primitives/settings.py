# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from .model import Model
from .numeric import NumericContext
from .types import DecimalBetween0And1, NonNegativeDecimal


class SystemConfiguration(Model):
    """
    Deal-wide financial rates, fixed for the duration of a run.

    These rates feed the circular solver (interest, deposit income, zakat and
    the minimum cash floor) and the valuation step (discount rate).
    """

    zakat_rate: DecimalBetween0And1 = Field(
        default=Decimal("0.025"),
        description="Zakat charged on max(0, equity + EBT - net PP&E).",
    )
    debt_interest_rate: DecimalBetween0And1 = Field(
        default=Decimal("0.05"),
        description="Annual rate on the average plug-debt balance.",
    )
    deposit_interest_rate: DecimalBetween0And1 = Field(
        default=Decimal("0.02"),
        description="Annual rate earned on average cash held above the minimum.",
    )
    min_cash_balance: NonNegativeDecimal = Field(
        default=Decimal("1000000"),
        description="Cash floor; shortfalls below it are funded with plug debt.",
    )
    discount_rate: Optional[DecimalBetween0And1] = Field(
        default=None,
        description=(
            "Discount rate for NPV and annualization. Falls back to the debt "
            "interest rate when not supplied."
        ),
    )

    @property
    def effective_discount_rate(self) -> Decimal:
        if self.discount_rate is not None:
            return self.discount_rate
        return self.debt_interest_rate


class CircularSolverConfig(Model):
    """
    Fixed-point iteration controls for the interest/cash/debt solver.

    Bounds are enforced by the engine preflight so that a bad configuration is
    reported as a ConfigurationError with a machine-readable code.
    """

    max_iterations: int = Field(
        default=100, description="Iteration budget per fiscal year."
    )
    convergence_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        description="Absolute tolerance (currency units) on interest and debt changes.",
    )
    relaxation_factor: Decimal = Field(
        default=Decimal("0.5"),
        description="Damping coefficient in (0, 1]; 1 disables damping.",
    )


class ValidationSettings(Model):
    """Tolerances used when checking the accounting identities of each period."""

    balance_tolerance: NonNegativeDecimal = Field(
        default=Decimal("100"),
        description="Max |assets - (liabilities + equity)| before a warning is raised.",
    )
    cash_tolerance: NonNegativeDecimal = Field(
        default=Decimal("100"),
        description="Max |beginning + CFO + CFI + CFF - ending| before a warning is raised.",
    )


class EngineSettings(Model):
    """
    Run-level engine settings.

    Example:
        ```python
        settings = EngineSettings(
            validation=ValidationSettings(balance_tolerance=Decimal("1")),
            log_solver_iterations=True,
        )
        ```
    """

    numeric: NumericContext = Field(default_factory=NumericContext)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    log_solver_iterations: bool = Field(
        default=False,
        description="Emit a DEBUG record for every solver iteration, not just per year.",
    )
