# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Decimal arithmetic helpers.

Every currency amount and rate in the engine is a `decimal.Decimal`. The
precision and rounding mode are carried by a `NumericContext` value and bound
for the duration of one calculation with `decimal.localcontext`, so two runs
on different threads never share arithmetic settings.

Example:
    ```python
    ctx = NumericContext(precision=28)
    with ctx.bind():
        rent = to_decimal("1000000") * step_escalation_factor(
            to_decimal("0.03"), elapsed_years=7, frequency=3
        )
    ```
"""

from __future__ import annotations

import decimal
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Iterator, Literal, Union

from pydantic import Field

from .model import Model

ZERO = Decimal("0")
ONE = Decimal("1")
TWO = Decimal("2")
HUNDRED = Decimal("100")

RoundingMode = Literal[
    "ROUND_HALF_UP",
    "ROUND_HALF_EVEN",
    "ROUND_HALF_DOWN",
    "ROUND_DOWN",
    "ROUND_UP",
    "ROUND_CEILING",
    "ROUND_FLOOR",
]

NumberLike = Union[Decimal, int, str, float]


class NumericContext(Model):
    """Precision and rounding policy bound once per calculation."""

    precision: int = Field(
        default=28,
        ge=10,
        le=100,
        description="Significant digits used by every Decimal operation in a run.",
    )
    rounding: RoundingMode = Field(
        default=ROUND_HALF_UP,
        description="Rounding mode for arithmetic and for currency presentation.",
    )
    currency_places: int = Field(
        default=2, ge=0, le=6, description="Decimal places for presented currency."
    )

    def decimal_context(self) -> decimal.Context:
        return decimal.Context(prec=self.precision, rounding=self.rounding)

    @contextmanager
    def bind(self) -> Iterator[decimal.Context]:
        """Activate this policy for the current thread until the block exits."""
        with decimal.localcontext(self.decimal_context()) as ctx:
            yield ctx


def to_decimal(value: NumberLike) -> Decimal:
    """Convert a number to Decimal, routing floats through their repr."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_currency(value: Decimal, places: int = 2) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_half_up(value: Decimal) -> int:
    """Round to a whole number, halves away from zero (student counts)."""
    return int(value.quantize(ONE, rounding=ROUND_HALF_UP))


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == ZERO:
        return ZERO
    return numerator / denominator


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def average(a: Decimal, b: Decimal) -> Decimal:
    return (a + b) / TWO


def escalation_steps(elapsed_years: int, frequency: int) -> int:
    """Number of completed escalation blocks; zero before the anchor year."""
    if elapsed_years <= 0 or frequency <= 0:
        return 0
    return elapsed_years // frequency


def step_escalation_factor(
    rate: Decimal, elapsed_years: int, frequency: int
) -> Decimal:
    """
    Step-function growth factor: (1 + rate) ** floor(elapsed / frequency).

    Rates compound only at block boundaries, so the factor is constant within
    each `frequency`-year block.
    """
    return (ONE + rate) ** escalation_steps(elapsed_years, frequency)
