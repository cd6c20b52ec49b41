# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from decimal import Decimal
from typing import Annotated

from pydantic import Field

# constrained types
PositiveInt = Annotated[int, Field(strict=True, ge=0)]
PositiveIntGt0 = Annotated[int, Field(strict=True, gt=0)]
FiscalYear = Annotated[int, Field(strict=True, ge=1900, le=2300)]
NonNegativeDecimal = Annotated[Decimal, Field(ge=0)]
DecimalBetween0And1 = Annotated[Decimal, Field(ge=0, le=1)]
GrowthRate = Annotated[Decimal, Field(gt=-1)]
