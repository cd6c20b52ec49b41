# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
CapEx & depreciation: asset categories, the two depreciation regimes, manual
assets and periodic reinvestment.
"""

from .assets import DepreciableAsset
from .config import (
    AutoReinvestmentConfig,
    CapExCategory,
    CapExConfig,
    HistoricalDepreciationState,
    TransitionCapExEntry,
    VirtualAsset,
)
from .scheduler import CapExScheduler, CapExYearResult, reinvestment_due

__all__ = [
    "AutoReinvestmentConfig",
    "CapExCategory",
    "CapExConfig",
    "CapExScheduler",
    "CapExYearResult",
    "DepreciableAsset",
    "HistoricalDepreciationState",
    "TransitionCapExEntry",
    "VirtualAsset",
    "reinvestment_due",
]
