# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Metrics & valuation: NPV, IRR, annualized EBITDA and rent, and NAV.
"""

from .metrics import ProjectionMetrics, ProjectionValuation

__all__ = ["ProjectionMetrics", "ProjectionValuation"]
