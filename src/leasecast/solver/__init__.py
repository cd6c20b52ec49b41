# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Circular solver resolving interest, cash and plug debt within each year.
"""

from .circular import CircularSolver, OpeningPosition, SolverResult

__all__ = ["CircularSolver", "OpeningPosition", "SolverResult"]
