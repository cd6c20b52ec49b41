# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Presentation tables (pandas) for completed projection runs.
"""

from .base import BaseReport
from .interface import ReportingInterface
from .statements import MetricsReport, OperatingReport, StatementReport, ValidationReport

__all__ = [
    "BaseReport",
    "MetricsReport",
    "OperatingReport",
    "ReportingInterface",
    "StatementReport",
    "ValidationReport",
]
