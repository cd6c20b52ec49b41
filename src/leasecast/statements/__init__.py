# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial statements per fiscal year and the validator that checks them.

The assembler lives in `leasecast.statements.assembler` and is imported
directly by the engine.
"""

from .models import (
    BalanceSheet,
    CapExSummary,
    CashFlowStatement,
    OperatingMetrics,
    Period,
    ProfitLossStatement,
    SolverDiagnostics,
)
from .validators import (
    ValidationSummary,
    ValidationWarning,
    check_balance,
    check_cash_reconciliation,
    check_linkage,
    validate_periods,
)

__all__ = [
    "BalanceSheet",
    "CapExSummary",
    "CashFlowStatement",
    "OperatingMetrics",
    "Period",
    "ProfitLossStatement",
    "SolverDiagnostics",
    "ValidationSummary",
    "ValidationWarning",
    "check_balance",
    "check_cash_reconciliation",
    "check_linkage",
    "validate_periods",
]
