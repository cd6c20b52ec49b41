# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import time
from decimal import Decimal

import pytest

from leasecast.core import (
    CalculationTimeoutError,
    ConfigurationError,
    ConvergenceError,
    Deadline,
    LeasecastError,
)


class TestErrorHierarchy:
    def test_configuration_error_is_value_error(self):
        error = ConfigurationError("bad input", code="ENROLLMENT_NON_POSITIVE")
        assert isinstance(error, LeasecastError)
        assert isinstance(error, ValueError)
        assert str(error) == "[ENROLLMENT_NON_POSITIVE] bad input"

    def test_default_code_is_class_name(self):
        assert LeasecastError("boom").code == "LeasecastError"

    def test_convergence_error_carries_diagnostics(self):
        error = ConvergenceError(
            year=2030, iterations=5, residual=Decimal("12.5"), tolerance=Decimal("0.01")
        )
        assert error.code == "SOLVER_NOT_CONVERGED"
        assert error.year == 2030
        assert error.to_dict()["details"]["residual"] == "12.5"

    def test_timeout_error_is_timeout(self):
        error = CalculationTimeoutError(100, 150, stage="contract year 2030")
        assert isinstance(error, TimeoutError)
        assert error.code == "CALCULATION_TIMEOUT"
        assert "contract year 2030" in error.message


class TestDeadline:
    def test_unbounded_deadline_never_expires(self):
        deadline = Deadline()
        assert not deadline.expired
        deadline.check("anything")

    def test_zero_budget_expires_immediately(self):
        deadline = Deadline(budget_ms=0)
        with pytest.raises(CalculationTimeoutError):
            deadline.check("start")

    def test_generous_budget_does_not_expire(self):
        deadline = Deadline(budget_ms=60_000)
        time.sleep(0.001)
        assert not deadline.expired
        assert deadline.elapsed_ms > 0
