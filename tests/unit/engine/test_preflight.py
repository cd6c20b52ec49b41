# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for fail-fast configuration checks.

Each invalid snapshot must raise ConfigurationError with its code before
any period is computed.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from leasecast.capex import (
    AutoReinvestmentConfig,
    CapExCategory,
    CapExConfig,
    TransitionCapExEntry,
)
from leasecast.core import ConfigurationError
from leasecast.core.primitives import CircularSolverConfig
from leasecast.engine import validate_engine_input
from leasecast.periods import (
    CurriculumConfig,
    CurriculumProgram,
    EnrollmentConfig,
    TransitionPeriodInput,
)
from leasecast.rent import FixedEscalationRent


def _template_with(make_dynamic_period, **update):
    return make_dynamic_period().model_copy(update=update)


INVALID_CASES = {
    "HISTORICAL_PERIODS_MISSING": lambda make, dyn: make().model_copy(
        update={"historical_periods": []}
    ),
    "CONTRACT_PERIOD": lambda make, dyn: make(contract_period_years=61),
    "YEAR_SEQUENCE": lambda make, dyn: make(
        transition_periods=[TransitionPeriodInput(year=2025)]
    ),
    "ENROLLMENT_NON_POSITIVE": lambda make, dyn: make(steady_state_students=0),
    "RAMP_UP_RANGE_INVALID": lambda make, dyn: make(
        enrollment=EnrollmentConfig(steady_state_students=1000, ramp_up_enabled=True)
    ),
    "GRADE_DISTRIBUTION_SUM": lambda make, dyn: make(
        enrollment=EnrollmentConfig(
            steady_state_students=1000, grade_distribution={"G1": Decimal("0.5")}
        )
    ),
    "CURRICULUM_PROGRAM_COUNT": lambda make, dyn: make(
        dynamic_period=_template_with(
            dyn,
            curriculum=CurriculumConfig(
                programs=[
                    CurriculumProgram(name=name, base_fee=Decimal("1000"))
                    for name in ("A", "B", "C")
                ]
            ),
        )
    ),
    "CURRICULUM_FEE_NON_POSITIVE": lambda make, dyn: make(fee=Decimal("0")),
    "PROGRAM_SHARE_OUT_OF_RANGE": lambda make, dyn: make(
        dynamic_period=_template_with(
            dyn,
            curriculum=CurriculumConfig(
                programs=[
                    CurriculumProgram(name="National", base_fee=Decimal("1000")),
                    CurriculumProgram(name="IB", base_fee=Decimal("2000")),
                ]
            ),
        )
    ),
    "ESCALATION_FREQUENCY": lambda make, dyn: make(
        rent_params=FixedEscalationRent(base_rent=Decimal("1000"), frequency=0)
    ),
    "CAPEX_USEFUL_LIFE": lambda make, dyn: make(
        capex_config=CapExConfig(categories=[CapExCategory(name="Kit", useful_life_years=0)])
    ),
    "CAPEX_CATEGORY_UNKNOWN": lambda make, dyn: make(
        capex_config=CapExConfig(
            transition_capex=[
                TransitionCapExEntry(year=2024, category="Missing", amount=Decimal("1"))
            ]
        )
    ),
    "REINVESTMENT_FREQUENCY": lambda make, dyn: make(
        capex_config=CapExConfig(
            auto_reinvestment=AutoReinvestmentConfig(
                enabled=True, frequency_years=0, fixed_amount=Decimal("1")
            )
        )
    ),
    "SOLVER_CONFIG": lambda make, dyn: make(
        solver_config=CircularSolverConfig(relaxation_factor=Decimal("0"))
    ),
}


class TestPreflight:
    def test_default_snapshot_passes(self, engine_input):
        validate_engine_input(engine_input)

    @pytest.mark.parametrize("code", sorted(INVALID_CASES))
    def test_invalid_snapshot_raises_with_code(self, code, make_engine_input, make_dynamic_period):
        engine_input = INVALID_CASES[code](make_engine_input, make_dynamic_period)
        with pytest.raises(ConfigurationError) as excinfo:
            validate_engine_input(engine_input)
        assert excinfo.value.code == code

    def test_template_capex_config_is_checked(self, make_engine_input, make_dynamic_period):
        template = make_dynamic_period(
            capex_config=CapExConfig(categories=[CapExCategory(name="Kit", useful_life_years=0)])
        )
        with pytest.raises(ConfigurationError) as excinfo:
            validate_engine_input(make_engine_input(dynamic_period=template))
        assert excinfo.value.code == "CAPEX_USEFUL_LIFE"

    def test_error_details_are_recorded(self, make_engine_input):
        with pytest.raises(ConfigurationError) as excinfo:
            validate_engine_input(make_engine_input(steady_state_students=-5))
        assert excinfo.value.details["steady_state_students"] == -5
