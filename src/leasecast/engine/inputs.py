# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ..capex.config import CapExConfig
from ..core.primitives import CircularSolverConfig, Model, SystemConfiguration
from ..periods.inputs import (
    DynamicPeriodInput,
    HistoricalPeriodInput,
    TransitionPeriodInput,
)
from ..working_capital.ratios import WorkingCapitalRatios


class CalculationEngineInput(Model):
    """
    Complete, self-contained input snapshot for one projection run.

    The run is a pure function of this snapshot (plus EngineSettings), which
    is also what the cache fingerprints.
    """

    proposal_id: Optional[str] = Field(
        default=None,
        description="Owning proposal; used only to invalidate cached runs.",
    )
    system_config: SystemConfiguration = Field(default_factory=SystemConfiguration)
    historical_periods: List[HistoricalPeriodInput] = Field(default_factory=list)
    transition_periods: List[TransitionPeriodInput] = Field(default_factory=list)
    working_capital_ratios: WorkingCapitalRatios = Field(
        default_factory=WorkingCapitalRatios,
        description="Unlocked ratios are re-derived from the final historical year.",
    )
    dynamic_period: DynamicPeriodInput
    capex_config: CapExConfig = Field(default_factory=CapExConfig)
    solver_config: CircularSolverConfig = Field(default_factory=CircularSolverConfig)
    contract_period_years: int = Field(default=30, description="Number of contract years.")
    contract_start_year: Optional[int] = Field(
        default=None,
        description="Defaults to the year after the last transition (or historical) year.",
    )

    @property
    def first_projection_year(self) -> int:
        return self.historical_periods[-1].year + 1

    @property
    def resolved_contract_start_year(self) -> int:
        if self.contract_start_year is not None:
            return self.contract_start_year
        if self.transition_periods:
            return self.transition_periods[-1].year + 1
        return self.first_projection_year

    @property
    def contract_end_year(self) -> int:
        return self.resolved_contract_start_year + self.contract_period_years - 1

    @property
    def effective_capex_config(self) -> CapExConfig:
        """Capex config on the dynamic template takes precedence when present."""
        if self.dynamic_period.capex_config is not None:
            return self.dynamic_period.capex_config
        return self.capex_config
