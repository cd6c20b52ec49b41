# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import importlib
import logging

"""
Leasecast - Financial Projection Engine for Long-Term School Lease Deals

Produces year-by-year Profit & Loss, Balance Sheet and Cash Flow statements
for a 30+ year operating lease, from historical actuals through a transition
bridge into the contract period, under one of several rent structures.

Key Entry Points:
- leasecast.engine.calculate() - Full projection with validation and metrics
- leasecast.engine.run_with_timeout() - Same, bounded by a wall-clock budget
- leasecast.engine.CalculationCache - Fingerprint-keyed memoization of runs
- leasecast.analysis.* - Scenario and sensitivity analysis
- leasecast.reporting.* - Tabular statement views

Example Usage:
    ```python
    from leasecast.engine import calculate, CalculationEngineInput

    engine_input = CalculationEngineInput(
        system_config=system_config,
        historical_periods=historical_periods,
        transition_periods=transition_periods,
        working_capital_ratios=ratios,
        dynamic_period=dynamic_template,
        capex_config=capex_config,
    )

    output = calculate(engine_input)
    print(f"NAV: {output.metrics.contract_nav:,.0f}")
    ```
"""

# Libraries should not configure logging; applications attach their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "capex",
    "core",
    "engine",
    "periods",
    "rent",
    "reporting",
    "solver",
    "statements",
    "valuation",
    "working_capital",
]


_LAZY_MODULES = {
    "analysis": "leasecast.analysis",
    "capex": "leasecast.capex",
    "core": "leasecast.core",
    "engine": "leasecast.engine",
    "periods": "leasecast.periods",
    "rent": "leasecast.rent",
    "reporting": "leasecast.reporting",
    "solver": "leasecast.solver",
    "statements": "leasecast.statements",
    "valuation": "leasecast.valuation",
    "working_capital": "leasecast.working_capital",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'leasecast' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
