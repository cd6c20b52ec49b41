# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Boundary serialization and content fingerprints.

Every Decimal leaves the engine as a string so no precision is lost in
storage or transport. Fingerprints hash the canonical JSON of an input
snapshot and the run settings, so equal runs share a cache entry.
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..core.primitives import EngineSettings
from .inputs import CalculationEngineInput
from .results import CalculationEngineOutput

FINGERPRINT_PREFIX = "calc:"
RUNTIME_FIELDS = frozenset({"calculated_at", "performance"})


def to_boundary(value: Any) -> Any:
    """Recursively convert a model dump into JSON-safe values with Decimals as strings."""
    if isinstance(value, BaseModel):
        return to_boundary(value.model_dump())
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_boundary(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_boundary(item) for item in value]
    return value


def serialize_output(
    output: CalculationEngineOutput, include_runtime: bool = True
) -> Dict[str, Any]:
    """
    Output contract as plain data.

    Args:
        output: Completed run
        include_runtime: Drop timing and timestamp when False, leaving only
            content that is a pure function of the input
    """
    payload = to_boundary(output)
    if not include_runtime:
        for key in RUNTIME_FIELDS:
            payload.pop(key, None)
    return payload


def output_to_json(output: CalculationEngineOutput, include_runtime: bool = True) -> str:
    return json.dumps(
        serialize_output(output, include_runtime=include_runtime),
        sort_keys=True,
        separators=(",", ":"),
    )


def input_fingerprint(
    engine_input: CalculationEngineInput, settings: Optional[EngineSettings] = None
) -> str:
    """
    SHA-256 over the canonical JSON of the input snapshot and the settings
    that shape its output (numeric policy and validation tolerances).

    Omitted settings fingerprint as the defaults, as in `calculate`.
    """
    settings = settings or EngineSettings()
    payload = {
        "input": to_boundary(engine_input),
        "settings": to_boundary(settings.model_dump(include={"numeric", "validation"})),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{FINGERPRINT_PREFIX}{digest}"
