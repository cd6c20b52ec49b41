# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable models for inputs, configuration and emitted statements.
    Mutable runtime state (asset ledgers, solver estimates) lives in
    dataclasses outside of models.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,  # Emitted periods are never mutated downstream
        extra="forbid",  # Catches typos and missing field definitions immediately
    )
