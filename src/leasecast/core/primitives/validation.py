# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reusable Pydantic validation utilities for common input-shape patterns.

This module provides standardized checks for:
- Mutual exclusivity (either/or requirements)
- Paired fields (both or neither)
- Conditional requirements (if X then Y)

These run inside `model_validator(mode="after")` hooks and raise ValueError,
which Pydantic surfaces as a ValidationError on construction.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union


class ValidationMixin:
    """
    Mixin class providing reusable validation methods for Pydantic models.

    Inherit alongside `Model` and call the helpers from an after-validator.
    """

    def validate_either_or_required(
        self,
        field_a: str,
        field_b: str,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Validate that exactly one of two fields is provided.

        Raises:
            ValueError: If neither or both fields are provided
        """
        value_a = getattr(self, field_a, None)
        value_b = getattr(self, field_b, None)

        if value_a is None and value_b is None:
            msg = error_message or f"Either {field_a} or {field_b} must be provided"
            raise ValueError(msg)

        if value_a is not None and value_b is not None:
            msg = error_message or f"Cannot provide both {field_a} and {field_b}"
            raise ValueError(msg)

    def validate_paired_fields(
        self,
        field_a: str,
        field_b: str,
        error_message: Optional[str] = None,
    ) -> None:
        """Validate that two fields are either both provided or both omitted."""
        has_a = getattr(self, field_a, None) is not None
        has_b = getattr(self, field_b, None) is not None
        if has_a != has_b:
            msg = error_message or f"{field_a} and {field_b} must be provided together"
            raise ValueError(msg)

    def validate_conditional_requirement(
        self,
        condition_field: str,
        condition_values: Union[Any, List[Any]],
        required_field: str,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Validate that a field is required when a condition is met.

        Args:
            condition_field: Field name to check condition on
            condition_values: Value(s) that trigger the requirement
            required_field: Field that becomes required
            error_message: Custom error message

        Raises:
            ValueError: If required field is missing when condition is met
        """
        condition_value = getattr(self, condition_field, None)
        required_value = getattr(self, required_field, None)

        # Normalize condition_values to a list
        if not isinstance(condition_values, list):
            condition_values = [condition_values]

        if condition_value in condition_values and required_value is None:
            msg = (
                error_message
                or f"{required_field} is required when {condition_field} is {condition_value}"
            )
            raise ValueError(msg)
