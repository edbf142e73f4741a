"""Validation utilities for Patrol Assign.

This module provides reusable validation functions with consistent error handling.
"""

# Patrol Assign
# Copyright (C) 2025  Patrol Assign developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Any, Mapping, Optional, Sequence


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Generic Validation ==========


def validate_non_empty(value: Any, field_name: str = "Field") -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None or not str(value).strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=str(value).strip())


def validate_positive_integer(value: Any, field_name: str = "Value") -> ValidationResult:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is required",
        )

    try:
        int_value = int(value)
        if int_value <= 0:
            return ValidationResult(
                is_valid=False,
                error_message=f"{field_name} must be positive",
            )
        return ValidationResult(is_valid=True, sanitized_value=str(int_value))
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )


# ========== Participant Validation ==========

PARTICIPANT_FIELDS = ("id", "name", "club", "division", "gender")


def validate_participant_fields(
    data: Mapping[str, Any], fields: Sequence[str] = PARTICIPANT_FIELDS
) -> list:
    """Check that every registry field is a non-empty string.

    Args:
        data: Raw participant record
        fields: Field names that must be present and non-empty

    Returns:
        List of error messages; empty when the record is valid
    """
    errors = []
    for field_name in fields:
        result = validate_non_empty(data.get(field_name), field_name.capitalize())
        if not result:
            errors.append(result.error_message)
    return errors
