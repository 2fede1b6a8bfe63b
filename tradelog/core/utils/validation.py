"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

from typing import Any

from tradelog.core.exceptions.journal import ValidationError


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a numeric value is positive.

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return value


def validate_account_id(account_id: Any, param_name: str = "account_id") -> str:
    """Validate an account identifier tag.

    Raises:
        ValidationError: If the identifier is empty or not a string
    """
    if not isinstance(account_id, str) or not account_id.strip():
        raise ValidationError(f"{param_name} must be a non-empty string")
    return account_id.strip()
