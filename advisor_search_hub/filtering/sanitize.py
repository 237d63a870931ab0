"""Helpers for cleaning and spot-checking individual filter values."""

from typing import Any

from ..models.filters import is_empty_value
from ..utils.config_loader import load_default_rules

__all__ = [
    "is_empty_value",
    "is_valid_account_minimum_range",
    "is_valid_aum_range",
    "is_valid_city_name",
    "sanitize_filter_value",
]


def is_valid_city_name(city: Any) -> bool:
    return isinstance(city, str) and 0 < len(city) <= 100


def is_valid_aum_range(value: Any) -> bool:
    """Check an assets-under-management bucket against the bundled rules."""
    allowed = load_default_rules().rules["assetsUnderManagement"].allowed_values
    return value in (allowed or ())


def is_valid_account_minimum_range(value: Any) -> bool:
    """Check an account-minimum bucket against the bundled rules."""
    allowed = load_default_rules().rules["accountMinimum"].allowed_values
    return value in (allowed or ())


def sanitize_filter_value(value: Any, filter_type: str) -> Any:
    """Coerce a raw form value to the given rule type.

    Args:
        value: Raw value from the search form
        filter_type: Rule type: "string", "array" or "boolean"

    Returns:
        The cleaned value, or None when ``value`` is None
    """
    if value is None:
        return None

    if filter_type == "string":
        return value.strip() if isinstance(value, str) else str(value).strip()
    if filter_type == "array":
        if not isinstance(value, list | tuple):
            return []
        return [item for item in value if item is not None and item != ""]
    if filter_type == "boolean":
        return bool(value)
    return value
