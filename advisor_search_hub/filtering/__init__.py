"""Search filter validation, complexity checks and ordering."""

from .complexity import check_query_complexity, ensure_query_supported
from .optimizer import optimize_filter_order
from .sanitize import is_empty_value, sanitize_filter_value
from .validator import FilterValidationService

__all__ = [
    "FilterValidationService",
    "check_query_complexity",
    "ensure_query_supported",
    "is_empty_value",
    "optimize_filter_order",
    "sanitize_filter_value",
]
