"""Filter validation service.

Checks a search filter mapping against the rule set before it reaches the
query builder. Individual checks raise FilterValidationError; the
whole-mapping entry point collects those into a ValidationResult and never
raises for invalid input.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..models.filters import FilterSet
from ..models.results import (
    ComplexityReport,
    FilterErrorCode,
    QueryPerformanceReport,
    UserMessage,
    ValidationIssue,
    ValidationResult,
)
from ..models.rules import RuleSet, ValidationRule
from ..utils.config_loader import load_rule_set
from ..utils.errors import FilterValidationError
from .complexity import check_query_complexity, ensure_query_supported
from .messages import user_friendly_message
from .optimizer import optimize_filter_order
from .performance import measure_query_performance
from .sanitize import is_empty_value

logger = logging.getLogger(__name__)


class FilterValidationService:
    """Validates, checks and orders search filters for one rule set."""

    def __init__(self, rules: RuleSet | None = None, enforce_required: bool = False):
        """Initialize the service.

        Args:
            rules: Rule set to validate against (defaults to the bundled rules)
            enforce_required: Report required filters that are absent or empty.
                When False, empty values are skipped even for required rules.
        """
        self.rules = rules or load_rule_set()
        self.enforce_required = enforce_required
        self._last_result = ValidationResult(is_valid=True)

    def validate_filter(self, filter_name: str, value: Any) -> bool:
        """Validate one filter value.

        Raises:
            FilterValidationError: On the first failed check
        """
        rule = self.rules.get(filter_name)
        if rule is None:
            raise FilterValidationError(
                f"Unknown filter: {filter_name}",
                filter_name,
                FilterErrorCode.UNKNOWN_FILTER.value,
            )

        if rule.required and (value is None or value == ""):
            raise FilterValidationError(
                f"{filter_name} is required",
                filter_name,
                FilterErrorCode.REQUIRED_FIELD.value,
            )

        if not value and not rule.required:
            return True

        if rule.type == "string":
            self._check_string(filter_name, value, rule)
        elif rule.type == "array":
            self._check_array(filter_name, value, rule)
        elif rule.type == "boolean" and not isinstance(value, bool):
            raise FilterValidationError(
                f"{filter_name} must be a boolean",
                filter_name,
                FilterErrorCode.INVALID_TYPE.value,
            )

        if rule.allowed_values is not None:
            self._check_allowed(filter_name, value, rule)

        return True

    def _check_string(self, filter_name: str, value: Any, rule: ValidationRule):
        if not isinstance(value, str):
            raise FilterValidationError(
                f"{filter_name} must be a string",
                filter_name,
                FilterErrorCode.INVALID_TYPE.value,
            )
        if rule.max_length and len(value) > rule.max_length:
            raise FilterValidationError(
                f"{filter_name} exceeds maximum length of {rule.max_length}",
                filter_name,
                FilterErrorCode.MAX_LENGTH_EXCEEDED.value,
            )
        if not rule.matches_pattern(value):
            raise FilterValidationError(
                f"{filter_name} has invalid format",
                filter_name,
                FilterErrorCode.INVALID_FORMAT.value,
            )

    def _check_array(self, filter_name: str, value: Any, rule: ValidationRule):
        if not isinstance(value, list | tuple):
            raise FilterValidationError(
                f"{filter_name} must be an array",
                filter_name,
                FilterErrorCode.INVALID_TYPE.value,
            )
        if rule.max_items and len(value) > rule.max_items:
            raise FilterValidationError(
                f"{filter_name} exceeds maximum items of {rule.max_items}",
                filter_name,
                FilterErrorCode.MAX_ITEMS_EXCEEDED.value,
            )
        if rule.item_type == "string" and not all(isinstance(i, str) for i in value):
            raise FilterValidationError(
                f"{filter_name} items must be of type {rule.item_type}",
                filter_name,
                FilterErrorCode.INVALID_ITEM_TYPE.value,
            )

    def _check_allowed(self, filter_name: str, value: Any, rule: ValidationRule):
        allowed = rule.allowed_values
        if rule.type == "array":
            invalid = [item for item in value if item not in allowed]
            if invalid:
                raise FilterValidationError(
                    f"{filter_name} contains invalid values: "
                    + ", ".join(str(item) for item in invalid),
                    filter_name,
                    FilterErrorCode.INVALID_VALUES.value,
                    invalid_values=invalid,
                )
        elif value not in allowed:
            raise FilterValidationError(
                f"{filter_name} has invalid value: {value}",
                filter_name,
                FilterErrorCode.INVALID_VALUE.value,
            )

    def validate_filters(
        self, filters: Mapping[str, Any] | FilterSet
    ) -> ValidationResult:
        """Validate every non-empty filter and collect the failures.

        Errors follow the input iteration order. Empty values (None, "", [])
        are skipped.
        """
        if isinstance(filters, FilterSet):
            filters = filters.to_mapping()

        errors: list[ValidationIssue] = []
        for filter_name, value in filters.items():
            if is_empty_value(value):
                continue

            try:
                self.validate_filter(filter_name, value)
            except FilterValidationError as e:
                errors.append(_issue_from_error(e))
            except Exception as e:
                logger.warning(
                    f"Unexpected error validating {filter_name}: {e}", exc_info=True
                )
                errors.append(
                    ValidationIssue(
                        field=filter_name,
                        message=f"Unexpected validation error for {filter_name}: {e}",
                        code=FilterErrorCode.UNEXPECTED_ERROR.value,
                    )
                )

        if self.enforce_required:
            errors.extend(self._missing_required(filters))

        result = ValidationResult(is_valid=not errors, errors=errors, warnings=[])
        self._last_result = result
        return result

    def _missing_required(self, filters: Mapping[str, Any]) -> list[ValidationIssue]:
        missing = []
        for filter_name, rule in self.rules.rules.items():
            if rule.required and is_empty_value(filters.get(filter_name)):
                missing.append(
                    ValidationIssue(
                        field=filter_name,
                        message=f"{filter_name} is required",
                        code=FilterErrorCode.REQUIRED_FIELD.value,
                    )
                )
        return missing

    def validate_query_complexity(self, filters: Mapping[str, Any]) -> ComplexityReport:
        return check_query_complexity(filters, self.rules)

    def ensure_query_supported(self, filters: Mapping[str, Any]) -> ComplexityReport:
        return ensure_query_supported(filters, self.rules)

    def optimize_filter_order(self, filters: Mapping[str, Any]) -> dict[str, Any]:
        return optimize_filter_order(filters, self.rules)

    def get_user_friendly_message(self, issue: ValidationIssue) -> str:
        """Phrase one validation issue for display."""
        label = self.rules.label_for(issue.field)
        return user_friendly_message(issue.code, label, issue.message)

    def get_error_messages(
        self, result: ValidationResult | None = None
    ) -> list[UserMessage]:
        """User-facing messages for ``result``, or for the last validation run."""
        result = result or self._last_result
        return [
            UserMessage(
                field=issue.field,
                message=self.get_user_friendly_message(issue),
                code=issue.code,
            )
            for issue in result.errors
        ]

    def measure_query_performance(
        self,
        start_time: float,
        end_time: float,
        result_count: int,
        filters: Mapping[str, Any],
    ) -> QueryPerformanceReport:
        return measure_query_performance(start_time, end_time, result_count, filters)


def _issue_from_error(error: FilterValidationError) -> ValidationIssue:
    return ValidationIssue(
        field=error.field or "",
        message=error.message,
        code=error.code,
        invalid_values=error.invalid_values,
    )
