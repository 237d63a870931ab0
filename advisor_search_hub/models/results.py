"""Result models for filter validation and query shaping."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FilterErrorCode(str, Enum):
    """Machine-readable filter validation codes."""

    UNKNOWN_FILTER = "UNKNOWN_FILTER"
    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_TYPE = "INVALID_TYPE"
    MAX_LENGTH_EXCEEDED = "MAX_LENGTH_EXCEEDED"
    INVALID_FORMAT = "INVALID_FORMAT"
    MAX_ITEMS_EXCEEDED = "MAX_ITEMS_EXCEEDED"
    INVALID_ITEM_TYPE = "INVALID_ITEM_TYPE"
    INVALID_VALUE = "INVALID_VALUE"
    INVALID_VALUES = "INVALID_VALUES"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class ValidationIssue(BaseModel):
    """A single failed filter check."""

    field: str
    message: str
    code: str
    invalid_values: list[Any] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Outcome of validating a whole filter set."""

    is_valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class UserMessage(BaseModel):
    """Validation error phrased for display next to a form field."""

    field: str
    message: str
    code: str


class ComplexityMetrics(BaseModel):
    """Clause counts for a filter set."""

    where_clause_count: int = 0
    array_contains_any_count: int = 0
    range_query_count: int = 0


class ComplexityReport(BaseModel):
    """Filter set checked against the document store's query limits."""

    is_valid: bool
    issues: list[str] = Field(default_factory=list)
    metrics: ComplexityMetrics


class QueryPerformanceReport(BaseModel):
    """Timing of a single executed search."""

    duration: float = Field(..., description="Duration in milliseconds")
    result_count: int
    active_filters: int
    avg_time_per_result: float
    is_slow_query: bool
    timestamp: str
    filters: list[str]
    complexity_score: int


class PreparedFilters(BaseModel):
    """Filters ready for the query builder, with their checks."""

    filters: dict[str, Any]
    validation: ValidationResult
    complexity: ComplexityReport

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid
