"""Query complexity checks against Firestore's compound-query limits.

check_query_complexity is advisory and only reports violations;
ensure_query_supported raises for callers that must not run such a query.
"""

from collections.abc import Mapping
from typing import Any

from ..models.results import ComplexityMetrics, ComplexityReport
from ..models.rules import FilterKind, RuleSet
from ..utils.errors import QueryTooComplexError
from .sanitize import is_empty_value

# Firestore limits for a single compound query
MAX_WHERE_CLAUSES = 10
MAX_ARRAY_CONTAINS_ANY = 10
MAX_RANGE_QUERIES = 1


def count_clauses(filters: Mapping[str, Any], rules: RuleSet) -> ComplexityMetrics:
    """Count active, array-membership and range clauses in a filter mapping."""
    array_filters = rules.names_of_kind(FilterKind.MULTI_SELECT)
    range_filters = rules.names_of_kind(FilterKind.RANGE)

    metrics = ComplexityMetrics()
    for filter_name, value in filters.items():
        if is_empty_value(value):
            continue

        metrics.where_clause_count += 1
        if filter_name in array_filters:
            metrics.array_contains_any_count += 1
        if filter_name in range_filters:
            metrics.range_query_count += 1

    return metrics


def check_query_complexity(
    filters: Mapping[str, Any], rules: RuleSet
) -> ComplexityReport:
    """Compare clause counts with the query limits.

    Args:
        filters: Filter name to value mapping
        rules: Rule set declaring which filters are ranges or multi-selects

    Returns:
        ComplexityReport with one issue string per exceeded limit
    """
    metrics = count_clauses(filters, rules)
    issues = []

    if metrics.where_clause_count > MAX_WHERE_CLAUSES:
        issues.append(
            f"Too many filter conditions "
            f"({metrics.where_clause_count}/{MAX_WHERE_CLAUSES})"
        )

    if metrics.array_contains_any_count > MAX_ARRAY_CONTAINS_ANY:
        issues.append(
            f"Too many array-contains-any queries "
            f"({metrics.array_contains_any_count}/{MAX_ARRAY_CONTAINS_ANY})"
        )

    if metrics.range_query_count > MAX_RANGE_QUERIES:
        issues.append(
            f"Too many range queries ({metrics.range_query_count}/{MAX_RANGE_QUERIES}). "
            "Consider using only one range filter at a time."
        )

    return ComplexityReport(is_valid=not issues, issues=issues, metrics=metrics)


def ensure_query_supported(
    filters: Mapping[str, Any], rules: RuleSet
) -> ComplexityReport:
    """Strict form of check_query_complexity for query builders.

    Raises:
        QueryTooComplexError: If any limit is exceeded
    """
    report = check_query_complexity(filters, rules)
    if not report.is_valid:
        raise QueryTooComplexError(
            issues=report.issues, metrics=report.metrics.model_dump()
        )
    return report
