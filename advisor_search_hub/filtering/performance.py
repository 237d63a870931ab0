"""Per-search timing report."""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from ..models.results import QueryPerformanceReport
from .sanitize import is_empty_value

SLOW_QUERY_MS = 2000
LARGE_RESULT_COUNT = 100


def measure_query_performance(
    start_time: float,
    end_time: float,
    result_count: int,
    filters: Mapping[str, Any],
) -> QueryPerformanceReport:
    """Summarise one executed search.

    Args:
        start_time: Start timestamp in milliseconds
        end_time: End timestamp in milliseconds
        result_count: Number of documents returned
        filters: Filters the search ran with

    Returns:
        QueryPerformanceReport for the search
    """
    duration = end_time - start_time
    active_filters = sum(1 for value in filters.values() if not is_empty_value(value))

    return QueryPerformanceReport(
        duration=duration,
        result_count=result_count,
        active_filters=active_filters,
        avg_time_per_result=duration / result_count if result_count > 0 else 0.0,
        is_slow_query=duration > SLOW_QUERY_MS,
        timestamp=datetime.now(UTC).isoformat(),
        filters=list(filters),
        complexity_score=active_filters * 10
        + (50 if result_count > LARGE_RESULT_COUNT else 0),
    )
