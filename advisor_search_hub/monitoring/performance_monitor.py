"""Timing and cost tracking for Firestore operations.

A PerformanceMonitor is created by the application session that owns it and
keeps a bounded history of timed operations plus running totals per
(operation type, collection). Nothing is persisted.
"""

import logging
import time
import uuid
from collections import deque
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from ..config.settings import MonitoringConfig
from ..models.metrics import (
    AggregateStats,
    OperationMetric,
    PerformanceBucket,
    PerformanceSummary,
    Recommendation,
    TimeRange,
)
from .cost import categorize_performance, estimate_cost

logger = logging.getLogger(__name__)

R = TypeVar("R")

DEFAULT_MAX_HISTORY = 1000

# Recommendation thresholds
HIGH_COST_USD = 0.01
SLOW_OPERATION_RATIO = 0.1
ERROR_RATIO = 0.05
LARGE_RESULT_DOCUMENTS = 50
FREQUENT_COLLECTION_COUNT = 20

# Logging thresholds
PAGINATION_WARNING_DOCUMENTS = 100


def _error_text(error: BaseException | str | None) -> str | None:
    """Error text for a metric; message-less exceptions use their type name."""
    if error is None:
        return None
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return error or "Error"


class OperationTimer:
    """Times a single operation until ``end`` is called.

    Can also be used as a context manager; set ``document_count`` inside the
    block and the timer ends on exit, recording any exception raised.
    """

    def __init__(
        self,
        monitor: "PerformanceMonitor | None",
        operation_type: str,
        collection: str,
        metadata: dict[str, Any] | None = None,
    ):
        self.monitor = monitor
        self.operation_type = operation_type
        self.collection = collection
        self.metadata = metadata or {}
        self.id = f"{operation_type}_{collection}_{uuid.uuid4().hex}"
        self.document_count = 0
        self.start_time = time.perf_counter()
        self._ended = False

    def end(
        self, document_count: int = 0, error: BaseException | str | None = None
    ) -> OperationMetric | None:
        """Stop the timer and record the operation.

        Returns:
            The recorded metric, or None when monitoring is disabled or the
            timer already ended
        """
        if self._ended:
            return None
        self._ended = True

        if self.monitor is None:
            return None

        duration = (time.perf_counter() - self.start_time) * 1000
        return self.monitor._end_timer(self, duration, document_count, error)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end(0 if exc_val is not None else self.document_count, exc_val)


class PerformanceMonitor:
    """Tracks Firestore operation timings, costs and errors."""

    def __init__(self, enabled: bool = True, max_history: int = DEFAULT_MAX_HISTORY):
        self.enabled = enabled
        self.max_history = max_history
        self.query_history: deque[OperationMetric] = deque(maxlen=max_history)
        self.metrics: dict[tuple[str, str], AggregateStats] = {}

    @classmethod
    def from_config(cls, config: MonitoringConfig) -> "PerformanceMonitor":
        return cls(enabled=config.enabled, max_history=config.max_history)

    def start_timer(
        self,
        operation_type: str,
        collection: str,
        metadata: dict[str, Any] | None = None,
    ) -> OperationTimer:
        """Start timing an operation.

        Args:
            operation_type: Type of operation (read, write, query)
            collection: Collection name
            metadata: Additional metadata stored with the metric

        Returns:
            Timer whose ``end`` records the operation
        """
        return OperationTimer(
            self if self.enabled else None, operation_type, collection, metadata
        )

    def _end_timer(
        self,
        timer: OperationTimer,
        duration: float,
        document_count: int,
        error: BaseException | str | None,
    ) -> OperationMetric:
        end_time = datetime.now(UTC)
        metric = OperationMetric(
            id=timer.id,
            operation_type=timer.operation_type,
            collection=timer.collection,
            duration=duration,
            document_count=document_count,
            start_time=end_time - timedelta(milliseconds=duration),
            end_time=end_time,
            error=_error_text(error),
            metadata=timer.metadata,
            cost=self.estimate_cost(timer.operation_type, document_count),
            performance=self.categorize_performance(duration, timer.operation_type),
        )

        self.record_metric(metric)
        self._log_metric(metric)
        return metric

    def record_metric(self, metric: OperationMetric) -> None:
        """Add a metric to the history and the per-key totals."""
        # Newest first; the deque drops the oldest entry past max_history
        self.query_history.appendleft(metric)

        key = (metric.operation_type, metric.collection)
        stats = self.metrics.setdefault(key, AggregateStats())
        stats.count += 1
        stats.total_duration += metric.duration
        stats.total_documents += metric.document_count
        stats.total_cost += metric.cost
        stats.last_executed = metric.end_time
        if metric.error is not None:
            stats.errors += 1

    def _log_metric(self, metric: OperationMetric) -> None:
        logger.debug(
            f"Firestore {metric.operation_type} - {metric.collection} "
            f"({metric.duration:.2f}ms, {metric.document_count} documents, "
            f"${metric.cost:.6f}, {metric.performance.value})"
        )
        if metric.metadata:
            logger.debug(f"Metadata: {metric.metadata}")

        if metric.error is not None:
            logger.error(
                f"Firestore {metric.operation_type} on '{metric.collection}' failed: "
                f"{metric.error}"
            )
        if metric.performance == PerformanceBucket.SLOW:
            logger.warning(
                f"Slow {metric.operation_type} on '{metric.collection}' "
                f"({metric.duration:.2f}ms). Consider optimization."
            )
        if metric.document_count > PAGINATION_WARNING_DOCUMENTS:
            logger.warning(
                f"Large result set from '{metric.collection}' "
                f"({metric.document_count} documents). Consider pagination."
            )

    def estimate_cost(self, operation_type: str, document_count: int) -> float:
        return estimate_cost(operation_type, document_count)

    def categorize_performance(
        self, duration: float, operation_type: str
    ) -> PerformanceBucket:
        return categorize_performance(duration, operation_type)

    def get_summary(self) -> PerformanceSummary:
        """Summarise the operations currently in the history."""
        summary = PerformanceSummary(total_operations=len(self.query_history))
        if not self.query_history:
            return summary

        total_duration = 0.0
        start: datetime | None = None
        end: datetime | None = None

        for metric in self.query_history:
            summary.total_cost += metric.cost
            total_duration += metric.duration
            if metric.error is not None:
                summary.errors += 1

            summary.performance[metric.performance.value] += 1
            summary.operation_types[metric.operation_type] = (
                summary.operation_types.get(metric.operation_type, 0) + 1
            )
            summary.collections[metric.collection] = (
                summary.collections.get(metric.collection, 0) + 1
            )

            if start is None or metric.start_time < start:
                start = metric.start_time
            if end is None or metric.end_time > end:
                end = metric.end_time

        summary.average_duration = total_duration / len(self.query_history)
        summary.time_range = TimeRange(start=start, end=end)
        return summary

    def get_recommendations(self) -> list[Recommendation]:
        """Advisory messages for costly, slow or error-prone usage patterns."""
        recommendations = []
        summary = self.get_summary()

        if summary.total_cost > HIGH_COST_USD:
            recommendations.append(
                Recommendation(
                    type="cost",
                    priority="high",
                    message=(
                        f"High Firestore costs detected (${summary.total_cost:.4f}). "
                        "Consider implementing caching or reducing query frequency."
                    ),
                    impact="Reduce costs by 30-50%",
                )
            )

        slow = summary.performance[PerformanceBucket.SLOW.value]
        if slow > summary.total_operations * SLOW_OPERATION_RATIO:
            recommendations.append(
                Recommendation(
                    type="performance",
                    priority="high",
                    message=(
                        "Multiple slow queries detected. Review query patterns "
                        "and add appropriate indexes."
                    ),
                    impact="Improve user experience and reduce costs",
                )
            )

        large = sum(
            1
            for metric in self.query_history
            if metric.document_count > LARGE_RESULT_DOCUMENTS
        )
        if large:
            recommendations.append(
                Recommendation(
                    type="pagination",
                    priority="medium",
                    message=(
                        f"{large} queries returning large result sets. "
                        "Implement pagination."
                    ),
                    impact="Reduce bandwidth and improve performance",
                )
            )

        if summary.errors > summary.total_operations * ERROR_RATIO:
            recommendations.append(
                Recommendation(
                    type="reliability",
                    priority="high",
                    message=(
                        "High error rate detected. Review error handling "
                        "and retry logic."
                    ),
                    impact="Improve application reliability",
                )
            )

        for collection, count in summary.collections.items():
            if count > FREQUENT_COLLECTION_COUNT:
                recommendations.append(
                    Recommendation(
                        type="caching",
                        priority="medium",
                        message=(
                            f"Frequent queries to '{collection}' collection "
                            f"({count} times). Consider caching."
                        ),
                        impact="Reduce query costs and improve performance",
                    )
                )

        return recommendations

    def clear(self) -> None:
        """Forget all recorded operations."""
        self.metrics.clear()
        self.query_history.clear()

    def export(self) -> dict[str, Any]:
        """Export summary, recommendations, history and totals as plain data."""
        return {
            "summary": self.get_summary().model_dump(mode="json"),
            "recommendations": [r.model_dump() for r in self.get_recommendations()],
            "query_history": [m.model_dump(mode="json") for m in self.query_history],
            "metrics": {
                f"{operation_type}_{collection}": stats.model_dump(mode="json")
                for (operation_type, collection), stats in self.metrics.items()
            },
        }

    async def _monitor(
        self,
        operation_type: str,
        operation: Callable[[], Awaitable[R]],
        collection: str,
        metadata: dict[str, Any] | None,
        count_documents: Callable[[Any], int],
    ) -> R:
        timer = self.start_timer(operation_type, collection, metadata)
        try:
            result = await operation()
        except Exception as e:
            timer.end(0, e)
            raise
        timer.end(count_documents(result))
        return result

    async def monitor_read(
        self,
        operation: Callable[[], Awaitable[R]],
        collection: str,
        metadata: dict[str, Any] | None = None,
    ) -> R:
        """Run and record a document read.

        The document count is the number of returned documents, or 1 for a
        single snapshot that exists.
        """
        return await self._monitor(
            "read",
            operation,
            collection,
            metadata,
            lambda result: count_documents(result, single_exists=True),
        )

    async def monitor_write(
        self,
        operation: Callable[[], Awaitable[R]],
        collection: str,
        metadata: dict[str, Any] | None = None,
    ) -> R:
        """Run and record a write; writes always count as one document."""
        return await self._monitor(
            "write", operation, collection, metadata, lambda result: 1
        )

    async def monitor_query(
        self,
        operation: Callable[[], Awaitable[R]],
        collection: str,
        metadata: dict[str, Any] | None = None,
    ) -> R:
        """Run and record a query; the document count is the number returned."""
        return await self._monitor(
            "query", operation, collection, metadata, count_documents
        )


def count_documents(result: Any, single_exists: bool = False) -> int:
    """Number of documents in a store result.

    Accepts query snapshots exposing ``docs``, plain sequences of snapshots,
    and (with ``single_exists``) single document snapshots exposing ``exists``.
    """
    docs = getattr(result, "docs", None)
    if docs is None and isinstance(result, list | tuple):
        docs = result

    if docs:
        return len(docs)
    if single_exists and getattr(result, "exists", False):
        return 1
    return 0
