"""Firestore operation monitoring."""

from .cost import categorize_performance, estimate_cost
from .performance_monitor import OperationTimer, PerformanceMonitor, count_documents

__all__ = [
    "OperationTimer",
    "PerformanceMonitor",
    "categorize_performance",
    "count_documents",
    "estimate_cost",
]
