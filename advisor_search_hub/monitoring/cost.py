"""Cost and speed classification for Firestore operations."""

from ..models.metrics import PerformanceBucket

# Firestore list prices in USD per document
PRICING = {
    "read": 0.00000036,  # $0.36 per 100,000 reads
    "write": 0.0000018,  # $1.80 per 100,000 writes
    "delete": 0.0000018,  # $1.80 per 100,000 deletes
}

# (fast, slow) boundaries in milliseconds
THRESHOLDS = {
    "read": (100, 500),
    "write": (200, 1000),
    "query": (200, 800),
}


def pricing_category(operation_type: str) -> str | None:
    """Map an operation name onto a pricing category."""
    op = operation_type.lower()
    if any(word in op for word in ("read", "get", "query")):
        return "read"
    if any(word in op for word in ("write", "set", "add", "update")):
        return "write"
    if "delete" in op:
        return "delete"
    return None


def estimate_cost(operation_type: str, document_count: int) -> float:
    """Estimated USD cost of an operation; every operation bills at least one document."""
    category = pricing_category(operation_type)
    rate = PRICING[category] if category else 0.0
    return rate * max(document_count, 1)


def categorize_performance(duration: float, operation_type: str) -> PerformanceBucket:
    """Bucket a duration in milliseconds using per-operation thresholds."""
    op = operation_type.lower()
    if "write" in op:
        fast, slow = THRESHOLDS["write"]
    elif "query" in op:
        fast, slow = THRESHOLDS["query"]
    else:
        fast, slow = THRESHOLDS["read"]

    if duration < fast:
        return PerformanceBucket.FAST
    if duration < slow:
        return PerformanceBucket.MEDIUM
    return PerformanceBucket.SLOW
