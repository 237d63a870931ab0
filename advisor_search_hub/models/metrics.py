"""Document-store operation metric models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class PerformanceBucket(str, Enum):
    """Coarse speed category of an operation."""

    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"


class OperationMetric(BaseModel):
    """One timed document-store operation."""

    id: str
    operation_type: str
    collection: str
    duration: float = Field(..., ge=0.0, description="Duration in milliseconds")
    document_count: int = Field(0, ge=0)
    start_time: datetime
    end_time: datetime
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    cost: float = Field(0.0, ge=0.0, description="Estimated cost in USD")
    performance: PerformanceBucket


class AggregateStats(BaseModel):
    """Running totals for one (operation type, collection) pair."""

    count: int = 0
    total_duration: float = 0.0
    total_documents: int = 0
    total_cost: float = 0.0
    errors: int = 0
    last_executed: datetime | None = None


class TimeRange(BaseModel):
    start: datetime | None = None
    end: datetime | None = None


class PerformanceSummary(BaseModel):
    """Summary over the recorded operation history."""

    total_operations: int = 0
    total_cost: float = 0.0
    average_duration: float = 0.0
    operation_types: dict[str, int] = Field(default_factory=dict)
    collections: dict[str, int] = Field(default_factory=dict)
    performance: dict[str, int] = Field(
        default_factory=lambda: {bucket.value: 0 for bucket in PerformanceBucket}
    )
    errors: int = 0
    time_range: TimeRange = Field(default_factory=TimeRange)


class Recommendation(BaseModel):
    """Advisory message derived from the recorded operations."""

    type: str
    priority: str
    message: str
    impact: str
