"""Search session wiring.

A SearchSession owns the filter validator, the rule set and the performance
monitor for one application session. Create one when the app starts, pass
it to whatever builds queries, and close it when the session ends.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from .config.settings import AppSettings, get_settings
from .filtering.validator import FilterValidationService
from .models.results import PreparedFilters
from .models.rules import RuleSet
from .monitoring.performance_monitor import PerformanceMonitor
from .utils.config_loader import load_rule_set
from .utils.logging import log_filters, log_validation

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SearchSession:
    """Filter preparation and store monitoring for one app session."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        rules: RuleSet | None = None,
        monitor: PerformanceMonitor | None = None,
    ):
        self.settings = settings or get_settings()
        self.rules = rules or load_rule_set(self.settings.rules_file)
        self.validator = FilterValidationService(
            self.rules, enforce_required=self.settings.enforce_required
        )
        self.monitor = monitor or PerformanceMonitor.from_config(
            self.settings.monitoring
        )

    def prepare_filters(self, filters: Mapping[str, Any]) -> PreparedFilters:
        """Validate, check and order filters for the query builder.

        Complexity problems are reported but do not make the result invalid;
        only validation errors do.
        """
        validation = self.validator.validate_filters(filters)
        complexity = self.validator.validate_query_complexity(filters)
        optimized = self.validator.optimize_filter_order(filters)

        log_filters(logger, dict(filters), optimized)
        log_validation(logger, validation, complexity)

        return PreparedFilters(
            filters=optimized, validation=validation, complexity=complexity
        )

    async def run_query(
        self,
        operation: Callable[[], Awaitable[R]],
        collection: str,
        metadata: dict[str, Any] | None = None,
    ) -> R:
        """Execute a store query through the session's monitor."""
        return await self.monitor.monitor_query(operation, collection, metadata)

    def close(self) -> None:
        """End the session and drop recorded metrics."""
        summary = self.monitor.get_summary()
        if summary.total_operations:
            logger.info(
                f"Session closed after {summary.total_operations} store operations "
                f"(estimated cost ${summary.total_cost:.6f})"
            )
        self.monitor.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
