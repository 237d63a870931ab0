"""Logging configuration."""

import logging
import sys
from typing import Any, TextIO


def configure_logging(
    log_level: str = "INFO", stream: TextIO | None = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Stream for log records (defaults to stdout)

    Returns:
        Configured logger instance
    """
    # Convert string log level to logging constant
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger("advisor_search_hub")
    logger.setLevel(numeric_level)

    # Replace handlers from earlier calls
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    return logger


def log_filters(
    logger: logging.Logger,
    filters: dict[str, Any],
    optimized: dict[str, Any] | None = None,
):
    """
    Log the filters of a search.

    Args:
        logger: Logger instance
        filters: Filters as submitted
        optimized: Filters after reordering, if available
    """
    logger.info(f"Filters: {sorted(filters)}")
    if optimized is not None:
        logger.debug(f"Optimized filter order: {list(optimized)}")


def log_validation(logger: logging.Logger, result: Any, complexity: Any = None):
    """
    Log validation and complexity outcomes.

    Args:
        logger: Logger instance
        result: ValidationResult for the filter set
        complexity: Optional ComplexityReport for the filter set
    """
    if result.is_valid:
        logger.debug("Filter validation passed")
    else:
        codes = ", ".join(f"{e.field}:{e.code}" for e in result.errors)
        logger.info(f"Filter validation failed: {codes}")

    if complexity is not None and not complexity.is_valid:
        for issue in complexity.issues:
            logger.warning(f"Query complexity: {issue}")
