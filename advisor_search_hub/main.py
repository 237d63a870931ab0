"""Command-line entry point for checking search filters."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .config import get_settings
from .session import SearchSession
from .utils.config_loader import ConfigLoader
from .utils.errors import AdvisorSearchError
from .utils.logging import configure_logging


def parse_args(argv: list[str] | None = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Advisor Search Hub filter tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate", help="Validate a JSON filter file and print the report"
    )
    validate.add_argument("filters_file", type=Path, help="JSON object of filters")
    validate.add_argument("--rules", type=Path, help="Rule document to use")
    validate.add_argument(
        "--enforce-required",
        action="store_true",
        help="Report required filters that are missing",
    )
    validate.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    return parser.parse_args(argv)


def run_validate(args) -> int:
    """Validate a filter file; returns the process exit code."""
    session = SearchSession(settings=get_settings())
    filters = ConfigLoader.read_json(
        args.filters_file, config_key="filters_file", label="Filters file"
    )
    prepared = session.prepare_filters(filters)

    report = prepared.model_dump()
    report["messages"] = [
        m.model_dump() for m in session.validator.get_error_messages(prepared.validation)
    ]
    print(json.dumps(report, indent=2))
    return 0 if prepared.is_valid else 1


def main(argv: list[str] | None = None) -> int:
    """Run the command-line tool."""
    args = parse_args(argv)

    # Command-line options override the environment
    if args.rules:
        os.environ["RULES_FILE"] = str(args.rules)
    if args.enforce_required:
        os.environ["ENFORCE_REQUIRED"] = "true"
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
    get_settings.cache_clear()

    # Keep stdout for the JSON report
    configure_logging(get_settings().log_level, stream=sys.stderr)

    try:
        return run_validate(args)
    except AdvisorSearchError as e:
        logging.getLogger("advisor_search_hub").error(e.message)
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
