"""Filter ordering for query construction."""

from collections.abc import Mapping
from typing import Any

from ..models.rules import RuleSet
from .sanitize import is_empty_value


def optimize_filter_order(filters: Mapping[str, Any], rules: RuleSet) -> dict[str, Any]:
    """Return the non-empty filters in selectivity order, most selective first.

    The order comes from ``rules.filter_order``: location, then numeric
    ranges, then yes/no filters, then multi-value filters. Filters that are
    not in the order are left out. The input mapping is not modified.
    """
    return {
        name: filters[name]
        for name in rules.filter_order
        if name in filters and not is_empty_value(filters[name])
    }
