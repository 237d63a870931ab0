"""Test configuration for Advisor Search Hub."""

import pytest

from advisor_search_hub.config import get_settings
from advisor_search_hub.filtering.validator import FilterValidationService
from advisor_search_hub.monitoring.performance_monitor import PerformanceMonitor
from advisor_search_hub.utils.config_loader import load_rule_set


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rules():
    """The bundled rule set."""
    return load_rule_set()


@pytest.fixture
def service(rules):
    """Filter validation service with default behaviour."""
    return FilterValidationService(rules)


@pytest.fixture
def monitor():
    """An enabled performance monitor."""
    return PerformanceMonitor()


@pytest.fixture
def sample_filters():
    """A valid, fully populated filter mapping."""
    return {
        "fees": ["Hourly", "Retainer"],
        "principalOfficeCity": "Seattle",
        "custodians": ["Charles Schwab", "Fidelity"],
        "assetsUnderManagement": "10000000-50000000",
        "performanceFees": False,
        "discretionaryAuthority": "both",
        "professionalDesignations": ["CFA", "CFP"],
    }
