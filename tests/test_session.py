"""Tests for the search session."""

import json
import logging
from types import SimpleNamespace

import pytest

from advisor_search_hub.config import AppSettings
from advisor_search_hub.monitoring.performance_monitor import PerformanceMonitor
from advisor_search_hub.session import SearchSession


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return AppSettings(_env_file=None)


@pytest.fixture
def session(settings):
    return SearchSession(settings=settings)


class TestSearchSession:
    """Test filter preparation and monitored queries."""

    def test_prepare_valid_filters(self, session, sample_filters):
        prepared = session.prepare_filters(sample_filters)

        assert prepared.is_valid
        assert prepared.complexity.is_valid
        assert list(prepared.filters)[0] == "principalOfficeCity"
        assert list(prepared.filters)[-1] == "fees"

    def test_complexity_issues_do_not_invalidate(self, session, caplog):
        filters = {
            "assetsUnderManagement": "10000000-50000000",
            "accountMinimum": "0-25000",
        }
        with caplog.at_level(logging.WARNING):
            prepared = session.prepare_filters(filters)

        assert prepared.is_valid
        assert not prepared.complexity.is_valid
        assert "Too many range queries (2/1)" in caplog.text

    def test_invalid_filters(self, session):
        prepared = session.prepare_filters(
            {"custodians": ["Charles Schwab", "Fidelity", "Not-A-Custodian"]}
        )

        assert not prepared.is_valid
        assert prepared.validation.errors[0].code == "INVALID_VALUES"
        # Invalid values are still passed through for the caller to decide
        assert prepared.filters == {
            "custodians": ["Charles Schwab", "Fidelity", "Not-A-Custodian"]
        }

    def test_enforce_required_from_settings(self, tmp_path):
        rules_path = tmp_path / "rules.json"
        rules_path.write_text(
            json.dumps(
                {
                    "rules": {
                        "principalOfficeCity": {
                            "type": "string",
                            "kind": "string",
                            "required": True,
                        }
                    },
                    "filter_order": ["principalOfficeCity"],
                }
            )
        )
        settings = AppSettings(
            rules_file=rules_path, enforce_required=True, _env_file=None
        )
        session = SearchSession(settings=settings)

        prepared = session.prepare_filters({})

        assert not prepared.is_valid
        assert prepared.validation.errors[0].code == "REQUIRED_FIELD"

    def test_sessions_do_not_share_monitors(self, settings):
        first = SearchSession(settings=settings)
        second = SearchSession(settings=settings)
        assert first.monitor is not second.monitor

    def test_monitor_injection(self, settings):
        monitor = PerformanceMonitor(max_history=10)
        session = SearchSession(settings=settings, monitor=monitor)
        assert session.monitor is monitor

    def test_monitoring_disabled_from_settings(self):
        settings = AppSettings(monitoring={"enabled": False}, _env_file=None)
        session = SearchSession(settings=settings)
        assert session.monitor.enabled is False

    @pytest.mark.asyncio
    async def test_run_query(self, session):
        async def query():
            return SimpleNamespace(docs=["a", "b"])

        result = await session.run_query(query, "advisors", {"city": "Seattle"})

        assert result.docs == ["a", "b"]
        stats = session.monitor.metrics[("query", "advisors")]
        assert stats.count == 1
        assert stats.total_documents == 2

    @pytest.mark.asyncio
    async def test_close_clears_metrics(self, session):
        async def query():
            return []

        await session.run_query(query, "advisors")
        with session:
            pass

        assert len(session.monitor.query_history) == 0
