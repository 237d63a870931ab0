"""Tests for the per-search timing report."""

from advisor_search_hub.filtering.performance import measure_query_performance


class TestMeasureQueryPerformance:
    """Test search timing reports."""

    def test_fast_search(self, sample_filters):
        report = measure_query_performance(1000.0, 1250.0, 25, sample_filters)

        assert report.duration == 250.0
        assert report.active_filters == 7
        assert report.avg_time_per_result == 10.0
        assert report.is_slow_query is False
        assert report.complexity_score == 70
        assert report.filters == list(sample_filters)

    def test_slow_large_search(self):
        filters = {"principalOfficeCity": "Austin", "fees": [], "custodians": None}
        report = measure_query_performance(0.0, 2500.0, 150, filters)

        assert report.is_slow_query is True
        assert report.active_filters == 1
        assert report.complexity_score == 60

    def test_no_results(self):
        report = measure_query_performance(0.0, 100.0, 0, {})
        assert report.avg_time_per_result == 0.0

    def test_service_delegates(self, service):
        report = service.measure_query_performance(0.0, 2001.0, 1, {"fees": ["Hourly"]})
        assert report.is_slow_query is True
