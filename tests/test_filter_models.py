"""Tests for typed filter models and value helpers."""

import pytest
from pydantic import ValidationError

from advisor_search_hub.filtering import sanitize
from advisor_search_hub.filtering.sanitize import (
    is_empty_value,
    is_valid_account_minimum_range,
    is_valid_aum_range,
    is_valid_city_name,
    sanitize_filter_value,
)
from advisor_search_hub.models import filters as filters_module
from advisor_search_hub.models.filters import (
    BooleanFilter,
    FilterSet,
    MultiSelectFilter,
    RangeFilter,
    StringFilter,
)


class TestFilterSet:
    """Test conversion between raw mappings and typed filters."""

    def test_from_mapping_kinds(self, rules, sample_filters):
        filter_set = FilterSet.from_mapping(sample_filters, rules)
        by_name = {f.name: f for f in filter_set.filters}

        assert isinstance(by_name["principalOfficeCity"], StringFilter)
        assert isinstance(by_name["assetsUnderManagement"], RangeFilter)
        assert isinstance(by_name["custodians"], MultiSelectFilter)
        assert isinstance(by_name["performanceFees"], BooleanFilter)
        assert by_name["performanceFees"].value is False

    def test_round_trip_keeps_order(self, rules, sample_filters):
        filter_set = FilterSet.from_mapping(sample_filters, rules)
        assert filter_set.to_mapping() == sample_filters
        assert filter_set.names() == list(sample_filters)

    def test_empty_entries_skipped(self, rules):
        filter_set = FilterSet.from_mapping(
            {"principalOfficeCity": "", "fees": [], "accountMinimum": None}, rules
        )
        assert filter_set.filters == []

    def test_empty_check_shared_with_filtering(self):
        assert sanitize.is_empty_value is filters_module.is_empty_value

    def test_wrong_shape_rejected(self, rules):
        with pytest.raises(ValidationError):
            FilterSet.from_mapping({"custodians": "Fidelity"}, rules)

        with pytest.raises(ValidationError):
            FilterSet.from_mapping({"performanceFees": "yes"}, rules)

    def test_unknown_filter_kept_as_string(self, rules):
        filter_set = FilterSet.from_mapping({"zipCode": "98101"}, rules)
        assert isinstance(filter_set.filters[0], StringFilter)

    def test_validator_accepts_filter_set(self, service, rules):
        filter_set = FilterSet.from_mapping({"fees": ["Hourly", "Barter"]}, rules)
        result = service.validate_filters(filter_set)

        assert not result.is_valid
        assert result.errors[0].invalid_values == ["Barter"]

    def test_discriminated_union_parses(self):
        filter_set = FilterSet.model_validate(
            {"filters": [{"kind": "range", "name": "accountMinimum", "value": "0-25000"}]}
        )
        assert isinstance(filter_set.filters[0], RangeFilter)


class TestRangeFilter:
    """Test range bounds."""

    def test_closed_range(self):
        assert RangeFilter(name="accountMinimum", value="25000-100000").bounds == (
            25000,
            100000,
        )

    def test_open_range(self):
        assert RangeFilter(name="assetsUnderManagement", value="1000000000+").bounds == (
            1000000000,
            None,
        )


class TestValueHelpers:
    """Test empty checks, spot checks and sanitizing."""

    @pytest.mark.parametrize("value", [None, "", [], ()])
    def test_empty(self, value):
        assert is_empty_value(value)

    @pytest.mark.parametrize("value", [False, 0, "x", ["x"]])
    def test_not_empty(self, value):
        assert not is_empty_value(value)

    def test_city_name(self):
        assert is_valid_city_name("Seattle")
        assert not is_valid_city_name("")
        assert not is_valid_city_name("a" * 101)
        assert not is_valid_city_name(None)

    def test_range_checks(self):
        assert is_valid_aum_range("1000000000+")
        assert not is_valid_aum_range("0-25000")
        assert is_valid_account_minimum_range("0-25000")
        assert not is_valid_account_minimum_range("abc")

    def test_sanitize_string(self):
        assert sanitize_filter_value("  Seattle ", "string") == "Seattle"
        assert sanitize_filter_value(42, "string") == "42"

    def test_sanitize_array(self):
        assert sanitize_filter_value(["CFA", None, "", "CFP"], "array") == ["CFA", "CFP"]
        assert sanitize_filter_value("CFA", "array") == []

    def test_sanitize_boolean(self):
        assert sanitize_filter_value("yes", "boolean") is True
        assert sanitize_filter_value("", "boolean") is False

    def test_sanitize_none_and_unknown(self):
        assert sanitize_filter_value(None, "string") is None
        assert sanitize_filter_value({"a": 1}, "object") == {"a": 1}
