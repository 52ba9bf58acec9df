"""Tests for advanced search."""

from datetime import date

import pytest

from pkgcompare.analyzers.search import (
    build_filter,
    build_predicates,
    filter_by_grade,
    paginate,
    search,
    sort_records,
)
from pkgcompare.models.schemas import Grade, SearchCriteria, SortKey


def _names(records):
    return [r.name for r in records]


# =============================================================================
# Predicates
# =============================================================================


class TestPredicates:
    def test_empty_criteria_matches_everything(self, search_records, scorer):
        assert build_predicates(SearchCriteria()) == []
        assert _names(search(search_records, SearchCriteria(), scorer)) == [
            "alpha", "beta", "gamma", "delta",
        ]

    def test_min_stars_and_exclude_deprecated(self, search_records, scorer):
        criteria = SearchCriteria(min_stars=1000, exclude_deprecated=True)
        assert _names(search(search_records, criteria, scorer)) == ["gamma", "delta"]

    def test_deprecated_star_leader_dropped(self, scorer, record_factory):
        records = [
            record_factory("old", stars=5000, is_deprecated=True),
            record_factory("current", stars=1500, is_deprecated=False),
        ]
        criteria = SearchCriteria(min_stars=1000, exclude_deprecated=True, sort_by=SortKey.STARS)
        assert _names(search(records, criteria, scorer)) == ["current"]

    def test_missing_metric_fails_range(self, search_records, scorer):
        criteria = SearchCriteria(max_stars=1000)
        assert _names(search(search_records, criteria, scorer)) == ["alpha"]

    def test_dependents_range(self, search_records, scorer):
        assert _names(search(search_records, SearchCriteria(min_dependents=100), scorer)) == ["delta"]
        assert _names(search(search_records, SearchCriteria(max_dependents=100), scorer)) == ["alpha"]

    def test_query_matches_name_or_description(self, search_records, scorer):
        assert _names(search(search_records, SearchCriteria(query="ALP"), scorer)) == ["alpha"]
        assert _names(search(search_records, SearchCriteria(query="http"), scorer)) == ["alpha"]

    def test_platforms_case_insensitive(self, search_records, scorer):
        assert _names(search(search_records, SearchCriteria(platforms=["NPM"]), scorer)) == [
            "alpha", "delta",
        ]
        assert _names(search(search_records, SearchCriteria(exclude_platforms=["npm"]), scorer)) == [
            "beta", "gamma",
        ]

    def test_categories(self, search_records, scorer):
        assert _names(search(search_records, SearchCriteria(categories=["Logging"]), scorer)) == ["gamma"]
        excluded = SearchCriteria(exclude_categories=["Testing", "UI Framework"])
        assert _names(search(search_records, excluded, scorer)) == ["alpha", "gamma"]

    def test_category_match_is_substring(self, search_records, scorer):
        assert _names(search(search_records, SearchCriteria(categories=["UI"]), scorer)) == ["delta"]

    def test_last_commit_after_is_inclusive(self, search_records, scorer):
        criteria = SearchCriteria(last_commit_after=date(2025, 1, 1))
        assert _names(search(search_records, criteria, scorer)) == ["alpha", "gamma"]

    def test_exclude_vulnerable(self, search_records, scorer):
        criteria = SearchCriteria(exclude_vulnerable=True)
        assert _names(search(search_records, criteria, scorer)) == ["alpha", "beta", "delta"]

    def test_exclude_unmaintained(self, search_records, today):
        matches = build_filter(SearchCriteria(exclude_unmaintained=True), today)
        assert [r.name for r in search_records if matches(r)] == ["alpha"]


# =============================================================================
# Grade post-filter
# =============================================================================


class TestGradeFilter:
    def test_keeps_only_allowed_grades(self, scorer, healthy_record, record_factory):
        weak = record_factory("weak")
        result = filter_by_grade([healthy_record, weak], [Grade.A], scorer)
        assert result == [healthy_record]

    def test_accepts_strings(self, scorer, record_factory):
        weak = record_factory("weak")
        assert filter_by_grade([weak], ["D"], scorer) == [weak]

    def test_empty_allow_list_keeps_all(self, search_records, scorer):
        assert filter_by_grade(search_records, [], scorer) == search_records

    def test_search_applies_grades(self, scorer, healthy_record, record_factory):
        records = [record_factory("weak"), healthy_record]
        criteria = SearchCriteria(include_grades=[Grade.A])
        assert _names(search(records, criteria, scorer)) == ["express"]


# =============================================================================
# Sorting and pagination
# =============================================================================


class TestSorting:
    @pytest.mark.parametrize(
        "key,expected",
        [
            (SortKey.STARS, ["gamma", "delta", "alpha", "beta"]),
            (SortKey.DEPENDENTS, ["delta", "alpha", "beta", "gamma"]),
            (SortKey.NAME, ["alpha", "beta", "delta", "gamma"]),
            (SortKey.UPDATED, ["alpha", "gamma", "beta", "delta"]),
        ],
    )
    def test_sort_nulls_last(self, search_records, key, expected):
        assert _names(sort_records(search_records, key)) == expected

    def test_no_sort_keeps_input_order(self, search_records):
        assert sort_records(search_records, None) == search_records

    def test_sort_by_string(self, search_records):
        assert _names(sort_records(search_records, "name"))[0] == "alpha"


class TestPaginate:
    def test_pages(self, record_factory):
        records = [record_factory(f"pkg{i}") for i in range(45)]
        page = paginate(records, page=3, size=20)
        assert len(page.items) == 5
        assert page.total == 45
        assert page.total_pages == 3

    def test_past_the_end(self, record_factory):
        page = paginate([record_factory()], page=2, size=20)
        assert page.items == []

    def test_invalid(self, record_factory):
        with pytest.raises(ValueError):
            paginate([record_factory()], page=0)
        with pytest.raises(ValueError):
            paginate([record_factory()], size=0)
