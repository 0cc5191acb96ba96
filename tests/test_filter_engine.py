import pytest

from moto_catalog.filter_engine import FilterCriteria, category_tabs, filter_records, matches, parse_category
from moto_catalog.models import ALL_CATEGORIES, Category


def test_search_350_matches_name_or_series_in_catalog_order(catalog):
    result = filter_records(catalog, "350", ALL_CATEGORIES)
    assert [record.id for record in result] == ["a", "d"]


def test_search_is_case_insensitive(catalog):
    assert [r.id for r in filter_records(catalog, "krv")] == ["b"]
    assert [r.id for r in filter_records(catalog, "IONEX")] == ["e"]


def test_empty_search_and_all_returns_everything(catalog):
    result = filter_records(catalog, "", ALL_CATEGORIES)
    assert result == list(catalog)
    assert result is not catalog


def test_category_and_search_compose(catalog):
    assert [r.id for r in filter_records(catalog, "", "复古")] == ["c", "d"]
    assert [r.id for r in filter_records(catalog, "350", "复古")] == ["d"]
    assert filter_records(catalog, "350", "电动") == []


def test_no_match_is_empty_list(catalog):
    assert filter_records(catalog, "zzz") == []


@pytest.mark.parametrize("search", ["", "3", "350", "li", "KR", "x"])
@pytest.mark.parametrize("category", category_tabs())
def test_filter_is_sound_complete_and_idempotent(catalog, search, category):
    result = filter_records(catalog, search, category)
    assert result == filter_records(catalog, search, category)
    for record in catalog:
        category_ok = category == ALL_CATEGORIES or record.category == category
        search_ok = not search or search.lower() in record.name.lower() or search.lower() in record.series.lower()
        assert (record in result) == (category_ok and search_ok)
        assert matches(record, search, category) == (category_ok and search_ok)


def test_filter_does_not_mutate_catalog(catalog):
    before = list(catalog)
    filter_records(catalog, "350", "踏板")
    assert catalog == before


def test_category_tabs_start_with_all():
    tabs = category_tabs()
    assert tabs[0] == ALL_CATEGORIES
    assert tabs[1:] == [c.value for c in Category]


def test_parse_category_rejects_unknown_values():
    assert parse_category("全部") == ALL_CATEGORIES
    assert parse_category("电动") == "电动"
    with pytest.raises(ValueError):
        parse_category("卡车")


def test_filter_criteria_apply_and_reset(catalog):
    criteria = FilterCriteria(search="like", category="复古")
    assert [r.id for r in criteria.apply(catalog)] == ["c"]
    criteria.reset()
    assert criteria.apply(catalog) == list(catalog)
