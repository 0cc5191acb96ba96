from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .models import ALL_CATEGORIES, Category, Record


def category_tabs() -> List[str]:
    """Selector values in display order, the "all" sentinel first."""
    return [ALL_CATEGORIES] + [category.value for category in Category]


def parse_category(value: str) -> str:
    """Purpose: Validate a category selector coming from the presentation layer.
    Inputs/Outputs: Input is a raw selector string; output is the canonical selector.
    Failure Modes: Raises ValueError for values outside the enumeration.
    """
    if value == ALL_CATEGORIES:
        return ALL_CATEGORIES
    return Category(value).value


def matches(record: Record, search: str, category: str) -> bool:
    """True when the record passes both the category and the search predicate."""
    if category != ALL_CATEGORIES and record.category != category:
        return False
    if not search:
        return True
    needle = search.lower()
    return needle in record.name.lower() or needle in record.series.lower()


def filter_records(catalog: Sequence[Record], search: str = "", category: str = ALL_CATEGORIES) -> List[Record]:
    """Purpose: Derive the visible subset of the catalog.
    Inputs/Outputs: Inputs are the catalog, a search string and a category selector;
        output is a new list of matching records in catalog order.
    Side Effects / State: None; the catalog is never mutated.
    Failure Modes: None; no match yields an empty list.
    Testing Notes: "350" with "全部" returns every record whose name or series
        contains 350, in source order.
    """
    return [record for record in catalog if matches(record, search, category)]


@dataclass
class FilterCriteria:
    """Search text and category selector backing the list view."""
    search: str = ""
    category: str = ALL_CATEGORIES

    def apply(self, catalog: Sequence[Record]) -> List[Record]:
        return filter_records(catalog, self.search, self.category)

    def reset(self) -> None:
        self.search = ""
        self.category = ALL_CATEGORIES
