"""Row filters: category restriction, keyword search, incomplete rows."""

from __future__ import annotations

from typing import List, Optional

from .._types import TableModel
from .matchers import KeyMatcher, RegexMatcher


def filter_category(table: TableModel, category_column: str, value: str) -> TableModel:
    """Keep rows whose *category_column* cell equals *value*.

    An empty *value* or a column missing from the headers returns the table
    unchanged.
    """
    if value == "":
        return table
    idx = table.index_of(category_column)
    if idx == -1:
        return table
    return TableModel(
        headers=list(table.headers),
        rows=[list(r) for r in table.rows if idx < len(r) and r[idx] == value],
    )


def list_categories(table: TableModel, category_column: str) -> List[str]:
    """Distinct values of *category_column* in first-seen order."""
    idx = table.index_of(category_column)
    if idx == -1:
        return []
    values: List[str] = []
    for row in table.rows:
        value = row[idx] if idx < len(row) else ""
        if value not in values:
            values.append(value)
    return values


def search_rows(
    table: TableModel,
    keyword: str,
    matcher: Optional[KeyMatcher] = None,
) -> TableModel:
    """Keep rows where any cell is selected by *keyword*."""
    if keyword == "":
        return table
    matcher = matcher or RegexMatcher()
    return TableModel(
        headers=list(table.headers),
        rows=[list(r) for r in table.rows if any(matcher.matches(keyword, c) for c in r)],
    )


def _is_missing(cell: str) -> bool:
    text = cell.strip()
    return text == "" or text.lower() == "null"


def drop_incomplete_rows(table: TableModel) -> TableModel:
    """Drop rows that have any empty or literal ``null`` cell."""
    return TableModel(
        headers=list(table.headers),
        rows=[list(r) for r in table.rows if not any(_is_missing(c) for c in r)],
    )
