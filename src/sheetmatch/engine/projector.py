"""Column and row removal by position."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .._types import TableModel
from .matchers import KeyMatcher, RegexMatcher


def find_columns(
    headers: Sequence[str],
    patterns: Iterable[str],
    matcher: Optional[KeyMatcher] = None,
    start: int = 0,
) -> List[int]:
    """Indices of every header at or after *start* selected by any pattern."""
    matcher = matcher or RegexMatcher()
    patterns = list(patterns)
    return [
        i for i in range(start, len(headers))
        if any(matcher.matches(p, headers[i]) for p in patterns)
    ]


def _without(cells: Sequence[str], drop: set) -> List[str]:
    return [c for i, c in enumerate(cells) if i not in drop]


def drop_columns(table: TableModel, indices: Iterable[int]) -> TableModel:
    """Remove the columns at *indices*, keeping the order of the rest."""
    drop = set(indices)
    return TableModel(
        headers=_without(table.headers, drop),
        rows=[_without(row, drop) for row in table.rows],
    )


def drop_rows(table: TableModel, indices: Iterable[int]) -> TableModel:
    """Remove rows by position; out-of-range indices are ignored."""
    drop = {i for i in indices if 0 <= i < len(table.rows)}
    return TableModel(
        headers=list(table.headers),
        rows=[list(r) for i, r in enumerate(table.rows) if i not in drop],
    )
