"""Accumulation of rows with exact-duplicate suppression."""

from __future__ import annotations

from typing import List, Set, Tuple

from .._types import TableModel


def append_unique(accumulated: TableModel, incoming: TableModel) -> TableModel:
    """Append *incoming* rows to *accumulated*, skipping exact duplicates.

    A row is a duplicate when it equals, cell for cell, a row already in the
    result, including rows appended earlier in the same call. Headers are
    assumed to match already (see ``ensure_same_headers``); an accumulated
    table without headers takes the incoming ones.
    """
    seen: Set[Tuple[str, ...]] = {tuple(r) for r in accumulated.rows}
    rows: List[List[str]] = [list(r) for r in accumulated.rows]

    for row in incoming.rows:
        key = tuple(row)
        if key in seen:
            continue
        seen.add(key)
        rows.append(list(row))

    headers = accumulated.headers or incoming.headers
    return TableModel(headers=list(headers), rows=rows)
