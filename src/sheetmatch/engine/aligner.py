"""Column alignment of an incoming table against a reference header order."""

from __future__ import annotations

from typing import List, Sequence

from .._types import TableModel
from ..errors import HeaderMismatch


def align_headers(reference: TableModel, incoming: TableModel) -> TableModel:
    """Reorder *incoming*'s columns to follow ``reference.headers``.

    A header count mismatch passes *incoming* through unchanged; the caller
    catches that with ``ensure_same_headers``. When a header name appears
    more than once in *incoming*, its first occurrence is used.

    Raises:
        HeaderMismatch: If a reference header is absent from *incoming*.
    """
    if len(reference.headers) != len(incoming.headers):
        return incoming

    positions: List[int] = []
    for name in reference.headers:
        idx = incoming.index_of(name)
        if idx == -1:
            raise HeaderMismatch(reference.headers, incoming.headers, missing=name)
        positions.append(idx)

    rows = [[row[idx] if idx < len(row) else "" for idx in positions] for row in incoming.rows]
    return TableModel(headers=list(reference.headers), rows=rows)


def headers_equal(a: Sequence[str], b: Sequence[str]) -> bool:
    """Order-sensitive element-wise header comparison."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def ensure_same_headers(expected: TableModel, actual: TableModel) -> None:
    """Raise ``HeaderMismatch`` unless both tables share the same headers."""
    if not headers_equal(expected.headers, actual.headers):
        raise HeaderMismatch(expected.headers, actual.headers)
