"""Raw grid parsing -- the first row is the header, the rest are data."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

from .._types import TableModel


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_blank_row(row: Sequence[str]) -> bool:
    """True when every cell of *row* is the empty string."""
    return all(cell == "" for cell in row)


def parse_grid(
    grid: Iterable[Sequence[Optional[Any]]],
    pad_headers: bool = True,
) -> TableModel:
    """Convert a rectangular-ish grid of cells into a ``TableModel``.

    Args:
        grid: Rows of cell values; row 0 is taken as the header. Rows may
            have different lengths. ``None`` cells become ``""``.
        pad_headers: Pad the header with empty names up to the widest data
            row. With ``False`` only data rows are padded, so headers may be
            shorter than rows; cells past the header width are then only
            addressable by position and are cut off by ``reconcile``.

    Returns:
        TableModel with trimmed cells, blank rows dropped and every data row
        right-padded to the widest row.
    """
    headers: List[str] = []
    rows: List[List[str]] = []
    max_width = 0

    for i, raw in enumerate(grid):
        cells = [_cell_text(c) for c in raw]
        if i == 0:
            headers = cells
            continue
        if is_blank_row(cells):
            continue
        rows.append(cells)
        max_width = max(max_width, len(cells))

    max_width = max(max_width, len(headers))

    for row in rows:
        row.extend([""] * (max_width - len(row)))
    if pad_headers:
        headers.extend([""] * (max_width - len(headers)))

    return TableModel(headers=headers, rows=rows)
