"""Shared table and result types for the sheetmatch library.

Engine functions take and return ``TableModel`` values; the store and
workflow layers return the result models below.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, Field


class TableModel(BaseModel):
    """Normalized in-memory table: a header row plus rows of cell strings.

    Cells are never ``None``; missing data is the empty string. Header and
    row order are significant and preserved by every engine step except
    header alignment.
    """

    headers: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the table has no headers or no data rows."""
        return not self.headers or not self.rows

    def index_of(self, name: str) -> int:
        """Index of the first header equal to *name*, or -1."""
        for i, header in enumerate(self.headers):
            if header == name:
                return i
        return -1

    def copy_table(self) -> "TableModel":
        """Return a copy whose header and row lists are not shared."""
        return TableModel(headers=list(self.headers), rows=[list(r) for r in self.rows])

    def fitted(self) -> "TableModel":
        """Copy with every row padded or cut to the header width."""
        width = len(self.headers)
        return TableModel(
            headers=list(self.headers),
            rows=[(list(r) + [""] * width)[:width] for r in self.rows],
        )

    def to_frame(self) -> pd.DataFrame:
        """Render as a DataFrame (duplicate header names are kept)."""
        return pd.DataFrame(self.rows, columns=self.headers or None)


# -- Reconciler types --

class ReconcileResult(BaseModel):
    """Result of reconciling a target table with a source table."""
    table: TableModel
    key_patterns: List[str]
    key_columns: List[List[int]]
    assignments: List[Optional[int]]
    statistics: Dict[str, Any]


# -- Store types --

class ImportResult(BaseModel):
    """Result of importing a table into the master dataset."""
    incoming_rows: int
    dropped_incomplete: int
    appended_rows: int
    duplicate_rows: int
    total_rows: int
    replaced: bool
    headers: List[str]
