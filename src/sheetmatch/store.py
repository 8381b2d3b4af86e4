"""The accumulating master dataset and its persistence.

``TableStore`` is the narrow load/save seam; ``MasterDataset`` owns the
in-memory master table, serializes every read and mutation behind a lock
and writes the result back through the store after each change.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union

from ._types import ImportResult, ReconcileResult, TableModel
from .config import Settings
from .engine import (
    KeyMatcher,
    align_headers,
    append_unique,
    drop_incomplete_rows,
    drop_rows,
    ensure_same_headers,
    list_categories,
    search_rows,
)
from .ingestion import load_workbook_table, save_workbook
from .workflows import match_against_master, merge_uploads

logger = logging.getLogger(__name__)


class TableStore(Protocol):
    """Persistence seam for the master table."""

    def load(self) -> TableModel: ...

    def save(self, table: TableModel) -> None: ...


class MemoryStore:
    """Keeps the master table in memory; for tests and embedding."""

    def __init__(self, table: Optional[TableModel] = None) -> None:
        self._table = table.copy_table() if table is not None else TableModel()
        self.saves = 0

    def load(self) -> TableModel:
        return self._table.copy_table()

    def save(self, table: TableModel) -> None:
        self._table = table.copy_table()
        self.saves += 1


class WorkbookStore:
    """Persists the master table as an xlsx file.

    A missing file loads as an empty table; saving a table without headers
    removes the file.
    """

    def __init__(self, file_path: Union[str, Path], pad_headers: bool = True) -> None:
        self.path = Path(file_path)
        self.pad_headers = pad_headers

    def load(self) -> TableModel:
        if not self.path.exists():
            logger.debug("No master file at %s, starting empty", self.path)
            return TableModel()
        return load_workbook_table(self.path, pad_headers=self.pad_headers)

    def save(self, table: TableModel) -> None:
        if not table.headers:
            self.path.unlink(missing_ok=True)
            return
        save_workbook(table, self.path)


class MasterDataset:
    """Lock-guarded owner of the accumulating master table.

    Parameters
    ----------
    store : TableStore
        Where the master is loaded from and saved to.
    settings : Settings, optional
        Field patterns and import behavior; defaults from the environment.
    matcher : KeyMatcher, optional
        Header selection strategy for key patterns (regex by default).
    """

    def __init__(
        self,
        store: TableStore,
        settings: Optional[Settings] = None,
        matcher: Optional[KeyMatcher] = None,
    ) -> None:
        self.store = store
        self.settings = settings or Settings()
        self.matcher = matcher
        self._lock = threading.RLock()
        self._table: Optional[TableModel] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MasterDataset":
        return cls(WorkbookStore(settings.data_file, settings.pad_headers), settings)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _current(self) -> TableModel:
        if self._table is None:
            self._table = self.store.load()
        return self._table

    def snapshot(self) -> TableModel:
        """Copy of the master table."""
        with self._lock:
            return self._current().copy_table()

    def reload(self) -> TableModel:
        """Drop the cached table and read it again from the store."""
        with self._lock:
            self._table = None
            return self._current().copy_table()

    def search(self, keyword: str = "") -> TableModel:
        with self._lock:
            return search_rows(self._current(), keyword, self.matcher).copy_table()

    def categories(self) -> List[str]:
        with self._lock:
            return list_categories(self._current(), self.settings.category_column)

    def match(self, probe: TableModel, category: str = "") -> ReconcileResult:
        """Enrich *probe* with master rows on the configured match fields."""
        with self._lock:
            master = self._current()
            return match_against_master(
                master,
                probe,
                self.settings.match_fields,
                category_column=self.settings.category_column,
                category=category,
                matcher=self.matcher,
            )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _commit(self, table: TableModel) -> None:
        self.store.save(table)
        self._table = table

    def import_table(self, incoming: TableModel) -> ImportResult:
        """Accumulate *incoming* into the master, skipping duplicate rows.

        An empty master is replaced by the incoming table as uploaded.
        Otherwise the incoming columns are aligned to the master's order
        first.

        Raises:
            HeaderMismatch: If the headers differ after alignment.
        """
        cleaned = incoming
        if self.settings.drop_incomplete_rows:
            cleaned = drop_incomplete_rows(incoming)
        dropped = len(incoming.rows) - len(cleaned.rows)

        with self._lock:
            current = self._current()
            replaced = current.is_empty
            if replaced:
                merged = cleaned.copy_table()
            else:
                aligned = align_headers(current, cleaned)
                ensure_same_headers(current, aligned)
                merged = append_unique(current, aligned)

            appended = len(merged.rows) - (0 if replaced else len(current.rows))
            self._commit(merged)

        logger.info(
            "Imported %d rows (%d new, %d dropped as incomplete), master now %d rows",
            len(incoming.rows),
            appended,
            dropped,
            len(merged.rows),
        )
        return ImportResult(
            incoming_rows=len(incoming.rows),
            dropped_incomplete=dropped,
            appended_rows=appended,
            duplicate_rows=len(cleaned.rows) - appended,
            total_rows=len(merged.rows),
            replaced=replaced,
            headers=list(merged.headers),
        )

    def import_uploads(self, first: TableModel, second: Optional[TableModel] = None) -> ImportResult:
        """Import one upload, or two joined on the merge field."""
        table = first
        if second is not None:
            table = merge_uploads(first, second, self.settings.merge_field, self.matcher)
        return self.import_table(table)

    def delete_rows(self, indices: Iterable[int]) -> int:
        """Remove master rows by position and return how many were removed."""
        with self._lock:
            current = self._current()
            remaining = drop_rows(current, indices)
            removed = len(current.rows) - len(remaining.rows)
            if removed:
                self._commit(remaining)
        logger.info("Deleted %d rows from master", removed)
        return removed

    def clear(self) -> None:
        """Reset the master to an empty table."""
        with self._lock:
            self._commit(TableModel())
        logger.info("Cleared master dataset")
