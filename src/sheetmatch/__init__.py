"""sheetmatch -- Spreadsheet accumulation and key-based reconciliation.

Keep a growing master table of uploads, then match freshly uploaded
tables against it on an ordered set of key fields found by header name.

Quick start::

    from sheetmatch import MasterDataset, WorkbookStore, load_table, reconcile

    master = MasterDataset(WorkbookStore("data.xlsx"))
    master.import_table(load_table("orders.xlsx"))

    result = master.match(load_table("probe.xlsx"), category="SF")
    print(result.statistics["match_rate_percent"], "% matched")
"""

__version__ = "0.3.0"

from ._types import ImportResult, ReconcileResult, TableModel
from .errors import (
    EmptyMasterError,
    HeaderMismatch,
    InvalidKeyPattern,
    KeyFieldNotFound,
    ParseEmptyInput,
    SheetMatchError,
    UnreadableInput,
)

# Engine
from .engine import (
    align_headers,
    append_unique,
    drop_columns,
    drop_incomplete_rows,
    drop_rows,
    ensure_same_headers,
    filter_category,
    find_columns,
    get_matcher,
    list_categories,
    parse_grid,
    reconcile,
    reconcile_report,
    search_rows,
)

# Ingestion
from .ingestion import load_table, save_table, table_to_workbook_bytes

# Store and workflows
from .config import Settings, get_settings
from .store import MasterDataset, MemoryStore, TableStore, WorkbookStore
from .workflows import match_against_master, merge_uploads

__all__ = [
    "__version__",
    # Types
    "TableModel",
    "ReconcileResult",
    "ImportResult",
    # Errors
    "SheetMatchError",
    "ParseEmptyInput",
    "EmptyMasterError",
    "HeaderMismatch",
    "KeyFieldNotFound",
    "InvalidKeyPattern",
    "UnreadableInput",
    # Engine
    "parse_grid",
    "align_headers",
    "ensure_same_headers",
    "append_unique",
    "filter_category",
    "list_categories",
    "search_rows",
    "drop_incomplete_rows",
    "find_columns",
    "drop_columns",
    "drop_rows",
    "get_matcher",
    "reconcile",
    "reconcile_report",
    # Ingestion
    "load_table",
    "save_table",
    "table_to_workbook_bytes",
    # Store and workflows
    "Settings",
    "get_settings",
    "TableStore",
    "MemoryStore",
    "WorkbookStore",
    "MasterDataset",
    "merge_uploads",
    "match_against_master",
]
