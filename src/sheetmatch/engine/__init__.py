"""sheetmatch engine -- pure transformations over ``TableModel`` values.

Public API:
    parse_grid           -- Raw grid to TableModel (trim, drop blanks, pad)
    align_headers        -- Reorder columns to a reference header order
    ensure_same_headers  -- Raise HeaderMismatch unless headers are equal
    append_unique        -- Accumulate rows, suppressing exact duplicates
    filter_category      -- Keep rows of one category
    list_categories      -- Distinct values of a category column
    search_rows          -- Keep rows where any cell matches a keyword
    drop_incomplete_rows -- Drop rows with empty or 'null' cells
    find_columns / drop_columns / drop_rows -- Positional projection
    reconcile / reconcile_report -- Two-pass key matching
"""

from .parser import parse_grid, is_blank_row
from .aligner import align_headers, ensure_same_headers, headers_equal
from .dedup import append_unique
from .filters import drop_incomplete_rows, filter_category, list_categories, search_rows
from .matchers import ExactMatcher, KeyMatcher, RegexMatcher, SubstringMatcher, get_matcher
from .projector import drop_columns, drop_rows, find_columns
from .reconciler import (
    RELAXED,
    STRICT,
    UNMATCHED,
    match_rows,
    reconcile,
    reconcile_report,
    resolve_key_columns,
)

__all__ = [
    # Parsing
    "parse_grid",
    "is_blank_row",
    # Alignment
    "align_headers",
    "ensure_same_headers",
    "headers_equal",
    # Accumulation
    "append_unique",
    # Filters
    "filter_category",
    "list_categories",
    "search_rows",
    "drop_incomplete_rows",
    # Projection
    "find_columns",
    "drop_columns",
    "drop_rows",
    # Matchers
    "KeyMatcher",
    "RegexMatcher",
    "SubstringMatcher",
    "ExactMatcher",
    "get_matcher",
    # Reconciler
    "reconcile",
    "reconcile_report",
    "resolve_key_columns",
    "match_rows",
    "STRICT",
    "RELAXED",
    "UNMATCHED",
]
