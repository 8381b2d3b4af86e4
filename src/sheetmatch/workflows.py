"""Request-level flows built from engine steps.

``merge_uploads`` joins two uploads on the order-number column before they
are imported; ``match_against_master`` enriches a probe table with rows of
the master dataset.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ._types import ReconcileResult, TableModel
from .engine import KeyMatcher, drop_columns, filter_category, find_columns, reconcile_report
from .errors import EmptyMasterError

logger = logging.getLogger(__name__)


def merge_uploads(
    first: TableModel,
    second: TableModel,
    merge_field: str,
    matcher: Optional[KeyMatcher] = None,
) -> TableModel:
    """Join two uploads on *merge_field* into one table.

    The second upload is enriched with the columns of the first; the
    first upload's columns selected by *merge_field* are removed from the
    result so the key appears once.

    Raises:
        KeyFieldNotFound: If either upload has no column for *merge_field*.
    """
    result = reconcile_report(second, first, [merge_field], matcher)
    source_keys = find_columns(
        result.table.headers, [merge_field], matcher, start=len(second.headers)
    )
    merged = drop_columns(result.table, source_keys)
    logger.info(
        "Merged uploads: %d rows, %d matched on '%s'",
        len(merged.rows),
        result.statistics["strict_matches"],
        merge_field,
    )
    return merged


def match_against_master(
    master: TableModel,
    probe: TableModel,
    key_patterns: Sequence[str],
    category_column: str = "",
    category: str = "",
    matcher: Optional[KeyMatcher] = None,
) -> ReconcileResult:
    """Enrich *probe* rows with matching master rows.

    The master is first restricted to *category* on *category_column* (a
    no-op when either is empty or the column is absent).

    Raises:
        EmptyMasterError: If the master has no headers or no rows.
        KeyFieldNotFound: If a key pattern selects no header.
    """
    if master.is_empty:
        raise EmptyMasterError()

    candidates = filter_category(master, category_column, category) if category_column else master
    result = reconcile_report(probe, candidates, key_patterns, matcher)
    logger.info(
        "Matched %d/%d probe rows (%d strict, %d relaxed) against %d master rows",
        result.statistics["strict_matches"] + result.statistics["relaxed_matches"],
        result.statistics["target_rows"],
        result.statistics["strict_matches"],
        result.statistics["relaxed_matches"],
        len(candidates.rows),
    )
    return result
