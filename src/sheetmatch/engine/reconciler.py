"""Two-pass key matching of a target table against a source table.

Every target row looks for the earliest unconsumed source row whose key
cells are all non-empty and equal to its own. Rows left over after the
strict pass get a second chance with the last key dropped, when more than
one key is given. Each source row is consumed at most once and every
target row is kept in the output, padded with empty cells when unmatched.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .._types import ReconcileResult, TableModel
from ..errors import KeyFieldNotFound
from .matchers import KeyMatcher, RegexMatcher

logger = logging.getLogger(__name__)

KeyPair = Tuple[int, int]

UNMATCHED = 0
STRICT = 1
RELAXED = 2


def _first_match(headers: Sequence[str], pattern: str, matcher: KeyMatcher) -> int:
    for i, name in enumerate(headers):
        if matcher.matches(pattern, name):
            return i
    return -1


def resolve_key_columns(
    target_headers: Sequence[str],
    source_headers: Sequence[str],
    key_patterns: Sequence[str],
    matcher: Optional[KeyMatcher] = None,
) -> List[KeyPair]:
    """Resolve one (target, source) column index pair per key pattern.

    Raises:
        KeyFieldNotFound: If a pattern selects no header on either side.
    """
    matcher = matcher or RegexMatcher()
    pairs: List[KeyPair] = []
    for pattern in key_patterns:
        t_idx = _first_match(target_headers, pattern, matcher)
        if t_idx == -1:
            raise KeyFieldNotFound(pattern, "target")
        s_idx = _first_match(source_headers, pattern, matcher)
        if s_idx == -1:
            raise KeyFieldNotFound(pattern, "source")
        pairs.append((t_idx, s_idx))
    return pairs


def _keys_match(target_row: Sequence[str], source_row: Sequence[str], pairs: Sequence[KeyPair]) -> bool:
    for t_idx, s_idx in pairs:
        value = target_row[t_idx]
        # empty never matches, not even another empty cell
        if value == "" or value != source_row[s_idx]:
            return False
    return True


def _run_pass(
    target: TableModel,
    source: TableModel,
    pairs: Sequence[KeyPair],
    assignments: List[Optional[int]],
    consumed: List[bool],
) -> int:
    found = 0
    for i, target_row in enumerate(target.rows):
        if assignments[i] is not None:
            continue
        for j, source_row in enumerate(source.rows):
            if consumed[j]:
                continue
            if _keys_match(target_row, source_row, pairs):
                consumed[j] = True
                assignments[i] = j
                found += 1
                break
    return found


def match_rows(
    target: TableModel,
    source: TableModel,
    key_pairs: Sequence[KeyPair],
) -> Tuple[List[Optional[int]], List[int]]:
    """Assign at most one source row to each target row.

    Returns:
        ``(assignments, passes)``: for each target row the matched source
        row index (or ``None``) and the pass that matched it
        (``STRICT``, ``RELAXED`` or ``UNMATCHED``).
    """
    assignments: List[Optional[int]] = [None] * len(target.rows)
    consumed = [False] * len(source.rows)

    strict = _run_pass(target, source, key_pairs, assignments, consumed)
    passes = [STRICT if a is not None else UNMATCHED for a in assignments]
    logger.debug("Strict pass matched %d of %d rows", strict, len(target.rows))

    if len(key_pairs) > 1:
        relaxed = _run_pass(target, source, key_pairs[:-1], assignments, consumed)
        for i, a in enumerate(assignments):
            if a is not None and passes[i] == UNMATCHED:
                passes[i] = RELAXED
        logger.debug("Relaxed pass matched %d more rows", relaxed)

    return assignments, passes


def _assemble(target: TableModel, source: TableModel, assignments: Sequence[Optional[int]]) -> TableModel:
    padding = [""] * len(source.headers)
    rows = []
    for target_row, j in zip(target.rows, assignments):
        extra = source.rows[j] if j is not None else padding
        rows.append(list(target_row) + list(extra))
    return TableModel(headers=list(target.headers) + list(source.headers), rows=rows)


def reconcile_report(
    target: TableModel,
    source: TableModel,
    key_patterns: Sequence[str],
    matcher: Optional[KeyMatcher] = None,
) -> ReconcileResult:
    """Reconcile *source* into *target* and report how each row matched.

    Args:
        target: Table whose rows are enriched; every row is kept.
        source: Table supplying extra columns; each row used at most once.
        key_patterns: Ordered key patterns, most significant first. The
            last one is dropped for the relaxed second pass.
        matcher: Header selection strategy, regex search by default.

    Returns:
        ReconcileResult with the enriched table, per-row assignments and
        statistics.

    Raises:
        KeyFieldNotFound: If a key pattern selects no header on a side.
    """
    if not key_patterns:
        raise ValueError("At least one key pattern is required")

    # cells past the header width have no column to land under
    target = target.fitted()
    source = source.fitted()

    pairs = resolve_key_columns(target.headers, source.headers, key_patterns, matcher)
    assignments, passes = match_rows(target, source, pairs)
    table = _assemble(target, source, assignments)

    strict = passes.count(STRICT)
    relaxed = passes.count(RELAXED)
    total = len(target.rows)
    return ReconcileResult(
        table=table,
        key_patterns=list(key_patterns),
        key_columns=[list(p) for p in pairs],
        assignments=assignments,
        statistics={
            "target_rows": total,
            "source_rows": len(source.rows),
            "strict_matches": strict,
            "relaxed_matches": relaxed,
            "unmatched": total - strict - relaxed,
            "match_rate_percent": round((strict + relaxed) / max(total, 1) * 100, 2),
        },
    )


def reconcile(
    target: TableModel,
    source: TableModel,
    key_patterns: Sequence[str],
    matcher: Optional[KeyMatcher] = None,
) -> TableModel:
    """Merge *source* into *target*; see ``reconcile_report``."""
    return reconcile_report(target, source, key_patterns, matcher).table
