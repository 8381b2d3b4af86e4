"""Exception hierarchy for sheetmatch.

Every error is a ``ValueError`` so callers that only care about bad input
can catch that; all of them end the operation that raised them.
"""

from __future__ import annotations

from typing import List, Sequence


class SheetMatchError(ValueError):
    """Base exception for all sheetmatch errors."""


class ParseEmptyInput(SheetMatchError):
    """Input carried no usable header row."""


class EmptyMasterError(ParseEmptyInput):
    """The master dataset has nothing to match against yet."""

    def __init__(self, message: str = "Master dataset is empty, import data first") -> None:
        super().__init__(message)


class HeaderMismatch(SheetMatchError):
    """Two tables expected to share the same headers do not."""

    def __init__(self, expected: Sequence[str], actual: Sequence[str], missing: str = "") -> None:
        self.expected: List[str] = list(expected)
        self.actual: List[str] = list(actual)
        self.missing = missing
        detail = f" (missing '{missing}')" if missing else ""
        super().__init__(
            f"Headers do not match{detail}: expected {self.expected}, got {self.actual}. "
            "Clear the master dataset or upload data with the same headers."
        )


class KeyFieldNotFound(SheetMatchError):
    """A key pattern selects no header on one side of a reconciliation."""

    def __init__(self, pattern: str, side: str) -> None:
        self.pattern = pattern
        self.side = side
        super().__init__(f"Key field '{pattern}' not found in {side} headers")


class InvalidKeyPattern(SheetMatchError):
    """A regular-expression key pattern failed to compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid key pattern '{pattern}': {reason}")


class UnreadableInput(SheetMatchError):
    """An uploaded file could not be decoded as a table."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Cannot read {source}: {reason}")
