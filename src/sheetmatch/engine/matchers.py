"""Key pattern matchers: decide whether a pattern selects a header name."""

from __future__ import annotations

import re
from typing import Dict, Pattern, Protocol

from ..errors import InvalidKeyPattern


class KeyMatcher(Protocol):
    """Strategy deciding whether *pattern* selects *name*."""

    def matches(self, pattern: str, name: str) -> bool: ...


class RegexMatcher:
    """Regular-expression search anywhere in the name (the default)."""

    def __init__(self) -> None:
        self._compiled: Dict[str, Pattern[str]] = {}

    def _compile(self, pattern: str) -> Pattern[str]:
        compiled = self._compiled.get(pattern)
        if compiled is None:
            try:
                compiled = re.compile(pattern)
            except re.error as exc:
                raise InvalidKeyPattern(pattern, str(exc)) from exc
            self._compiled[pattern] = compiled
        return compiled

    def matches(self, pattern: str, name: str) -> bool:
        return self._compile(pattern).search(name) is not None


class SubstringMatcher:
    """Plain substring containment."""

    def matches(self, pattern: str, name: str) -> bool:
        return pattern in name


class ExactMatcher:
    """Whole-name equality."""

    def matches(self, pattern: str, name: str) -> bool:
        return pattern == name


_MATCHERS = {
    "regex": RegexMatcher,
    "substring": SubstringMatcher,
    "exact": ExactMatcher,
}


def get_matcher(kind: str = "regex") -> KeyMatcher:
    """Build a matcher by name: 'regex', 'substring' or 'exact'."""
    try:
        return _MATCHERS[kind]()
    except KeyError:
        raise ValueError(f"Unknown matcher: {kind}") from None
