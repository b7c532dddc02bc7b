from __future__ import annotations
from typing import Protocol, Optional, Dict
import re

from licensematch.core.errors import InvalidPatternError


class PatternMatcher(Protocol):
    def match_prefix(self, pattern: str, text: str) -> Optional[int]: ...


class RegexPatternMatcher:
    """
    Applies a variable rule's pattern with the `re` module.

    match_prefix() returns the end offset of a match that starts at offset 0,
    or None. The match may cover only a prefix of the text.
    """

    def __init__(self, ignore_case: bool = True) -> None:
        self.ignore_case = ignore_case
        self._cache: Dict[str, re.Pattern] = {}

    def compile(self, pattern: str) -> re.Pattern:
        compiled = self._cache.get(pattern)
        if compiled is None:
            flags = re.IGNORECASE if self.ignore_case else 0
            try:
                compiled = re.compile(pattern, flags)
            except re.error as e:
                raise InvalidPatternError(pattern, str(e)) from e
            self._cache[pattern] = compiled
        return compiled

    def match_prefix(self, pattern: str, text: str) -> Optional[int]:
        m = self.compile(pattern).match(text)
        if m is None:
            return None
        return m.end()
