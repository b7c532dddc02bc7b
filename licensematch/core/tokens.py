"""
Normalization and tokenization of license text.

Both the template literals and the compare text go through the same pipeline:
normalize_text() canonicalizes quotes, dashes and whitespace while keeping the
original casing, then tokenize() splits each line into lowercased words and
single punctuation characters, recording where every token came from so that
divergences can be reported against the compare text.
"""
from __future__ import annotations
import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from licensematch.core.differences import LineColumn

# Comment markers for the usual source languages, plus stray commas.
# `/` is a token of its own, so `//`, `/*` and `*/` reduce to `/` and `*`.
DEFAULT_SKIPPABLE_TOKENS = frozenset({
    "#", "##", "*", "**", "/", "=begin", "=end", ",",
})

DEFAULT_EQUIVALENT_WORDS: Dict[str, str] = {
    "acknowledgement": "acknowledgment",
    "analogue": "analog",
    "analyse": "analyze",
    "artefact": "artifact",
    "authorisation": "authorization",
    "authorised": "authorized",
    "calibre": "caliber",
    "cancelled": "canceled",
    "capitalisations": "capitalizations",
    "catalogue": "catalog",
    "categorise": "categorize",
    "centre": "center",
    "emphasised": "emphasized",
    "favour": "favor",
    "favourite": "favorite",
    "fulfil": "fulfill",
    "fulfilment": "fulfillment",
    "initialise": "initialize",
    "judgement": "judgment",
    "labelling": "labeling",
    "labour": "labor",
    "licence": "license",
    "maximise": "maximize",
    "modelled": "modeled",
    "modelling": "modeling",
    "offence": "offense",
    "optimise": "optimize",
    "organisation": "organization",
    "organise": "organize",
    "practise": "practice",
    "programme": "program",
    "realise": "realize",
    "recognise": "recognize",
    "signalling": "signaling",
    "utilisation": "utilization",
    "whilst": "while",
    "wilful": "willful",
    "noncommercial": "non-commercial",
}

Tokens = List[str]
Locations = List[LineColumn]

_SINGLE_QUOTES = re.compile("[‘’‚‛`]")
_DOUBLE_QUOTES = re.compile("[“”„‟]")
_DASHES = re.compile("[‐‑‒–—―−﹘﹣－-]+")
_LINE_BREAKS = re.compile(r"\r\n?")
_SPACES = re.compile(r"[^\S\n]+")
_TOKEN_PATTERN = re.compile(r"[^\s.,?\"'();:/\[\]]+|[.,?\"'();:/\[\]]")
_SEPARATOR_LINE = re.compile(r"^(-+|=+|\*+)$")


def normalize_text(text: str) -> str:
    s = _LINE_BREAKS.sub("\n", text)
    s = _SINGLE_QUOTES.sub("'", s)
    s = s.replace("http://", "https://")
    s = s.replace("''", '"')
    s = _DASHES.sub("-", s)
    s = _DOUBLE_QUOTES.sub('"', s)
    return _SPACES.sub(" ", s)


def tokenize(text: str) -> Tuple[Tokens, Locations]:
    """
    Split already normalized text into lowercased tokens.

    Returns the tokens and, index for index, the LineColumn (1-based line,
    0-based column, length) each token was read from.
    """
    tokens: Tokens = []
    locations: Locations = []
    for line_no, line in enumerate(text.split("\n"), start=1):
        for m in _TOKEN_PATTERN.finditer(line):
            tokens.append(m.group(0).lower())
            locations.append(LineColumn(line_no, m.start(), m.end() - m.start()))
    return tokens, locations


def token_at(tokens: Tokens, index: int) -> Optional[str]:
    if 0 <= index < len(tokens):
        return tokens[index]
    return None


def locate_original_text(full_text: str, start: int, end: int, locations: Locations) -> str:
    """
    Original-cased text from the first character of token `start` through the
    last character of token `end` (inclusive). When `end` is past the last token
    the rest of the text is returned.
    """
    if start > end or start < 0 or start >= len(locations):
        return ""
    lines = full_text.split("\n")
    first = locations[start]
    if first.line > len(lines):
        return ""
    last = locations[end] if end < len(locations) else None
    head = lines[first.line - 1]
    if last is None:
        return "\n".join([head[first.column:]] + lines[first.line:])
    if last.line == first.line:
        return head[first.column:last.column + last.length]
    parts = [head[first.column:]]
    parts.extend(lines[first.line:last.line - 1])
    if last.line <= len(lines):
        parts.append(lines[last.line - 1][:last.column + last.length])
    return "\n".join(parts)


class Tokenizer:
    def __init__(
        self,
        skippable_tokens: Iterable[str] | None = None,
        equivalent_words: Mapping[str, str] | None = None,
    ) -> None:
        self.skippable_tokens = frozenset(
            t.strip().lower() for t in (DEFAULT_SKIPPABLE_TOKENS if skippable_tokens is None else skippable_tokens)
        )
        words = dict(DEFAULT_EQUIVALENT_WORDS)
        if equivalent_words:
            words.update({str(k).lower(): str(v).lower() for k, v in equivalent_words.items()})
        self.equivalent_words = words

    def normalize(self, text: str) -> str:
        return normalize_text(text)

    def tokenize(self, text: str) -> Tuple[Tokens, Locations]:
        return tokenize(normalize_text(text))

    def can_skip(self, token: Optional[str]) -> bool:
        if token is None:
            return False
        t = token.strip().lower()
        return t in self.skippable_tokens or bool(_SEPARATOR_LINE.match(t))

    def _canonical(self, token: str) -> str:
        t = token.strip().lower()
        return self.equivalent_words.get(t, t)

    def tokens_equivalent(self, a: Optional[str], b: Optional[str]) -> bool:
        if a is None or b is None:
            return a is None and b is None
        return self._canonical(a) == self._canonical(b)


_DEFAULT = Tokenizer()


def can_skip(token: Optional[str]) -> bool:
    return _DEFAULT.can_skip(token)


def tokens_equivalent(a: Optional[str], b: Optional[str]) -> bool:
    return _DEFAULT.tokens_equivalent(a, b)


def default_tokenizer() -> Tokenizer:
    return _DEFAULT
