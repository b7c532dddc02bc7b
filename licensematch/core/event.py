from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol

from licensematch.core.errors import TemplateFormatError

TEXT = "text"
VARIABLE = "variable"
BEGIN_OPTIONAL = "begin_optional"
END_OPTIONAL = "end_optional"
EVENT_TYPES = (TEXT, VARIABLE, BEGIN_OPTIONAL, END_OPTIONAL)


class TemplateEventHandler(Protocol):
    def literal_text(self, text: str) -> None: ...
    def variable_rule(self, name: str, match: str, example: str = "") -> None: ...
    def begin_optional(self) -> None: ...
    def end_optional(self) -> None: ...
    def complete_parsing(self) -> None: ...


@dataclass(frozen=True)
class TemplateEvent:
    """One structural event emitted by a license template parser."""
    type: str
    text: Optional[str] = None
    name: Optional[str] = None
    match: Optional[str] = None
    example: str = ""

    @staticmethod
    def literal(text: str) -> "TemplateEvent":
        return TemplateEvent(TEXT, text=text)

    @staticmethod
    def variable(name: str, match: str, example: str = "") -> "TemplateEvent":
        return TemplateEvent(VARIABLE, name=name, match=match, example=example)

    @staticmethod
    def begin() -> "TemplateEvent":
        return TemplateEvent(BEGIN_OPTIONAL)

    @staticmethod
    def end() -> "TemplateEvent":
        return TemplateEvent(END_OPTIONAL)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"type": self.type}
        if self.type == TEXT:
            d["text"] = self.text
        elif self.type == VARIABLE:
            d.update({"name": self.name, "match": self.match, "example": self.example})
        return d

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "TemplateEvent":
        t = str(d.get("type", "")).lower()
        if t not in EVENT_TYPES:
            raise TemplateFormatError(f"Unknown template event type {d.get('type')!r}")
        if t == TEXT:
            if "text" not in d:
                raise TemplateFormatError("Text event without 'text'")
            return TemplateEvent.literal(str(d["text"]))
        if t == VARIABLE:
            if "match" not in d:
                raise TemplateFormatError("Variable event without 'match'")
            return TemplateEvent.variable(
                str(d.get("name", "")),
                str(d["match"]),
                str(d.get("example", d.get("original", ""))),
            )
        return TemplateEvent(t)


def replay(events: Iterable[TemplateEvent], handler: TemplateEventHandler, complete: bool = True) -> None:
    for e in events:
        if e.type == TEXT:
            handler.literal_text(e.text or "")
        elif e.type == VARIABLE:
            handler.variable_rule(e.name or "", e.match or "", e.example)
        elif e.type == BEGIN_OPTIONAL:
            handler.begin_optional()
        elif e.type == END_OPTIONAL:
            handler.end_optional()
    if complete:
        handler.complete_parsing()


def events_from_dicts(items: Iterable[Dict[str, Any]]) -> List[TemplateEvent]:
    return [TemplateEvent.from_dict(item) for item in items]
