from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

NO_DIFFERENCE = "No difference found"


@dataclass(frozen=True)
class LineColumn:
    line: int
    column: int
    length: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column, "length": self.length}


@dataclass
class DifferenceDescription:
    difference_found: bool = False
    message: str = NO_DIFFERENCE
    differences: List[LineColumn] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return not self.difference_found

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difference_found": self.difference_found,
            "message": self.message,
            "differences": [loc.to_dict() for loc in self.differences],
        }


def format_difference_message(msg: str, location: Optional[LineColumn], token: Optional[str]) -> str:
    """
    Render the human-readable explanation for a divergence.
    A missing location means the compare text ran out first.
    """
    if location is None:
        return f"{msg} at end of text"
    if token is None:
        return f"{msg} at end of text (line #{location.line} column #{location.column})"
    return f'{msg} starting at line #{location.line} column #{location.column} "{token}".'


def end_of_text_location(locations: List[LineColumn]) -> LineColumn:
    """Zero-length location just past the last token (line 1, column 0 for an empty text)."""
    if not locations:
        return LineColumn(1, 0, 0)
    last = locations[-1]
    return LineColumn(last.line, last.column + last.length, 0)
