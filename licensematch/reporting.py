from __future__ import annotations
from typing import Any, Dict, List, Optional

from licensematch.core.differences import DifferenceDescription, LineColumn
from licensematch.core.tokens import normalize_text


def _trim(s: str, width: int) -> str:
    return s if len(s) <= width else (s[: max(0, width - 1)] + "…")


def build_excerpt(compare_text: str, location: LineColumn, *, width: int = 78) -> List[str]:
    """
    Two display lines for a divergence: the offending line of the (normalized)
    compare text and a caret marker underneath the reported token.
    """
    lines = normalize_text(compare_text).split("\n")
    if location.line < 1 or location.line > len(lines):
        return []
    prefix = f"{location.line:>5} | "
    line = lines[location.line - 1]
    start = 0
    # keep the marked column on screen for long lines
    if location.column > width - 10:
        start = location.column - (width // 2)
        line = "…" + line[start + 1:]
    shown = _trim(line, width)
    marker = " " * (len(prefix) + location.column - start) + "^" * max(1, location.length)
    return [prefix + shown, marker]


def build_json_report(
    description: DifferenceDescription,
    compare_text: Optional[str] = None,
) -> Dict[str, Any]:
    report: Dict[str, Any] = {
        "matched": description.matched,
        "message": description.message,
        "differences": [loc.to_dict() for loc in description.differences],
    }
    if compare_text is not None:
        report["excerpts"] = [
            "\n".join(build_excerpt(compare_text, loc)) for loc in description.differences
        ]
    return report


def format_text_report(
    description: DifferenceDescription,
    compare_text: Optional[str] = None,
    *,
    title: Optional[str] = None,
) -> str:
    """
    Build a human-friendly text report with:
      - header + verdict,
      - the divergence message,
      - each divergence location, with an excerpt when the compare text is given.
    """
    lines: List[str] = []
    hdr = title or "License Template Comparison"
    lines.append("=" * 80)
    lines.append(hdr)
    lines.append("=" * 80)
    lines.append(f"Matched: {description.matched}")
    lines.append(f"Message: {description.message}")
    if description.differences:
        lines.append("")
        lines.append("Differences:")
        for loc in description.differences:
            lines.append(f"  · line {loc.line}, column {loc.column}, length {loc.length}")
            if compare_text is not None:
                for ex in build_excerpt(compare_text, loc):
                    lines.append("    " + ex)
    lines.append("=" * 80)
    return "\n".join(lines)
