from __future__ import annotations
import json
from typing import Any, Dict, Iterable, List
from pathlib import Path

from licensematch.core.errors import TemplateFormatError
from licensematch.core.event import TemplateEvent, events_from_dicts


def save_template_events(path: str | Path, events: Iterable[TemplateEvent]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "schema_version": "1",
        "events": [e.to_dict() for e in events],
    }
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def load_template_events(path: str | Path) -> List[TemplateEvent]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "events" in data:
        return events_from_dicts(data["events"])
    if isinstance(data, list):
        return events_from_dicts(data)
    raise TemplateFormatError("Unrecognized template event JSON format")


def load_text(path: str | Path) -> str:
    with Path(path).open("r", encoding="utf-8") as f:
        return f.read()


def save_json(path: str | Path, obj: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
