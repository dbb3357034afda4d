"""
The task record produced by forms and kept in the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .dates import get_today
from .repeat import Repeat, parse_repeat, repeat_to_text


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value else None


@dataclass
class Task:
    name: str = ""
    date: datetime = field(default_factory=get_today)
    repeats: Repeat = field(default_factory=Repeat.never)
    group: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    id: Optional[int] = None

    def set_group(self, group: Optional[str]) -> None:
        self.group = _optional_text(group)

    def set_description(self, description: Optional[str]) -> None:
        self.description = _optional_text(description)

    def set_url(self, url: Optional[str]) -> None:
        self.url = _optional_text(url)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "date": self.date.isoformat(),
            "repeats": repeat_to_text(self.repeats),
        }
        for key in ("group", "description", "url"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        raw_id = data.get("id")
        task = cls(
            name=str(data.get("name") or ""),
            date=datetime.fromisoformat(data["date"]) if data.get("date") else get_today(),
            repeats=parse_repeat(str(data.get("repeats") or "")),
            id=int(raw_id) if raw_id is not None else None,
        )
        task.set_group(data.get("group"))
        task.set_description(data.get("description"))
        task.set_url(data.get("url"))
        return task
