"""
Recurrence rules for tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from .errors import RepeatParseError


WEEKDAYS: Tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_WEEKDAY_INDEX = {name.lower(): i for i, name in enumerate(WEEKDAYS)}


class RepeatKind(Enum):
    NEVER = "Never"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"
    CUSTOM = "Custom"


_KEYWORDS = {
    kind.value.lower(): kind
    for kind in RepeatKind
    if kind is not RepeatKind.CUSTOM
}


@dataclass(frozen=True)
class Repeat:
    """
    How often a task repeats.

    ``weekdays`` holds weekday indexes (0 = Monday) and is only used by
    ``RepeatKind.CUSTOM``; it is always sorted and free of duplicates.
    """

    kind: RepeatKind = RepeatKind.NEVER
    weekdays: Tuple[int, ...] = ()

    @classmethod
    def never(cls) -> "Repeat":
        return cls(RepeatKind.NEVER)

    @classmethod
    def on_weekdays(cls, days: Iterable[int]) -> "Repeat":
        normalized = tuple(sorted(set(int(d) for d in days)))
        for d in normalized:
            if d < 0 or d >= len(WEEKDAYS):
                raise ValueError(f"weekday index out of range: {d}")
        if not normalized:
            return cls.never()
        return cls(RepeatKind.CUSTOM, normalized)

    @property
    def is_never(self) -> bool:
        return self.kind is RepeatKind.NEVER

    def __str__(self) -> str:
        return repeat_to_text(self)


def parse_repeat(text: str) -> Repeat:
    """
    Parse a recurrence rule.

    Accepts "" or "Never", "Daily", "Weekly", "Monthly", "Yearly", or a
    comma-separated list of weekday abbreviations such as "Mon,Wed,Fri".
    Matching ignores case and surrounding whitespace.

    Raises:
        RepeatParseError: if the text is none of the above
    """
    raw = text.strip()
    if not raw:
        return Repeat.never()

    kind = _KEYWORDS.get(raw.lower())
    if kind is not None:
        return Repeat(kind)

    days = []
    for token in raw.split(","):
        idx = _WEEKDAY_INDEX.get(token.strip().lower())
        if idx is None:
            raise RepeatParseError(text)
        days.append(idx)
    return Repeat.on_weekdays(days)


def repeat_to_text(repeat: Repeat) -> str:
    if repeat.kind is RepeatKind.CUSTOM:
        return ",".join(WEEKDAYS[d] for d in repeat.weekdays)
    return repeat.kind.value
