"""
Cursor-based editing over an ordered set of named text fields.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional


@dataclass
class Field:
    name: str
    buffer: str = ""


class FieldEditor:
    """
    Editable text buffers with a single active field and cursor.

    Field order is navigation order. Every operation clamps instead of
    failing, so any keystroke can be applied without checks by the caller.

    Example:
        >>> editor = FieldEditor(["name", "date"])
        >>> for ch in "Gym":
        ...     editor.insert_char(ch)
        >>> editor.value("name")
        'Gym'
    """

    def __init__(self, names: Iterable[str], values: Optional[Mapping[str, str]] = None):
        """
        Initialize editor.

        Args:
            names: Field names in navigation order
            values: Initial buffer per field name (missing names start empty)
        """
        values = values or {}
        self.fields: List[Field] = [Field(name, str(values.get(name, ""))) for name in names]
        if not self.fields:
            raise ValueError("FieldEditor needs at least one field")
        self._index: Dict[str, int] = {f.name: i for i, f in enumerate(self.fields)}
        self.active_index = 0
        self.cursor = 0

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def active_field(self) -> Field:
        return self.fields[self.active_index]

    def current_value(self) -> str:
        return self.active_field.buffer

    def value(self, name: str) -> str:
        return self.fields[self._index[name]].buffer

    def values(self) -> Dict[str, str]:
        return {f.name: f.buffer for f in self.fields}

    def set_cursor(self, offset: int) -> None:
        self.cursor = max(0, min(int(offset), len(self.active_field.buffer)))

    def insert_char(self, ch: str) -> None:
        buf = self.active_field.buffer
        self.active_field.buffer = buf[:self.cursor] + ch + buf[self.cursor:]
        self.cursor += len(ch)

    def delete_char_before_cursor(self) -> None:
        if self.cursor == 0:
            return
        f = self.active_field
        f.buffer = f.buffer[:self.cursor - 1] + f.buffer[self.cursor:]
        if not f.buffer:
            self.cursor = 0
        else:
            self.cursor -= 1

    def move_cursor(self, delta: int) -> None:
        """
        Move the cursor by ``delta`` characters, clamped to the buffer.

        Args:
            delta: Signed offset; large values jump to start or end
        """
        if delta < 0 and self.cursor <= -delta:
            self.cursor = 0
            return
        self.cursor = min(len(self.active_field.buffer), self.cursor + delta)

    def next_field(self) -> None:
        if self.active_index < self.field_count - 1:
            self.active_index += 1
            self.cursor = len(self.active_field.buffer)

    def prev_field(self) -> None:
        if self.active_index > 0:
            self.active_index -= 1
            self.cursor = len(self.active_field.buffer)
