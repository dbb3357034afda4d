"""
The task create/edit form: semantic fields over a FieldEditor, seeding from
an existing task, and validation into a Task on submit.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union

from .config import Settings
from .dates import date_to_input_text, get_today, parse_date
from .editor import FieldEditor
from .errors import EmptyNameError, InvalidRepeatError, RepeatParseError
from .repeat import parse_repeat, repeat_to_text
from .task import Task


class TaskField(Enum):
    NAME = "name"
    DATE = "date"
    REPEATS = "repeats"
    GROUP = "group"
    DESCRIPTION = "description"
    URL = "url"


# Navigation order. Rendering maps indexes to rows, so keep it stable.
TASK_FIELDS: Tuple[TaskField, ...] = (
    TaskField.NAME,
    TaskField.DATE,
    TaskField.REPEATS,
    TaskField.GROUP,
    TaskField.DESCRIPTION,
    TaskField.URL,
)

FieldKey = Union[TaskField, str]


class TaskForm:
    """
    Editable form backing the task screen.

    Example:
        >>> form = TaskForm.new_empty()
        >>> for ch in "Pay rent":
        ...     form.add_char(ch)
        >>> task = form.submit(get_config())
    """

    def __init__(self, editor: FieldEditor, record_id: Optional[int] = None):
        self.editor = editor
        self.record_id = record_id

    @classmethod
    def new_empty(cls) -> "TaskForm":
        return cls(FieldEditor(f.value for f in TASK_FIELDS))

    @classmethod
    def from_task(cls, task: Task, settings: Settings) -> "TaskForm":
        """
        Seed a form from an existing task, cursor at the end of the name.

        Unset optional fields become empty buffers.
        """
        editor = FieldEditor(
            (f.value for f in TASK_FIELDS),
            {
                TaskField.NAME.value: task.name,
                TaskField.DATE.value: date_to_input_text(task.date, settings),
                TaskField.REPEATS.value: repeat_to_text(task.repeats),
                TaskField.GROUP.value: task.group or "",
                TaskField.DESCRIPTION.value: task.description or "",
                TaskField.URL.value: task.url or "",
            },
        )
        editor.set_cursor(len(task.name))
        return cls(editor, record_id=task.id)

    # Editing

    def add_char(self, ch: str) -> None:
        self.editor.insert_char(ch)

    def remove_char(self) -> None:
        self.editor.delete_char_before_cursor()

    def move_cursor(self, delta: int) -> None:
        self.editor.move_cursor(delta)

    def next_field(self) -> None:
        self.editor.next_field()

    def prev_field(self) -> None:
        self.editor.prev_field()

    # Read-only state for rendering

    @property
    def cursor_pos(self) -> int:
        return self.editor.cursor

    @property
    def current_field_index(self) -> int:
        return self.editor.active_index

    @property
    def current_field(self) -> TaskField:
        return TASK_FIELDS[self.editor.active_index]

    @property
    def num_fields(self) -> int:
        return self.editor.field_count

    def current_field_value(self) -> str:
        return self.editor.current_value()

    def named_field_value(self, name: FieldKey) -> str:
        return self.editor.value(TaskField(name).value)

    # Submission

    def submit(self, settings: Settings, today: Optional[datetime] = None) -> Task:
        """
        Validate the buffers and build a Task.

        The repeat rule is checked before the name, so a form with both an
        invalid rule and an empty name reports the rule. An unparsable date
        falls back to today. Buffers are left as they are on failure.

        Args:
            settings: Supplies the date input formats
            today: Fallback date (defaults to today at midnight)

        Raises:
            InvalidRepeatError: repeats text is not a known rule
            EmptyNameError: name buffer is empty
        """
        try:
            repeats = parse_repeat(self.named_field_value(TaskField.REPEATS))
        except RepeatParseError as e:
            raise InvalidRepeatError() from e

        date = parse_date(self.named_field_value(TaskField.DATE), settings)
        if date is None:
            date = today if today is not None else get_today()

        name = self.named_field_value(TaskField.NAME)
        if not name:
            raise EmptyNameError()

        task = Task(name=name, date=date, repeats=repeats, id=self.record_id)
        group = self.named_field_value(TaskField.GROUP)
        if group:
            task.group = group
        description = self.named_field_value(TaskField.DESCRIPTION)
        if description:
            task.description = description
        url = self.named_field_value(TaskField.URL)
        if url:
            task.url = url

        return task
