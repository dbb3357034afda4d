"""
Task create/edit screen: key handling, rendering and saving for a TaskForm.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from .ansi import CLEAR_SCREEN, HIDE_CURSOR, RESET, SHOW_CURSOR, goto, write
from .config import Settings
from .errors import ValidationError
from .input import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DOWN,
    KEY_END,
    KEY_HOME,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_SHIFTTAB,
    KEY_TAB,
    KEY_UP,
    RawInput,
    is_printable,
    key_display_name,
    key_from_name,
)
from .store import TaskStore
from .style import resolve_style
from .task import Task
from .task_form import TASK_FIELDS, TaskField, TaskForm
from .utils import pad_string, truncate_string


logger = logging.getLogger(__name__)

REPEATS_HINT = "Never | Daily | Weekly | Monthly | Yearly | Mon,Tue,Wed,Thu,Fri,Sat,Sun"

_MARGIN = 2
_BOX_HEIGHT = 3


class InputMode(Enum):
    NORMAL = "normal"
    INSERT = "insert"


class PageAction(Enum):
    CONTINUE = "continue"
    SAVED = "saved"
    BACK = "back"
    QUIT = "quit"


def _visible_window(text: str, cursor: int, width: int) -> Tuple[str, int]:
    """Slice ``text`` to ``width`` columns keeping ``cursor`` in view."""
    if width <= 0:
        return "", 0
    start = 0
    if cursor >= width:
        start = cursor - width + 1
    return text[start:start + width], cursor - start


class TaskPage:
    """
    Screen for creating a new task or editing an existing one.

    The page never holds the task store; it is handed in for the duration
    of a key press that may save.

    Example:
        >>> page = TaskPage(get_config())
        >>> action = page.run(store)
    """

    def __init__(self, settings: Settings, task: Optional[Task] = None):
        self.settings = settings
        if task is None:
            self.task_form = TaskForm.new_empty()
            self.editing_task: Optional[int] = None
        else:
            self.task_form = TaskForm.from_task(task, settings)
            self.editing_task = task.id
        self.input_mode = InputMode.NORMAL
        self.error: Optional[str] = None

    # Keys

    def _binding(self, name: str) -> str:
        return key_from_name(getattr(self.settings.keybindings, name))

    def handle_key(self, key: Optional[str], store: TaskStore) -> PageAction:
        if not key:
            return PageAction.CONTINUE
        if self.input_mode is InputMode.INSERT:
            return self._handle_insert_key(key, store)
        return self._handle_normal_key(key, store)

    def _handle_normal_key(self, key: str, store: TaskStore) -> PageAction:
        form = self.task_form
        if key == self._binding("enter_insert_mode"):
            self.input_mode = InputMode.INSERT
        elif key in (self._binding("down"), KEY_DOWN, KEY_TAB):
            form.next_field()
        elif key in (self._binding("up"), KEY_UP, KEY_SHIFTTAB):
            form.prev_field()
        elif key == self._binding("save_changes"):
            if self.submit(store):
                return PageAction.SAVED
        elif key == self._binding("go_back"):
            return PageAction.BACK
        elif key == self._binding("quit"):
            return PageAction.QUIT
        return PageAction.CONTINUE

    def _handle_insert_key(self, key: str, store: TaskStore) -> PageAction:
        form = self.task_form
        normal_key = self._binding("enter_normal_mode")
        save_key = self._binding("save_changes")

        if key == normal_key and not is_printable(key):
            self.input_mode = InputMode.NORMAL
        elif key == save_key and not is_printable(key):
            if self.submit(store):
                return PageAction.SAVED
        elif key in (KEY_TAB, KEY_DOWN):
            form.next_field()
        elif key in (KEY_SHIFTTAB, KEY_UP):
            form.prev_field()
        elif key == KEY_LEFT:
            form.move_cursor(-1)
        elif key == KEY_RIGHT:
            form.move_cursor(1)
        elif key == KEY_HOME:
            form.move_cursor(-len(form.current_field_value()))
        elif key == KEY_END:
            form.move_cursor(len(form.current_field_value()))
        elif key in (KEY_BACKSPACE, KEY_DELETE):
            form.remove_char()
        elif is_printable(key):
            form.add_char(key)
        return PageAction.CONTINUE

    def submit(self, store: TaskStore) -> bool:
        """
        Validate the form and write the result into ``store``.

        Editing replaces the original task under the same id. On a
        validation error the message is kept in ``error`` for display and
        the form stays as it was.
        """
        try:
            task = self.task_form.submit(self.settings)
        except ValidationError as e:
            self.error = str(e)
            return False

        if self.editing_task is not None:
            store.delete(self.editing_task)
        task_id = store.add(task)
        logger.debug("saved task %d from form", task_id)
        self.error = None
        return True

    # Rendering

    def _color(self, name: str) -> str:
        return resolve_style(getattr(self.settings.colors, name), "")

    def _date_hint(self) -> str:
        formats = self.settings.date_formats
        return f"{formats.input_date_hint} or {formats.input_datetime_hint}"

    def _keybind_hint(self) -> str:
        kb = self.settings.keybindings
        color = self._color("secondary_color")

        def k(name: str) -> str:
            return f"{color}{key_display_name(getattr(kb, name))}{RESET}"

        return (
            f"Press {k('enter_insert_mode')} to enter insert mode, {k('quit')} to quit, "
            f"{k('up')} and {k('down')} to move up and down, {k('save_changes')} to save, "
            f"{k('enter_normal_mode')} to exit input mode, and {k('go_back')} to go back "
            "to the main screen. (*) Fields are required."
        )

    def field_title(self, task_field: TaskField) -> str:
        return {
            TaskField.NAME: "Name (*)",
            TaskField.DATE: f"Date ({self._date_hint()})",
            TaskField.REPEATS: f"Repeats ({REPEATS_HINT})",
            TaskField.GROUP: "Group",
            TaskField.DESCRIPTION: "Description",
            TaskField.URL: "URL",
        }[task_field]

    def _box(self, x: int, y: int, width: int, title: str, body: str, style: str) -> List[str]:
        inner = max(0, width - 2)
        title = truncate_string(title, max(0, inner - 2))
        top = "┌" + (f" {title} " if title else "")
        top = pad_string(top, width - 1, fillchar="─") + "┐"
        middle = f"│{style}{pad_string(body, inner)}{RESET}│"
        bottom = "└" + "─" * inner + "┘"
        return [goto(x, y) + top, goto(x, y + 1) + middle, goto(x, y + 2) + bottom]

    def render(self, width: int = 80, focused: bool = True) -> str:
        """
        Build the full screen as an ANSI string.

        Rows: key hint, one box per field in form order, then the error box
        if the last save failed. The terminal cursor ends on the active
        field at the form's cursor offset.
        """
        form = self.task_form
        x = 1 + _MARGIN
        box_width = max(10, width - 2 * _MARGIN)
        inner = box_width - 2
        primary = self._color("primary_color")

        out: List[str] = [CLEAR_SCREEN, HIDE_CURSOR]
        out.append(goto(1, 1) + (primary if focused else "") + "Task" + RESET)
        out.append(goto(x, 1 + _MARGIN) + self._keybind_hint())

        field_top = 1 + _MARGIN + _BOX_HEIGHT
        cursor_xy = (x + 1, field_top + 1)
        for i, task_field in enumerate(TASK_FIELDS):
            y = field_top + i * _BOX_HEIGHT
            text = form.named_field_value(task_field)
            active = i == form.current_field_index
            if active:
                text, col = _visible_window(text, form.cursor_pos, inner)
                cursor_xy = (x + 1 + col, y + 1)
            else:
                text = text[:inner]
            style = primary if active and self.input_mode is InputMode.INSERT else ""
            out.extend(self._box(x, y, box_width, self.field_title(task_field), text, style))

        if self.error:
            y = field_top + form.num_fields * _BOX_HEIGHT
            out.extend(self._box(x, y, box_width, "Error", self.error[:inner], self._color("error_color")))

        if focused:
            out.append(goto(*cursor_xy) + SHOW_CURSOR)
        return "".join(out)

    def run(self, store: TaskStore, inp: Optional[RawInput] = None) -> PageAction:
        """
        Drive the page from the keyboard until it saves, goes back or quits.

        A closed input stream counts as quitting.
        """
        if inp is None:
            with RawInput() as raw:
                return self.run(store, raw)

        while True:
            write(self.render())
            try:
                key = inp.get_key()
            except EOFError:
                logger.debug("input closed, leaving task page")
                write(CLEAR_SCREEN)
                return PageAction.QUIT
            action = self.handle_key(key, store)
            if action is not PageAction.CONTINUE:
                write(CLEAR_SCREEN)
                return action
