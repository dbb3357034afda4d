"""
taskpad - a terminal task manager.

This package provides:
- FieldEditor: cursor-based editing over ordered named text fields
- TaskForm: the task create/edit form with validation into a Task
- TaskPage: the interactive screen driving a TaskForm from the keyboard
- Task, Repeat and TaskStore: the task record, its recurrence rule and storage
"""

__version__ = "0.1.0"

from .config import Settings, DateFormats, Colors, KeyBindings, get_config, configure, load_config
from .dates import parse_date, date_to_input_text, date_to_display_text, get_today
from .editor import Field, FieldEditor
from .errors import (
    TaskpadError,
    ValidationError,
    InvalidRepeatError,
    EmptyNameError,
    RepeatParseError,
    ConfigError,
    StoreError,
    TaskNotFoundError,
)
from .repeat import Repeat, RepeatKind, WEEKDAYS, parse_repeat, repeat_to_text
from .store import TaskStore
from .task import Task
from .task_form import TaskField, TaskForm, TASK_FIELDS
from .task_page import TaskPage, InputMode, PageAction

__all__ = [
    "Settings", "DateFormats", "Colors", "KeyBindings", "get_config", "configure", "load_config",
    "parse_date", "date_to_input_text", "date_to_display_text", "get_today",
    "Field", "FieldEditor",
    "TaskpadError", "ValidationError", "InvalidRepeatError", "EmptyNameError",
    "RepeatParseError", "ConfigError", "StoreError", "TaskNotFoundError",
    "Repeat", "RepeatKind", "WEEKDAYS", "parse_repeat", "repeat_to_text",
    "TaskStore",
    "Task",
    "TaskField", "TaskForm", "TASK_FIELDS",
    "TaskPage", "InputMode", "PageAction",
]
