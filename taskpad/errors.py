"""
Error hierarchy for taskpad.

Hierarchy:
    TaskpadError
    ├── ValidationError       - form submission rejected
    │   ├── InvalidRepeatError
    │   └── EmptyNameError
    ├── RepeatParseError      - recurrence text not understood
    ├── ConfigError           - config file unreadable or not valid TOML
    └── StoreError            - task store operation failed
        └── TaskNotFoundError
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TaskpadError(Exception):
    """Base error for all taskpad failures."""

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.error_type,
            "message": self.message,
            "context": {k: str(v) for k, v in self.context.items()},
        }

    def __repr__(self) -> str:
        return f"{self.error_type}: {self.message}"


class ValidationError(TaskpadError):
    """A form could not be turned into a task."""

    def __init__(self, message: str, field: Optional[str] = None, **context: Any):
        self.field = field
        super().__init__(message, field=field, **context)


class InvalidRepeatError(ValidationError):
    def __init__(self, message: str = "Invalid repeat format", **context: Any):
        super().__init__(message, field="repeats", **context)


class EmptyNameError(ValidationError):
    def __init__(self, message: str = "Task name cannot be empty", **context: Any):
        super().__init__(message, field="name", **context)


class RepeatParseError(TaskpadError, ValueError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unrecognized repeat rule: {text!r}", text=text)


class ConfigError(TaskpadError):
    def __init__(self, message: str, path: Optional[str] = None, **context: Any):
        self.path = path
        super().__init__(message, path=path, **context)


class StoreError(TaskpadError):
    pass


class TaskNotFoundError(StoreError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"No task with id {task_id}", task_id=task_id)
