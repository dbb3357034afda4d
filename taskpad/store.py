"""
Task storage: an id-keyed collection with JSON persistence.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from .errors import StoreError
from .task import Task


logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task collection, optionally backed by a JSON file.

    Example:
        >>> store = TaskStore()
        >>> task_id = store.add(Task(name="Pay rent"))
        >>> store.get(task_id).name
        'Pay rent'
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._tasks: Dict[int, Task] = {}
        self._next_id = 1

    @classmethod
    def load(cls, path: Path) -> "TaskStore":
        store = cls(path)
        if not store.path.exists():
            logger.debug("no task file at %s, starting empty", store.path)
            return store

        try:
            raw = json.loads(store.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreError(f"Could not read tasks from {store.path}: {e}", path=str(store.path)) from e
        if not isinstance(raw, list):
            raise StoreError(f"Malformed task file {store.path}", path=str(store.path))

        try:
            for item in raw:
                store.add(Task.from_dict(item))
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            raise StoreError(f"Malformed task record in {store.path}: {e}", path=str(store.path)) from e
        logger.debug("loaded %d tasks from %s", len(store), store.path)
        return store

    def save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump([t.to_dict() for t in self.tasks()], f, indent=2)
        os.replace(tmp, self.path)
        logger.debug("saved %d tasks to %s", len(self), self.path)

    def add(self, task: Task) -> int:
        """
        Store a task and return its id.

        A task that already carries an unused id keeps it, so an edited task
        re-added after deleting the original retains its identity.
        """
        if task.id is None or task.id in self._tasks:
            task.id = self._next_id
        self._tasks[task.id] = task
        self._next_id = max(self._next_id, task.id + 1)
        logger.debug("added task %d", task.id)
        return task.id

    def get(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    def delete(self, task_id: int) -> bool:
        removed = self._tasks.pop(task_id, None) is not None
        if removed:
            logger.debug("deleted task %d", task_id)
        return removed

    def tasks(self) -> List[Task]:
        return sorted(self._tasks.values(), key=lambda t: (t.date, t.id or 0))

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
