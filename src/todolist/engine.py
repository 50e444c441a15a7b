"""Store-backed task list."""

import logging
from typing import Callable, List, Optional

from .core import (
    add_task,
    toggle_task,
    edit_task,
    delete_task,
    clear_completed,
)
from .models import Task, STORE_KEY, new_task_id
from .storage import JsonStore, load_tasks, save_tasks

logger = logging.getLogger(__name__)


class TodoList:
    """Owns the task list and mirrors every change to a store slot.

    The slot is read once when the list is created. Each operation that
    changes the list writes it back immediately.
    """

    def __init__(
        self,
        store: JsonStore,
        key: str = STORE_KEY,
        new_id: Callable[[], str] = new_task_id,
    ):
        self.store = store
        self.key = key
        self.new_id = new_id
        self._tasks: List[Task] = load_tasks(store, key)
        logger.debug("Loaded %d task(s) from %r", len(self._tasks), key)

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def _commit(self, new_tasks: List[Task]) -> bool:
        if new_tasks is self._tasks:
            return False
        self._tasks = new_tasks
        save_tasks(self.store, self._tasks, self.key)
        return True

    def reload(self) -> None:
        """Re-read the list from the store."""
        self._tasks = load_tasks(self.store, self.key)

    def add(self, text: str) -> Optional[Task]:
        """Add a task; returns it, or None when text was blank."""
        if self._commit(add_task(self._tasks, text, self.new_id)):
            logger.info("Added task %s", self._tasks[0].id)
            return self._tasks[0]
        return None

    def toggle(self, task_id: str) -> bool:
        return self._commit(toggle_task(self._tasks, task_id))

    def edit(self, task_id: str, text: str) -> bool:
        return self._commit(edit_task(self._tasks, task_id, text))

    def delete(self, task_id: str) -> bool:
        changed = self._commit(delete_task(self._tasks, task_id))
        if changed:
            logger.info("Deleted task %s", task_id)
        return changed

    def clear_completed(self) -> int:
        """Remove completed tasks; returns how many were removed."""
        before = len(self._tasks)
        self._commit(clear_completed(self._tasks))
        return before - len(self._tasks)
