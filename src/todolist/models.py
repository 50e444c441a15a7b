"""Data models and constants for todolist."""

import os
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple

DEFAULT_DIR = os.path.expanduser("~/.todolist")
STORE_KEY = "todos-v1"

Filter = Literal["all", "active", "completed"]
FILTERS: Tuple[Filter, ...] = ("all", "active", "completed")
DEFAULT_FILTER: Filter = "all"


def new_task_id() -> str:
    """Return a fresh random task id."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Task:
    """A single to-do entry."""

    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """Build a Task from a stored record.

        Raises ValueError when the record does not have the
        {id, text, completed} shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"task record must be an object, got {type(data).__name__}")
        try:
            task_id, text, completed = data["id"], data["text"], data["completed"]
        except KeyError as e:
            raise ValueError(f"task record missing field {e}") from None
        if not isinstance(task_id, str) or not task_id:
            raise ValueError("task id must be a non-empty string")
        if not isinstance(text, str) or not text.strip():
            raise ValueError("task text must be a non-empty string")
        if not isinstance(completed, bool):
            raise ValueError("task completed flag must be a boolean")
        return cls(id=task_id, text=text, completed=completed)
