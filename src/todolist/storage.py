"""Local JSON key-value store for todolist.

Each key is one file, ``<directory>/<key>.json``. Reads and writes are
best-effort: failures fall back to the caller's default or are dropped.
"""

import json
import logging
import os
import tempfile
from typing import Any, List

from .models import Task, STORE_KEY

logger = logging.getLogger(__name__)


class JsonStore:
    """Named JSON slots in a directory."""

    def __init__(self, directory: str):
        self.directory = os.path.abspath(os.path.expanduser(directory))

    def path_for(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def load(self, key: str, default: Any) -> Any:
        """Return the parsed value stored under key, or default.

        A missing slot, an unreadable file and unparseable JSON all return
        default; nothing is raised.
        """
        path = self.path_for(key)
        if not os.path.exists(path):
            logger.debug("No stored value for %r at %s", key, path)
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError, RecursionError):
            logger.debug("Could not read %r from %s", key, path, exc_info=True)
            return default

    def save(self, key: str, value: Any) -> None:
        """Serialize value under key. Failures are discarded."""
        path = self.path_for(key)
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.write("\n")
                os.replace(tmp, path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except (OSError, TypeError, ValueError, RecursionError):
            # Non-fatal; the in-memory list stays authoritative
            logger.debug("Could not save %r to %s", key, path, exc_info=True)


def decode_tasks(raw: Any) -> List[Task]:
    """Parse a stored array into tasks. Raises ValueError on a bad shape."""
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of tasks, got {type(raw).__name__}")
    tasks = [Task.from_dict(item) for item in raw]
    ids = {t.id for t in tasks}
    if len(ids) != len(tasks):
        raise ValueError("duplicate task ids")
    return tasks


def load_tasks(store: JsonStore, key: str = STORE_KEY) -> List[Task]:
    """Load the task list, treating any incompatible shape as empty."""
    raw = store.load(key, [])
    try:
        return decode_tasks(raw)
    except ValueError:
        logger.debug("Discarding incompatible stored value for %r", key, exc_info=True)
        return []


def save_tasks(store: JsonStore, tasks: List[Task], key: str = STORE_KEY) -> None:
    """Write the task list as an array of {id, text, completed} objects."""
    store.save(key, [t.to_dict() for t in tasks])
