"""To-do list operations (pure functions, no I/O).

Every mutation takes the previous list and returns a new one. The input is
never modified; when nothing changes the input list itself is returned.
"""

from dataclasses import replace
from typing import Callable, List, Optional

from .models import Task, new_task_id

ID_RETRIES = 8


def find_task(tasks: List[Task], task_id: str) -> Optional[Task]:
    """Return the task with task_id, or None."""
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def _fresh_id(existing, new_id: Callable[[], str]) -> str:
    """Draw an id not in existing; a stuck factory falls back to uuid4."""
    for _ in range(ID_RETRIES):
        task_id = new_id()
        if task_id not in existing:
            return task_id
    task_id = new_task_id()
    while task_id in existing:
        task_id = new_task_id()
    return task_id


def add_task(
    tasks: List[Task], text: str, new_id: Callable[[], str] = new_task_id
) -> List[Task]:
    """Prepend a new open task with trimmed text; empty text is a no-op."""
    t = text.strip()
    if not t:
        return tasks
    task_id = _fresh_id({x.id for x in tasks}, new_id)
    return [Task(id=task_id, text=t, completed=False)] + tasks


def toggle_task(tasks: List[Task], task_id: str) -> List[Task]:
    """Flip completed on the matching task."""
    if find_task(tasks, task_id) is None:
        return tasks
    return [replace(x, completed=not x.completed) if x.id == task_id else x for x in tasks]


def edit_task(tasks: List[Task], task_id: str, text: str) -> List[Task]:
    """Replace the matching task's text verbatim.

    Blank text is a no-op so a stored task is never empty. Trimming and
    skipping unchanged text is up to the caller.
    """
    if not text.strip() or find_task(tasks, task_id) is None:
        return tasks
    return [replace(x, text=text) if x.id == task_id else x for x in tasks]


def delete_task(tasks: List[Task], task_id: str) -> List[Task]:
    if find_task(tasks, task_id) is None:
        return tasks
    return [x for x in tasks if x.id != task_id]


def clear_completed(tasks: List[Task]) -> List[Task]:
    """Drop every completed task, keeping the rest in order."""
    if not any(x.completed for x in tasks):
        return tasks
    return [x for x in tasks if not x.completed]


def visible_tasks(tasks: List[Task], filter: str) -> List[Task]:
    """Project the list through a view filter."""
    if filter == "active":
        return [t for t in tasks if not t.completed]
    if filter == "completed":
        return [t for t in tasks if t.completed]
    return tasks


def remaining_count(tasks: List[Task]) -> int:
    """Number of tasks not yet completed."""
    return sum(1 for t in tasks if not t.completed)
