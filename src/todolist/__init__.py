"""todolist - a small to-do list manager with local persistence."""

__version__ = "1.0.0"

from .models import Task, Filter, FILTERS, STORE_KEY, DEFAULT_DIR, new_task_id
from .storage import JsonStore, load_tasks, save_tasks
from .core import (
    add_task,
    toggle_task,
    edit_task,
    delete_task,
    clear_completed,
    find_task,
    visible_tasks,
    remaining_count,
)
from .engine import TodoList
from .view import ViewState, ItemEditor

__all__ = [
    "Task",
    "Filter",
    "FILTERS",
    "STORE_KEY",
    "DEFAULT_DIR",
    "new_task_id",
    "JsonStore",
    "load_tasks",
    "save_tasks",
    "add_task",
    "toggle_task",
    "edit_task",
    "delete_task",
    "clear_completed",
    "find_task",
    "visible_tasks",
    "remaining_count",
    "TodoList",
    "ViewState",
    "ItemEditor",
]
