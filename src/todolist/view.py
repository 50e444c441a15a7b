"""View state shared by the TUI and CLI (never persisted)."""

from typing import TYPE_CHECKING

from .models import Filter, FILTERS, DEFAULT_FILTER, Task

if TYPE_CHECKING:
    from .engine import TodoList

EMPTY_MESSAGE = "No items. Add your first task!"
CLEAR_LABEL = "Clear completed"


def counter_label(left: int) -> str:
    """'1 item left' / 'N items left'."""
    return f"{left} item{'s' if left != 1 else ''} left"


def filter_label(f: str) -> str:
    return f[:1].upper() + f[1:]


def marker(task: Task) -> str:
    return "[x]" if task.completed else "[ ]"


class ViewState:
    """Current filter selection."""

    def __init__(self, filter: Filter = DEFAULT_FILTER):
        self.filter: Filter = DEFAULT_FILTER
        self.set_filter(filter)

    def set_filter(self, f: str) -> None:
        if f not in FILTERS:
            raise ValueError(f"unknown filter {f!r}; expected one of {', '.join(FILTERS)}")
        self.filter = f  # type: ignore[assignment]

    def cycle_filter(self) -> Filter:
        """Advance to the next filter pill and return it."""
        i = FILTERS.index(self.filter)
        self.filter = FILTERS[(i + 1) % len(FILTERS)]
        return self.filter


class ItemEditor:
    """Edit-in-place state for one task.

    The draft is seeded from the task text. commit() only reaches the
    engine when the trimmed draft is non-empty and differs from the
    original; cancel() restores the original text.
    """

    def __init__(self, todos: "TodoList", task: Task):
        self.todos = todos
        self.task_id = task.id
        self.original = task.text
        self.draft = task.text
        self.editing = False

    def begin(self) -> None:
        self.draft = self.original
        self.editing = True

    def commit(self) -> bool:
        """Apply the draft. Returns True if the engine was called."""
        t = self.draft.strip()
        self.editing = False
        if not t or t == self.original:
            self.draft = self.original
            return False
        self.todos.edit(self.task_id, t)
        self.original = t
        self.draft = t
        return True

    def cancel(self) -> None:
        self.draft = self.original
        self.editing = False
