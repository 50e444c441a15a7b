"""todolist command-line interface."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import get_settings
from .core import visible_tasks, remaining_count
from .engine import TodoList
from .logging_setup import setup_logging
from .models import Task, FILTERS
from .storage import JsonStore
from .view import EMPTY_MESSAGE, ItemEditor, counter_label, marker

logger = logging.getLogger(__name__)


def print_list(tasks: List[Task], filter: str) -> None:
    """Print visible tasks with their full-list index, then the counter."""
    shown = {t.id for t in visible_tasks(tasks, filter)}
    if not shown:
        print(EMPTY_MESSAGE)
    for i, t in enumerate(tasks, start=1):
        if t.id not in shown:
            continue
        print(f"{i:>3}. {marker(t)} {t.text}")
    print(counter_label(remaining_count(tasks)))


def resolve_ref(tasks: List[Task], ref: str) -> Task:
    """Map a 1-based index from `list`, or a unique id prefix, to a task."""
    ref = ref.strip()
    if ref.isdecimal():
        idx = int(ref)
        if idx < 1 or idx > len(tasks):
            sys.exit("Index out of range.")
        return tasks[idx - 1]
    matches = [t for t in tasks if t.id.startswith(ref)] if ref else []
    if not matches:
        sys.exit(f"No task matches {ref!r}.")
    if len(matches) > 1:
        sys.exit(f"Ambiguous task id prefix {ref!r}.")
    return matches[0]


def open_list(args: argparse.Namespace) -> TodoList:
    return TodoList(JsonStore(args.data_dir), key=args.key)


def cmd_list(args: argparse.Namespace) -> None:
    todos = open_list(args)
    print_list(todos.tasks, args.filter)


def cmd_add(args: argparse.Namespace) -> None:
    todos = open_list(args)
    task = todos.add(args.text)
    if task is None:
        print("Nothing to add.")
        return
    print(f"Added: {task.text}")


def cmd_toggle(args: argparse.Namespace) -> None:
    todos = open_list(args)
    task = resolve_ref(todos.tasks, args.ref)
    todos.toggle(task.id)
    state = "active" if task.completed else "completed"
    print(f"Marked {state}: {task.text}")


def cmd_edit(args: argparse.Namespace) -> None:
    todos = open_list(args)
    task = resolve_ref(todos.tasks, args.ref)
    editor = ItemEditor(todos, task)
    editor.begin()
    editor.draft = args.text
    if editor.commit():
        print(f"Edited: {editor.original}")
    else:
        print("Unchanged.")


def cmd_delete(args: argparse.Namespace) -> None:
    todos = open_list(args)
    task = resolve_ref(todos.tasks, args.ref)
    todos.delete(task.id)
    print(f"Deleted: {task.text}")


def cmd_clear(args: argparse.Namespace) -> None:
    todos = open_list(args)
    removed = todos.clear_completed()
    print(f"Removed {removed} completed task{'s' if removed != 1 else ''}.")


def cmd_path(args: argparse.Namespace) -> None:
    print(JsonStore(args.data_dir).path_for(args.key))


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    settings = get_settings()
    p = argparse.ArgumentParser(prog="todolist", description="A small to-do list manager.")
    p.add_argument(
        "-d",
        "--data-dir",
        default=settings.data_dir,
        help=f"Directory holding the task store (default: {settings.data_dir})",
    )
    p.add_argument(
        "-k",
        "--key",
        default=settings.store_key,
        help=f"Store slot name (default: {settings.store_key})",
    )
    sub = p.add_subparsers(dest="cmd")

    s_list = sub.add_parser("list", help="Show tasks")
    s_list.add_argument("--filter", choices=FILTERS, default="all", help="Which tasks to show")
    s_list.set_defaults(func=cmd_list)

    s_add = sub.add_parser("add", help="Add a new task at the top")
    s_add.add_argument("text", help="Task text, quoted if it has spaces")
    s_add.set_defaults(func=cmd_add)

    s_toggle = sub.add_parser("toggle", help="Flip a task between active and completed")
    s_toggle.add_argument("ref", help="Index from `list` or task id prefix")
    s_toggle.set_defaults(func=cmd_toggle)

    s_edit = sub.add_parser("edit", help="Edit task text in place")
    s_edit.add_argument("ref", help="Index from `list` or task id prefix")
    s_edit.add_argument("text", help="New text")
    s_edit.set_defaults(func=cmd_edit)

    for name in ("delete", "rm"):
        s_del = sub.add_parser(name, help="Delete a task" if name == "delete" else "Alias of `delete`")
        s_del.add_argument("ref", help="Index from `list` or task id prefix")
        s_del.set_defaults(func=cmd_delete)

    s_clear = sub.add_parser("clear", help="Remove all completed tasks")
    s_clear.set_defaults(func=cmd_clear)

    s_path = sub.add_parser("path", help="Show the path to the task store")
    s_path.set_defaults(func=cmd_path)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Launches TUI if no subcommand given."""
    settings = get_settings()
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        settings.log_dir,
        console_level=settings.console_level,
        console=args.cmd is not None,
    )
    logger.debug("Using store %s", JsonStore(args.data_dir).path_for(args.key))

    if args.cmd is None:
        # No subcommand: launch TUI
        from .tui import main as tui_main

        tui_main(open_list(args))
    else:
        args.func(args)


if __name__ == "__main__":
    main()
