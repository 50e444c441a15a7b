"""todolist curses-based terminal user interface."""

import curses
import logging
from typing import List, Optional, Tuple

from .core import visible_tasks, remaining_count
from .engine import TodoList
from .models import FILTERS, Task
from .view import (
    CLEAR_LABEL,
    EMPTY_MESSAGE,
    ItemEditor,
    ViewState,
    counter_label,
    filter_label,
    marker,
)

logger = logging.getLogger(__name__)

HELP_TEXT = [
    "To-Do List - Keymap",
    "Movement:  up/k up   down/j down   PgUp/PgDn page   g top   G bottom",
    "Tasks:     a add   space/x toggle   e edit   d delete   c clear completed",
    "Filter:    1 all   2 active   3 completed   f/Tab next filter",
    "System:    R reload from disk   ? help   q quit",
    "",
    "Prompts: Enter saves, ESC cancels",
    "Markers: [ ] active    [x] completed",
]

KEY_TAB = 9
KEY_ESC = 27


class LineBuffer:
    """Single-line text being typed at a prompt."""

    def __init__(self, text: str = ""):
        self.text = text
        self.pos = len(text)
        self.offset = 0

    def insert(self, s: str):
        self.text = self.text[: self.pos] + s + self.text[self.pos :]
        self.pos += len(s)

    def backspace(self):
        if self.pos > 0:
            self.text = self.text[: self.pos - 1] + self.text[self.pos :]
            self.pos -= 1

    def delete(self):
        self.text = self.text[: self.pos] + self.text[self.pos + 1 :]

    def left(self):
        self.pos = max(0, self.pos - 1)

    def right(self):
        self.pos = min(len(self.text), self.pos + 1)

    def home(self):
        self.pos = 0

    def end(self):
        self.pos = len(self.text)

    def view(self, width: int) -> Tuple[str, int]:
        """Slice of text that fits width, and the cursor column inside it."""
        if self.pos < self.offset:
            self.offset = self.pos
        elif self.pos >= self.offset + width:
            self.offset = self.pos - width + 1
        return self.text[self.offset : self.offset + width], self.pos - self.offset


class TUI:
    """Curses TUI over a store-backed TodoList."""

    def __init__(self, stdscr, todos: TodoList):
        self.stdscr = stdscr
        self.todos = todos
        self.view = ViewState()
        self.cursor = 0
        self.scroll = 0
        self.status = "Press ? for help. a to add; space to toggle; e to edit."
        curses.curs_set(0)
        self.stdscr.keypad(True)
        self.height, self.width = self.stdscr.getmaxyx()

        self.has_colors = curses.has_colors()
        if self.has_colors:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass
            curses.init_pair(1, curses.COLOR_GREEN, -1)
            curses.init_pair(2, curses.COLOR_CYAN, -1)
            self.COL_DONE = curses.color_pair(1)
            self.COL_PILL = curses.color_pair(2) | curses.A_BOLD
        else:
            self.COL_DONE = curses.A_DIM
            self.COL_PILL = curses.A_BOLD | curses.A_UNDERLINE

    def visible(self) -> List[Task]:
        return visible_tasks(self.todos.tasks, self.view.filter)

    def current(self) -> Optional[Task]:
        rows = self.visible()
        if not rows:
            return None
        self.cursor = max(0, min(len(rows) - 1, self.cursor))
        return rows[self.cursor]

    def draw(self):
        """Render header, task list, toolbar, and status line."""
        self.stdscr.erase()
        self.height, self.width = self.stdscr.getmaxyx()

        self.stdscr.addnstr(0, 0, "To-Do List", self.width - 1, curses.A_BOLD)
        self.stdscr.addnstr(
            1, 0, "e to edit - Enter to save, Esc to cancel", self.width - 1, curses.A_DIM
        )

        top = 2
        body_h = self.height - top - 3
        if body_h < 1:
            return

        rows = self.visible()
        if rows:
            self.cursor = max(0, min(len(rows) - 1, self.cursor))
        else:
            self.cursor = 0
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif self.cursor >= self.scroll + body_h:
            self.scroll = self.cursor - body_h + 1

        if not rows:
            self.stdscr.addnstr(
                top + body_h // 3, 0, EMPTY_MESSAGE.center(self.width - 1), self.width - 1
            )
        for i in range(self.scroll, min(self.scroll + body_h, len(rows))):
            t = rows[i]
            left = f"{i + 1:>4}. {marker(t)} "
            avail = max(0, self.width - 1 - len(left))
            text = t.text
            if len(text) > avail:
                text = text[: max(avail - 3, 0)] + "..."
            attrs = curses.A_NORMAL
            if t.completed:
                attrs |= self.COL_DONE
            if i == self.cursor:
                attrs |= curses.A_REVERSE
            self.stdscr.addnstr(top + i - self.scroll, 0, left + text, self.width - 1, attrs)

        self.draw_toolbar(self.height - 3)
        self.stdscr.hline(self.height - 2, 0, curses.ACS_HLINE, self.width)
        self.stdscr.addnstr(self.height - 1, 0, self.status[: self.width - 1], self.width - 1)
        self.stdscr.refresh()

    def draw_toolbar(self, y: int):
        """Counter, filter pills and the clear-completed hint on one row."""
        x = 0
        counter = counter_label(remaining_count(self.todos.tasks)) + "   "
        self.stdscr.addnstr(y, x, counter, max(0, self.width - 1 - x))
        x += len(counter)
        for n, f in enumerate(FILTERS, start=1):
            pill = f"[{n}] {filter_label(f)} "
            if x >= self.width - 1:
                return
            attrs = self.COL_PILL | curses.A_REVERSE if f == self.view.filter else curses.A_NORMAL
            self.stdscr.addnstr(y, x, pill, self.width - 1 - x, attrs)
            x += len(pill) + 1
        hint = f"  c: {CLEAR_LABEL}"
        if x < self.width - 1:
            self.stdscr.addnstr(y, x, hint, self.width - 1 - x, curses.A_DIM)

    def prompt(self, prompt: str, initial: str = "") -> Optional[str]:
        """Inline text input (Enter submits, ESC cancels).

        Returns the typed text exactly, or None when cancelled. Text wider
        than the field scrolls horizontally.
        """
        curses.curs_set(1)
        win = curses.newwin(3, self.width, self.height - 4, 0)
        win.keypad(True)
        buf = LineBuffer(initial)
        field_x = len(prompt) + 3
        field_w = max(1, self.width - field_x - 1)
        try:
            while True:
                win.erase()
                win.border()
                win.addnstr(0, 2, " Input (Enter saves, ESC cancels) ", self.width - 4, curses.A_DIM)
                win.addnstr(1, 2, prompt, self.width - 4)
                shown, col = buf.view(field_w)
                win.addnstr(1, field_x, shown, field_w)
                win.move(1, field_x + col)
                win.refresh()

                ch = win.get_wch()
                if ch in ("\n", "\r", curses.KEY_ENTER):
                    return buf.text
                if ch == "\x1b":
                    return None
                if ch in ("\x7f", "\b", curses.KEY_BACKSPACE):
                    buf.backspace()
                elif ch == curses.KEY_DC:
                    buf.delete()
                elif ch == curses.KEY_LEFT:
                    buf.left()
                elif ch == curses.KEY_RIGHT:
                    buf.right()
                elif ch in (curses.KEY_HOME, "\x01"):
                    buf.home()
                elif ch in (curses.KEY_END, "\x05"):
                    buf.end()
                elif isinstance(ch, str) and ch.isprintable():
                    buf.insert(ch)
        finally:
            curses.curs_set(0)

    def message(self, text: str):
        self.status = text

    def reload(self):
        """Reload tasks from disk."""
        self.todos.reload()
        self.message("Reloaded from disk.")

    def move_cursor(self, delta: int):
        rows = self.visible()
        if not rows:
            return
        self.cursor = max(0, min(len(rows) - 1, self.cursor + delta))

    def add_task(self):
        s = self.prompt("New task:")
        if s is None:
            self.message("Add cancelled.")
            return
        task = self.todos.add(s)
        if task is None:
            self.message("Nothing to add.")
            return
        self.cursor = 0
        self.message(f"Added: {task.text}")

    def toggle_task(self):
        t = self.current()
        if t is None:
            return
        self.todos.toggle(t.id)
        self.message(f"{'Reopened' if t.completed else 'Completed'}: {t.text}")

    def edit_task(self):
        t = self.current()
        if t is None:
            return
        editor = ItemEditor(self.todos, t)
        editor.begin()
        s = self.prompt("Edit task:", editor.draft)
        if s is None:
            editor.cancel()
            self.message("Edit cancelled.")
            return
        editor.draft = s
        if editor.commit():
            self.message(f"Edited: {editor.original}")
        else:
            self.message("No change.")

    def delete_task(self):
        t = self.current()
        if t is None:
            return
        self.todos.delete(t.id)
        self.message(f"Deleted: {t.text}")

    def clear_done(self):
        removed = self.todos.clear_completed()
        self.message(f"Removed {removed} completed task{'s' if removed != 1 else ''}.")

    def set_filter(self, f: str):
        self.view.set_filter(f)
        self.cursor = 0
        self.message(f"Showing: {filter_label(f)}")

    def help_popup(self):
        h, w = self.height, self.width
        win_h = min(len(HELP_TEXT) + 2, h - 2)
        win_w = min(max(len(line) for line in HELP_TEXT) + 4, w - 2)
        win = curses.newwin(win_h, win_w, (h - win_h) // 2, (w - win_w) // 2)
        win.border()
        for i, line in enumerate(HELP_TEXT[: win_h - 2], start=1):
            win.addnstr(i, 2, line, win_w - 4)
        win.addnstr(win_h - 1, 2, "Press any key...", win_w - 4, curses.A_DIM)
        win.refresh()
        win.getch()

    def run(self):
        """Main event loop."""
        while True:
            self.draw()
            ch = self.stdscr.getch()

            if ch in (ord("q"), KEY_ESC):
                break

            elif ch in (curses.KEY_UP, ord("k")):
                self.move_cursor(-1)
            elif ch in (curses.KEY_DOWN, ord("j")):
                self.move_cursor(+1)
            elif ch == curses.KEY_PPAGE:
                self.move_cursor(-(self.height - 5))
            elif ch == curses.KEY_NPAGE:
                self.move_cursor(+(self.height - 5))
            elif ch == ord("g"):
                self.cursor = 0
            elif ch == ord("G"):
                self.cursor = max(0, len(self.visible()) - 1)

            elif ch in (ord("a"), 10, 13, curses.KEY_ENTER):
                self.add_task()
            elif ch in (ord(" "), ord("x")):
                self.toggle_task()
            elif ch == ord("e"):
                self.edit_task()
            elif ch in (ord("d"), curses.KEY_DC):
                self.delete_task()
            elif ch == ord("c"):
                self.clear_done()

            elif ch in (ord("1"), ord("2"), ord("3")):
                self.set_filter(FILTERS[ch - ord("1")])
            elif ch in (ord("f"), KEY_TAB):
                self.set_filter(self.view.cycle_filter())
            elif ch == ord("R"):
                self.reload()
            elif ch == ord("?"):
                self.help_popup()


def main(todos: TodoList) -> None:
    """TUI entry point."""

    def _main(stdscr):
        TUI(stdscr, todos).run()

    logger.debug("Starting TUI with %d task(s)", len(todos))
    curses.wrapper(_main)
