import pytest

curses = pytest.importorskip("curses")

from todolist import tui as tui_mod  # noqa: E402
from todolist.storage import load_tasks  # noqa: E402


class FakeScreen:
    """Stand-in for a curses window that replays scripted key presses."""

    def __init__(self, keys):
        self.keys = list(keys)

    def keypad(self, flag):
        pass

    def getmaxyx(self):
        return (24, 80)

    def getch(self):
        return self.keys.pop(0) if self.keys else ord("q")


@pytest.fixture()
def make_tui(monkeypatch, todos):
    monkeypatch.setattr(tui_mod.curses, "curs_set", lambda v: None)
    monkeypatch.setattr(tui_mod.curses, "has_colors", lambda: False)
    monkeypatch.setattr(tui_mod.TUI, "draw", lambda self: None)

    def build(keys=(), answers=()):
        ui = tui_mod.TUI(FakeScreen(keys), todos)
        replies = list(answers)
        ui.prompts = []

        def fake_prompt(prompt, initial=""):
            ui.prompts.append((prompt, initial))
            return replies.pop(0)

        ui.prompt = fake_prompt
        return ui

    return build


def keys(s):
    return [ord(c) for c in s]


def test_add_toggle_and_clear(make_tui, todos, store):
    ui = make_tui(keys("aajxc"), answers=["Buy milk", "Walk dog"])
    ui.run()
    assert [t.text for t in todos.tasks] == ["Walk dog"]
    assert [t.text for t in load_tasks(store)] == ["Walk dog"]
    assert ui.status == "Removed 1 completed task."


def test_cancelled_add_does_nothing(make_tui, todos):
    ui = make_tui(keys("a"), answers=[None])
    ui.run()
    assert todos.tasks == []
    assert ui.status == "Add cancelled."


def test_edit_commits_through_editor(make_tui, todos):
    todos.add("Buy milk")
    ui = make_tui(keys("e"), answers=["  Buy oat milk "])
    ui.run()
    assert ui.prompts == [("Edit task:", "Buy milk")]
    assert todos.tasks[0].text == "Buy oat milk"


@pytest.mark.parametrize("answer", [None, "", "Buy milk"])
def test_edit_cancel_or_no_change_keeps_text(make_tui, todos, answer):
    todos.add("Buy milk")
    ui = make_tui(keys("e"), answers=[answer])
    ui.run()
    assert todos.tasks[0].text == "Buy milk"


def test_filter_keys_restrict_actions_to_visible_rows(make_tui, todos):
    todos.add("one")
    todos.add("two")
    todos.toggle(todos.tasks[1].id)
    # completed filter, delete the only visible row ("one")
    ui = make_tui(keys("3d"))
    ui.run()
    assert ui.view.filter == "completed"
    assert [t.text for t in todos.tasks] == ["two"]


def test_tab_cycles_filter(make_tui):
    ui = make_tui([9, 9])
    ui.run()
    assert ui.view.filter == "completed"


def test_actions_on_empty_list_are_harmless(make_tui, todos):
    ui = make_tui(keys("xedjk"))
    ui.run()
    assert todos.tasks == []


class FakePromptWindow:
    """Prompt window that hands out scripted get_wch() results."""

    def __init__(self, typed):
        self.typed = list(typed)
        self.drawn = []

    def keypad(self, flag):
        pass

    def erase(self):
        pass

    def border(self):
        pass

    def addnstr(self, y, x, s, n, attr=0):
        self.drawn.append((y, x, s[:n]))

    def move(self, y, x):
        self.cursor = (y, x)

    def refresh(self):
        pass

    def get_wch(self):
        return self.typed.pop(0)


@pytest.fixture()
def typed_window(monkeypatch):
    """Route curses.newwin to a FakePromptWindow fed with the given keys."""

    def install(*typed):
        win = FakePromptWindow(typed)
        monkeypatch.setattr(tui_mod.curses, "newwin", lambda *a: win)
        return win

    return install


@pytest.fixture()
def real_tui(make_tui, todos):
    def build(keys=()):
        ui = make_tui(keys)
        del ui.prompt
        return ui

    return build


LONG_TEXT = "Renew passport, " + "x" * 113


@pytest.mark.parametrize("text", ["Café au lait", "Überprüfen 日本語 ✓", LONG_TEXT])
def test_prompt_enter_returns_seed_untouched(real_tui, typed_window, text):
    typed_window("\n")
    assert real_tui().prompt("Edit task:", text) == text


def test_prompt_escape_cancels(real_tui, typed_window):
    typed_window("a", "b", "\x1b")
    assert real_tui().prompt("New task:") is None


def test_prompt_typing_and_cursor_keys(real_tui, typed_window):
    typed_window(
        "é", "t", "é",
        curses.KEY_HOME, "L", "'",
        curses.KEY_END, "\x7f", "!",
        curses.KEY_LEFT, curses.KEY_DC,
        "\r",
    )
    assert real_tui().prompt("New task:") == "L'ét"


def test_prompt_long_text_scrolls_within_field(real_tui, typed_window):
    win = typed_window("\n")
    real_tui().prompt("Edit task:", LONG_TEXT)
    field = [s for (y, x, s) in win.drawn if y == 1 and x == len("Edit task:") + 3]
    assert field and LONG_TEXT.endswith(field[-1])
    assert win.cursor[1] < 80


def test_edit_with_no_changes_keeps_stored_text(real_tui, typed_window, todos, store):
    todos.add("Café au lait")
    saved = load_tasks(store)
    typed_window("\n")
    ui = real_tui(keys("e"))
    ui.run()
    assert ui.status == "No change."
    assert load_tasks(store) == saved


def test_edit_typed_text_is_saved(real_tui, typed_window, todos, store):
    todos.add("Café")
    typed_window(" ", "c", "r", "è", "m", "e", "\n")
    real_tui(keys("e")).run()
    assert load_tasks(store)[0].text == "Café crème"


class TestLineBuffer:
    def test_starts_at_end(self):
        buf = tui_mod.LineBuffer("abc")
        assert buf.pos == 3

    def test_backspace_at_start_is_noop(self):
        buf = tui_mod.LineBuffer("abc")
        buf.home()
        buf.backspace()
        assert buf.text == "abc"

    def test_view_keeps_cursor_visible(self):
        buf = tui_mod.LineBuffer("0123456789")
        assert buf.view(4) == ("789", 3)
        buf.home()
        assert buf.view(4) == ("0123", 0)
