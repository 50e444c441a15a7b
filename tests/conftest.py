import itertools
import logging
from pathlib import Path
from typing import Callable, List

import pytest

from todolist.config import get_settings
from todolist.engine import TodoList
from todolist.models import Task
from todolist.storage import JsonStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point settings at tmp dirs and restore root logging afterwards."""
    monkeypatch.chdir(tmp_path)
    for name in ("TODOLIST_STORE_KEY", "TODOLIST_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TODOLIST_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("TODOLIST_LOG_DIR", str(tmp_path / "logs"))
    get_settings(reload=True)

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            h.close()
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    get_settings(reload=True)


@pytest.fixture()
def id_factory() -> Callable[[], str]:
    """Deterministic ids: t1, t2, ..."""
    counter = itertools.count(1)
    return lambda: f"t{next(counter)}"


@pytest.fixture()
def store(tmp_path: Path) -> JsonStore:
    return JsonStore(str(tmp_path / "store"))


@pytest.fixture()
def todos(store: JsonStore, id_factory) -> TodoList:
    return TodoList(store, new_id=id_factory)


@pytest.fixture()
def sample() -> List[Task]:
    return [
        Task(id="a", text="Write report", completed=False),
        Task(id="b", text="Pay rent", completed=True),
        Task(id="c", text="Call mom", completed=False),
        Task(id="d", text="Water plants", completed=True),
    ]
