"""Logging configuration for the todolist CLI and TUI."""

import logging
import os
import sys

LOG_FILE = "todolist.log"


class _ConsoleNoiseFilter(logging.Filter):
    """Keep todolist records on the console; third-party only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todolist" or record.name.startswith("todolist."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    log_dir: str,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    console: bool = True,
) -> None:
    """Configure root logging: a debug log file plus an optional stderr handler.

    The curses TUI passes console=False so records never draw over the
    screen. Call once, before the first log call.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(console_level)
        ch.setFormatter(fmt)
        ch.addFilter(_ConsoleNoiseFilter())
        root.addHandler(ch)

    try:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, LOG_FILE), encoding="utf-8")
    except OSError:
        # No file log; the app still runs
        fh = None
    if fh is not None:
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)
    else:
        root.addHandler(logging.NullHandler())

    logging.captureWarnings(True)
