"""Settings loaded from environment variables (+ optional .env)."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .models import DEFAULT_DIR, STORE_KEY

ENV_PREFIX = "TODOLIST"

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: str) -> str:
    return os.path.expanduser(_env(name, default))


def _env_level(name: str, default: str) -> str:
    raw = _env(name, default).upper()
    return raw if raw in _LEVELS else default


@dataclass(frozen=True)
class Settings:
    data_dir: str
    store_key: str
    log_level: str
    log_dir: str

    @property
    def console_level(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), DEFAULT_DIR)
        return Settings(
            data_dir=data_dir,
            store_key=_env(_k("STORE_KEY"), STORE_KEY),
            log_level=_env_level(_k("LOG_LEVEL"), "WARNING"),
            log_dir=_env_path(_k("LOG_DIR"), data_dir),
        )


_SETTINGS: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    """Return process settings, reading .env and the environment once."""
    global _SETTINGS
    if _SETTINGS is None or reload:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
