"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "StudyMate"
    SAVE_FILENAME = "studymate.txt"
    DEFAULT_TICK_SECONDS = 30

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.SAVE_FILE = self.DATA_DIR / os.getenv("STUDYMATE_SAVE_FILE", self.SAVE_FILENAME)
        self.TICK_SECONDS = _env_positive_int("STUDYMATE_TICK_SECONDS", self.DEFAULT_TICK_SECONDS)
        self.DEV_MODE = _env_bool("STUDYMATE_DEV_MODE", default=True)

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the save file and logs."""

        data_root = os.getenv("STUDYMATE_DATA_DIR", "data")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()


class DevConfig(BaseConfig):
    """Development configuration with verbose console output."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration for tests, rooted at an explicit directory."""

    __test__ = False

    DEBUG = True
    TESTING = True

    def __init__(self, data_dir: Path | str) -> None:
        self._data_dir = Path(data_dir)
        super().__init__()
        self.DEV_MODE = True

    def _resolve_data_dir(self) -> Path:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        return self._data_dir


def get_config(name: str = "development") -> BaseConfig:
    """Return the configuration object registered under ``name``."""

    configs = {"development": DevConfig, "production": BaseConfig}
    try:
        return configs[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown configuration: {name}") from exc
