# src/tasg/config.py

"""Settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per invocation, built by the CLI and passed down.
- Nothing is read or created on disk at import time (besides .env).
- TASG_FILE keeps working for files created by earlier releases.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import click
from dotenv import find_dotenv, load_dotenv

APP_NAME = "tasg"
ENV_PREFIX = "TASG"

# .env next to where the user runs the command; never overrides the real environment.
load_dotenv(find_dotenv(usecwd=True), override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_log_level(name: str, default: str) -> str:
    level = _env(name, default).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return default
    return level


def default_data_dir() -> Path:
    """Per-user config directory, e.g. ~/.config/tasg on Linux."""
    return Path(click.get_app_dir(APP_NAME))


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str
    log_to_file: bool
    log_file: Path

    # ---- Local data paths ----
    data_dir: Path
    tasks_file: Path

    @property
    def console_level(self) -> int:
        return logging.getLevelName(self.log_level)

    @staticmethod
    def from_env() -> Settings:
        data_dir = _env_path(_k("DATA_DIR"), default_data_dir())
        tasks_file = _env_path(_k("FILE"), data_dir / "tasks.json")

        log_level = _env_log_level(_k("LOG_LEVEL"), "WARNING")
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)
        log_file = _env_path(_k("LOG_FILE"), data_dir / f"{APP_NAME}.log")

        return Settings(
            log_level=log_level,
            log_to_file=log_to_file,
            log_file=log_file,
            data_dir=data_dir,
            tasks_file=tasks_file,
        )
