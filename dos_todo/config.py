"""
DOS TODO - Settings

Loaded once from DOS_TODO_* environment variables. Bad values fall back
to the defaults rather than stopping the app.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .constants import MESSAGE_DURATION

ENV_PREFIX = "DOS_TODO"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_log_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_dir: Path
    log_level: int = logging.INFO
    message_duration: float = MESSAGE_DURATION


def load_settings() -> Settings:
    """Build Settings from the current environment"""
    data_dir = _env_path(_k("HOME"), Path.home() / ".dos_todo")
    return Settings(
        data_dir=data_dir,
        log_dir=_env_path(_k("LOG_DIR"), data_dir / "logs"),
        log_level=_env_log_level(_k("LOG_LEVEL"), logging.INFO),
        message_duration=_env_float(_k("MESSAGE_SECONDS"), MESSAGE_DURATION),
    )
