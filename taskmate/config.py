from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATA_FILE = "data/taskmate.txt"
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_level: str = "INFO"
    log_dir: str = "logs"
    duplicate_match_time: bool = True


def load_settings() -> Settings:
    data_file = os.getenv("TASKMATE_DATA_FILE", "").strip() or DEFAULT_DATA_FILE
    return Settings(
        data_file=Path(data_file),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        duplicate_match_time=_env_flag("TASKMATE_DUPLICATE_MATCH_TIME", True),
    )


load_env()

SETTINGS = load_settings()
