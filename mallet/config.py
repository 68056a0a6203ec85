from __future__ import annotations
import os
from pathlib import Path
from typing import Optional


_DEFAULT_HISTORY_FILE = Path.home() / ".mallet_history"
_DEFAULT_PROMPT = "user> "
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_RECURSION_LIMIT = 10_000


def path_from_env(var: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()


def get_history_file() -> Path:
    return path_from_env('MALLET_HISTORY_FILE', _DEFAULT_HISTORY_FILE)


def get_prelude_path() -> Optional[Path]:
    # No extra prelude unless one is configured
    return path_from_env('MALLET_PRELUDE_PATH', None)


def get_log_level() -> str:
    return os.environ.get('MALLET_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper() or _DEFAULT_LOG_LEVEL


def get_prompt() -> str:
    return os.environ.get('MALLET_PROMPT', _DEFAULT_PROMPT)


def get_recursion_limit() -> int:
    raw = os.environ.get('MALLET_RECURSION_LIMIT', '').strip()
    return int(raw) if raw.isdigit() else _DEFAULT_RECURSION_LIMIT
