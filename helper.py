# Environment-backed settings. Values can come from the shell or a .env file.

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv, find_dotenv

from mockcode.session import DEFAULT_BASE_DIR


def load_env():
    _ = load_dotenv(find_dotenv(usecwd=True))


def get_base_dir() -> Path:
    """
    Root directory for history and session transcripts.

    Defaults to ~/.mock-code/claude; set MOCK_CODE_HOME to override.
    """
    base_dir = os.getenv("MOCK_CODE_HOME")
    if base_dir:
        return Path(base_dir).expanduser()
    return DEFAULT_BASE_DIR


def get_hook_timeout() -> Optional[float]:
    """
    Per-hook timeout in seconds from MOCK_CODE_HOOK_TIMEOUT.

    Returns None when unset so the executor default applies.
    """
    value = os.getenv("MOCK_CODE_HOOK_TIMEOUT")
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"MOCK_CODE_HOOK_TIMEOUT must be a number of seconds, got {value!r}")
    if timeout <= 0:
        raise ValueError("MOCK_CODE_HOOK_TIMEOUT must be positive")
    return timeout


def get_log_level() -> str:
    return os.getenv("MOCK_CODE_LOG_LEVEL", "WARNING")
