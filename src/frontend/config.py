from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cryptography.fernet import Fernet

from common.mockapi import DEFAULT_BASE_URL
from state.local_store import DEFAULT_STORAGE_DIR, default_storage_file


ENV_API_BASE_URL = "PRISONER_API_BASE_URL"
ENV_HTTP_TIMEOUT = "PRISONER_HTTP_TIMEOUT"
ENV_STORAGE_DIR = "PRISONER_STORAGE_DIR"
ENV_STORAGE_KEY = "PRISONER_STORAGE_KEY"
ENV_LOG_LEVEL = "PRISONER_LOG_LEVEL"

DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_LOG_LEVEL = "WARNING"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name)
    return val if val not in (None, "") else default


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_BASE_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    storage_dir: str = DEFAULT_STORAGE_DIR
    storage_key: Optional[str] = None  # Fernet key; storage is plain JSON when unset
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def storage_path(self) -> Path:
        return default_storage_file(self.storage_dir)


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"Invalid {ENV_HTTP_TIMEOUT}: {raw!r} is not a number") from None
    if value <= 0:
        raise RuntimeError(f"Invalid {ENV_HTTP_TIMEOUT}: must be > 0, got {raw!r}")
    return value


def _parse_storage_key(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    key = raw.strip()
    try:
        Fernet(key)
    except (ValueError, TypeError):
        raise RuntimeError(
            f"Invalid {ENV_STORAGE_KEY}: expected a url-safe base64 32-byte Fernet key"
        ) from None
    return key


def _parse_log_level(raw: Optional[str]) -> str:
    level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise RuntimeError(f"Invalid {ENV_LOG_LEVEL}: unknown logging level {raw!r}")
    return level


def load_settings() -> Settings:
    """
    Load console settings from environment variables.

    - PRISONER_API_BASE_URL: MockAPI base URL (default: the hosted project)
    - PRISONER_HTTP_TIMEOUT: request timeout in seconds (default: 15)
    - PRISONER_STORAGE_DIR:  directory holding local_storage.json (default: .cache)
    - PRISONER_STORAGE_KEY:  optional Fernet key to encrypt local storage at rest
    - PRISONER_LOG_LEVEL:    logging level name (default: WARNING)
    """
    return Settings(
        api_base_url=(_getenv(ENV_API_BASE_URL, DEFAULT_BASE_URL) or DEFAULT_BASE_URL).strip().rstrip("/"),
        http_timeout=_parse_timeout(_getenv(ENV_HTTP_TIMEOUT)),
        storage_dir=_getenv(ENV_STORAGE_DIR, DEFAULT_STORAGE_DIR) or DEFAULT_STORAGE_DIR,
        storage_key=_parse_storage_key(_getenv(ENV_STORAGE_KEY)),
        log_level=_parse_log_level(_getenv(ENV_LOG_LEVEL)),
    )
