"""
governance/config.py

Register settings read from the process environment and an optional ``.env``.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TypeVar

ENV_FILE = Path(__file__).resolve().parents[1] / ".env"

_Number = TypeVar("_Number", int, float)


def load_env_files(env_path: Path = ENV_FILE) -> None:
    """
    Seed ``os.environ`` from a KEY=VALUE file; variables already set win.
    """

    if not env_path.is_file():
        return
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        key, separator, value = raw_line.strip().partition("=")
        key = key.strip()
        if not separator or not key or key.startswith("#"):
            continue
        os.environ.setdefault(key, value.strip().strip("\"'"))


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _env_value(name: str) -> str | None:
    _load_env_once()
    value = (os.getenv(name) or "").strip()
    return value or None


def _env_number(name: str, default: _Number, parse: Callable[[str], _Number]) -> _Number:
    """
    Parse a numeric variable, keeping *default* when unset or malformed.
    """

    raw_value = _env_value(name)
    if raw_value is None:
        return default
    try:
        return parse(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class GoogleHTTPSettings:
    """
    Shared HTTP behavior settings for the Google connectors.
    """

    timeout_seconds: float = 15.0
    max_retries: int = 0
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    drive_base_url: str = "https://www.googleapis.com/drive/v3"
    drive_upload_url: str = "https://www.googleapis.com/upload/drive/v3"
    sheets_base_url: str = "https://sheets.googleapis.com/v4"


@dataclass(frozen=True)
class RegisterSettings:
    """
    Naming, caching and partitioning settings for the governance register.
    """

    root_folder_name: str = "Governance Workflow"
    spreadsheet_name: str = "Governance Register"
    folder_cache_ttl_seconds: float = 300.0
    spreadsheet_cache_ttl_seconds: float = 600.0
    timezone: str = "UTC"
    entry_list_limit: int = 50


@lru_cache(maxsize=1)
def get_google_http_settings() -> GoogleHTTPSettings:
    """
    Return shared Google connector HTTP settings from environment variables.
    """

    return GoogleHTTPSettings(
        timeout_seconds=max(1.0, _env_number("GOOGLE_HTTP_TIMEOUT_SECONDS", 15.0, float)),
        max_retries=max(0, _env_number("GOOGLE_HTTP_MAX_RETRIES", 0, int)),
        backoff_initial_seconds=max(0.1, _env_number("GOOGLE_HTTP_BACKOFF_INITIAL_SECONDS", 0.5, float)),
        backoff_multiplier=max(1.0, _env_number("GOOGLE_HTTP_BACKOFF_MULTIPLIER", 2.0, float)),
        drive_base_url=_env_value("GOOGLE_DRIVE_BASE_URL") or "https://www.googleapis.com/drive/v3",
        drive_upload_url=_env_value("GOOGLE_DRIVE_UPLOAD_URL") or "https://www.googleapis.com/upload/drive/v3",
        sheets_base_url=_env_value("GOOGLE_SHEETS_BASE_URL") or "https://sheets.googleapis.com/v4",
    )


@lru_cache(maxsize=1)
def get_register_settings() -> RegisterSettings:
    """
    Return cached register settings from environment variables.
    """

    return RegisterSettings(
        root_folder_name=_env_value("GOVERNANCE_ROOT_FOLDER_NAME") or "Governance Workflow",
        spreadsheet_name=_env_value("GOVERNANCE_SPREADSHEET_NAME") or "Governance Register",
        folder_cache_ttl_seconds=max(0.0, _env_number("GOVERNANCE_FOLDER_CACHE_TTL_SECONDS", 300.0, float)),
        spreadsheet_cache_ttl_seconds=max(
            0.0, _env_number("GOVERNANCE_SPREADSHEET_CACHE_TTL_SECONDS", 600.0, float)
        ),
        timezone=_env_value("GOVERNANCE_TIMEZONE") or "UTC",
        entry_list_limit=max(1, _env_number("GOVERNANCE_ENTRY_LIST_LIMIT", 50, int)),
    )
