"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

_DEVELOPMENT_ENVIRONMENTS = {"dev", "development", "local"}
_ENV_FILES = (".env", ".env.local")
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_env_line(line: str) -> tuple[str, str] | None:
    text = line.strip()
    if not text or text.startswith("#"):
        return None
    if text.startswith("export "):
        text = text[len("export "):]
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        return None
    return key.strip(), value.strip().strip("'\"")


@lru_cache(maxsize=1)
def _load_env_files() -> None:
    """
    Populate ``os.environ`` from the project's `.env` files once per process.

    Variables already set in the environment win over file values.
    """

    project_root = Path(__file__).resolve().parents[1]
    for env_path in (project_root / name for name in _ENV_FILES):
        if not env_path.is_file():
            continue
        for line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def _env(name: str) -> str | None:
    """
    Return a stripped environment value, treating blank values as unset.
    """

    _load_env_files()
    value = (os.getenv(name) or "").strip()
    return value or None


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name)
    return default if value is None else value.lower() in _TRUE_VALUES


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    value = _env(name)
    try:
        parsed = default if value is None else int(value)
    except ValueError:
        parsed = default
    return max(minimum, parsed)


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list; an empty list falls back to the default.
    """

    items = tuple(item.strip() for item in (_env(name) or "").split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class AppSettings:
    """
    Top-level application settings.
    """

    environment: str = "production"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_allow_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))
    seed_sample_data: bool = True

    @property
    def is_development(self) -> bool:
        return self.environment in _DEVELOPMENT_ENVIRONMENTS


@dataclass(frozen=True)
class CSVImportSettings:
    """
    Runtime settings for CSV import.
    """

    max_upload_bytes: int = 10 * 1024 * 1024
    max_validation_errors: int = 500
    log_validation_errors: bool = True


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings from environment variables.
    """

    return AppSettings(
        environment=(_env("ESG_ENVIRONMENT") or "production").lower(),
        log_level=(_env("LOG_LEVEL") or "INFO").upper(),
        host=_env("HOST") or "0.0.0.0",
        port=_env_int("PORT", 3000),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", ("*",)),
        seed_sample_data=_env_bool("ESG_SEED_SAMPLE_DATA", True),
    )


@lru_cache(maxsize=1)
def get_csv_import_settings() -> CSVImportSettings:
    """
    Return cached CSV import settings from environment variables.
    """

    return CSVImportSettings(
        max_upload_bytes=_env_int("CSV_IMPORT_MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        max_validation_errors=_env_int("CSV_IMPORT_MAX_VALIDATION_ERRORS", 500),
        log_validation_errors=_env_bool("CSV_IMPORT_LOG_VALIDATION_ERRORS", True),
    )
