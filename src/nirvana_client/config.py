# src/nirvana_client/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole client.
- No secrets required at import time: library use needs no credentials,
  only the CLI checks for them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "NIRVANA"

DEFAULT_BASE_URL = "https://api.nirvanahq.com/"
DEFAULT_APP_ID = "nirvana-sdk-python"
DEFAULT_APP_VERSION = "1"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Real environment wins over .env.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Credentials ----
    username: str
    password: str
    password_md5: str

    # ---- API ----
    base_url: str
    app_id: str
    app_version: str
    user_agent: str
    timeout_seconds: float

    # ---- Debug dump ----
    dump_responses: bool
    data_dir: Path
    dump_path: Path

    # ---- CLI ----
    since: int
    log_level: str

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.password or self.password_md5)

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/nirvana"))

        return Settings(
            username=_env(_k("USERNAME")).strip(),
            password=_env(_k("PASSWORD")),
            password_md5=_env(_k("PASSWORD_MD5")).strip().lower(),
            base_url=_env(_k("BASE_URL"), DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
            app_id=_env(_k("APP_ID"), DEFAULT_APP_ID),
            app_version=_env(_k("APP_VERSION"), DEFAULT_APP_VERSION),
            user_agent=_env(_k("USER_AGENT")),
            timeout_seconds=_env_float(_k("TIMEOUT_SECONDS"), 30.0),
            dump_responses=_env_bool(_k("DUMP_RESPONSES"), False),
            data_dir=data_dir,
            dump_path=_env_path(_k("DUMP_PATH"), data_dir / "nirvana_response.dump.json"),
            since=_env_int(_k("SINCE"), 0),
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
