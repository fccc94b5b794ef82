# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from nirvana_client.config import DEFAULT_BASE_URL, Settings

_VARS = [
    "USERNAME",
    "PASSWORD",
    "PASSWORD_MD5",
    "BASE_URL",
    "APP_ID",
    "APP_VERSION",
    "USER_AGENT",
    "TIMEOUT_SECONDS",
    "DUMP_RESPONSES",
    "DATA_DIR",
    "DUMP_PATH",
    "SINCE",
    "LOG_LEVEL",
]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _VARS:
        monkeypatch.delenv(f"NIRVANA_{name}", raising=False)
    return monkeypatch


def test_defaults(clean_env) -> None:
    s = Settings.from_env()
    assert s.base_url == DEFAULT_BASE_URL
    assert s.app_id == "nirvana-sdk-python"
    assert s.app_version == "1"
    assert s.timeout_seconds == 30.0
    assert s.dump_responses is False
    assert s.data_dir == Path(".local/nirvana")
    assert s.dump_path == Path(".local/nirvana") / "nirvana_response.dump.json"
    assert s.since == 0
    assert s.log_level == "INFO"
    assert not s.has_credentials


def test_from_env(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("NIRVANA_USERNAME", " someone@example.com ")
    clean_env.setenv("NIRVANA_PASSWORD_MD5", "ABCDEF")
    clean_env.setenv("NIRVANA_DUMP_RESPONSES", "yes")
    clean_env.setenv("NIRVANA_DATA_DIR", str(tmp_path))
    clean_env.setenv("NIRVANA_SINCE", "1700000000")
    clean_env.setenv("NIRVANA_TIMEOUT_SECONDS", "2.5")

    s = Settings.from_env()
    assert s.username == "someone@example.com"
    assert s.password_md5 == "abcdef"
    assert s.has_credentials
    assert s.dump_responses is True
    assert s.dump_path == tmp_path / "nirvana_response.dump.json"
    assert s.since == 1700000000
    assert s.timeout_seconds == 2.5


def test_bad_numbers_fall_back(clean_env) -> None:
    clean_env.setenv("NIRVANA_SINCE", "soon")
    clean_env.setenv("NIRVANA_TIMEOUT_SECONDS", "fast")
    s = Settings.from_env()
    assert s.since == 0
    assert s.timeout_seconds == 30.0
