# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from nirvana_client.api.diagnostics import CollectingDiagnosticSink
from nirvana_client.config import Settings

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture()
def sink() -> CollectingDiagnosticSink:
    return CollectingDiagnosticSink()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Explicit Settings for tests.

    Built directly rather than via from_env() so a developer's .env or shell
    variables never leak into unit tests.
    """
    return Settings(
        username="someone@example.com",
        password="secret",
        password_md5="",
        base_url="https://api.nirvanahq.test/",
        app_id="nirvana-sdk-python",
        app_version="1",
        user_agent="nirvana-client-tests",
        timeout_seconds=5.0,
        dump_responses=False,
        data_dir=tmp_path,
        dump_path=tmp_path / "dump.json",
        since=0,
        log_level="DEBUG",
    )


@pytest.fixture()
def everything_bytes() -> bytes:
    return (DATA_DIR / "everything.json").read_bytes()


@pytest.fixture()
def raw_task() -> dict[str, Any]:
    """A fully populated wire task; tests override single fields."""
    return {
        "id": "T1",
        "type": "0",
        "ps": "0",
        "state": "1",
        "parentid": "P1",
        "seq": "4",
        "seqt": "1700000000",
        "seqp": "7",
        "name": "Write report",
        "tags": "Work,Home",
        "etime": "45",
        "energy": "2",
        "waitingfor": "",
        "startdate": "20240105",
        "duedate": "20240131",
        "recurring": "",
        "note": "draft first",
        "completed": "0",
        "cancelled": "0",
        "deleted": "0",
        "updated": "1700000500",
    }
