# tests/test_cli.py

from __future__ import annotations

from dataclasses import replace

import pytest

from nirvana_client.api.client import NirvanaClient, hash_password
from nirvana_client.api.diagnostics import CollectingDiagnosticSink
from nirvana_client.api.envelope import decode_envelope
from nirvana_client.cli.main import run, summarize
from nirvana_client.errors import ConfigError

from .fakes import FakeNirvanaServer, form


def test_summarize(everything_bytes, sink) -> None:
    counts = summarize(decode_envelope(everything_bytes, sink))
    assert counts == {"users": 1, "tags": 4, "tasks": 3, "open": 2, "completed": 1, "deleted": 0}


def test_run_authenticates_then_retrieves(settings, everything_bytes) -> None:
    server = FakeNirvanaServer(everything_body=everything_bytes)
    diagnostics = CollectingDiagnosticSink()
    s = replace(settings, since=1234)

    with NirvanaClient(s, transport=server.transport(), sink=diagnostics) as client:
        assert run(s, client, diagnostics) == 0

    auth_req, everything_req = server.requests
    assert form(auth_req)["p"] == hash_password("secret")
    assert everything_req.url.params["since"] == "1234"
    assert everything_req.url.params["authtoken"] == server.token


def test_run_requires_credentials(settings) -> None:
    s = replace(settings, username="", password="")
    server = FakeNirvanaServer()
    with NirvanaClient(s, transport=server.transport()) as client:
        with pytest.raises(ConfigError):
            run(s, client, CollectingDiagnosticSink())
    assert server.requests == []
