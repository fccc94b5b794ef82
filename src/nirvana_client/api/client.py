# src/nirvana_client/api/client.py

"""
HTTP transport for the Nirvana API (httpx).

Builds requests with the common query parameters, keeps the auth token once
obtained, and hands the raw body to decode_envelope. HTTP-level failures are
raised as NirvanaTransportError before any decoding happens.
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
import uuid
from pathlib import Path
from typing import Any

import httpx

from ..config import Settings, get_settings
from ..core.ports import DiagnosticSink
from ..errors import NirvanaAuthError, NirvanaTransportError
from .envelope import ResponseEnvelope, decode_envelope

logger = logging.getLogger(__name__)

API_TYPE = "rest"


def hash_password(plain: str) -> str:
    """The API expects the MD5 hex digest of the password, never the password."""
    return hashlib.md5(plain.encode("utf-8")).hexdigest()


def resolve_password_md5(settings: Settings) -> str:
    if settings.password_md5:
        return settings.password_md5
    return hash_password(settings.password)


class NirvanaClient:
    """
    Synchronous Nirvana API client.

    Owns one httpx.Client (connection pool + cookie jar) unless one is passed
    in. Use as a context manager or call close().
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        if http_client is not None and transport is not None:
            raise ValueError("pass either http_client or transport, not both")

        self._settings = settings or get_settings()
        self._sink = sink
        self._auth_token = ""
        self._base_url = httpx.URL(self._settings.base_url)

        self._owns_http = http_client is None
        if http_client is None:
            http_client = httpx.Client(
                timeout=httpx.Timeout(self._settings.timeout_seconds),
                transport=transport,
            )
        self._http = http_client

    # ---- lifecycle ----

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> NirvanaClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_authenticated(self) -> bool:
        return bool(self._auth_token)

    # ---- API methods ----

    def authenticate(self, login: str, password_md5: str) -> None:
        """Log in and keep the returned token for later requests."""
        envelope = self._request(
            "POST",
            "/",
            data={"method": "auth.new", "u": login, "p": password_md5},
        )
        envelope.raise_for_error()

        token = envelope.first_auth_token()
        if token is None:
            raise NirvanaAuthError("Nirvana client error: no authentication token")
        self._auth_token = token
        logger.info("Nirvana: authenticated login=%s", login)

    def retrieve_since(self, since: int) -> ResponseEnvelope:
        """Everything (user, tags, tasks) changed since the given unix time."""
        envelope = self._request(
            "GET",
            "/",
            params={"method": "everything", "since": str(int(since))},
            headers={"Content-Type": "application/json"},
        )
        envelope.raise_for_error()
        logger.info(
            "Nirvana: retrieved since=%s results=%d",
            since,
            len(envelope.results),
        )
        return envelope

    # ---- low-level helpers ----

    def _query_params(self, extra: dict[str, str] | None) -> dict[str, str]:
        params = {
            "api": API_TYPE,
            "requestid": str(uuid.uuid4()),
            "clienttime": str(int(time.time())),
            "appid": self._settings.app_id,
            "appversion": self._settings.app_version,
        }
        if self._auth_token:
            params["authtoken"] = self._auth_token
        if extra:
            params.update(extra)
        return params

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.user_agent:
            headers["User-Agent"] = self._settings.user_agent
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ResponseEnvelope:
        url = self._base_url.join(path)
        query = self._query_params(params)
        logger.debug("Nirvana: %s %s method=%s", method, url, query.get("method", ""))

        kwargs: dict[str, Any] = {"params": query, "headers": self._headers(headers)}
        if data is not None:
            # httpx sets application/x-www-form-urlencoded and Content-Length
            kwargs["data"] = data

        try:
            resp = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise NirvanaTransportError(f"HTTP request failed: {e}") from e

        if resp.status_code // 100 != 2:
            raise NirvanaTransportError(
                f"HTTP response error {resp.status_code}",
                status_code=resp.status_code,
            )

        body = resp.content
        if self._settings.dump_responses:
            self._dump(body, self._settings.dump_path)

        return decode_envelope(body, self._sink)

    @staticmethod
    def _dump(body: bytes, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # mode only applies on creation; an existing file is tightened first
            if path.exists():
                os.chmod(path, 0o600)
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "wb") as fh:
                fh.write(body)
        except OSError:
            logger.exception("Failed to dump response to %s", path)
            return
        logger.debug("Nirvana: response dumped to %s (%d bytes)", path, len(body))
