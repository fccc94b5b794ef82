# src/nirvana_client/api/envelope.py

"""
Response envelope of the Nirvana API.

Wire shape:
    {"request": {"requestid": "..."},
     "results": [{"error": {...}}, {"auth": {...}}, {"task": {...}}, ...]}

Each result object normally carries exactly one of error/auth/user/tag/task,
but decoding does not rely on that: every key present is decoded.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.ports import DiagnosticSink
from ..errors import EnvelopeDecodeError, NirvanaServiceError
from .decoders import (
    as_object,
    decode_auth,
    decode_error,
    decode_request,
    decode_tag,
    decode_task,
    decode_user,
    encode_auth,
    encode_error,
    encode_request,
    encode_tag,
    encode_task,
    encode_user,
)
from .diagnostics import default_sink
from .models import APIError, APIRequest, Auth, ResultKind, Tag, Task, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Result:
    error: APIError | None = None
    auth: Auth | None = None
    user: User | None = None
    tag: Tag | None = None
    task: Task | None = None

    @property
    def kind(self) -> ResultKind:
        """First populated sub-record, in wire key order; EMPTY if none."""
        for k in _RESULT_KEYS:
            if getattr(self, k) is not None:
                return ResultKind(k)
        return ResultKind.EMPTY

    @property
    def record(self) -> APIError | Auth | User | Tag | Task | None:
        kind = self.kind
        if kind is ResultKind.EMPTY:
            return None
        return getattr(self, kind.value)


@dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    request: APIRequest = field(default_factory=APIRequest)
    results: tuple[Result, ...] = ()

    # ---- first-result queries ----

    def first_error(self) -> APIError | None:
        """Error of the first result if its code is nonzero. Later results are not checked."""
        if not self.results:
            return None
        err = self.results[0].error
        if err is not None and err.code != 0:
            return err
        return None

    def first_auth_token(self) -> str | None:
        if not self.results:
            return None
        auth = self.results[0].auth
        if auth is not None and auth.token:
            return auth.token
        return None

    def raise_for_error(self) -> None:
        err = self.first_error()
        if err is not None:
            raise NirvanaServiceError(err.code, err.message, err.request.request_id)

    # ---- whole-sequence queries ----

    def users(self) -> list[User]:
        return [r.user for r in self.results if r.user is not None]

    def tags(self) -> list[Tag]:
        return [r.tag for r in self.results if r.tag is not None]

    def tasks(self) -> list[Task]:
        return [r.task for r in self.results if r.task is not None]

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "request": encode_request(self.request),
            "results": [encode_result(r) for r in self.results],
        }


_DECODERS: dict[str, Callable[[Any, str, DiagnosticSink | None], Any]] = {
    "error": decode_error,
    "auth": decode_auth,
    "user": decode_user,
    "tag": decode_tag,
    "task": decode_task,
}

_ENCODERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "error": encode_error,
    "auth": encode_auth,
    "user": encode_user,
    "tag": encode_tag,
    "task": encode_task,
}

_RESULT_KEYS = tuple(_DECODERS)


def decode_result(data: Any, path: str, sink: DiagnosticSink | None = None) -> Result:
    obj = as_object(data, path)
    parts: dict[str, Any] = {}
    for key, decoder in _DECODERS.items():
        value = obj.get(key)
        # null or {} means "not this kind"
        if value is None or (isinstance(value, Mapping) and not value):
            continue
        parts[key] = decoder(value, f"{path}.{key}", sink)
    return Result(**parts)


def encode_result(result: Result) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, encoder in _ENCODERS.items():
        value = getattr(result, key)
        if value is not None:
            out[key] = encoder(value)
    return out


def decode_envelope(data: bytes | str, sink: DiagnosticSink | None = None) -> ResponseEnvelope:
    """
    Decode a complete response body.

    Raises EnvelopeDecodeError if the body is not JSON or not envelope-shaped.
    Malformed scalars inside records only produce diagnostics.
    """
    try:
        doc = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise EnvelopeDecodeError(f"invalid JSON: {e}") from e
    return decode_envelope_object(doc, sink)


def decode_envelope_object(doc: Any, sink: DiagnosticSink | None = None) -> ResponseEnvelope:
    """Same as decode_envelope, for an already parsed JSON document."""
    sink = default_sink() if sink is None else sink
    top = as_object(doc, "$")

    request_raw = top.get("request")
    request = APIRequest() if request_raw is None else decode_request(request_raw)

    results_raw = top.get("results")
    if results_raw is None:
        results_raw = []
    if not isinstance(results_raw, list):
        raise EnvelopeDecodeError(f"expected array, got {type(results_raw).__name__}", path="results")

    results = tuple(decode_result(item, f"results[{i}]", sink) for i, item in enumerate(results_raw))

    logger.debug(
        "Decoded envelope requestid=%s results=%d",
        request.request_id,
        len(results),
    )
    return ResponseEnvelope(request=request, results=results)
