# src/nirvana_client/api/decoders.py

"""
Per-entity decoders: raw JSON object (string fields) -> typed record.

Every decoder takes the parsed object, a path prefix used to name fields in
diagnostics (e.g. "results[3].task") and an optional sink. Bad scalar content
never raises; only a wrong structure (non-object record, object/array where a
scalar belongs) raises EnvelopeDecodeError.

The encode_* functions are the inverse and produce the wire shape again.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any, TypeVar

from ..core.ports import Diagnostic, DiagnosticSink
from ..errors import EnvelopeDecodeError
from .coerce import (
    NO_TIME,
    format_calendar_date,
    format_loose_boolean,
    parse_calendar_date,
    parse_integer,
    parse_loose_boolean,
    parse_unix_timestamp,
    to_unix,
)
from .diagnostics import default_sink
from .models import APIError, APIRequest, Auth, Tag, TagType, Task, TaskKind, TaskState, User


E = TypeVar("E", bound=StrEnum)


# ---- low-level helpers ----


def as_object(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise EnvelopeDecodeError(f"expected object, got {type(value).__name__}", path=path)
    return value


def raw_field(obj: Mapping[str, Any], key: str, path: str) -> str:
    """
    Read a wire scalar as a string.

    Missing and null read as "". Numbers and booleans are accepted in their
    string form since the service is not always consistent about quoting.
    """
    value = obj.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    raise EnvelopeDecodeError(
        f"expected scalar, got {type(value).__name__}", path=f"{path}.{key}"
    )


def _enum(
    cls: type[E],
    raw: str,
    default: E,
    field_name: str,
    sink: DiagnosticSink,
) -> E:
    if raw == "":
        return default
    try:
        return cls(raw)
    except ValueError:
        sink.report(Diagnostic(field=field_name, value=raw, reason=f"unknown {cls.__name__} code"))
        return default


def _timestamp_field(value: datetime, flag: bool) -> str:
    # A set flag with a sentinel timestamp came from a raw "" (or garbage):
    # encode "" so the flag survives a re-decode.
    if value == NO_TIME:
        return "" if flag else "0"
    return str(to_unix(value))


# ---- decoders ----


def decode_request(data: Any, path: str = "request") -> APIRequest:
    obj = as_object(data, path)
    return APIRequest(request_id=raw_field(obj, "requestid", path))


def decode_error(
    data: Any,
    path: str = "error",
    sink: DiagnosticSink | None = None,
) -> APIError:
    sink = default_sink() if sink is None else sink
    obj = as_object(data, path)

    code_raw = obj.get("code")
    if isinstance(code_raw, int) and not isinstance(code_raw, bool):
        code = code_raw
    else:
        code = parse_integer(raw_field(obj, "code", path), 0, f"{path}.code", sink)

    request_raw = obj.get("request")
    request = APIRequest() if request_raw is None else decode_request(request_raw, f"{path}.request")

    return APIError(code=code, message=raw_field(obj, "message", path), request=request)


def decode_auth(data: Any, path: str = "auth", sink: DiagnosticSink | None = None) -> Auth:
    obj = as_object(data, path)
    return Auth(token=raw_field(obj, "token", path))


def decode_user(data: Any, path: str = "user", sink: DiagnosticSink | None = None) -> User:
    obj = as_object(data, path)
    return User(id=raw_field(obj, "id", path))


def decode_tag(data: Any, path: str = "tag", sink: DiagnosticSink | None = None) -> Tag:
    sink = default_sink() if sink is None else sink
    obj = as_object(data, path)

    def f(key: str) -> str:
        return raw_field(obj, key, path)

    raw_type = f("type")
    deleted = f("deleted")

    if raw_type == "0":
        # legacy tags come back with type "0"; the service treats them as contexts
        tag_type = TagType.CONTEXT
    else:
        tag_type = _enum(TagType, raw_type, TagType.TAG, f"{path}.type", sink)

    return Tag(
        key=f("key"),
        type=tag_type,
        email=f("email"),
        color=f("color"),
        meta=f("meta"),
        deleted=parse_unix_timestamp(deleted, 0, f"{path}.deleted", sink),
        is_deleted=deleted != "0",
    )


def decode_task(data: Any, path: str = "task", sink: DiagnosticSink | None = None) -> Task:
    sink = default_sink() if sink is None else sink
    obj = as_object(data, path)

    def f(key: str) -> str:
        return raw_field(obj, key, path)

    def n(key: str) -> str:
        return f"{path}.{key}"

    completed = f("completed")
    deleted = f("deleted")
    startdate, _ = parse_calendar_date(f("startdate"), n("startdate"), sink)
    duedate, _ = parse_calendar_date(f("duedate"), n("duedate"), sink)

    return Task(
        id=f("id"),
        kind=_enum(TaskKind, f("type"), TaskKind.TASK, n("type"), sink),
        sequential=parse_loose_boolean(f("ps")),
        state=_enum(TaskState, f("state"), TaskState.INBOX, n("state"), sink),
        parent_id=f("parentid"),
        seq=parse_integer(f("seq"), 0, n("seq"), sink),
        seqt=parse_unix_timestamp(f("seqt"), 0, n("seqt"), sink),
        seqp=parse_integer(f("seqp"), 0, n("seqp"), sink),
        name=f("name"),
        tags=f("tags"),
        etime=parse_integer(f("etime"), 0, n("etime"), sink),
        energy=parse_integer(f("energy"), 0, n("energy"), sink),
        waitingfor=f("waitingfor"),
        startdate=startdate,
        duedate=duedate,
        recurring=f("recurring"),
        note=f("note"),
        completed=parse_unix_timestamp(completed, 0, n("completed"), sink),
        cancelled=parse_loose_boolean(f("cancelled")),
        deleted=parse_unix_timestamp(deleted, 0, n("deleted"), sink),
        updated=parse_unix_timestamp(f("updated"), 0, n("updated"), sink),
        is_completed=completed != "0",
        is_deleted=deleted != "0",
    )


# ---- encoders (wire shape) ----


def encode_request(request: APIRequest) -> dict[str, str]:
    return {"requestid": request.request_id}


def encode_error(error: APIError) -> dict[str, Any]:
    return {"code": error.code, "message": error.message, "request": encode_request(error.request)}


def encode_auth(auth: Auth) -> dict[str, str]:
    return {"token": auth.token}


def encode_user(user: User) -> dict[str, str]:
    return {"id": user.id}


def encode_tag(tag: Tag) -> dict[str, str]:
    # "0" on the wire means CONTEXT, so a plain TAG goes out as ""
    return {
        "key": tag.key,
        "type": "" if tag.type is TagType.TAG else tag.type.value,
        "email": tag.email,
        "color": tag.color,
        "meta": tag.meta,
        "deleted": _timestamp_field(tag.deleted, tag.is_deleted),
    }


def encode_task(task: Task) -> dict[str, str]:
    return {
        "id": task.id,
        "type": task.kind.value,
        "ps": format_loose_boolean(task.sequential),
        "state": task.state.value,
        "parentid": task.parent_id,
        "seq": str(task.seq),
        "seqt": str(to_unix(task.seqt)),
        "seqp": str(task.seqp),
        "name": task.name,
        "tags": task.tags,
        "etime": str(task.etime),
        "energy": str(task.energy),
        "waitingfor": task.waitingfor,
        "startdate": format_calendar_date(task.startdate),
        "duedate": format_calendar_date(task.duedate),
        "recurring": task.recurring,
        "note": task.note,
        "completed": _timestamp_field(task.completed, task.is_completed),
        "cancelled": format_loose_boolean(task.cancelled),
        "deleted": _timestamp_field(task.deleted, task.is_deleted),
        "updated": str(to_unix(task.updated)),
    }
