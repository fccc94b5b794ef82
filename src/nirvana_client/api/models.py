# src/nirvana_client/api/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

from .coerce import NO_DATE, NO_TIME


class TagType(StrEnum):
    """
    Tag classification (wire value of tag.type).

    Notes:
    - the service still returns "0" for some legacy tags; decode remaps
      those to CONTEXT, so TAG is only produced for an empty or unknown type.
    """

    TAG = "0"
    AREA = "1"
    CONTEXT = "2"
    CONTACT = "3"


class TaskKind(StrEnum):
    """Wire value of task.type."""

    TASK = "0"
    PROJECT = "1"
    REFERENCE = "2"
    REFERENCE_PROJECT = "3"


class TaskState(StrEnum):
    """
    Workflow state of a task or project (wire value of task.state).

    INBOX is what an unset/zero state means. "10" is not used by the service.
    """

    INBOX = "0"
    NEXT = "1"
    WAITING = "2"
    SCHEDULED = "3"
    SOMEDAY = "4"
    LATER = "5"
    TRASHED = "6"
    LOGGED = "7"
    DELETED = "8"
    RECURRING = "9"
    ACTIVE_PROJECT = "11"


class ResultKind(StrEnum):
    ERROR = "error"
    AUTH = "auth"
    USER = "user"
    TAG = "tag"
    TASK = "task"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class APIRequest:
    request_id: str = ""


@dataclass(frozen=True, slots=True)
class APIError:
    code: int = 0
    message: str = ""
    request: APIRequest = field(default_factory=APIRequest)

    @property
    def is_error(self) -> bool:
        return self.code != 0


@dataclass(frozen=True, slots=True)
class Auth:
    token: str = ""


@dataclass(frozen=True, slots=True)
class User:
    id: str = ""


@dataclass(frozen=True, slots=True)
class Tag:
    key: str
    type: TagType
    # contact email (blank for other types)
    email: str
    color: str
    meta: str
    deleted: datetime
    is_deleted: bool


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    kind: TaskKind
    # projects only: True if sequential, False if parallel
    sequential: bool
    state: TaskState
    parent_id: str

    # order in project list / time focused (NO_TIME if not) / order in task list
    seq: int
    seqt: datetime
    seqp: int

    name: str
    # comma-delimited tag keys, kept as sent
    tags: str
    etime: int
    energy: int
    waitingfor: str

    startdate: date
    duedate: date

    # opaque JSON, e.g. {"paused":false,"freq":"daily","interval":1,...}
    recurring: str
    note: str

    completed: datetime
    cancelled: bool
    deleted: datetime
    updated: datetime

    is_completed: bool
    is_deleted: bool

    @property
    def is_project(self) -> bool:
        return self.kind in (TaskKind.PROJECT, TaskKind.REFERENCE_PROJECT)

    @property
    def has_start_date(self) -> bool:
        return self.startdate != NO_DATE

    @property
    def has_due_date(self) -> bool:
        return self.duedate != NO_DATE

    @property
    def is_focused(self) -> bool:
        return self.seqt != NO_TIME

    @property
    def tag_list(self) -> list[str]:
        """Tag keys split out of the raw comma-delimited string."""
        return [t.strip() for t in self.tags.split(",") if t.strip()]
