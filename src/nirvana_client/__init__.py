# src/nirvana_client/__init__.py

"""Client for the NirvanaHQ task-management API."""

from .api.client import NirvanaClient, hash_password
from .api.coerce import NO_DATE, NO_TIME
from .api.diagnostics import CollectingDiagnosticSink, LoggingDiagnosticSink, NullDiagnosticSink
from .api.envelope import ResponseEnvelope, Result, decode_envelope
from .api.models import APIError, Auth, ResultKind, Tag, TagType, Task, TaskKind, TaskState, User
from .core.ports import Diagnostic, DiagnosticSink
from .errors import (
    EnvelopeDecodeError,
    NirvanaAuthError,
    NirvanaError,
    NirvanaServiceError,
    NirvanaTransportError,
)

__all__ = [
    "APIError",
    "Auth",
    "CollectingDiagnosticSink",
    "Diagnostic",
    "DiagnosticSink",
    "EnvelopeDecodeError",
    "LoggingDiagnosticSink",
    "NO_DATE",
    "NO_TIME",
    "NirvanaAuthError",
    "NirvanaClient",
    "NirvanaError",
    "NirvanaServiceError",
    "NirvanaTransportError",
    "NullDiagnosticSink",
    "ResponseEnvelope",
    "Result",
    "ResultKind",
    "Tag",
    "TagType",
    "Task",
    "TaskKind",
    "TaskState",
    "User",
    "decode_envelope",
    "hash_password",
]
