# src/nirvana_client/cli/main.py

"""
CLI entrypoint.

Initializes logging from settings, authenticates with the credentials from
the environment, retrieves everything since NIRVANA_SINCE and logs a summary.
"""

from __future__ import annotations

import logging
import sys

from ..api.client import NirvanaClient, resolve_password_md5
from ..api.diagnostics import CollectingDiagnosticSink, LoggingDiagnosticSink, TeeDiagnosticSink
from ..api.envelope import ResponseEnvelope
from ..config import Settings, get_settings
from ..errors import ConfigError, NirvanaError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def summarize(envelope: ResponseEnvelope) -> dict[str, int]:
    tasks = envelope.tasks()
    return {
        "users": len(envelope.users()),
        "tags": len(envelope.tags()),
        "tasks": len(tasks),
        "open": sum(1 for t in tasks if not t.is_completed and not t.is_deleted),
        "completed": sum(1 for t in tasks if t.is_completed),
        "deleted": sum(1 for t in tasks if t.is_deleted),
    }


def run(settings: Settings, client: NirvanaClient, diagnostics: CollectingDiagnosticSink) -> int:
    if not settings.has_credentials:
        raise ConfigError("Set environment variables NIRVANA_USERNAME and NIRVANA_PASSWORD")

    client.authenticate(settings.username, resolve_password_md5(settings))
    envelope = client.retrieve_since(settings.since)

    counts = summarize(envelope)
    logger.info(
        "users=%d tags=%d tasks=%d (open=%d completed=%d deleted=%d) diagnostics=%d",
        counts["users"],
        counts["tags"],
        counts["tasks"],
        counts["open"],
        counts["completed"],
        counts["deleted"],
        len(diagnostics),
    )
    return 0


def main() -> int:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    diagnostics = CollectingDiagnosticSink()
    sink = TeeDiagnosticSink(LoggingDiagnosticSink(), diagnostics)

    try:
        with NirvanaClient(settings, sink=sink) as client:
            return run(settings, client, diagnostics)
    except ConfigError as e:
        logger.error("%s", e)
        return 2
    except NirvanaError as e:
        logger.error("Nirvana: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
