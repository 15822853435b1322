"""structlog wiring for the design request service.

Our own events and uvicorn's stdlib records leave through one stdout
handler, so a submission's ``form_submission_received`` / ``email_sent``
lines and the access log share the same keys (``timestamp``, ``level``,
``service``). Per-request keys bound with ``structlog.contextvars`` (the
handler binds ``language``) are merged into every event of that request.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

SERVICE_NAME = "design-request"


def _service_tagger(service: str) -> Processor:
    def tag(logger, method_name, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return tag


def _record_processors(service: str) -> list[Processor]:
    """Processors valid for both structlog events and foreign stdlib records."""
    return [
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.add_log_level,
        _service_tagger(service),
        structlog.stdlib.add_logger_name,
    ]


def setup_logging(*, json: bool = True, level: str = "INFO", service: str = SERVICE_NAME) -> None:
    """Install the stdout handler and configure structlog around it.

    ``json=True`` is the deployed format (one JSON object per line);
    ``json=False`` uses the console renderer for local form testing.
    *level* is case-insensitive and applies to the root logger, so uvicorn
    follows it too.
    """
    record_processors = _record_processors(service)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *record_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=record_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
