"""
Structured logging for the estimator, built on structlog.

Estimation events (`optimism_l1_gas`, `pre_verification_gas_estimated`, ...)
carry their numbers as key/value pairs, so the default output is one JSON
object per line. DEBUG switches to the console renderer unless JSON is
forced. The CLI logs to stderr so `--json` output on stdout stays parseable.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog

from .config import settings

QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def resolve_level(log_level: Optional[str] = None) -> int:
    return getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)


def _event_processors(json_logs: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _stream_handler(stream: TextIO, json_logs: bool) -> logging.Handler:
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    stream: Optional[TextIO] = None,
    json_logs: Optional[bool] = None,
) -> None:
    """Send structlog and stdlib records through one handler.

    Args:
        log_level: Level name; falls back to settings.log_level
        stream: Destination (stdout when omitted)
        json_logs: Force JSON (True) or console (False) rendering
    """
    level = resolve_level(log_level)
    if json_logs is None:
        json_logs = level != logging.DEBUG

    structlog.configure(
        processors=[
            *_event_processors(json_logs),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers[:] = [_stream_handler(stream or sys.stdout, json_logs)]
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
