# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for the enrichment hook.

Modules log through ``logging.getLogger(__name__)``; ``configure()`` routes
those records through structlog so host services get JSON lines and the CLI
gets console output. ``invocation_context()`` tags every record emitted during
one hook invocation with its silo, so interleaved concurrent auctions can be
told apart. httpx/httpcore request logging is held at WARNING unless DEBUG is
requested, since the client already logs each classification fetch.

Leaf module with no package imports.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import structlog

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure(*, json_output: bool = False, level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install a single structlog-formatted handler on the root logger.

    Args:
        json_output: True for JSON lines (host services), False for console (CLI).
        level: Root logger level name; unknown names fall back to INFO.
        stream: Destination stream (default stderr).
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    name = level.upper()
    root.setLevel(getattr(logging, name) if name in _LOG_LEVELS else logging.INFO)
    for noisy in _QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.NOTSET if root.level <= logging.DEBUG else logging.WARNING)


@contextmanager
def invocation_context(*, silo: str) -> Iterator[None]:
    """Bind *silo* into the log context for the duration of one invocation."""
    with structlog.contextvars.bound_contextvars(silo=silo):
        yield
