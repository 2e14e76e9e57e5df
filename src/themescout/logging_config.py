# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for scrape runs.

The pipeline logs through plain ``logging.getLogger(__name__)``: one INFO
line per detail page (``"3/10: Fetching ananke"``), a WARNING for each
skipped theme and a closing count. This module renders those lines with
ConsoleRenderer on a terminal, or as JSON lines under ``--json-logs`` so a
long extract run can be grepped for skipped themes afterwards.

Leaf module, no themescout imports. Call once from the CLI before any run.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that are chatty at DEBUG/INFO during a scrape.
_NOISY_LOGGERS = ("asyncio", "playwright")


def configure(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route stdlib logging through structlog, writing to stderr.

    Args:
        json_output: True for JSON lines, False for human-readable console lines.
        level: Root logger level (default INFO).
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
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

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

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
