# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""structlog configuration for applications using entitree.

The library itself only emits records through ``logging.getLogger(__name__)``.
Applications that want readable output call :func:`configure_logging` once.
"""

from __future__ import annotations

import logging
import sys

import structlog

# ###############
# Public Interface
# ###############

LOGGER_NAME = "entitree"


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route entitree log records through structlog to stderr.

    Args:
        verbose: Emit DEBUG records (schema compilation, type registration).
            When False, only WARNING and above.
        log_json: Render JSON lines instead of the console renderer.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

