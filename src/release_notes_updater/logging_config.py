"""Structured logging configuration.

Sets up structlog so each decision the updater takes is one event with
key/value context, e.g.:
  {"event": "release_fetched", "release_id": 123, "body_length": 512}

Logs go to stderr: stdout is reserved for workflow commands
(::warning::, ::error::) that the Actions runner parses.

Usage:
    from release_notes_updater.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("release_updated", release_id=123)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog


def _resolve_level(log_level: str | None) -> int:
    # RUNNER_DEBUG=1 is set when a workflow is re-run with debug logging
    if log_level is None and os.environ.get("RUNNER_DEBUG") == "1":
        return logging.DEBUG
    name = (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def setup_logging(
    environment: str | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structured logging for a run.

    In development: console output, colorized on a terminal or runner.
    In production: one JSON object per line.

    Args:
        environment: "development" or "production". Reads from
                     ENVIRONMENT env var if not provided.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
                   Reads from LOG_LEVEL env var, or RUNNER_DEBUG, if
                   not provided.
    """
    env = environment or os.environ.get("ENVIRONMENT", "development")
    level = _resolve_level(log_level)

    if env == "production":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=bool(os.environ.get("GITHUB_ACTIONS")) or sys.stderr.isatty()
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # httpx logs each request through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)


def get_logger(name: str) -> Any:
    """Get a structured logger instance (name is typically __name__)."""
    return structlog.get_logger(name)
