"""structlog setup for the CLI."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # Looked up per logger so a swapped sys.stderr (tests, CliRunner) is honored.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(*, verbose: bool = False, level: str = "INFO") -> None:
    """Route structured logs to stderr, filtered by level.

    Args:
        verbose: Lower the threshold to DEBUG regardless of `level`.
        level: Level name used when not verbose.
    """
    threshold = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=_stderr_logger,
    )
