"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, Dict

import structlog
from rich.logging import RichHandler

from talent_pipeline.config import settings


def configure_logging() -> None:
    """Configure structured logging with rich output."""

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper()),
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper())
        ),
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_transition(job_id: str, application_id: str, action: str, **kwargs: Any) -> Dict[str, Any]:
    """Create a log context for an application status change."""
    return {
        "job_id": job_id,
        "application_id": application_id,
        "action": action,
        **{k: v for k, v in kwargs.items() if not k.startswith("_")},
    }
