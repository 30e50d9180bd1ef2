"""
Structured Logging
structlog setup and the divergence record shared by every billing write
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

DIVERGENCE_EVENT = "Billing provider updated but local update failed - states diverged"


def configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging, once per process.

    Request context bound through ``structlog.contextvars`` (student or
    family id) is merged into every record. Production renders JSON, dev
    renders coloured console lines.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=True),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_divergence(
    logger: Any,
    operation: str,
    external_subscription_id: str,
    intended_state: str,
    error: str,
    **context: Any,
) -> None:
    """
    CRITICAL record for a provider write whose local mirror write failed.

    Carries everything a reconciliation job needs to repair the row:
    the operation name, the provider subscription id, what the provider
    now holds, and why the local write failed.
    """
    logger.critical(
        DIVERGENCE_EVENT,
        operation=operation,
        external_subscription_id=external_subscription_id,
        intended_state=intended_state,
        error=error,
        **context,
    )
