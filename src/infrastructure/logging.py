"""Structured logging setup with correlation ID support."""

import logging
import sys
import uuid
from contextvars import ContextVar

# One ID per caller-facing operation, shared by every log line it produces
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
)
# Pillow logs every plugin it tries at DEBUG
IMAGE_LOGGERS = ("PIL",)


def get_correlation_id() -> str:
    """
    Get current correlation ID or generate a new one.

    Returns:
        Correlation ID string (UUID)
    """
    corr_id = correlation_id_var.get()
    if corr_id is None:
        corr_id = str(uuid.uuid4())
        correlation_id_var.set(corr_id)
    return corr_id


def set_correlation_id(corr_id: str | None = None) -> str:
    """Set correlation ID for current context, generating one when omitted."""
    corr_id = corr_id or str(uuid.uuid4())
    correlation_id_var.set(corr_id)
    return corr_id


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()  # type: ignore[attr-defined]
        return True


def configure_logging(level: int = logging.INFO, verbose: bool = False) -> None:
    """
    Configure root logging with correlation IDs.

    Args:
        level: Logging level (default: INFO)
        verbose: If True, let HTTP client and Pillow logs through at the
            configured level; otherwise they are limited to WARNING.
    """
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s correlation_id=%(correlation_id)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIDFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    noisy_level = level if verbose else max(level, logging.WARNING)
    for logger_name in (*HTTP_LOGGERS, *IMAGE_LOGGERS):
        logging.getLogger(logger_name).setLevel(noisy_level)
