"""
Logging configuration.

One stdout handler on the root logger; every record carries the request
correlation id.

Dependencies: logging (stdlib), standup_digest.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from standup_digest.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# HTTP clients log every request at INFO; the Langfuse SDK logs every flush.
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "langfuse")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation id to every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Route all logging to stdout with correlation ids.

    Safe to call more than once: existing root handlers are replaced.

    Args:
        level: Root log level name (already validated by BaseSettings)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
