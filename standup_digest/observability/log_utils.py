"""
Structured logging helpers for the summarization pipeline.

Pipeline values are often large (model outputs, document batches); these
helpers reduce them to short, log-safe strings before they become record
extras.

Dependencies: logging (stdlib), langchain_core
System role: Logging helper functions
"""

import logging
from collections import Counter
from typing import Any

from langchain_core.documents import Document

MAX_LOG_VALUE_LENGTH = 500


def describe_documents(documents: list[Document]) -> str:
    """
    Summarize a document batch by source, e.g. "3 documents (github=1, slack=2)".

    Args:
        documents: Documents to describe

    Returns:
        str: Count plus per-source breakdown
    """
    sources = Counter(doc.metadata.get("source", "unknown") for doc in documents)
    breakdown = ", ".join(f"{name}={count}" for name, count in sorted(sources.items()))
    return f"{len(documents)} documents ({breakdown})" if documents else "0 documents"


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + f"... (truncated, {len(text)} total)"


def to_log_value(value: Any, max_length: int = MAX_LOG_VALUE_LENGTH) -> str:
    """
    Render a value as a short string for a log record.

    Documents are described by source and size, document lists by source
    breakdown, other collections by length. Long text is truncated.

    Args:
        value: Value to render
        max_length: Maximum rendered length before truncating

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, Document):
        source = value.metadata.get("source", "unknown")
        return f"Document(source={source}, chars={len(value.page_content)})"
    if isinstance(value, list) and value and all(isinstance(v, Document) for v in value):
        return describe_documents(value)
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    try:
        return _truncate(str(value), max_length)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """
    Log a message with every context value attached as a log-safe extra.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Record extras
    """
    logger.log(level, message, extra={key: to_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception at ERROR with its type and message as record extras.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Additional record extras
    """
    extra = {key: to_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = to_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
