"""
Request correlation ids.

A correlation id is bound for the duration of one request and shows up in
every log line and Langfuse trace the request produces.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def get_correlation_id() -> str:
    """Correlation id bound to the current context ("" outside a request)."""
    return correlation_id_ctx.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation id for the enclosed block.

    The previous value is restored on exit, so nested scopes behave.

    Args:
        correlation_id: Incoming id (e.g. from a request header); a new one
            is generated when missing

    Yields:
        str: The bound correlation id
    """
    value = correlation_id or new_correlation_id()
    token = correlation_id_ctx.set(value)
    try:
        yield value
    finally:
        correlation_id_ctx.reset(token)
