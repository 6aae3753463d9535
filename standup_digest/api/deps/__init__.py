"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_quick_ask_service,
    get_service_cache,
    get_settings_dependency,
    get_summarization_service,
)

__all__ = [
    "ServiceCache",
    "get_quick_ask_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_summarization_service",
]
