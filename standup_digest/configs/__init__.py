"""
Configuration management module.

Centralized, type-safe configuration for the summarization engine and its
collaborators using Pydantic Settings. Every module maps environment
variables with its own prefix.
"""

from standup_digest.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
