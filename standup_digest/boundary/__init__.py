"""
Boundary layer for external system integrations.

Handles all interactions with external systems (Slack, GitHub, Google Docs).
Provides thin async clients behind small protocols so the orchestrator never
depends on a concrete integration.
"""
