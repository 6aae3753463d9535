"""API routers."""

from .ai_engine import router as ai_engine_router
from .health import router as health_router

__all__ = ["ai_engine_router", "health_router"]
