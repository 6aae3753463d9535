"""
Health check API endpoint.

Routes: GET /health

Reports liveness plus which integrations have credentials configured;
no external service is contacted.

Dependencies: fastapi, standup_digest.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from standup_digest import __version__
from standup_digest.api.deps import get_settings_dependency
from standup_digest.configs import Settings


class IntegrationStatus(BaseModel):
    """Whether each integration is configured."""

    slack: bool
    github: bool
    google_docs: bool
    tracing: bool


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    version: str = Field(default=__version__)
    integrations: IntegrationStatus


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Liveness and integration configuration."""
    obs = settings.observability
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        integrations=IntegrationStatus(
            slack=bool(settings.slack.bot_token),
            github=bool(settings.github.token),
            google_docs=settings.google_docs.is_configured,
            tracing=obs.langfuse_enabled,
        ),
    )
