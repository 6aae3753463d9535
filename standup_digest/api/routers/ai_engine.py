"""AI engine endpoints.

Routes:
- POST /ai-engine/summarize - Summarize standups and issues into a status report
- POST /ai-engine/quick-ask - Answer a single question with one model call

Dependencies: standup_digest.application.services
System role: Summarization and quick-ask HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from standup_digest.api.deps import get_quick_ask_service, get_summarization_service
from standup_digest.application.services.quick_ask_service import QuickAskService
from standup_digest.application.services.summarization_service import SummarizationService
from standup_digest.core.exceptions import StandupDigestException
from standup_digest.models.common import ErrorResponse
from standup_digest.models.quick_ask import QuickAskRequest, QuickAskResponse
from standup_digest.models.summarize import SummarizeRequest, SummarizeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai-engine", tags=["ai-engine"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid configuration or input"},
    500: {"model": ErrorResponse, "description": "Internal error"},
    502: {"model": ErrorResponse, "description": "Upstream source, model or publisher failure"},
}


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    status_code=200,
    responses=ERROR_RESPONSES,
)
async def summarize(
    request: SummarizeRequest,
    service: SummarizationService = Depends(get_summarization_service),
) -> SummarizeResponse:
    """Generate a project-status report from Slack standups and GitHub issues.

    Inputs under the stuff threshold (auto mode) are summarized in one call;
    larger inputs go through map-reduce. When publish is true and a publisher
    is configured, the report is written to a new Google Doc and its URL is
    returned; a publishing failure fails the request.

    Args:
        request: Summarization request
        service: Injected summarization service

    Returns:
        SummarizeResponse: Template replacements, algorithm, token count, document URL
    """
    try:
        return await service.summarize(request)
    except StandupDigestException:
        raise
    except Exception as e:
        logger.exception(f"{__name__}:summarize - unexpected {type(e).__name__}: {e}")
        raise StandupDigestException(
            "Summarization failed",
            {"error_type": type(e).__name__},
        ) from e


@router.post(
    "/quick-ask",
    response_model=QuickAskResponse,
    status_code=200,
    responses=ERROR_RESPONSES,
)
async def quick_ask(
    request: QuickAskRequest,
    service: QuickAskService = Depends(get_quick_ask_service),
) -> QuickAskResponse:
    """Answer a single question.

    Args:
        request: Question with optional provider/model/temperature
        service: Injected quick-ask service

    Returns:
        QuickAskResponse: Answer and the model that produced it
    """
    try:
        return await service.ask(request)
    except StandupDigestException:
        raise
    except Exception as e:
        logger.exception(f"{__name__}:quick_ask - unexpected {type(e).__name__}: {e}")
        raise StandupDigestException(
            "Quick ask failed",
            {"error_type": type(e).__name__},
        ) from e
