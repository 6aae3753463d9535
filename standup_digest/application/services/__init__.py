"""Application services."""

from .quick_ask_service import QuickAskService
from .summarization_service import SummarizationService, structure_response

__all__ = ["QuickAskService", "SummarizationService", "structure_response"]
