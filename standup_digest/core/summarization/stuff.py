"""
Stuff summarization: every document in one prompt, one model call.

Callers choose this path only when the combined token count fits the
model's budget; no chunking or budget checks happen here.

Dependencies: langchain_core, standup_digest.core.summarization
System role: Single-pass summarizer
"""

import logging

from langchain_core.documents import Document
from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import BasePromptTemplate

from standup_digest.core.summarization.model_call import format_prompt, invoke_model
from standup_digest.core.summarization.report_schema import (
    ProjectSummary,
    get_format_instructions,
    parse_report,
)
from standup_digest.observability.tracing import TraceContext

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "\n\n"


def join_documents(documents: list[Document]) -> str:
    """Concatenate document contents in input order."""
    return DOCUMENT_SEPARATOR.join(doc.page_content for doc in documents)


class StuffSummarizer:
    """Single-pass summarizer producing the structured report."""

    def __init__(self, call_timeout_seconds: float | None = None) -> None:
        """
        Args:
            call_timeout_seconds: Wall-clock timeout for the model call
        """
        self._timeout = call_timeout_seconds

    async def summarize(
        self,
        model: BaseChatModel,
        prompt: BasePromptTemplate,
        documents: list[Document],
        trace: TraceContext | None = None,
    ) -> ProjectSummary:
        """
        Summarize all documents with exactly one model invocation.

        Args:
            model: Chat model
            prompt: Report prompt with {context} and {format_instructions}
            documents: Source documents, concatenated in order
            trace: Request trace context

        Returns:
            ProjectSummary: Parsed report

        Raises:
            ModelInvocationError: If the model call fails
            ReportParseError: If the output does not match the report shape
        """
        trace = trace or TraceContext.disabled()
        logger.info(f"{__name__}:summarize - START documents={len(documents)}")

        with trace.span("stuff-summarize", metadata={"documents": len(documents)}) as span:
            prompt_value = format_prompt(
                prompt,
                context=join_documents(documents),
                format_instructions=get_format_instructions(),
            )
            raw_output = await invoke_model(
                model,
                prompt_value,
                stage="stuff",
                timeout=self._timeout,
                trace=trace,
            )
            report = parse_report(raw_output, stage="stuff")
            span.end(output=report.model_dump(by_alias=True))

        logger.info(f"{__name__}:summarize - END")
        return report
