"""Summarization service layer.

Orchestrates one summarization request end to end:
1. Resolve and validate the model
2. Gather documents (GitHub, then Slack)
3. Count tokens once and select the algorithm
4. Run stuff or map-reduce
5. Shape the response and publish it

Publishing is all-or-nothing: when a report should be published and the
publisher fails, or no publisher is configured, the whole request fails.

Dependencies: standup_digest.core, standup_digest.boundary, standup_digest.observability
System role: Service layer for the summarize endpoint
"""

import logging
from collections.abc import Callable

from langchain_core.documents import Document
from langchain_core.language_models import BaseChatModel

from standup_digest.boundary.publishing.base import DocumentPublisher
from standup_digest.boundary.sources.base import DocumentSource
from standup_digest.configs import Settings, get_settings
from standup_digest.core.exceptions import (
    ConfigurationError,
    PublishingError,
    UnsupportedModelError,
    ValidationError,
)
from standup_digest.core.formatting import format_date
from standup_digest.core.model_factory import create_model, validate_model
from standup_digest.core.summarization.algorithm import Algorithm, select_algorithm
from standup_digest.core.summarization.map_reduce import MapReduceConfig, MapReduceSummarizer
from standup_digest.core.summarization.prompts import (
    get_map_prompt,
    get_reduce_prompt,
    get_report_prompt,
)
from standup_digest.core.summarization.report_schema import REPORT_SCHEMA_VERSION, ProjectSummary
from standup_digest.core.summarization.stuff import StuffSummarizer
from standup_digest.core.summarization.token_counter import TokenCounter
from standup_digest.models.summarize import (
    ReportMetadata,
    ReportReplacements,
    SummarizeRequest,
    SummarizeResponse,
)
from standup_digest.observability.log_utils import (
    describe_documents,
    log_exception_with_context,
    log_with_context,
)
from standup_digest.observability.tracing import LangfuseTracer, TraceContext

logger = logging.getLogger(__name__)


def structure_response(
    report: ProjectSummary,
    metadata: ReportMetadata,
    algorithm: Algorithm,
    total_tokens: int,
) -> SummarizeResponse:
    """
    Flatten a report into template replacements plus run metadata.

    Args:
        report: Parsed report
        metadata: Request labelling (project, window, status, doc name)
        algorithm: Algorithm that produced the report
        total_tokens: Input token count

    Returns:
        SummarizeResponse: Response with document_url unset
    """
    replacements = ReportReplacements(
        project_name=metadata.project_name,
        from_date=format_date(metadata.start_date),
        to_date=format_date(metadata.end_date),
        project_status=metadata.project_status,
        summary=report.summary,
        risk_blocker_action_needed=report.risk_blocker_action_needed,
        completed=report.task_details.completed,
        in_progress=report.task_details.in_progress,
        in_review=report.task_details.in_review,
    )
    return SummarizeResponse(
        replacements=replacements,
        doc_name=metadata.doc_name,
        algorithm=algorithm,
        total_tokens=total_tokens,
        schema_version=REPORT_SCHEMA_VERSION,
    )


class SummarizationService:
    """Service producing project-status reports from standups and issues.

    Holds only long-lived collaborators; everything request-scoped (model,
    trace, pipeline state) is created per call.
    """

    def __init__(
        self,
        slack_source: DocumentSource | None = None,
        github_source: DocumentSource | None = None,
        publisher: DocumentPublisher | None = None,
        settings: Settings | None = None,
        tracer: LangfuseTracer | None = None,
        model_factory: Callable[..., BaseChatModel] = create_model,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            slack_source: Slack standup source (None when not configured)
            github_source: GitHub issues source (None when not configured)
            publisher: Report publisher (None: only publish=False requests succeed)
            settings: Application settings
            tracer: Langfuse tracer
            model_factory: Builds a chat model from (provider, model, temperature)
        """
        self._slack_source = slack_source
        self._github_source = github_source
        self._publisher = publisher
        self._settings = settings or get_settings()
        self._tracer = tracer or LangfuseTracer()
        self._model_factory = model_factory

    def _resolve_model(self, request: SummarizeRequest) -> tuple[str, str, float]:
        defaults = self._settings.llm
        provider = request.provider.value if request.provider else defaults.provider
        model_name = request.model or defaults.name
        temperature = request.temperature if request.temperature is not None else defaults.temperature
        return provider, model_name, temperature

    async def _gather_documents(self, request: SummarizeRequest) -> list[Document]:
        """GitHub document first, then Slack, for whichever sources are enabled."""
        documents: list[Document] = []

        github = request.github_data
        if github.enabled:
            if self._github_source is None:
                raise ConfigurationError("GitHub source requested but not configured")
            documents.extend(
                await self._github_source.fetch_documents(
                    owner=github.owner,
                    repo=github.repo,
                    since=github.since,
                    fetch_body=github.fetch_body,
                    fetch_comments=github.fetch_comments,
                )
            )

        slack = request.slack_data
        if slack.enabled:
            if self._slack_source is None:
                raise ConfigurationError("Slack source requested but not configured")
            documents.extend(
                await self._slack_source.fetch_documents(
                    channel_name=slack.channel_name,
                    start_date=request.metadata.start_date,
                    end_date=request.metadata.end_date,
                )
            )

        return documents

    async def _run_algorithm(
        self,
        algorithm: Algorithm,
        model: BaseChatModel,
        token_counter: TokenCounter,
        documents: list[Document],
        trace: TraceContext,
    ) -> ProjectSummary:
        obs = self._settings.observability
        summarization = self._settings.summarization
        report_prompt = get_report_prompt(obs.use_prompt_registry, obs.prompt_label)

        if algorithm is Algorithm.STUFF:
            logger.info(f"{__name__}:_run_algorithm - running stuff summarization")
            return await StuffSummarizer(
                call_timeout_seconds=summarization.call_timeout_seconds,
            ).summarize(model, report_prompt, documents, trace=trace)

        logger.info(f"{__name__}:_run_algorithm - running map-reduce summarization")
        summarizer = MapReduceSummarizer(
            model=model,
            map_prompt=get_map_prompt(obs.use_prompt_registry, obs.prompt_label),
            reduce_prompt=get_reduce_prompt(obs.use_prompt_registry, obs.prompt_label),
            final_prompt=report_prompt,
            config=MapReduceConfig.from_settings(summarization),
            token_counter=token_counter,
        )
        return await summarizer.summarize(documents, trace=trace)

    async def _publish(self, response: SummarizeResponse) -> str:
        try:
            result = await self._publisher.publish(
                response.replacements.as_template_values(),
                response.doc_name,
            )
        except PublishingError:
            logger.error(f"{__name__}:_publish - publishing failed for doc_name={response.doc_name}")
            raise
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_publish - unexpected publisher failure",
                e,
                doc_name=response.doc_name,
            )
            raise PublishingError(
                f"Failed to publish report: {type(e).__name__}: {e}",
                {"doc_name": response.doc_name},
            ) from e
        return result.url

    async def summarize(self, request: SummarizeRequest) -> SummarizeResponse:
        """Generate a project-status report for the requested sources.

        Args:
            request: Summarization request

        Returns:
            SummarizeResponse: Report replacements, algorithm, token count and document URL

        Raises:
            ConfigurationError: Unsupported model, unusable tokenizer, missing source
                or publishing requested without a publisher
            ValidationError: No sources enabled or no documents gathered
            SourceFetchError: If a source fails
            SummarizationError: If a model call or report parsing fails
            PublishingError: If publishing was requested and failed
        """
        provider, model_name, temperature = self._resolve_model(request)
        if not validate_model(provider, model_name):
            raise UnsupportedModelError(provider, model_name)
        if request.publish and self._publisher is None:
            raise ConfigurationError(
                "Publishing requested but no publisher configured",
                {"doc_name": request.metadata.doc_name},
            )
        model = self._model_factory(provider, model_name, temperature)

        logger.info(
            f"{__name__}:summarize - START provider={provider}, model={model_name}, "
            f"algorithm={request.algorithm.value}"
        )

        trace = self._tracer.start_trace(
            name=f"summarization-{request.algorithm.value}",
            metadata={"provider": provider, "model": model_name, "temperature": temperature},
        )
        try:
            documents = await self._gather_documents(request)
            if not documents:
                raise ValidationError(
                    "No documents to summarize: enable at least one source",
                    field="slack_data/github_data",
                )

            token_counter = TokenCounter(model)
            with trace.span(
                "token-count",
                input=[doc.metadata for doc in documents],
            ) as span:
                total_tokens = await token_counter.count_all(documents)
                span.end(output={"total_tokens": total_tokens})

            algorithm = select_algorithm(
                total_tokens,
                request.algorithm,
                self._settings.summarization.stuff_max_tokens,
            )
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:summarize - gathered {describe_documents(documents)}",
                total_tokens=total_tokens,
                algorithm=algorithm.value,
            )

            report = await self._run_algorithm(algorithm, model, token_counter, documents, trace)
            response = structure_response(report, request.metadata, algorithm, total_tokens)

            if request.publish:
                response.document_url = await self._publish(response)

            trace.update(output=response.model_dump(mode="json", by_alias=True))
            logger.info(
                f"{__name__}:summarize - END algorithm={algorithm.value}, "
                f"published={response.document_url is not None}"
            )
            return response
        finally:
            trace.flush()
