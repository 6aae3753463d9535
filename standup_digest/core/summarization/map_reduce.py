"""
Map-reduce summarization state machine.

Start -> GenerateSummary (one per chunk, concurrent) -> CollectSummaries
-> ShouldCollapse? -> {CollapseSummaries (loop) | GenerateFinalSummary} -> End

The flow is an explicit loop over a per-invocation PipelineState:
1. split documents into chunks and summarize each chunk (map)
2. wrap the summaries into documents (collect)
3. while the summary set exceeds max_tokens, pack it into groups under
   the budget and reduce each multi-document group (collapse)
4. produce the structured report from what remains (final)

Any failure aborts the whole run; there is no partial result.

Dependencies: asyncio, langchain_core, standup_digest.core.summarization
System role: Core reduction algorithm for inputs larger than the model budget
"""

import asyncio
import logging
from dataclasses import dataclass, field

from langchain_core.documents import Document
from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import BasePromptTemplate

from standup_digest.configs.summarization import SummarizationSettings
from standup_digest.core.exceptions import (
    ConfigurationError,
    RecursionLimitExceededError,
    ValidationError,
)
from standup_digest.core.summarization.model_call import format_prompt, invoke_model
from standup_digest.core.summarization.report_schema import (
    ProjectSummary,
    get_format_instructions,
    parse_report,
)
from standup_digest.core.summarization.stuff import join_documents
from standup_digest.core.summarization.text_splitter import (
    DEFAULT_ENCODING,
    DocumentSplitter,
    validate_chunk_config,
)
from standup_digest.core.summarization.token_counter import TokenCounter
from standup_digest.observability.log_utils import log_with_context
from standup_digest.observability.tracing import TraceContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapReduceConfig:
    """Tuning for one map-reduce summarizer.

    Attributes:
        chunk_size: Map-stage chunk size in tokens
        chunk_overlap: Overlap between chunks (0: chunks are summarized independently)
        max_tokens: Collapse threshold for the summary set
        recursion_limit: Maximum number of collapse rounds
        max_concurrency: Maximum concurrent map calls
        call_timeout_seconds: Wall-clock timeout per model call
        encoding_name: tiktoken encoding for the splitter
    """

    chunk_size: int = 1_000
    chunk_overlap: int = 0
    max_tokens: int = 250_000
    recursion_limit: int = 10
    max_concurrency: int = 5
    call_timeout_seconds: float | None = 120.0
    encoding_name: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        validate_chunk_config(self.chunk_size, self.chunk_overlap)
        for name in ("max_tokens", "recursion_limit", "max_concurrency"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive", {name: value})

    @classmethod
    def from_settings(cls, settings: SummarizationSettings) -> "MapReduceConfig":
        return cls(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            max_tokens=settings.max_tokens,
            recursion_limit=settings.recursion_limit,
            max_concurrency=settings.max_concurrency,
            call_timeout_seconds=settings.call_timeout_seconds,
            encoding_name=settings.encoding_name,
        )


@dataclass
class PipelineState:
    """State threaded through one summarization invocation.

    summaries only grows; collapsed_summaries is replaced wholesale on each
    collapse round; final_summary is written at most once.
    """

    contents: list[str]
    summaries: list[str] = field(default_factory=list)
    collapsed_summaries: list[Document] = field(default_factory=list)
    final_summary: ProjectSummary | None = None
    collapse_rounds: int = 0

    def add_summary(self, summary: str) -> None:
        self.summaries.append(summary)

    def replace_collapsed(self, documents: list[Document]) -> None:
        self.collapsed_summaries = list(documents)

    def set_final_summary(self, report: ProjectSummary) -> None:
        if self.final_summary is not None:
            raise RuntimeError("final summary already written")
        self.final_summary = report


def split_into_groups(
    documents: list[Document],
    token_counts: list[int],
    max_tokens: int,
) -> list[list[Document]]:
    """
    Pack documents into consecutive groups whose token sum stays within max_tokens.

    Prefix-greedy: a document joins the current group unless that would push
    the group over budget, in which case it starts a new group. Order is
    preserved within and across groups. A document larger than the budget
    on its own ends up alone in its group.

    Args:
        documents: Documents to pack
        token_counts: Token count of each document, aligned with documents
        max_tokens: Group token budget

    Returns:
        list[list[Document]]: Non-empty groups in input order
    """
    groups: list[list[Document]] = []
    current: list[Document] = []
    current_tokens = 0

    for doc, doc_tokens in zip(documents, token_counts, strict=True):
        if current and current_tokens + doc_tokens > max_tokens:
            groups.append(current)
            current, current_tokens = [], 0
        current.append(doc)
        current_tokens += doc_tokens

    if current:
        groups.append(current)
    return groups


class MapReduceSummarizer:
    """Summarizes arbitrarily large inputs by map, collapse and final reduce."""

    def __init__(
        self,
        model: BaseChatModel,
        map_prompt: BasePromptTemplate,
        reduce_prompt: BasePromptTemplate,
        final_prompt: BasePromptTemplate,
        config: MapReduceConfig | None = None,
        token_counter: TokenCounter | None = None,
    ) -> None:
        """
        Initialize summarizer; configuration problems surface here.

        Args:
            model: Chat model shared read-only by every call in a run
            map_prompt: Per-chunk prompt ({context})
            reduce_prompt: Group-merge prompt ({docs})
            final_prompt: Report prompt ({context}, {format_instructions})
            config: Pipeline tuning (defaults when None)
            token_counter: Counter over the model's tokenizer

        Raises:
            ConfigurationError: If the config or the tokenizer is unusable
        """
        self._model = model
        self._map_prompt = map_prompt
        self._reduce_prompt = reduce_prompt
        self._final_prompt = final_prompt
        self._config = config or MapReduceConfig()
        self._token_counter = token_counter or TokenCounter(model)
        self._splitter = DocumentSplitter(
            chunk_size=self._config.chunk_size,
            chunk_overlap=self._config.chunk_overlap,
            encoding_name=self._config.encoding_name,
        )

    @property
    def config(self) -> MapReduceConfig:
        return self._config

    async def summarize(
        self,
        documents: list[Document],
        trace: TraceContext | None = None,
    ) -> ProjectSummary:
        """
        Run the full pipeline and return the structured report.

        Args:
            documents: Source documents
            trace: Request trace context

        Returns:
            ProjectSummary: Parsed final report

        Raises:
            ValidationError: If the documents contain no text
            ModelInvocationError: If any map, reduce or final call fails
            ReportParseError: If the final output does not match the report shape
            RecursionLimitExceededError: If collapsing cannot converge
        """
        trace = trace or TraceContext.disabled()
        logger.info(f"{__name__}:summarize - START documents={len(documents)}")

        with trace.span("map-reduce-split", metadata={"documents": len(documents)}) as span:
            chunks = self._splitter.split(documents)
            span.end(output={
                "chunks": len(chunks),
                "token_aware": self._splitter.is_token_aware,
            })

        if not chunks:
            raise ValidationError("No content to summarize", field="documents")

        state = PipelineState(contents=[chunk.page_content for chunk in chunks])

        await self._generate_summaries(state, trace)
        self._collect_summaries(state)
        token_counts = await self._token_counter.count_each(state.collapsed_summaries)
        while self._should_collapse(state, token_counts):
            await self._collapse_summaries(state, token_counts, trace)
            token_counts = await self._token_counter.count_each(state.collapsed_summaries)
        await self._generate_final_summary(state, trace)

        logger.info(
            f"{__name__}:summarize - END chunks={len(state.contents)}, "
            f"collapse_rounds={state.collapse_rounds}"
        )
        return state.final_summary

    async def _generate_summaries(self, state: PipelineState, trace: TraceContext) -> None:
        """Map step: one call per chunk, bounded concurrency, all-or-nothing."""
        semaphore = asyncio.Semaphore(self._config.max_concurrency)

        async def summarize_chunk(index: int, content: str) -> None:
            async with semaphore:
                prompt_value = format_prompt(self._map_prompt, context=content)
                summary = await invoke_model(
                    self._model,
                    prompt_value,
                    stage="map",
                    timeout=self._config.call_timeout_seconds,
                    trace=trace,
                    metadata={"chunk_index": index},
                )
            state.add_summary(summary)

        with trace.span("map-reduce-map", metadata={"chunks": len(state.contents)}) as span:
            tasks = [
                asyncio.create_task(summarize_chunk(index, content))
                for index, content in enumerate(state.contents)
            ]
            try:
                await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
            span.end(output={"summaries": len(state.summaries)})

        logger.info(f"{__name__}:_generate_summaries - {len(state.summaries)} chunk summaries")

    def _collect_summaries(self, state: PipelineState) -> None:
        """Wrap chunk summaries as documents; chunks are no longer used."""
        state.replace_collapsed([Document(page_content=summary) for summary in state.summaries])

    def _should_collapse(self, state: PipelineState, token_counts: list[int]) -> bool:
        """Collapse while the summary set is over budget and holds more than one document."""
        num_tokens = sum(token_counts)
        over_budget = num_tokens > self._config.max_tokens

        if over_budget and len(state.collapsed_summaries) <= 1:
            logger.warning(
                f"{__name__}:_should_collapse - single summary of {num_tokens} tokens "
                f"exceeds max_tokens={self._config.max_tokens}, proceeding to final summary"
            )
            return False

        logger.debug(
            f"{__name__}:_should_collapse - documents={len(state.collapsed_summaries)}, "
            f"tokens={num_tokens}, collapse={over_budget}"
        )
        return over_budget

    async def _collapse_summaries(
        self,
        state: PipelineState,
        token_counts: list[int],
        trace: TraceContext,
    ) -> None:
        """
        One collapse round: pack into groups under budget and reduce each group.

        Args:
            state: Pipeline state
            token_counts: Token count of each collapsed summary, in order
            trace: Request trace context

        Raises:
            RecursionLimitExceededError: If recursion_limit rounds already ran,
                or no two adjacent summaries fit within max_tokens together
        """
        if state.collapse_rounds >= self._config.recursion_limit:
            raise RecursionLimitExceededError(
                rounds=state.collapse_rounds,
                remaining_tokens=sum(token_counts),
                max_tokens=self._config.max_tokens,
            )

        groups = split_into_groups(state.collapsed_summaries, token_counts, self._config.max_tokens)

        if len(groups) == len(state.collapsed_summaries):
            logger.error(
                f"{__name__}:_collapse_summaries - no two adjacent summaries fit within "
                f"max_tokens={self._config.max_tokens}, collapse cannot progress"
            )
            raise RecursionLimitExceededError(
                rounds=state.collapse_rounds,
                remaining_tokens=sum(token_counts),
                max_tokens=self._config.max_tokens,
                message=(
                    "Collapse cannot make progress: no two adjacent summaries fit "
                    "within max_tokens"
                ),
            )

        round_number = state.collapse_rounds + 1
        with trace.span(
            "map-reduce-collapse",
            metadata={"round": round_number, "groups": len(groups)},
        ) as span:
            results: list[Document] = []
            for group in groups:
                if len(group) == 1:
                    results.append(group[0])
                    continue
                results.append(await self._reduce(group, trace))
            span.end(output={"documents": len(results)})

        state.replace_collapsed(results)
        state.collapse_rounds = round_number
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:_collapse_summaries - round={round_number} complete",
            round=round_number,
            groups=len(groups),
            documents=len(results),
        )

    async def _reduce(self, documents: list[Document], trace: TraceContext) -> Document:
        prompt_value = format_prompt(self._reduce_prompt, docs=join_documents(documents))
        text = await invoke_model(
            self._model,
            prompt_value,
            stage="reduce",
            timeout=self._config.call_timeout_seconds,
            trace=trace,
            metadata={"documents": len(documents)},
        )
        return Document(page_content=text)

    async def _generate_final_summary(self, state: PipelineState, trace: TraceContext) -> None:
        """Terminal step: one report call over the collapsed set."""
        with trace.span(
            "map-reduce-final",
            metadata={"documents": len(state.collapsed_summaries)},
        ) as span:
            prompt_value = format_prompt(
                self._final_prompt,
                context=join_documents(state.collapsed_summaries),
                format_instructions=get_format_instructions(),
            )
            raw_output = await invoke_model(
                self._model,
                prompt_value,
                stage="final",
                timeout=self._config.call_timeout_seconds,
                trace=trace,
            )
            report = parse_report(raw_output, stage="final")
            span.end(output=report.model_dump(by_alias=True))

        state.set_final_summary(report)
