"""Quick-ask service layer.

Answers a single free-form question with one model call.

Dependencies: langchain_core, standup_digest.core, standup_digest.observability
System role: Service layer for the quick-ask endpoint
"""

import logging
from collections.abc import Callable

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate

from standup_digest.configs import Settings, get_settings
from standup_digest.core.model_factory import ModelProvider, create_model
from standup_digest.core.summarization.model_call import format_prompt, invoke_model
from standup_digest.models.quick_ask import QuickAskRequest, QuickAskResponse
from standup_digest.observability.tracing import LangfuseTracer

logger = logging.getLogger(__name__)

QUICK_ASK_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Your task is to answer user queries "
    "based on the provided model and provider."
)

QUICK_ASK_PROMPT = ChatPromptTemplate.from_messages([
    ("system", QUICK_ASK_SYSTEM_PROMPT),
    ("human", "{question}"),
])


class QuickAskService:
    """Single-question answering over any supported model."""

    def __init__(
        self,
        settings: Settings | None = None,
        tracer: LangfuseTracer | None = None,
        model_factory: Callable[..., BaseChatModel] = create_model,
    ) -> None:
        self._settings = settings or get_settings()
        self._tracer = tracer or LangfuseTracer()
        self._model_factory = model_factory

    async def ask(self, request: QuickAskRequest) -> QuickAskResponse:
        """Answer the question with one model call.

        Args:
            request: Question plus optional provider/model/temperature

        Returns:
            QuickAskResponse: Answer and the model that produced it

        Raises:
            UnsupportedModelError: If the provider/model pair is not supported
            ModelInvocationError: If the model call fails
        """
        defaults = self._settings.llm
        provider = request.provider.value if request.provider else defaults.provider
        model_name = request.model or defaults.name
        temperature = request.temperature if request.temperature is not None else defaults.temperature

        model = self._model_factory(provider, model_name, temperature)
        logger.info(f"{__name__}:ask - START provider={provider}, model={model_name}")

        trace = self._tracer.start_trace(
            name="quick-ask",
            metadata={"provider": provider, "model": model_name, "temperature": temperature},
        )
        try:
            answer = await invoke_model(
                model,
                format_prompt(QUICK_ASK_PROMPT, question=request.user_query),
                stage="quick-ask",
                timeout=self._settings.summarization.call_timeout_seconds,
                trace=trace,
                metadata={"temperature": temperature},
            )
        finally:
            trace.flush()

        logger.info(f"{__name__}:ask - END answer_len={len(answer)}")
        return QuickAskResponse(
            answer=answer,
            provider=ModelProvider(provider),
            model=model_name,
        )
