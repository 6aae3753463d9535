"""
Chat model factory.

Maps a (provider, model, temperature) triple to a LangChain chat model.
Only the models listed below are accepted; anything else is rejected before
a model object exists.

Dependencies: langchain_openai, langchain_google_genai
System role: Single construction point for the summarization and quick-ask models
"""

import logging
from enum import Enum

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from standup_digest.core.exceptions import UnsupportedModelError, ValidationError

logger = logging.getLogger(__name__)


class ModelProvider(str, Enum):
    OPENAI = "openai"
    GOOGLE = "google"


class OpenAIModels(str, Enum):
    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    GPT_4O_MINI = "gpt-4o-mini"


class GoogleModels(str, Enum):
    GEMINI_2_FLASH = "gemini-2.0-flash"


SUPPORTED_MODELS: dict[ModelProvider, frozenset[str]] = {
    ModelProvider.OPENAI: frozenset(m.value for m in OpenAIModels),
    ModelProvider.GOOGLE: frozenset(m.value for m in GoogleModels),
}


def validate_model(provider: ModelProvider | str, model: str) -> bool:
    """Whether the model is offered by the provider."""
    try:
        provider = ModelProvider(provider)
    except ValueError:
        return False
    return str(getattr(model, "value", model)) in SUPPORTED_MODELS[provider]


def create_model(
    provider: ModelProvider | str,
    model: str,
    temperature: float = 0.7,
) -> BaseChatModel:
    """
    Create a chat model instance.

    Args:
        provider: Model provider (openai, google)
        model: Model name supported by the provider
        temperature: Sampling temperature in [0, 1]

    Returns:
        BaseChatModel: ChatOpenAI or ChatGoogleGenerativeAI

    Raises:
        UnsupportedModelError: If the provider/model pair is not supported
        ValidationError: If temperature is outside [0, 1]
    """
    provider_name = str(getattr(provider, "value", provider))
    model_name = str(getattr(model, "value", model))

    if not validate_model(provider_name, model_name):
        raise UnsupportedModelError(provider_name, model_name)

    if not 0.0 <= temperature <= 1.0:
        raise ValidationError(
            f"Temperature must be between 0 and 1, got {temperature}",
            field="temperature",
        )

    logger.info(f"{__name__}:create_model - provider={provider_name}, model={model_name}")

    if ModelProvider(provider_name) is ModelProvider.GOOGLE:
        return ChatGoogleGenerativeAI(model=model_name, temperature=temperature)
    return ChatOpenAI(model=model_name, temperature=temperature)
