"""Quick-ask API request/response models.

Dependencies: pydantic
System role: API data models for the quick-ask endpoint
"""

from pydantic import BaseModel, Field

from standup_digest.core.model_factory import ModelProvider


class QuickAskRequest(BaseModel):
    """Single question answered by one model call."""

    user_query: str = Field(
        min_length=1,
        max_length=200,
        description="The user query for the AI engine",
        examples=["What is the capital of France?"],
    )
    provider: ModelProvider | None = Field(
        default=None,
        description="Model provider (defaults to the configured provider)",
    )
    model: str | None = Field(
        default=None,
        description="Model name (defaults to the configured model)",
    )
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Sampling temperature (defaults to the configured temperature)",
    )


class QuickAskResponse(BaseModel):
    """Model answer and the model that produced it."""

    answer: str = Field(description="Model answer text")
    provider: ModelProvider = Field(description="Provider used")
    model: str = Field(description="Model used")
