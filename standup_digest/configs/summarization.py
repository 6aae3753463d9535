"""
Summarization engine configuration.

Token thresholds and map-reduce tuning knobs. Chunk size and the collapse
threshold are inputs to the algorithm, never constants inside it.

Dependencies: pydantic, pydantic_settings
System role: Tuning for algorithm selection and the map-reduce pipeline
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SummarizationSettings(BaseSettings):
    """Stuff / map-reduce thresholds and pipeline limits."""

    model_config = SettingsConfigDict(
        env_prefix="SUMMARIZATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    stuff_max_tokens: int = Field(
        default=100_000,
        gt=0,
        description="Inputs below this token count run the stuff algorithm in auto mode",
    )
    chunk_size: int = Field(default=1_000, gt=0, description="Map-stage chunk size in tokens")
    chunk_overlap: int = Field(default=0, ge=0, description="Overlap between map chunks in tokens")
    max_tokens: int = Field(
        default=250_000,
        gt=0,
        description="Collapse threshold for the intermediate summary set",
    )
    recursion_limit: int = Field(
        default=10,
        gt=0,
        description="Maximum number of collapse rounds before aborting",
    )
    max_concurrency: int = Field(
        default=5,
        gt=0,
        description="Maximum concurrent map calls",
    )
    call_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Wall-clock timeout for a single model call",
    )
    encoding_name: str = Field(
        default="cl100k_base",
        description="tiktoken encoding used by the token-aware splitter",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "SummarizationSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self
