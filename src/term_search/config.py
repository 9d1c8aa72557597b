"""Centralized configuration for term-search using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from term_search.search.analyzers import available_analyzers


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``TERM_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TERM_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Root logging level"
    )
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Tokenization
    analyzer: str = Field(default="standard", description="Analyzer used to turn document text into terms")
    read_chunk_size: int = Field(default=8192, ge=1, description="Characters requested per read from a text source")

    # Metrics
    metrics_enabled: bool = Field(default=True, description="Record ingestion counters and lookup latency")

    @field_validator("log_level", mode="before")
    @classmethod
    def _lower_log_level(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @field_validator("analyzer")
    @classmethod
    def _check_analyzer(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in available_analyzers():
            raise ValueError(f"Unknown analyzer '{value}'. Available: {available_analyzers()}")
        return normalized
