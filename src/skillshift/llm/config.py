"""LLM configuration models and utilities.

This module provides configuration for the text completion client: which
model to call, credentials, sampling parameters and the transport timeout.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_MODEL = "cerebras/llama3.1-8b"


class LLMConfig(BaseModel):
    """Configuration for the completion client.

    Attributes:
        default_model: litellm model identifier (e.g., "cerebras/llama3.1-8b")
        api_key: API key for the provider (sensitive - not in repr)
        api_base: Optional custom API base URL
        temperature: Sampling temperature (0.0-2.0)
        max_tokens: Maximum tokens per completion (None = provider default)
        timeout_ms: Transport timeout per completion call in milliseconds

    Example:
        >>> config = LLMConfig(default_model="gpt-4o-mini", temperature=0.2)
        >>> config.timeout_ms
        120000
    """

    default_model: str = Field(default=DEFAULT_MODEL, description="Model for all calls")
    api_key: Optional[str] = Field(default=None, repr=False, description="API key (sensitive)")
    api_base: Optional[str] = Field(default=None, description="Base URL for API endpoint")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: Optional[int] = Field(default=None, ge=1, description="Max tokens per call")
    timeout_ms: int = Field(
        default=120000, ge=1000, le=600000, description="Request timeout (1s-10min)"
    )

    @field_validator("default_model")
    @classmethod
    def validate_model(cls, value: str) -> str:
        """Reject blank model identifiers.

        Args:
            value: The model identifier to validate

        Returns:
            The stripped model identifier

        Raises:
            ValueError: If the identifier is blank
        """
        value = value.strip()
        if not value:
            raise ValueError("default_model must not be empty")
        return value

    class Config:
        """Pydantic config."""

        frozen = True  # Immutable after creation


def load_config_from_env() -> LLMConfig:
    """Load LLM configuration from environment variables.

    Automatically loads variables from a .env file if present.

    Reads:
    - SKILLSHIFT_LLM_MODEL: Model identifier
    - SKILLSHIFT_LLM_API_KEY: API key
    - SKILLSHIFT_LLM_API_BASE: Custom API base URL
    - SKILLSHIFT_LLM_TEMPERATURE: Sampling temperature
    - SKILLSHIFT_LLM_MAX_TOKENS: Maximum tokens per call
    - SKILLSHIFT_LLM_TIMEOUT_MS: Request timeout in milliseconds

    Returns:
        LLMConfig loaded from environment

    Example:
        >>> import os
        >>> os.environ["SKILLSHIFT_LLM_MODEL"] = "gpt-4o-mini"
        >>> load_config_from_env().default_model
        'gpt-4o-mini'
    """
    load_dotenv()

    max_tokens_str = os.getenv("SKILLSHIFT_LLM_MAX_TOKENS", "")

    return LLMConfig(
        default_model=os.getenv("SKILLSHIFT_LLM_MODEL", DEFAULT_MODEL),
        api_key=os.getenv("SKILLSHIFT_LLM_API_KEY") or None,
        api_base=os.getenv("SKILLSHIFT_LLM_API_BASE") or None,
        temperature=float(os.getenv("SKILLSHIFT_LLM_TEMPERATURE", "0.7")),
        max_tokens=int(max_tokens_str) if max_tokens_str else None,
        timeout_ms=int(os.getenv("SKILLSHIFT_LLM_TIMEOUT_MS", "120000")),
    )
