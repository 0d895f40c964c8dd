"""litellm-backed text completion client.

This module provides the production implementation of the TextCompletion
protocol. A single request is issued per call; there is no retry and no
model fallback. Provider and network failures surface as CompletionError.
"""

import logging
import warnings
from typing import Any, AsyncIterator, Optional

import litellm
import tiktoken

from skillshift.errors import CompletionError
from skillshift.llm.config import LLMConfig, load_config_from_env

# Suppress Pydantic serialization warnings emitted from inside litellm
warnings.filterwarnings(
    "ignore",
    category=UserWarning,
    message=".*Pydantic serializer warnings.*",
)

logger = logging.getLogger(__name__)


def count_tokens(text: str) -> int:
    """Count tokens in the given text using tiktoken.

    Uses the cl100k_base encoding, a reasonable approximation for most
    modern chat models.

    Args:
        text: The text to count tokens for

    Returns:
        Token count

    Examples:
        >>> count_tokens("Hello, world!")
        4
    """
    try:
        encoding = tiktoken.get_encoding("cl100k_base")
        return len(encoding.encode(text))
    except Exception:
        # Encoding files unavailable (offline); fall back to a rough estimate
        return max(1, len(text) // 4)


class LLMCompletionClient:
    """Text completion client supporting any provider litellm knows about.

    Attributes:
        config: Immutable LLM configuration
        model: The litellm model identifier in use
    """

    def __init__(self, config: Optional[LLMConfig] = None) -> None:
        """Initialize the completion client.

        Args:
            config: LLM configuration (defaults to load_config_from_env())
        """
        self.config = config or load_config_from_env()
        self.model = self.config.default_model

    def _build_kwargs(self, system: str, prompt: str, stream: bool) -> dict[str, Any]:
        """Build keyword arguments for litellm.acompletion.

        Args:
            system: System instruction
            prompt: User prompt
            stream: Whether to request a token stream

        Returns:
            Keyword arguments for the litellm call
        """
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
            "timeout": self.config.timeout_ms / 1000,
            "stream": stream,
        }
        if self.config.max_tokens is not None:
            kwargs["max_tokens"] = self.config.max_tokens
        if self.config.api_key:
            kwargs["api_key"] = self.config.api_key
        if self.config.api_base:
            kwargs["api_base"] = self.config.api_base
        return kwargs

    async def complete(self, system: str, prompt: str) -> str:
        """Return the full completion text for a prompt.

        Args:
            system: System instruction
            prompt: User prompt

        Returns:
            Generated text (empty string if the provider returned no content)

        Raises:
            CompletionError: If the provider call fails
        """
        try:
            response = await litellm.acompletion(**self._build_kwargs(system, prompt, False))
        except Exception as e:
            logger.error(f"Completion call to {self.model} failed: {e}")
            raise CompletionError(self.model, e) from e

        content: str = response.choices[0].message.content or ""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Completion from {self.model}: {count_tokens(content)} tokens")
        return content

    async def stream(self, system: str, prompt: str) -> AsyncIterator[str]:
        """Yield completion text fragments as the provider produces them.

        Args:
            system: System instruction
            prompt: User prompt

        Yields:
            Non-empty text fragments

        Raises:
            CompletionError: If the provider call fails before or during streaming
        """
        try:
            response = await litellm.acompletion(**self._build_kwargs(system, prompt, True))
            async for chunk in response:
                if hasattr(chunk, "choices") and len(chunk.choices) > 0:
                    delta = chunk.choices[0].delta
                    if hasattr(delta, "content") and delta.content:
                        yield delta.content
        except Exception as e:
            logger.error(f"Streaming completion from {self.model} failed: {e}")
            raise CompletionError(self.model, e) from e
