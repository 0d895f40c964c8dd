"""LLM access layer.

This module provides the litellm-backed completion client and its
environment-driven configuration.
"""

from skillshift.llm.client import LLMCompletionClient, count_tokens
from skillshift.llm.config import DEFAULT_MODEL, LLMConfig, load_config_from_env

__all__ = [
    "DEFAULT_MODEL",
    "LLMCompletionClient",
    "LLMConfig",
    "count_tokens",
    "load_config_from_env",
]
