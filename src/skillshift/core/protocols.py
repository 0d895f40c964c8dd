"""Core protocols for cross-layer abstractions.

The generation pipeline depends only on these structural interfaces, so the
litellm-backed client, test doubles and any other provider adapter can be
swapped in without the pipeline importing them.
"""

from typing import AsyncIterator, Protocol


class TextCompletion(Protocol):
    """Protocol for a system-instruction + prompt text completion capability.

    Implementations make a single request per call. They do not retry; any
    transport failure is raised to the caller.
    """

    async def complete(self, system: str, prompt: str) -> str:
        """Return the full generated text for a prompt.

        Args:
            system: System instruction for the model
            prompt: User prompt

        Returns:
            Generated text
        """
        ...

    def stream(self, system: str, prompt: str) -> AsyncIterator[str]:
        """Yield generated text incrementally.

        Args:
            system: System instruction for the model
            prompt: User prompt

        Returns:
            Async iterator over text fragments
        """
        ...
