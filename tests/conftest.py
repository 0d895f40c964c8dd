"""Pytest configuration and shared fixtures for the test suite."""

from typing import AsyncIterator, Callable, Optional

import pytest

from skillshift.generation.config import GenerationConfig

pytest_plugins = ["pytest_asyncio"]


class ScriptedCompletion:
    """Fake text completion that replays queued responses per system prompt.

    Every call is recorded as a (system, prompt) tuple. A call for a system
    prompt with nothing queued fails the test loudly.
    """

    def __init__(self, chunk_size: int = 16) -> None:
        self.chunk_size = chunk_size
        self.calls: list[tuple[str, str]] = []
        self._responses: dict[str, list[str]] = {}
        self._errors: dict[str, Exception] = {}

    def queue(self, system: str, *responses: str) -> "ScriptedCompletion":
        """Append responses for a system prompt."""
        self._responses.setdefault(system, []).extend(responses)
        return self

    def fail(self, system: str, error: Exception) -> "ScriptedCompletion":
        """Raise ``error`` on every call for a system prompt."""
        self._errors[system] = error
        return self

    def prompts_for(self, system: str) -> list[str]:
        """Return the prompts sent with a given system prompt, in call order."""
        return [prompt for called_system, prompt in self.calls if called_system == system]

    async def complete(self, system: str, prompt: str) -> str:
        self.calls.append((system, prompt))
        if system in self._errors:
            raise self._errors[system]
        queued = self._responses.get(system)
        if not queued:
            raise AssertionError(f"Unexpected completion call for system prompt {system[:40]!r}")
        return queued.pop(0)

    async def stream(self, system: str, prompt: str) -> AsyncIterator[str]:
        text = await self.complete(system, prompt)
        for start in range(0, len(text), self.chunk_size):
            yield text[start : start + self.chunk_size]


@pytest.fixture
def completion() -> ScriptedCompletion:
    """Create an empty scripted completion client."""
    return ScriptedCompletion()


@pytest.fixture
def generation_config() -> GenerationConfig:
    """Create the default generation configuration."""
    return GenerationConfig()


def build_skill(
    name: str = "code-review",
    description: str = "Review pull requests for correctness and style issues.",
    body: Optional[str] = None,
) -> str:
    """Build a structurally valid SKILL.md document."""
    if body is None:
        body = (
            f"# {name}\n\n"
            "## Instructions\n\n"
            "Read the diff, check every changed function for missing tests, "
            "and leave one comment per problem with a concrete suggestion.\n"
        )
    return f"---\nname: {name}\ndescription: {description}\n---\n\n{body}"


@pytest.fixture
def make_skill() -> Callable[..., str]:
    """Factory fixture producing structurally valid SKILL.md documents."""
    return build_skill
