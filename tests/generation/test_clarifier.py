"""Tests for SkillClarifier."""

import pytest

from conftest import ScriptedCompletion
from skillshift.generation.clarifier import (
    FALLBACK_REASONING,
    MAX_TURNS_REASONING,
    SkillClarifier,
)
from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import QAPair
from skillshift.generation.prompts import CLARIFIER_SYSTEM_PROMPT

NEED_MORE_INFO = """{
    "status": "need_more_info",
    "questions": [
        {"id": "q1", "question": "Which language?", "type": "multiple_choice",
         "options": ["Python", "Go"]},
        {"id": "q2", "question": "Any team conventions?", "type": "open_ended"}
    ],
    "reasoning": "Language matters for review rules"
}"""


class TestSkillClarifier:
    """Tests for SkillClarifier.clarify."""

    @pytest.mark.asyncio
    async def test_returns_questions(self, completion: ScriptedCompletion) -> None:
        """need_more_info carries the model's questions."""
        completion.queue(CLARIFIER_SYSTEM_PROMPT, NEED_MORE_INFO)
        clarifier = SkillClarifier(completion)

        result = await clarifier.clarify("Review pull requests", [], 1)

        assert result.status == "need_more_info"
        assert [q.id for q in result.questions] == ["q1", "q2"]
        assert result.questions[0].options == ["Python", "Go"]
        assert result.questions[1].options is None

    @pytest.mark.asyncio
    async def test_ready_drops_questions(self, completion: ScriptedCompletion) -> None:
        """A ready verdict never carries questions."""
        completion.queue(
            CLARIFIER_SYSTEM_PROMPT,
            '{"status": "ready", "questions": [{"id": "q1", "question": "?", '
            '"type": "open_ended"}], "reasoning": "Enough context"}',
        )
        clarifier = SkillClarifier(completion)

        result = await clarifier.clarify("Review pull requests", [], 2)

        assert result.status == "ready"
        assert result.questions == []
        assert result.reasoning == "Enough context"

    @pytest.mark.asyncio
    async def test_prompt_includes_answers(self, completion: ScriptedCompletion) -> None:
        """Answered questions are part of the clarifier prompt."""
        completion.queue(CLARIFIER_SYSTEM_PROMPT, '{"status": "ready"}')
        clarifier = SkillClarifier(completion)

        await clarifier.clarify(
            "Review pull requests", [QAPair(question="Which language?", answer="Go")], 2
        )

        assert "Q: Which language?\nA: Go" in completion.prompts_for(CLARIFIER_SYSTEM_PROMPT)[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", ["Ready!", '{"status": "unsure"}'])
    async def test_unparseable_response_is_ready(
        self, completion: ScriptedCompletion, response: str
    ) -> None:
        """Malformed clarifier output falls back to ready."""
        completion.queue(CLARIFIER_SYSTEM_PROMPT, response)
        clarifier = SkillClarifier(completion)

        result = await clarifier.clarify("Review pull requests", [], 1)

        assert result.status == "ready"
        assert result.questions == []
        assert result.reasoning == FALLBACK_REASONING

    @pytest.mark.asyncio
    async def test_turn_ceiling_skips_completion(self, completion: ScriptedCompletion) -> None:
        """At the ceiling the clarifier answers without calling the model."""
        clarifier = SkillClarifier(completion)

        result = await clarifier.clarify("Review pull requests", [], 10)

        assert result.status == "max_turns_reached"
        assert result.questions == []
        assert result.reasoning == MAX_TURNS_REASONING
        assert completion.calls == []

    @pytest.mark.asyncio
    async def test_custom_ceiling(self, completion: ScriptedCompletion) -> None:
        """The ceiling follows configuration."""
        clarifier = SkillClarifier(completion, GenerationConfig(max_clarification_turns=3))

        result = await clarifier.clarify("Review pull requests", [], 4)

        assert result.status == "max_turns_reached"
        assert completion.calls == []
