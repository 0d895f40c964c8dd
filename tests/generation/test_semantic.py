"""Tests for the semantic validator and repairer adapters."""

import pytest

from conftest import ScriptedCompletion
from skillshift.generation.models import IssueSeverity
from skillshift.generation.prompts import REPAIR_SYSTEM_PROMPT, VALIDATOR_SYSTEM_PROMPT
from skillshift.generation.semantic import SemanticValidator, SkillRepairer

CONTEXT = "## User Intent\nReview pull requests\n"


class TestSemanticValidator:
    """Tests for SemanticValidator.validate."""

    @pytest.mark.asyncio
    async def test_parses_verdict(self, completion: ScriptedCompletion) -> None:
        """A JSON verdict is parsed and split into errors and warnings."""
        completion.queue(
            VALIDATOR_SYSTEM_PROMPT,
            '{"valid": false, "issues": ['
            '{"type": "alignment", "severity": "error", "description": "Off topic", '
            '"suggestion": "Focus on reviews"}, '
            '{"type": "quality", "severity": "warning", "description": "Terse", '
            '"suggestion": "Add examples"}], "summary": "Needs work"}',
        )
        validator = SemanticValidator(completion)

        verdict = await validator.validate(CONTEXT, "---\nname: x\n---")

        assert verdict is not None
        assert verdict.valid is False
        assert [i.description for i in verdict.errors()] == ["Off topic"]
        assert [i.description for i in verdict.warnings()] == ["Terse"]
        assert verdict.errors()[0].severity == IssueSeverity.ERROR

    @pytest.mark.asyncio
    async def test_prompt_contains_context_and_document(
        self, completion: ScriptedCompletion
    ) -> None:
        """The validation prompt carries both the context and the document."""
        completion.queue(VALIDATOR_SYSTEM_PROMPT, '{"valid": true, "issues": []}')
        validator = SemanticValidator(completion)

        await validator.validate(CONTEXT, "DOCUMENT BODY")

        prompt = completion.prompts_for(VALIDATOR_SYSTEM_PROMPT)[0]
        assert prompt.startswith(CONTEXT)
        assert prompt.endswith("DOCUMENT BODY")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response", ["Looks great to me!", '{"valid": true, "issues": [}', '{"summary": "ok"}']
    )
    async def test_unparseable_verdict_returns_none(
        self, completion: ScriptedCompletion, response: str
    ) -> None:
        """Any parse failure fails open as None."""
        completion.queue(VALIDATOR_SYSTEM_PROMPT, response)
        validator = SemanticValidator(completion)

        assert await validator.validate(CONTEXT, "doc") is None


class TestSkillRepairer:
    """Tests for SkillRepairer.repair."""

    @pytest.mark.asyncio
    async def test_returns_trimmed_repair(self, completion: ScriptedCompletion) -> None:
        """The repaired document is returned trimmed."""
        completion.queue(REPAIR_SYSTEM_PROMPT, "\n\n---\nname: fixed\n---\nbody\n\n")
        repairer = SkillRepairer(completion)

        repaired = await repairer.repair(CONTEXT, "broken", ["- Missing body: add one"])

        assert repaired == "---\nname: fixed\n---\nbody"

    @pytest.mark.asyncio
    async def test_prompt_lists_issues(self, completion: ScriptedCompletion) -> None:
        """Every issue appears on its own line in the repair prompt."""
        completion.queue(REPAIR_SYSTEM_PROMPT, "fixed")
        repairer = SkillRepairer(completion)

        await repairer.repair(CONTEXT, "broken", ["first issue", "second issue"])

        prompt = completion.prompts_for(REPAIR_SYSTEM_PROMPT)[0]
        assert "## Current SKILL.md\nbroken" in prompt
        assert prompt.endswith("## Issues to Fix\nfirst issue\nsecond issue")
