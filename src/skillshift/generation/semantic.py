"""Semantic validation and repair adapters.

Both wrap a single completion call with a fixed system instruction. The
validator is advisory and fails open: if its self-reported verdict cannot be
parsed, the caller treats the document as if it had passed.
"""

import logging
from typing import Optional

from skillshift.core.protocols import TextCompletion
from skillshift.generation.models import ValidatorResponse
from skillshift.generation.parsing import parse_json_model
from skillshift.generation.prompts import (
    REPAIR_SYSTEM_PROMPT,
    VALIDATOR_SYSTEM_PROMPT,
    build_repair_prompt,
    build_validation_prompt,
)

logger = logging.getLogger(__name__)


class SemanticValidator:
    """Ask a model to judge alignment and quality of a structurally valid skill."""

    def __init__(self, completion: TextCompletion) -> None:
        """Initialize the semantic validator.

        Args:
            completion: Text completion capability
        """
        self.completion = completion

    async def validate(self, context: str, document: str) -> Optional[ValidatorResponse]:
        """Validate a document against the intent context.

        Args:
            context: Intent and Q&A context block
            document: Candidate SKILL.md

        Returns:
            Parsed verdict, or None when the model's answer could not be parsed
        """
        response = await self.completion.complete(
            VALIDATOR_SYSTEM_PROMPT, build_validation_prompt(context, document)
        )

        parsed = parse_json_model(response, ValidatorResponse)
        if not parsed.ok:
            logger.warning(f"Semantic validation unavailable, proceeding without: {parsed.error}")
            return None
        return parsed.value


class SkillRepairer:
    """Revise a document so that it addresses a list of issues."""

    def __init__(self, completion: TextCompletion) -> None:
        """Initialize the repairer.

        Args:
            completion: Text completion capability
        """
        self.completion = completion

    async def repair(self, context: str, document: str, issues: list[str]) -> str:
        """Return a revised document.

        Args:
            context: Intent and Q&A context block
            document: Current SKILL.md
            issues: Issue descriptions to fix, one per entry

        Returns:
            Trimmed revised SKILL.md
        """
        repaired = await self.completion.complete(
            REPAIR_SYSTEM_PROMPT, build_repair_prompt(context, document, issues)
        )
        return repaired.strip()
