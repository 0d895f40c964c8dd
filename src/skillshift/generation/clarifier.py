"""Clarifier: decide whether the intent needs more questions before generation."""

import logging
from typing import Optional

from skillshift.core.protocols import TextCompletion
from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import ClarificationResult, ClarifierResponse, QAPair
from skillshift.generation.parsing import parse_json_model
from skillshift.generation.prompts import CLARIFIER_SYSTEM_PROMPT, build_context

logger = logging.getLogger(__name__)

MAX_TURNS_REASONING = (
    "Maximum clarification turns reached. "
    "Please proceed with generation or refine your intent."
)
FALLBACK_REASONING = "Proceeding with generation based on provided context."


class SkillClarifier:
    """Ask the clarifier model for follow-up questions, up to a turn ceiling."""

    def __init__(
        self, completion: TextCompletion, config: Optional[GenerationConfig] = None
    ) -> None:
        """Initialize the clarifier.

        Args:
            completion: Text completion capability
            config: Generation configuration (defaults to GenerationConfig())
        """
        self.completion = completion
        self.config = config or GenerationConfig()

    async def clarify(
        self, intent: str, qa: list[QAPair], current_turn: int
    ) -> ClarificationResult:
        """Decide whether more information is needed.

        At or past the turn ceiling no completion call is made. An unparseable
        answer from the model is treated as "ready".

        Args:
            intent: The user's intent
            qa: Answered questions so far
            current_turn: 1-based clarification turn

        Returns:
            ClarificationResult with status, questions and reasoning
        """
        if current_turn >= self.config.max_clarification_turns:
            logger.info(f"Clarification turn {current_turn} reached the ceiling")
            return ClarificationResult(
                status="max_turns_reached", questions=[], reasoning=MAX_TURNS_REASONING
            )

        response = await self.completion.complete(
            CLARIFIER_SYSTEM_PROMPT, build_context(intent, qa)
        )

        parsed = parse_json_model(response, ClarifierResponse)
        if not parsed.ok or parsed.value is None:
            logger.warning(f"Could not parse clarifier response, assuming ready: {parsed.error}")
            return ClarificationResult(status="ready", questions=[], reasoning=FALLBACK_REASONING)

        verdict = parsed.value
        questions = verdict.questions if verdict.status == "need_more_info" else []
        return ClarificationResult(
            status=verdict.status, questions=questions, reasoning=verdict.reasoning
        )
