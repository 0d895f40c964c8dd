"""Skill generation orchestrator.

Runs the full pipeline for one request:

    intent + Q&A -> plan -> generate -> split into candidates
        -> validate/repair each candidate -> deduplicate -> aggregate

Everything runs sequentially: one document is fully validated and repaired
before the next one starts, so at most one completion call is in flight. No
state is shared between runs; every run replans and regenerates.
"""

import logging
from typing import AsyncIterator, Optional

from skillshift.core.protocols import TextCompletion
from skillshift.generation.aggregator import aggregate
from skillshift.generation.clarifier import SkillClarifier
from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import (
    ChunkEvent,
    ClarificationResult,
    CompleteEvent,
    GeneratedSkill,
    GenerationEvent,
    GenerationResult,
    QAPair,
    SkillPlan,
)
from skillshift.generation.parsing import parse_multiple_documents
from skillshift.generation.planner import SkillPlanner
from skillshift.generation.prompts import (
    GENERATOR_SYSTEM_PROMPT,
    build_context,
    build_generation_prompt,
)
from skillshift.generation.repair_loop import ValidateAndRepairLoop
from skillshift.generation.semantic import SemanticValidator, SkillRepairer
from skillshift.generation.similarity import deduplicate_skills

logger = logging.getLogger(__name__)


class SkillGenerationOrchestrator:
    """Coordinate planner, generator, validators and repairer for one intent.

    Attributes:
        completion: Text completion capability shared by every agent
        config: Generation limits and thresholds
        planner: Skill planner
        clarifier: Clarification agent
        repair_loop: Per-document validate-and-repair loop

    Example:
        >>> orchestrator = SkillGenerationOrchestrator(LLMCompletionClient())
        >>> result = await orchestrator.run_generation("Review pull requests", [])
        >>> result.validation_status
        <ValidationStatus.VALID: 'valid'>
    """

    def __init__(
        self, completion: TextCompletion, config: Optional[GenerationConfig] = None
    ) -> None:
        """Initialize the orchestrator.

        Args:
            completion: Text completion capability
            config: Generation configuration (defaults to GenerationConfig())
        """
        self.completion = completion
        self.config = config or GenerationConfig()
        self.planner = SkillPlanner(completion, self.config)
        self.clarifier = SkillClarifier(completion, self.config)
        self.repair_loop = ValidateAndRepairLoop(
            SemanticValidator(completion), SkillRepairer(completion), self.config
        )

    async def clarify(
        self, intent: str, qa: list[QAPair], current_turn: int
    ) -> ClarificationResult:
        """Delegate to the clarifier; see SkillClarifier.clarify."""
        return await self.clarifier.clarify(intent, qa, current_turn)

    async def run_generation(self, intent: str, qa: list[QAPair]) -> GenerationResult:
        """Run the whole pipeline and return the aggregated result.

        Args:
            intent: The user's intent
            qa: Answered clarification questions

        Returns:
            GenerationResult for the run

        Raises:
            CompletionError: If any completion call fails
        """
        context = build_context(intent, qa)
        plan = await self.planner.plan(intent, qa)

        raw_text = await self.completion.complete(
            GENERATOR_SYSTEM_PROMPT, build_generation_prompt(context, plan)
        )
        return await self._validate_documents(context, plan, raw_text)

    async def stream_generation(
        self, intent: str, qa: list[QAPair]
    ) -> AsyncIterator[GenerationEvent]:
        """Run the pipeline, streaming generator output as it arrives.

        Chunk events are emitted only while the generator streams. Validation
        and repair run on the complete text afterwards and are silent until
        the single terminal complete event.

        Args:
            intent: The user's intent
            qa: Answered clarification questions

        Yields:
            ChunkEvent for every generated fragment, then one CompleteEvent

        Raises:
            CompletionError: If any completion call fails
        """
        context = build_context(intent, qa)
        plan = await self.planner.plan(intent, qa)

        fragments: list[str] = []
        async for fragment in self.completion.stream(
            GENERATOR_SYSTEM_PROMPT, build_generation_prompt(context, plan)
        ):
            fragments.append(fragment)
            yield ChunkEvent(text=fragment)

        result = await self._validate_documents(context, plan, "".join(fragments))
        yield CompleteEvent(result=result)

    async def _validate_documents(
        self, context: str, plan: SkillPlan, raw_text: str
    ) -> GenerationResult:
        """Split, validate/repair, deduplicate and aggregate generator output.

        Args:
            context: Intent and Q&A context block
            plan: Plan the generator was asked to follow
            raw_text: Complete generator output

        Returns:
            Aggregated GenerationResult
        """
        documents = parse_multiple_documents(raw_text)
        if len(documents) != plan.skill_count:
            logger.warning(
                f"Generator returned {len(documents)} document(s) for "
                f"{plan.skill_count} planned skill(s)"
            )

        repair_attempts = 0
        skills: list[GeneratedSkill] = []
        for document in documents:
            skill, repair_attempts = await self.repair_loop.run(
                context, document, repair_attempts
            )
            skills.append(skill)

        unique = deduplicate_skills(skills, self.config)
        return aggregate(unique, repair_attempts)
