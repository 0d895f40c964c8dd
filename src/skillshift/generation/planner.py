"""Skill planner: decompose an intent into independent skill specifications.

The planner makes exactly one completion call. Any malformed, inconsistent or
fully duplicated plan degrades to a single default skill, so the rest of the
pipeline only ever sees a well-formed plan with at least one skill.
"""

import logging
from typing import Optional

from skillshift.core.protocols import TextCompletion
from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import QAPair, SkillCategory, SkillPlan, SkillPlanEntry
from skillshift.generation.parsing import parse_json_model
from skillshift.generation.prompts import PLANNER_SYSTEM_PROMPT, build_context
from skillshift.generation.similarity import calculate_similarity

logger = logging.getLogger(__name__)

FALLBACK_SKILL_NAME = "generated-skill"


def fallback_plan() -> SkillPlan:
    """Build the single-skill plan used whenever planning fails.

    Returns:
        Plan with one core skill named "generated-skill"
    """
    return SkillPlan(
        skill_count=1,
        skills=[
            SkillPlanEntry(
                name=FALLBACK_SKILL_NAME,
                description="Generated skill based on user intent",
                category=SkillCategory.CORE,
                concern="User intent",
            )
        ],
        reasoning="Fallback: generating single skill due to planning error",
    )


class SkillPlanner:
    """Plan how many skills to generate for an intent and what each covers.

    Attributes:
        completion: Text completion capability used for the planning call
        config: Planning limits and thresholds
    """

    def __init__(
        self, completion: TextCompletion, config: Optional[GenerationConfig] = None
    ) -> None:
        """Initialize the planner.

        Args:
            completion: Text completion capability
            config: Generation configuration (defaults to GenerationConfig())
        """
        self.completion = completion
        self.config = config or GenerationConfig()

    async def plan(self, intent: str, qa: list[QAPair]) -> SkillPlan:
        """Produce a deduplicated skill plan for an intent.

        Completion-call failures propagate; only malformed output falls back.

        Args:
            intent: The user's intent
            qa: Answered clarification questions

        Returns:
            Plan with 1..max_planned_skills uniquely named skills
        """
        context = build_context(intent, qa)
        response = await self.completion.complete(PLANNER_SYSTEM_PROMPT, context)

        parsed = parse_json_model(response, SkillPlan)
        if not parsed.ok or parsed.value is None:
            logger.warning(f"Falling back to default plan: {parsed.error}")
            return fallback_plan()

        plan = parsed.value
        if plan.skill_count > self.config.max_planned_skills:
            logger.warning(
                f"Falling back to default plan: {plan.skill_count} skills planned, "
                f"limit is {self.config.max_planned_skills}"
            )
            return fallback_plan()

        unique = self.deduplicate(plan.skills)
        if not unique:
            logger.warning("Falling back to default plan: no skills left after deduplication")
            return fallback_plan()

        logger.info(f"Planned {len(unique)} skill(s): {', '.join(s.name for s in unique)}")
        return SkillPlan(skill_count=len(unique), skills=unique, reasoning=plan.reasoning)

    def deduplicate(self, skills: list[SkillPlanEntry]) -> list[SkillPlanEntry]:
        """Drop later planned skills that repeat a name or a description.

        Args:
            skills: Planned skills in plan order

        Returns:
            Skills with unique lowercase-trimmed names and pairwise description
            similarity at or below the plan threshold
        """
        unique: list[SkillPlanEntry] = []
        seen_names: set[str] = set()

        for skill in skills:
            normalized_name = skill.name.lower().strip()
            if normalized_name in seen_names:
                logger.warning(f"Skipping duplicate skill in plan: {skill.name}")
                continue

            if any(
                calculate_similarity(existing.description, skill.description)
                > self.config.plan_description_threshold
                for existing in unique
            ):
                logger.warning(f"Skipping similar skill in plan: {skill.name}")
                continue

            unique.append(skill)
            seen_names.add(normalized_name)

        return unique
