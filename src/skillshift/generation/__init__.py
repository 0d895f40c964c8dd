"""Skill generation pipeline.

This module turns an intent plus clarification answers into validated
SKILL.md documents: planning, generation, structural and semantic
validation, bounded repair, deduplication and aggregation.
"""

from skillshift.generation.aggregator import aggregate, aggregate_status
from skillshift.generation.clarifier import SkillClarifier
from skillshift.generation.config import (
    MAX_CLARIFICATION_TURNS,
    MAX_REPAIR_ATTEMPTS,
    GenerationConfig,
    load_generation_config_from_env,
)
from skillshift.generation.models import (
    ChunkEvent,
    ClarificationResult,
    ClarifierQuestion,
    CompleteEvent,
    GeneratedSkill,
    GenerationEvent,
    GenerationResult,
    IssueSeverity,
    IssueType,
    QAPair,
    SkillCategory,
    SkillPlan,
    SkillPlanEntry,
    ValidationIssue,
    ValidationStatus,
    ValidatorResponse,
)
from skillshift.generation.orchestrator import SkillGenerationOrchestrator
from skillshift.generation.parsing import SKILL_SEPARATOR, parse_multiple_documents
from skillshift.generation.planner import SkillPlanner, fallback_plan
from skillshift.generation.repair_loop import ValidateAndRepairLoop
from skillshift.generation.semantic import SemanticValidator, SkillRepairer
from skillshift.generation.similarity import calculate_similarity, deduplicate_skills
from skillshift.generation.validator import (
    is_valid_skill_name,
    parse_frontmatter,
    sanitize_skill_name,
    validate_structure,
)

__all__ = [
    "MAX_CLARIFICATION_TURNS",
    "MAX_REPAIR_ATTEMPTS",
    "SKILL_SEPARATOR",
    "ChunkEvent",
    "ClarificationResult",
    "ClarifierQuestion",
    "CompleteEvent",
    "GeneratedSkill",
    "GenerationConfig",
    "GenerationEvent",
    "GenerationResult",
    "IssueSeverity",
    "IssueType",
    "QAPair",
    "SemanticValidator",
    "SkillCategory",
    "SkillClarifier",
    "SkillGenerationOrchestrator",
    "SkillPlan",
    "SkillPlanEntry",
    "SkillPlanner",
    "SkillRepairer",
    "ValidateAndRepairLoop",
    "ValidationIssue",
    "ValidationStatus",
    "ValidatorResponse",
    "aggregate",
    "aggregate_status",
    "calculate_similarity",
    "deduplicate_skills",
    "fallback_plan",
    "is_valid_skill_name",
    "load_generation_config_from_env",
    "parse_frontmatter",
    "parse_multiple_documents",
    "sanitize_skill_name",
    "validate_structure",
]
