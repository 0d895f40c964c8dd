"""Per-document validate-and-repair loop.

Each candidate document goes through at most ``max_repair_attempts + 1``
checks. Structure is always checked before semantics, and again after every
repair, because a repair can itself break the frontmatter. Exhausting the
budget ends in a reported ``failed`` status, never an exception. Completion
failures are not caught here.

The repair counter is an explicit accumulator: the caller passes the running
total in and receives the updated total back with the finished skill.
"""

import logging
from typing import Optional

from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import (
    GeneratedSkill,
    IssueSeverity,
    IssueType,
    ValidationIssue,
    ValidationStatus,
)
from skillshift.generation.semantic import SemanticValidator, SkillRepairer
from skillshift.generation.validator import parse_frontmatter, validate_structure

logger = logging.getLogger(__name__)

STRUCTURE_SUGGESTION = "Fix the SKILL.md structure"


def structural_issues_to_validation(issues: list[str]) -> list[ValidationIssue]:
    """Map structural defect strings to error-severity spec violations."""
    return [
        ValidationIssue(
            type=IssueType.SPEC_VIOLATION,
            severity=IssueSeverity.ERROR,
            description=issue,
            suggestion=STRUCTURE_SUGGESTION,
        )
        for issue in issues
    ]


class ValidateAndRepairLoop:
    """Drive one candidate document to a terminal validation status.

    Attributes:
        semantic_validator: Model-backed alignment/quality validator
        repairer: Model-backed document repairer
        config: Repair budget
    """

    def __init__(
        self,
        semantic_validator: SemanticValidator,
        repairer: SkillRepairer,
        config: Optional[GenerationConfig] = None,
    ) -> None:
        """Initialize the loop.

        Args:
            semantic_validator: Semantic validator adapter
            repairer: Repair adapter
            config: Generation configuration (defaults to GenerationConfig())
        """
        self.semantic_validator = semantic_validator
        self.repairer = repairer
        self.config = config or GenerationConfig()

    async def run(
        self, context: str, document: str, repair_attempts: int = 0
    ) -> tuple[GeneratedSkill, int]:
        """Validate a document, repairing it within the budget.

        Args:
            context: Intent and Q&A context block
            document: Candidate SKILL.md
            repair_attempts: Repairs performed so far in this run

        Returns:
            Tuple of (finished skill, updated repair total)
        """
        max_attempts = self.config.max_repair_attempts
        status = ValidationStatus.VALID
        issues: list[ValidationIssue] = []

        for attempt in range(max_attempts + 1):
            structural_issues = validate_structure(document)
            if structural_issues:
                logger.info(
                    f"Attempt {attempt}: {len(structural_issues)} structural issue(s)"
                )
                if attempt == max_attempts:
                    status = ValidationStatus.FAILED
                    issues = structural_issues_to_validation(structural_issues)
                    break

                document = await self.repairer.repair(context, document, structural_issues)
                repair_attempts += 1
                status = ValidationStatus.FIXED
                continue

            verdict = await self.semantic_validator.validate(context, document)
            if verdict is None:
                break

            errors = verdict.errors()
            if not errors:
                issues = verdict.warnings()
                break

            logger.info(f"Attempt {attempt}: {len(errors)} semantic error(s)")
            if attempt == max_attempts:
                status = ValidationStatus.FAILED
                issues = list(verdict.issues)
                break

            document = await self.repairer.repair(
                context, document, [error.format_for_repair() for error in errors]
            )
            repair_attempts += 1
            status = ValidationStatus.FIXED

        frontmatter = parse_frontmatter(document)
        skill = GeneratedSkill(
            markdown=document,
            name=frontmatter["name"] if frontmatter else None,
            description=frontmatter["description"] if frontmatter else None,
            validation_status=status,
            issues=issues,
        )
        logger.info(f"Skill '{skill.name}' finished with status {status.value}")
        return skill, repair_attempts
