"""Combine per-skill outcomes into one generation result."""

import logging

from skillshift.generation.models import (
    GeneratedSkill,
    GenerationResult,
    ValidationIssue,
    ValidationStatus,
)

logger = logging.getLogger(__name__)


def aggregate_status(skills: list[GeneratedSkill]) -> ValidationStatus:
    """Return failed if any skill failed, else fixed if any was fixed, else valid."""
    statuses = {skill.validation_status for skill in skills}
    if ValidationStatus.FAILED in statuses:
        return ValidationStatus.FAILED
    if ValidationStatus.FIXED in statuses:
        return ValidationStatus.FIXED
    return ValidationStatus.VALID


def aggregate(skills: list[GeneratedSkill], repair_attempts: int) -> GenerationResult:
    """Build the generation result for a run.

    Args:
        skills: Deduplicated skills in generation order
        repair_attempts: Total repair calls across every candidate of the run

    Returns:
        GenerationResult with aggregate status and the union of issues
    """
    status = aggregate_status(skills)
    issues: list[ValidationIssue] = []
    for skill in skills:
        issues.extend(skill.issues)

    logger.info(
        f"Generation finished: {len(skills)} skill(s), status={status.value}, "
        f"repairs={repair_attempts}, issues={len(issues)}"
    )
    return GenerationResult(
        success=status != ValidationStatus.FAILED,
        skills=list(skills),
        validation_status=status,
        issues=issues,
        repair_attempts=repair_attempts,
    )
