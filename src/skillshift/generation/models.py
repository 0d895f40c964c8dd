"""Pydantic models for the skill generation pipeline.

This module defines the data flowing through planning, generation,
validation/repair and aggregation, plus the clarification and streaming
event shapes exposed at the pipeline boundary.

Models that are filled from model (LLM) output validate their shape here, so
a malformed response becomes a pydantic ValidationError at parse time rather
than a surprise further down the pipeline.
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SkillCategory(str, Enum):
    """Kind of concern a planned skill addresses."""

    CORE = "core"
    WORKFLOW = "workflow"
    CONSTRAINTS = "constraints"
    INTEGRATION = "integration"
    VALIDATION = "validation"


class ValidationStatus(str, Enum):
    """Outcome of the validate-and-repair loop for one document.

    VALID: passed every check without a repair
    FIXED: needed at least one repair, then passed (or could not be judged)
    FAILED: repair budget exhausted with errors remaining
    """

    VALID = "valid"
    FIXED = "fixed"
    FAILED = "failed"


class IssueType(str, Enum):
    """Category of a validation issue."""

    SPEC_VIOLATION = "spec_violation"
    ALIGNMENT = "alignment"
    QUALITY = "quality"
    WORKFLOW = "workflow"
    INTEROPERABILITY = "interoperability"


class IssueSeverity(str, Enum):
    """Severity of a validation issue; only errors trigger repair."""

    ERROR = "error"
    WARNING = "warning"


class QAPair(BaseModel):
    """One answered clarification question."""

    question: str
    answer: str


class SkillPlanEntry(BaseModel):
    """Specification of one skill the pipeline intends to generate.

    Attributes:
        name: Planned skill name (kebab-case by convention)
        description: What the skill covers
        category: Authoring pattern the generator should follow
        concern: The slice of the intent this skill owns
    """

    name: str = Field(..., min_length=1)
    description: str
    category: SkillCategory
    concern: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, value: Any) -> Any:
        """Accept category names regardless of case and padding."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


class SkillPlan(BaseModel):
    """Set of independent skills planned for one intent.

    The planner's model answers in camelCase (``skillCount``); both spellings
    are accepted.

    Attributes:
        skill_count: Number of planned skills, always equal to len(skills)
        skills: Planned skill specifications
        reasoning: Planner's explanation of the split
    """

    model_config = ConfigDict(populate_by_name=True)

    skill_count: int = Field(..., alias="skillCount", ge=1)
    skills: list[SkillPlanEntry] = Field(..., min_length=1)
    reasoning: str = ""

    @model_validator(mode="after")
    def validate_count_matches(self) -> "SkillPlan":
        """Ensure the declared count matches the skills list.

        Returns:
            The validated plan

        Raises:
            ValueError: If skill_count differs from len(skills)
        """
        if self.skill_count != len(self.skills):
            raise ValueError(
                f"skillCount is {self.skill_count} but {len(self.skills)} skills were listed"
            )
        return self


class ValidationIssue(BaseModel):
    """A single problem found in a generated skill.

    Model-reported issues are normalised leniently: an unknown type becomes
    ``quality``, anything other than ``error`` is treated as a warning, and a
    missing description or suggestion is empty.
    """

    type: IssueType
    severity: IssueSeverity
    description: str = ""
    suggestion: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> str:
        """Map unknown issue types onto ``quality``."""
        if isinstance(value, IssueType):
            return value.value
        normalized = str(value).strip().lower() if value is not None else ""
        if normalized in {member.value for member in IssueType}:
            return normalized
        return IssueType.QUALITY.value

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, value: Any) -> str:
        """Treat anything that is not explicitly an error as a warning."""
        if isinstance(value, IssueSeverity):
            return value.value
        if isinstance(value, str) and value.strip().lower() == IssueSeverity.ERROR.value:
            return IssueSeverity.ERROR.value
        return IssueSeverity.WARNING.value

    def format_for_repair(self) -> str:
        """Render the issue as a bullet line for a repair prompt."""
        return f"- {self.description}: {self.suggestion}"


class ValidatorResponse(BaseModel):
    """Self-reported verdict of the semantic validator model."""

    valid: bool
    issues: list[ValidationIssue]
    summary: str = ""

    def errors(self) -> list[ValidationIssue]:
        """Return issues with error severity."""
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    def warnings(self) -> list[ValidationIssue]:
        """Return issues with warning severity."""
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]


class GeneratedSkill(BaseModel):
    """Final state of one candidate document after validation and repair.

    Attributes:
        markdown: Final SKILL.md content
        name: Name from the frontmatter, None if it could not be parsed
        description: Description from the frontmatter, None if unparseable
        validation_status: Loop outcome for this document
        issues: Remaining errors (failed) or surfaced warnings
    """

    model_config = ConfigDict(frozen=True)

    markdown: str
    name: Optional[str] = None
    description: Optional[str] = None
    validation_status: ValidationStatus = ValidationStatus.VALID
    issues: list[ValidationIssue] = Field(default_factory=list)


class GenerationResult(BaseModel):
    """Aggregate outcome of one generation run.

    Attributes:
        success: True unless the aggregate status is failed
        skills: Deduplicated skills in generation order
        validation_status: failed > fixed > valid across all skills
        issues: Every skill's issues, in skill order
        repair_attempts: Total repair calls across all candidate documents
    """

    success: bool
    skills: list[GeneratedSkill] = Field(default_factory=list)
    validation_status: ValidationStatus
    issues: list[ValidationIssue] = Field(default_factory=list)
    repair_attempts: int = Field(default=0, ge=0)

    @property
    def skill_markdown(self) -> Optional[str]:
        """Markdown of the first skill (single-skill view)."""
        return self.skills[0].markdown if self.skills else None

    @property
    def name(self) -> Optional[str]:
        """Name of the first skill (single-skill view)."""
        return self.skills[0].name if self.skills else None

    @property
    def description(self) -> Optional[str]:
        """Description of the first skill (single-skill view)."""
        return self.skills[0].description if self.skills else None


class ClarifierQuestion(BaseModel):
    """A question the clarifier wants answered before generation."""

    id: str
    question: str
    type: Literal["multiple_choice", "open_ended"]
    options: Optional[list[str]] = None


class ClarifierResponse(BaseModel):
    """Verdict returned by the clarifier model."""

    status: Literal["need_more_info", "ready"]
    questions: list[ClarifierQuestion] = Field(default_factory=list)
    reasoning: str = ""


class ClarificationResult(BaseModel):
    """Clarification outcome handed to the caller."""

    status: Literal["need_more_info", "ready", "max_turns_reached"]
    questions: list[ClarifierQuestion] = Field(default_factory=list)
    reasoning: str = ""


class ChunkEvent(BaseModel):
    """Raw generated text fragment emitted while the generator streams."""

    type: Literal["chunk"] = "chunk"
    text: str


class CompleteEvent(BaseModel):
    """Terminal streaming event carrying the aggregated result."""

    type: Literal["complete"] = "complete"
    result: GenerationResult


GenerationEvent = Union[ChunkEvent, CompleteEvent]
