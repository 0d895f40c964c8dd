"""Tunable limits and thresholds for the generation pipeline.

Defaults are the production values; the environment may override the repair
budget and clarification ceiling.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

MAX_REPAIR_ATTEMPTS = 2
MAX_CLARIFICATION_TURNS = 10


class GenerationConfig(BaseModel):
    """Configuration for planning, repair, deduplication and clarification.

    Attributes:
        max_repair_attempts: Repair calls allowed per candidate document
        max_clarification_turns: Turn ceiling after which clarify stops asking
        max_planned_skills: Upper bound on skills in one plan
        plan_description_threshold: Description similarity that makes two
            planned skills duplicates
        name_threshold: Name similarity that makes two generated skills duplicates
        description_threshold: Description similarity for generated skills
        content_threshold: Similarity of the content prefixes for generated skills
        content_prefix_chars: Length of the compared content prefix
        content_min_chars: Both prefixes must be longer than this to be compared
        min_intent_length: Shortest intent accepted at the session boundary
    """

    model_config = ConfigDict(frozen=True)

    max_repair_attempts: int = Field(default=MAX_REPAIR_ATTEMPTS, ge=0, le=10)
    max_clarification_turns: int = Field(default=MAX_CLARIFICATION_TURNS, ge=1, le=50)
    max_planned_skills: int = Field(default=5, ge=1, le=20)
    plan_description_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    name_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    description_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    content_threshold: float = Field(default=0.75, ge=0.0, le=1.0)
    content_prefix_chars: int = Field(default=500, ge=1)
    content_min_chars: int = Field(default=50, ge=0)
    min_intent_length: int = Field(default=10, ge=1)


def load_generation_config_from_env() -> GenerationConfig:
    """Load generation configuration from environment variables.

    Reads:
    - SKILLSHIFT_MAX_REPAIR_ATTEMPTS: Repair budget per document
    - SKILLSHIFT_MAX_CLARIFICATION_TURNS: Clarification turn ceiling

    Returns:
        GenerationConfig with environment overrides applied
    """
    load_dotenv()

    return GenerationConfig(
        max_repair_attempts=int(
            os.getenv("SKILLSHIFT_MAX_REPAIR_ATTEMPTS", str(MAX_REPAIR_ATTEMPTS))
        ),
        max_clarification_turns=int(
            os.getenv("SKILLSHIFT_MAX_CLARIFICATION_TURNS", str(MAX_CLARIFICATION_TURNS))
        ),
    )
