"""Parsing of raw model output.

Two concerns live here:

- Splitting one generator response into candidate SKILL.md documents, using a
  known separator token and a short, ordered list of near-variants.
- Extracting a JSON object from a model response and validating it into a
  pydantic model. Malformed output is an expected, common case, so these
  helpers return a ParseResult instead of raising.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

SKILL_SEPARATOR = "\n\n---SKILL_SEPARATOR---\n\n"

# Tried in order after the exact separator; spacing and spelling variants
# that generators produce in practice.
SEPARATOR_VARIANTS: tuple[str, ...] = (
    "\n---SKILL_SEPARATOR---\n",
    "---SKILL_SEPARATOR---",
    "\n\n---SKILL SEPARATOR---\n\n",
    "\n---SKILL SEPARATOR---\n",
    "---SKILL SEPARATOR---",
    "\n\n---SKILL_SEPERATOR---\n\n",
    "\n---SKILL_SEPERATOR---\n",
    "---SKILL_SEPERATOR---",
)

# First "{" through last "}"; tolerates prose and code fences around the object
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of parsing model output: a value or an error description.

    Attributes:
        value: Parsed value when parsing succeeded
        error: Reason parsing failed, None on success
    """

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when a value was produced."""
        return self.error is None and self.value is not None


def _split_on(text: str, separator: str) -> list[str]:
    """Split on a separator and keep non-empty trimmed segments."""
    return [segment.strip() for segment in text.split(separator) if segment.strip()]


def parse_multiple_documents(raw_text: str) -> list[str]:
    """Split a generator response into candidate documents.

    The exact separator is tried first, then each variant in order. A split is
    accepted only when it yields more than one non-empty segment. Otherwise the
    whole trimmed text is the single candidate, so the result is never empty
    (an empty response yields one empty candidate for the validator to flag).

    Args:
        raw_text: Complete generator output

    Returns:
        Candidate documents in generation order

    Examples:
        >>> parse_multiple_documents("A" + SKILL_SEPARATOR + "B")
        ['A', 'B']
        >>> parse_multiple_documents("  only one  ")
        ['only one']
    """
    for separator in (SKILL_SEPARATOR, *SEPARATOR_VARIANTS):
        if separator not in raw_text:
            continue
        documents = _split_on(raw_text, separator)
        if len(documents) > 1:
            if separator != SKILL_SEPARATOR:
                logger.info(f"Split generator output on separator variant {separator!r}")
            return documents

    return [raw_text.strip()]


def extract_json_object(text: str) -> tuple[Optional[dict[str, Any]], Optional[str]]:
    """Extract the outermost JSON object from a model response.

    Args:
        text: Raw model output, possibly wrapped in prose or code fences

    Returns:
        Tuple of (parsed object, None) on success or (None, error) on failure
    """
    match = JSON_OBJECT_PATTERN.search(text)
    if not match:
        return None, "No JSON object found in response"

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return None, f"Malformed JSON: {e}"

    if not isinstance(data, dict):
        return None, "JSON value is not an object"
    return data, None


def parse_json_model(text: str, model: type[T]) -> ParseResult[T]:
    """Extract a JSON object from model output and validate it into ``model``.

    Args:
        text: Raw model output
        model: Pydantic model describing the expected shape

    Returns:
        ParseResult holding the validated model or the reason it was rejected
    """
    data, error = extract_json_object(text)
    if data is None:
        return ParseResult(error=error)

    try:
        return ParseResult(value=model.model_validate(data))
    except ValidationError as e:
        return ParseResult(
            error=f"Response does not match {model.__name__}: {e.error_count()} error(s)"
        )
