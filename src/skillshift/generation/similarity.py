"""Near-duplicate detection for planned and generated skills.

The similarity metric is deliberately cheap: exact match, containment ratio,
then Jaccard overlap of word sets. It is used both by the planner (to drop
overlapping planned skills) and after generation (to drop overlapping
documents).
"""

import logging

from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import GeneratedSkill, ValidationStatus

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3


def calculate_similarity(first: str, second: str) -> float:
    """Score the similarity of two strings between 0.0 and 1.0.

    Args:
        first: First string
        second: Second string

    Returns:
        1.0 for case-insensitive equality; min/max length ratio when one
        contains the other; otherwise Jaccard similarity of the sets of words
        longer than two characters (0.0 when either set is empty)

    Examples:
        >>> calculate_similarity("Code Review", "code review")
        1.0
        >>> calculate_similarity("review", "code review")
        0.5454545454545454
    """
    s1 = first.lower().strip()
    s2 = second.lower().strip()

    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    if s1 in s2 or s2 in s1:
        return min(len(s1), len(s2)) / max(len(s1), len(s2))

    words1 = {word for word in s1.split() if len(word) >= MIN_WORD_LENGTH}
    words2 = {word for word in s2.split() if len(word) >= MIN_WORD_LENGTH}
    if not words1 or not words2:
        return 0.0

    return len(words1 & words2) / len(words1 | words2)


def are_skills_similar(
    first: GeneratedSkill, second: GeneratedSkill, config: GenerationConfig
) -> bool:
    """Decide whether two generated skills are near-duplicates.

    Args:
        first: First skill
        second: Second skill
        config: Thresholds to apply

    Returns:
        True if names, descriptions or content prefixes are too similar
    """
    name1 = (first.name or "").lower().strip()
    name2 = (second.name or "").lower().strip()
    if name1 and name2 and calculate_similarity(name1, name2) > config.name_threshold:
        return True

    desc1 = (first.description or "").lower().strip()
    desc2 = (second.description or "").lower().strip()
    if desc1 and desc2 and calculate_similarity(desc1, desc2) > config.description_threshold:
        return True

    content1 = first.markdown[: config.content_prefix_chars].lower().strip()
    content2 = second.markdown[: config.content_prefix_chars].lower().strip()
    if len(content1) > config.content_min_chars and len(content2) > config.content_min_chars:
        if calculate_similarity(content1, content2) > config.content_threshold:
            return True

    return False


def _prefer(challenger: GeneratedSkill, incumbent: GeneratedSkill) -> bool:
    """Return True if ``challenger`` should replace ``incumbent``.

    A valid skill beats a non-valid one; otherwise the longer markdown wins
    and ties keep the incumbent.
    """
    challenger_valid = challenger.validation_status == ValidationStatus.VALID
    incumbent_valid = incumbent.validation_status == ValidationStatus.VALID
    if challenger_valid != incumbent_valid:
        return challenger_valid
    return len(challenger.markdown) > len(incumbent.markdown)


def deduplicate_skills(
    skills: list[GeneratedSkill], config: GenerationConfig
) -> list[GeneratedSkill]:
    """Remove near-duplicate skills, keeping the better of each similar group.

    Skills are processed in order. Each new skill is compared against the
    skills kept so far; if it resembles any of them, the best of that group
    (by _prefer, earlier skills winning ties) takes the position of the
    earliest member and the others are dropped. Kept skills are therefore
    pairwise dissimilar, so running this on its own output changes nothing.

    Args:
        skills: Generated skills in generation order
        config: Similarity thresholds

    Returns:
        Deduplicated skills, preserving order of the survivors
    """
    if len(skills) <= 1:
        return list(skills)

    kept: list[GeneratedSkill] = []
    for candidate in skills:
        similar_indices = [
            index
            for index, existing in enumerate(kept)
            if are_skills_similar(existing, candidate, config)
        ]
        if not similar_indices:
            kept.append(candidate)
            continue

        group = [kept[index] for index in similar_indices] + [candidate]
        winner = group[0]
        for challenger in group[1:]:
            if _prefer(challenger, winner):
                winner = challenger

        for member in group:
            if member is not winner:
                logger.info(
                    f"Dropping duplicate skill '{member.name}' in favour of '{winner.name}'"
                )

        first_index = similar_indices[0]
        for index in reversed(similar_indices[1:]):
            del kept[index]
        kept[first_index] = winner

    return kept
