"""Tests for similarity scoring and generated-skill deduplication."""

import pytest

from skillshift.generation.config import GenerationConfig
from skillshift.generation.models import GeneratedSkill, ValidationStatus
from skillshift.generation.similarity import (
    are_skills_similar,
    calculate_similarity,
    deduplicate_skills,
)


def _skill(
    name: str,
    description: str,
    markdown: str = "",
    status: ValidationStatus = ValidationStatus.VALID,
) -> GeneratedSkill:
    return GeneratedSkill(
        markdown=markdown or f"---\nname: {name}\ndescription: {description}\n---\n",
        name=name,
        description=description,
        validation_status=status,
    )


class TestCalculateSimilarity:
    """Tests for calculate_similarity."""

    def test_exact_match_ignores_case_and_padding(self) -> None:
        """Case-folded, trimmed equality scores 1.0."""
        assert calculate_similarity("  Code Review ", "code review") == 1.0

    def test_empty_string_scores_zero(self) -> None:
        """An empty side never matches a non-empty one."""
        assert calculate_similarity("", "code review") == 0.0

    def test_containment_uses_length_ratio(self) -> None:
        """When one string contains the other, score is min/max length."""
        assert calculate_similarity("review", "code review") == pytest.approx(6 / 11)

    def test_jaccard_on_long_words(self) -> None:
        """Words shorter than three characters are ignored."""
        # {"review", "pull", "requests"} vs {"review", "merge", "requests"}
        score = calculate_similarity("review pull requests", "review merge requests")

        assert score == pytest.approx(2 / 4)

    def test_only_short_words_scores_zero(self) -> None:
        """Word sets made only of short words are empty."""
        assert calculate_similarity("a b c", "x y z") == 0.0


class TestAreSkillsSimilar:
    """Tests for are_skills_similar."""

    @pytest.fixture
    def config(self) -> GenerationConfig:
        """Create default thresholds."""
        return GenerationConfig()

    def test_similar_names(self, config: GenerationConfig) -> None:
        """Names above the name threshold are duplicates."""
        first = _skill("code-review", "Checks diffs for bugs and style problems")
        second = _skill("code-reviews", "Writes release notes from merged changes")

        assert are_skills_similar(first, second, config) is True

    def test_distinct_skills(self, config: GenerationConfig) -> None:
        """Unrelated names, descriptions and content are not duplicates."""
        first = _skill("code-review", "Checks diffs for bugs and style problems")
        second = _skill("release-notes", "Writes release notes from merged changes")

        assert are_skills_similar(first, second, config) is False

    def test_short_content_is_not_compared(self, config: GenerationConfig) -> None:
        """Content at or under the minimum length is skipped."""
        first = _skill("alpha-tool", "First unrelated description text", markdown="same body")
        second = _skill("omega-util", "Second different explanation here", markdown="same body")

        assert are_skills_similar(first, second, config) is False

    def test_similar_content_prefix(self, config: GenerationConfig) -> None:
        """Near-identical long content marks skills as duplicates."""
        body = "Instructions for checking every changed function carefully and thoroughly. " * 3
        first = _skill("alpha-tool", "First unrelated description text", markdown=body)
        second = _skill("omega-util", "Second different explanation here", markdown=body + "!")

        assert are_skills_similar(first, second, config) is True


class TestDeduplicateSkills:
    """Tests for deduplicate_skills."""

    @pytest.fixture
    def config(self) -> GenerationConfig:
        """Create default thresholds."""
        return GenerationConfig()

    def test_single_skill_is_untouched(self, config: GenerationConfig) -> None:
        """One skill is returned as is."""
        skill = _skill("code-review", "Checks diffs for bugs")

        assert deduplicate_skills([skill], config) == [skill]

    def test_valid_beats_fixed(self, config: GenerationConfig) -> None:
        """A valid duplicate replaces a non-valid one at its position."""
        fixed = _skill(
            "code-review", "Checks diffs", markdown="x" * 400, status=ValidationStatus.FIXED
        )
        valid = _skill("code-review", "Checks diffs", markdown="y" * 100)
        other = _skill("release-notes", "Writes release notes from merged changes")

        result = deduplicate_skills([fixed, other, valid], config)

        assert result == [valid, other]

    def test_longer_markdown_wins_between_equals(self, config: GenerationConfig) -> None:
        """Between two valid duplicates the longer document is kept."""
        short = _skill("code-review", "Checks diffs", markdown="a" * 60)
        long = _skill("code-review", "Checks diffs", markdown="b" * 120)

        assert deduplicate_skills([short, long], config) == [long]

    def test_tie_keeps_earlier(self, config: GenerationConfig) -> None:
        """Equal status and length keep the earlier skill."""
        first = _skill("code-review", "Checks diffs", markdown="a" * 80)
        second = _skill("code-review", "Checks diffs", markdown="b" * 80)

        assert deduplicate_skills([first, second], config) == [first]

    def test_order_of_survivors_is_preserved(self, config: GenerationConfig) -> None:
        """Distinct skills keep their generation order."""
        skills = [
            _skill("code-review", "Checks diffs for bugs and style problems"),
            _skill("release-notes", "Writes release notes from merged changes"),
            _skill("deploy-checklist", "Walks through production deployment steps"),
        ]

        assert deduplicate_skills(skills, config) == skills

    def test_is_idempotent(self, config: GenerationConfig) -> None:
        """Deduplicating the output again removes nothing."""
        skills = [
            _skill("code-review", "Checks diffs", markdown="a" * 60),
            _skill("release-notes", "Writes release notes from merged changes"),
            _skill("code-reviewer", "Checks diffs", markdown="b" * 90),
            _skill("release-notes", "Writes release notes", status=ValidationStatus.FAILED),
            _skill("deploy-checklist", "Walks through production deployment steps"),
        ]

        once = deduplicate_skills(skills, config)
        twice = deduplicate_skills(once, config)

        assert twice == once
        assert [skill.name for skill in once] == [
            "code-reviewer",
            "release-notes",
            "deploy-checklist",
        ]
