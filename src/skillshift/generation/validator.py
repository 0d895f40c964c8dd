"""Deterministic structural validation of SKILL.md documents.

Checks run on every iteration of the repair loop, so everything here is pure:
no model calls, no I/O, no mutation of the input.

Rules, in order:
1. The document starts with the ``---`` frontmatter delimiter (else stop).
2. The frontmatter parses into a flat map with ``name`` and ``description``
   (else stop).
3. ``name`` is present and kebab-case.
4. ``description`` is present and at least 10 characters.
5. There is a body after the closing delimiter.
6. The body is at least 100 characters and has a Markdown heading.
"""

import re
from typing import Optional

FRONTMATTER_DELIMITER = "---"

# Opening delimiter, lazily captured header, closing delimiter line
FRONTMATTER_PATTERN = re.compile(r"^---[ \t\r]*\n(.*?)\n---[ \t\r]*(?:\n|$)", re.DOTALL)

# Lowercase-letter start, alphanumeric groups joined by single hyphens
NAME_PATTERN = re.compile(r"[a-z][a-z0-9]*(?:-[a-z0-9]+)*")

HEADING_PATTERN = re.compile(r"^#{1,6}[ \t]+\w", re.MULTILINE)

MIN_DESCRIPTION_LENGTH = 10
MIN_BODY_LENGTH = 100


def _strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _split_frontmatter(content: str) -> tuple[Optional[dict[str, str]], str]:
    """Parse the frontmatter block and return it with the remaining body.

    Args:
        content: SKILL.md content

    Returns:
        Tuple of (header map or None, body text)
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None, ""

    header: dict[str, str] = {}
    for line in match.group(1).split("\n"):
        colon_index = line.find(":")
        if colon_index > 0:
            key = line[:colon_index].strip()
            header[key] = _strip_quotes(line[colon_index + 1 :].strip())

    if "name" not in header or "description" not in header:
        return None, content[match.end() :]
    return header, content[match.end() :]


def parse_frontmatter(content: str) -> Optional[dict[str, str]]:
    """Parse the flat ``key: value`` frontmatter of a SKILL.md document.

    Parsing is line based: each line is split on its first colon, both sides
    are trimmed and one pair of matching surrounding quotes is removed.

    Args:
        content: SKILL.md content

    Returns:
        Header map containing at least ``name`` and ``description``, or None if
        there is no frontmatter block or either field is absent

    Examples:
        >>> parse_frontmatter('---\\nname: "pdf-tools"\\ndescription: Edit PDFs\\n---\\n')
        {'name': 'pdf-tools', 'description': 'Edit PDFs'}
    """
    header, _ = _split_frontmatter(content)
    return header


def is_valid_skill_name(name: str) -> bool:
    """Check that a skill name is kebab-case.

    Args:
        name: Candidate skill name

    Returns:
        True for names such as "code-review-v2"; False for "Code_Review",
        "-leading", "trailing-" or "double--hyphen"
    """
    return NAME_PATTERN.fullmatch(name) is not None


def sanitize_skill_name(name: str) -> str:
    """Coerce free text into a kebab-case skill name.

    Args:
        name: Arbitrary name text

    Returns:
        Lowercase name with non-alphanumerics removed and whitespace runs
        turned into single hyphens (may be empty)

    Examples:
        >>> sanitize_skill_name("  Code Review!! Helper ")
        'code-review-helper'
    """
    sanitized = name.lower().strip()
    sanitized = re.sub(r"[^a-z0-9\s-]", "", sanitized)
    sanitized = re.sub(r"\s+", "-", sanitized)
    sanitized = re.sub(r"-+", "-", sanitized)
    return sanitized.strip("-")


def validate_structure(content: str) -> list[str]:
    """Validate the structure of a SKILL.md document.

    Args:
        content: SKILL.md content

    Returns:
        Defect descriptions; an empty list means structurally valid
    """
    if not content.startswith(FRONTMATTER_DELIMITER):
        return ["Missing header delimiter: SKILL.md must start with YAML frontmatter (---)"]

    frontmatter, body = _split_frontmatter(content)
    if frontmatter is None:
        return [
            "Invalid or missing header: frontmatter must be closed by --- and "
            "contain 'name' and 'description'"
        ]

    issues: list[str] = []

    name = frontmatter["name"]
    if not name:
        issues.append("Missing required field: name")
    elif not is_valid_skill_name(name):
        message = (
            f'Invalid skill name "{name}". Must be kebab-case '
            "(lowercase letters, numbers, single hyphens)"
        )
        suggestion = sanitize_skill_name(name)
        if suggestion and is_valid_skill_name(suggestion):
            message += f', e.g. "{suggestion}"'
        issues.append(message)

    description = frontmatter["description"]
    if not description:
        issues.append("Missing required field: description")
    elif len(description) < MIN_DESCRIPTION_LENGTH:
        issues.append(
            f"Description is too short (minimum {MIN_DESCRIPTION_LENGTH} characters)"
        )

    body = body.strip()
    if not body:
        issues.append("Missing body: SKILL.md must have content after the frontmatter")
    else:
        if len(body) < MIN_BODY_LENGTH:
            issues.append(f"Body too short (minimum {MIN_BODY_LENGTH} characters)")
        if not HEADING_PATTERN.search(body):
            issues.append("Missing heading: SKILL.md body needs at least one '# ' section")

    return issues
