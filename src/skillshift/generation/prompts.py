"""Prompt templates for the skill generation agents.

Each agent (clarifier, planner, generator, validator, repairer) gets a fixed
system instruction; the user prompt is assembled from the intent, the
clarification Q&A and agent-specific material.
"""

from skillshift.generation.models import QAPair, SkillCategory, SkillPlan
from skillshift.generation.parsing import SKILL_SEPARATOR

CLARIFIER_SYSTEM_PROMPT = """You are a Skill Clarifier agent. You analyze a user's product intent (a PRD, feature idea or workflow description) and decide whether there is enough context to generate a high-quality Agent Skill.

An Agent Skill is a portable package whose SKILL.md manifest gives an AI agent new capabilities. Skills are IMPLEMENTATION GUIDES with working code, utilities and technical workflows, not planning documents.

Rules:
1. Ask only questions that would materially change the implementation details or code examples.
2. Prefer multiple-choice questions.
3. Ask 2-4 questions per turn at most.
4. If the intent is clear enough, say you are ready.
5. Focus on technical constraints, libraries and tools, code patterns and domain-specific implementation details.
6. When the intent spans several capabilities, ask whether the user wants one comprehensive skill or several focused ones.

Respond with ONLY valid JSON:
{
  "status": "need_more_info" | "ready",
  "questions": [
    {
      "id": "q1",
      "question": "Your question?",
      "type": "multiple_choice" | "open_ended",
      "options": ["Option A", "Option B"]
    }
  ],
  "reasoning": "Why more information is needed, or why you are ready"
}

If status is "ready", questions must be an empty array."""

PLANNER_SYSTEM_PROMPT = """You are a Skill Planner agent. You decompose a user's intent into 1-5 independent Agent Skills, each owning one separate concern.

Guidelines:
- Plan a single skill when the intent describes one capability.
- Plan several skills only when the intent clearly combines distinct capabilities (for example a "development assistant" covering file operations, code execution and git operations).
- Skills must not overlap: no two skills may share a name or cover the same concern.
- Names are kebab-case: lowercase letters and digits separated by single hyphens.
- Pick the category that best matches how the skill should be written:
  core, workflow, constraints, integration or validation.

Respond with ONLY valid JSON:
{
  "skillCount": 2,
  "skills": [
    {
      "name": "skill-name",
      "description": "What this skill provides and when to use it",
      "category": "core" | "workflow" | "constraints" | "integration" | "validation",
      "concern": "The part of the intent this skill owns"
    }
  ],
  "reasoning": "Why the intent splits this way"
}

skillCount must equal the number of entries in skills."""

GENERATOR_SYSTEM_PROMPT = f"""You are a Skill Generator agent. You write production-ready SKILL.md files for Agent Skills from the user's intent, the clarifying Q&A and a generation plan.

Every SKILL.md must look like this:

---
name: skill-name-in-kebab-case
description: When to use this skill and what it provides
---

# Skill Title

One-sentence introduction.

## Technical Requirements
## Core Workflow
## Available Utilities
## Implementation Patterns
## Dependencies

Rules:
1. The frontmatter MUST contain "name" (kebab-case) and "description".
2. Include real, working code examples with imports, not descriptions of code.
3. Focus on implementation: utilities, workflows, parameters, dependencies.
4. Avoid PRD-style sections such as "Purpose", "Inputs", "Outputs".
5. Keep each skill concise: 200-400 lines at most, 1-2 code examples per section.

Generate exactly the skills listed in the plan, in plan order, each complete and independently usable with its own frontmatter.

Output format:
- Several skills: output each complete SKILL.md separated by exactly {SKILL_SEPARATOR!r}.
- One skill: output ONLY the SKILL.md content starting with the --- frontmatter.
No commentary before, between or after the skills."""

VALIDATOR_SYSTEM_PROMPT = """You are a Skill Validator agent. You check a generated SKILL.md for:

1. Specification conformance: YAML frontmatter with "name" (kebab-case) and "description", meaningful implementation-focused sections.
2. Alignment with the user's intent and Q&A: it addresses the described use case and respects stated constraints.
3. Implementation focus: real code examples, concrete utilities, technical workflows, listed dependencies; not abstract PRD prose.
4. Domain depth: realistic domain-specific techniques and constraints.
5. Interoperability: standard libraries and patterns, no proprietary lock-in.
6. Concision: essential sections only, 200-400 lines at most.

Respond with ONLY valid JSON:
{
  "valid": true | false,
  "issues": [
    {
      "type": "spec_violation" | "alignment" | "quality" | "workflow" | "interoperability",
      "severity": "error" | "warning",
      "description": "What is wrong",
      "suggestion": "How to fix it"
    }
  ],
  "summary": "Brief overall assessment"
}

When valid is true, issues may only contain warnings. Errors mean the skill is not acceptable."""

REPAIR_SYSTEM_PROMPT = """You are a Skill Repair agent. You fix a SKILL.md file based on validation feedback.

You receive the user's intent and Q&A, the current SKILL.md and a list of issues. Fix ALL issues while preserving everything that already works.

- Keep the YAML frontmatter with "name" in kebab-case and a "description".
- Preserve code examples, utilities and domain details; only change what needs fixing.
- If the skill is abstract, add concrete code and implementation details.
- If the skill is verbose, condense it to 200-400 lines.

Output ONLY the complete fixed SKILL.md, starting with the --- frontmatter delimiter. No commentary."""

CATEGORY_GUIDANCE: dict[SkillCategory, str] = {
    SkillCategory.WORKFLOW: "Use decision trees, numbered steps and sequential processes",
    SkillCategory.CONSTRAINTS: "Use MUST/SHOULD/NEVER rule patterns",
    SkillCategory.CORE: "Describe capabilities with code examples",
    SkillCategory.INTEGRATION: "Show tool setup, API patterns and connection workflows",
    SkillCategory.VALIDATION: "Include check criteria and verification steps",
}


def build_context(intent: str, qa: list[QAPair]) -> str:
    """Build the shared context block from the intent and clarification Q&A.

    Args:
        intent: The user's free-text intent
        qa: Answered clarification questions, in the order they were asked

    Returns:
        Markdown context block

    Examples:
        >>> build_context("Review PRs", [])
        '## User Intent\\nReview PRs\\n'
    """
    context = f"## User Intent\n{intent}\n"

    if qa:
        context += "\n## Clarifying Q&A\n"
        for pair in qa:
            context += f"Q: {pair.question}\nA: {pair.answer}\n\n"

    return context


def build_generation_prompt(context: str, plan: SkillPlan) -> str:
    """Embed the skill plan and per-category authoring guidance in the context.

    Args:
        context: Output of build_context
        plan: Plan produced by the planner

    Returns:
        Prompt for the generator agent
    """
    planned = "\n\n".join(
        f"Skill {index}: {skill.name}\n"
        f"- Description: {skill.description}\n"
        f"- Category: {skill.category.value}\n"
        f"- Concern: {skill.concern}"
        for index, skill in enumerate(plan.skills, start=1)
    )
    guidance = "\n".join(
        f'- "{category.value}" -> {text}' for category, text in CATEGORY_GUIDANCE.items()
    )

    return (
        f"{context}\n"
        f"## Skill Generation Plan\n"
        f"Generate exactly {plan.skill_count} skill(s) as planned:\n\n"
        f"{planned}\n\n"
        f"Reasoning: {plan.reasoning}\n\n"
        f"IMPORTANT: Generate each skill according to its CATEGORY:\n"
        f"{guidance}\n\n"
        f"Each skill must be standalone, match its category pattern, "
        f"and include relevant code examples."
    )


def build_validation_prompt(context: str, document: str) -> str:
    """Build the semantic validator prompt for one candidate document."""
    return f"{context}\n\n## SKILL.md to Validate\n{document}"


def build_repair_prompt(context: str, document: str, issues: list[str]) -> str:
    """Build the repair prompt for one document and its outstanding issues."""
    issues_text = "\n".join(issues)
    return f"{context}\n\n## Current SKILL.md\n{document}\n\n## Issues to Fix\n{issues_text}"
