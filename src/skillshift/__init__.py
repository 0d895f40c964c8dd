"""SkillShift - turn product intents into validated Agent Skill packages.

The package plans how many skills an intent calls for, generates SKILL.md
candidates through an LLM, validates and repairs them with a bounded budget,
deduplicates the survivors and aggregates a single generation result.
"""

__version__ = "0.1.0"
