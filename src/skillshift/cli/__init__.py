"""Command-line interface for SkillShift."""
