"""Main CLI entry point for SkillShift.

Provides commands for clarifying an intent and generating skills from it.
"""

import asyncio
import json
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from skillshift import __version__
from skillshift.errors import SkillShiftError
from skillshift.generation.config import load_generation_config_from_env
from skillshift.generation.models import (
    ChunkEvent,
    CompleteEvent,
    GenerationResult,
    QAPair,
    ValidationStatus,
)
from skillshift.observability.logging import setup_logging
from skillshift.service import ErrorEvent, SkillShiftService

console = Console()

STATUS_STYLES = {
    ValidationStatus.VALID: "green",
    ValidationStatus.FIXED: "yellow",
    ValidationStatus.FAILED: "red",
}


def parse_qa(values: tuple[str, ...]) -> list[QAPair]:
    """Parse ``question=answer`` option values into Q&A pairs.

    Args:
        values: Raw --qa option values

    Returns:
        Q&A pairs in the order given

    Raises:
        click.BadParameter: If a value has no "=" or an empty question
    """
    pairs: list[QAPair] = []
    for value in values:
        question, sep, answer = value.partition("=")
        if not sep or not question.strip():
            raise click.BadParameter(
                f"Expected 'question=answer', got {value!r}", param_hint="--qa"
            )
        pairs.append(QAPair(question=question.strip(), answer=answer.strip()))
    return pairs


def build_service() -> SkillShiftService:
    """Create a service configured from the environment."""
    return SkillShiftService(config=load_generation_config_from_env())


def render_result(result: GenerationResult) -> None:
    """Print a generation result as rich panels plus an issues table."""
    style = STATUS_STYLES[result.validation_status]
    console.print(
        f"[bold]Status:[/bold] [{style}]{result.validation_status.value}[/{style}]  "
        f"[bold]Skills:[/bold] {len(result.skills)}  "
        f"[bold]Repairs:[/bold] {result.repair_attempts}"
    )

    for skill in result.skills:
        skill_style = STATUS_STYLES[skill.validation_status]
        console.print(
            Panel(
                Markdown(skill.markdown),
                title=skill.name or "unnamed skill",
                subtitle=skill.validation_status.value,
                border_style=skill_style,
            )
        )

    if result.issues:
        table = Table(title="Issues")
        table.add_column("Severity", style="yellow")
        table.add_column("Type", style="cyan")
        table.add_column("Description")
        table.add_column("Suggestion", style="dim")
        for issue in result.issues:
            table.add_row(
                issue.severity.value, issue.type.value, issue.description, issue.suggestion
            )
        console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="skillshift")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Log level for pipeline logs (written to stderr)",
)
def cli(log_level: str) -> None:
    """SkillShift - turn an intent into validated SKILL.md documents."""
    setup_logging(log_level=log_level, json_logs=False)


@cli.command(name="clarify")
@click.argument("intent", type=str)
@click.option(
    "--qa",
    "qa_values",
    multiple=True,
    help="Answered question as 'question=answer' (repeatable)",
)
@click.option("--turn", type=int, default=1, show_default=True, help="Clarification turn")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
def clarify(intent: str, qa_values: tuple[str, ...], turn: int, as_json: bool) -> None:
    """Ask whether the intent needs more information.

    On turn 1 the answers are ignored; later turns send them as new answers.

    Examples:
        skillshift clarify "Help me review pull requests"
        skillshift clarify "Help me review pull requests" --qa "Language?=Python" --turn 2
    """
    qa = parse_qa(qa_values)
    service = build_service()

    async def _clarify() -> None:
        if turn <= 1:
            state = await service.start_session(intent)
        else:
            state = await service.answer(intent, [], turn - 1, qa)

        if as_json:
            click.echo(state.model_dump_json(indent=2))
            return

        console.print(f"[bold]Status:[/bold] {state.status} (turn {state.turn})")
        if state.reasoning:
            console.print(f"[dim]{state.reasoning}[/dim]")
        for question in state.questions:
            console.print(f"[cyan]{question.id}[/cyan] {question.question}")
            for option in question.options or []:
                console.print(f"    - {option}")

    try:
        asyncio.run(_clarify())
    except SkillShiftError as e:
        raise click.ClickException(e.message) from e


@cli.command(name="generate")
@click.argument("intent", type=str)
@click.option(
    "--qa",
    "qa_values",
    multiple=True,
    help="Answered question as 'question=answer' (repeatable)",
)
@click.option("--stream", "stream_output", is_flag=True, help="Stream generator output")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
def generate(
    intent: str, qa_values: tuple[str, ...], stream_output: bool, as_json: bool
) -> None:
    """Generate skills for an intent.

    Examples:
        skillshift generate "Help me review pull requests"
        skillshift generate "Help me review pull requests" --qa "Language?=Python" --stream
    """
    qa = parse_qa(qa_values)
    service = build_service()

    async def _generate() -> Optional[GenerationResult]:
        if not stream_output:
            response = await service.generate(intent, qa)
            if response.result is None:
                raise click.ClickException(response.error or "Generation failed")
            return response.result

        result: Optional[GenerationResult] = None
        async for event in service.stream(intent, qa):
            if isinstance(event, ChunkEvent):
                if not as_json:
                    console.print(event.text, end="", markup=False, highlight=False)
            elif isinstance(event, CompleteEvent):
                result = event.result
            elif isinstance(event, ErrorEvent):
                raise click.ClickException(event.error)
        if not as_json:
            console.print()
        return result

    try:
        result = asyncio.run(_generate())
    except SkillShiftError as e:
        raise click.ClickException(e.message) from e

    if result is None:
        raise click.ClickException("Generation ended without a result")

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        render_result(result)

    if not result.success:
        sys.exit(1)


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
