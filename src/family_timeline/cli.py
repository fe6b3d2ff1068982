"""CLI interface for family-timeline."""

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import CONFIG, LOG_LEVELS
from .logging import configure_logging
from .models.timeline import PassingDraft, PersonDraft, SpouseExclusivityContext

app = typer.Typer(
    name="family-timeline",
    help="Check member timelines and read family-tree change logs",
    add_completion=False,
)
console = Console()


class DraftFile(BaseModel):
    """Layout of a draft file for ``validate``."""

    person: PersonDraft
    passing: PassingDraft | None = None
    exclusivity: SpouseExclusivityContext | None = None


@app.callback()
def main(
    log_level: str = typer.Option(CONFIG.log_level, "--log-level", help="Logging level"),
):
    """Load .env settings and configure logging."""
    from dotenv import load_dotenv

    load_dotenv()
    level = log_level.upper()
    if level not in LOG_LEVELS:
        console.print(f"[red]Error: Invalid log level. Choose from: {list(LOG_LEVELS)}[/red]")
        raise typer.Exit(2)
    configure_logging(level)


def _load_json(path: Path) -> Any:
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(2)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: Could not read {path.name}: {e}[/red]")
        raise typer.Exit(2)


def _invalid_input(path: Path, error: ValidationError) -> typer.Exit:
    console.print(f"[red]Error: {path.name} does not match the expected layout[/red]")
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        console.print(f"  • {location}: {err['msg']}")
    return typer.Exit(2)


@app.command()
def validate(
    draft_path: Path = typer.Argument(..., help="JSON file with person, passing, exclusivity"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Validate a member draft's timeline."""
    from .validation import TimelineValidator

    try:
        draft = DraftFile.model_validate(_load_json(draft_path))
    except ValidationError as e:
        raise _invalid_input(draft_path, e)

    result = TimelineValidator().validate(draft.person, draft.passing, draft.exclusivity)

    if as_json:
        console.print_json(result.model_dump_json())
    elif result.is_valid:
        console.print("[green]Timeline is consistent[/green]")
    else:
        table = Table(title="Timeline Issues")
        table.add_column("Field")
        table.add_column("Problem")
        for issue in result.issues:
            table.add_row(issue.field.value, issue.message)
        console.print(table)

    if not result.is_valid:
        raise typer.Exit(1)


@app.command()
def describe(
    entry_path: Path = typer.Argument(..., help="JSON file with one audit entry"),
    names_path: Path = typer.Option(
        None, "--names", "-n", help="JSON object mapping member ids to names"
    ),
):
    """Show the field-level changes recorded by an audit entry."""
    from .changelog import describe_entry
    from .models.changelog import AuditEntry

    try:
        entry = AuditEntry.model_validate(_load_json(entry_path))
    except ValidationError as e:
        raise _invalid_input(entry_path, e)

    names = {}
    if names_path is not None:
        raw_names = _load_json(names_path)
        if not isinstance(raw_names, dict):
            console.print(f"[red]Error: {names_path.name} must hold a JSON object[/red]")
            raise typer.Exit(2)
        names = {str(key): str(value) for key, value in raw_names.items()}

    description = describe_entry(entry, names)

    title = f"{entry.entity_type} {entry.action.value.lower()}"
    console.print(Panel(description.summary or "[dim]Minor change[/dim]", title=title))

    if not description.changes:
        console.print("[dim]No field changes[/dim]")
        return

    table = Table(title="Changes")
    table.add_column("Field")
    table.add_column("Status")
    table.add_column("Before")
    table.add_column("After")
    for change in description.changes:
        table.add_row(
            change.field,
            change.status.value if change.status else "",
            change.old_value if change.old_value is not None else "",
            change.new_value if change.new_value is not None else "",
        )
    console.print(table)


@app.command()
def feed(
    log_path: Path = typer.Argument(..., help="JSON file with a list of audit entries"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum items to show"),
):
    """Show the major-event feed for an audit log."""
    from .changelog import build_feed
    from .models.changelog import AuditEntry

    raw = _load_json(log_path)
    if not isinstance(raw, list):
        console.print(f"[red]Error: {log_path.name} must hold a JSON list[/red]")
        raise typer.Exit(2)
    try:
        entries = [AuditEntry.model_validate(item) for item in raw]
    except ValidationError as e:
        raise _invalid_input(log_path, e)

    items = build_feed(entries)
    if not items:
        console.print("[yellow]No major changes recorded yet.[/yellow]")
        return

    table = Table(title="Recent Changes")
    table.add_column("")
    table.add_column("Change")
    table.add_column("By")
    table.add_column("When")
    for item in items[:limit]:
        table.add_row(item.symbol, item.summary, item.actor, item.when)
    console.print(table)
    console.print(f"[dim]Showing {min(limit, len(items))} of {len(items)} changes[/dim]")


if __name__ == "__main__":
    app()
