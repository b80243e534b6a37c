"""CLI command: accessaudit criteria — list the success criteria catalog."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from accessaudit.audit.mapper import has_automated_signal
from accessaudit.catalog.loader import load_catalog
from accessaudit.catalog.models import ConformanceLevel

console = Console()


@click.command()
@click.option(
    "--level",
    "-l",
    type=click.Choice(["A", "AA", "AAA"], case_sensitive=False),
    default="AAA",
    help="Only list criteria that apply at this level.",
)
def criteria(level: str) -> None:
    """List success criteria and whether automated checks cover them."""
    catalog = load_catalog()
    selected = catalog.for_level(ConformanceLevel.parse(level))

    table = Table(title=f"{catalog.version} criteria (level {level.upper()})")
    table.add_column("ID", style="cyan")
    table.add_column("Level")
    table.add_column("Title")
    table.add_column("Automated")

    for criterion in selected:
        automated = has_automated_signal(criterion.id)
        table.add_row(
            criterion.id,
            criterion.level.value,
            criterion.title,
            "[green]yes[/green]" if automated else "[dim]manual[/dim]",
        )

    console.print(table)
    manual = sum(1 for c in selected if not has_automated_signal(c.id))
    console.print(f"{len(selected)} criteria, {manual} manual-only")
