"""CLI command: accessaudit scan <target> — one-off automated assessment."""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.table import Table

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.config import AccessAuditConfig
from accessaudit.errors import AccessAuditError
from accessaudit.fetcher import default_fetcher
from accessaudit.report import scan_to_dict
from accessaudit.scanner.engine import assess_markup
from accessaudit.scanner.models import Severity
from accessaudit.scans.models import Completed, Scan

console = Console(stderr=True)

_SEVERITY_COLORS = {
    Severity.MINOR: "blue",
    Severity.MODERATE: "yellow",
    Severity.SERIOUS: "magenta",
    Severity.CRITICAL: "red",
}

_SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.SERIOUS: 1,
    Severity.MODERATE: 2,
    Severity.MINOR: 3,
}


async def _assess(target: str, level: ConformanceLevel, config: AccessAuditConfig) -> Scan:
    fetcher = default_fetcher(
        timeout=config.fetch_timeout,
        max_bytes=config.max_markup_bytes,
        user_agent=config.user_agent,
    )
    if not fetcher.accepts(target):
        raise click.BadParameter(
            f"expected an http(s) URL or a local .html file, got {target!r}",
            param_hint="TARGET",
        )
    try:
        markup = await fetcher.fetch(target)
    finally:
        await fetcher.close()

    findings, metrics = await asyncio.to_thread(assess_markup, markup, level)
    return Scan(
        target=target,
        level=level,
        outcome=Completed(findings=tuple(findings), metrics=metrics),
    )


@click.command()
@click.argument("target")
@click.option(
    "--level",
    "-l",
    type=click.Choice(["A", "AA", "AAA"], case_sensitive=False),
    default=None,
    help="Conformance level to assess against (default: AA).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def scan(target: str, level: str | None, as_json: bool) -> None:
    """Scan a URL or local HTML file for accessibility problems."""
    config = AccessAuditConfig.load()
    conformance = ConformanceLevel.parse(level or config.default_level)

    if not as_json:
        console.print(
            f"[bold]AccessAudit[/bold] scanning [cyan]{target}[/cyan] "
            f"at level [cyan]{conformance.value}[/cyan]\n"
        )

    try:
        result = asyncio.run(_assess(target, conformance, config))
    except AccessAuditError as e:
        console.print(f"[red]Scan failed:[/red] {e}")
        sys.exit(2)

    if as_json:
        click.echo(json.dumps(scan_to_dict(result), indent=2))
    else:
        _print_findings(result)

    critical_count = sum(1 for f in result.findings if f.severity is Severity.CRITICAL)
    if critical_count > 0:
        if not as_json:
            console.print(f"\n[red]{critical_count} critical finding(s)[/red]")
        sys.exit(1)


def _print_findings(result: Scan) -> None:
    if not result.findings:
        console.print("[green]No findings.[/green]")
        _print_summary(result)
        return

    findings = sorted(result.findings, key=lambda f: _SEVERITY_ORDER[f.severity])

    table = Table(title="Findings", show_lines=False)
    table.add_column("Severity", style="bold", width=10)
    table.add_column("Rule", style="cyan")
    table.add_column("Criteria")
    table.add_column("Location")
    table.add_column("Snippet", max_width=50)

    for finding in findings:
        color = _SEVERITY_COLORS[finding.severity]
        evidence = finding.evidence[0] if finding.evidence else None
        table.add_row(
            f"[{color}]{finding.severity.value}[/{color}]",
            finding.rule_id,
            ", ".join(finding.criterion_tags),
            evidence.locator if evidence else "",
            evidence.snippet[:50] if evidence else "",
        )

    console.print(table)
    _print_summary(result)


def _print_summary(result: Scan) -> None:
    metrics = result.metrics
    if metrics is not None:
        console.print(
            f"\nScanned {metrics.elements_scanned} elements, "
            f"~{metrics.estimated_passed_checks} checks passed, "
            f"estimated score {metrics.compliance_score}/100"
        )
    console.print(f"Total findings: {len(result.findings)}")
