"""CLI command for rendering saved analyses as reports."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from thermosim.core.config import load_analysis_json
from thermosim.reports.summary import (
    generate_text_report,
    save_html_report,
    save_text_report,
)

_WRITERS = {"text": (".txt", save_text_report), "html": (".html", save_html_report)}


def _targets(fmt: str, output: str | None) -> list[tuple[str, Path]]:
    """Report kinds to write and where; empty for text printed to the console."""
    if fmt == "both":
        base = Path(output) if output else Path("report")
        return [(kind, base.with_suffix(_WRITERS[kind][0])) for kind in ("text", "html")]
    if output:
        return [(fmt, Path(output))]
    if fmt == "html":
        return [("html", Path("report.html"))]
    return []


@click.command("report")
@click.option(
    "--analysis",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Analysis JSON written by the state, process or cycle command.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "html", "both"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Report format.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output path; text reports go to the console when omitted.",
)
@click.pass_context
def report(ctx: click.Context, analysis: str, fmt: str, output: str | None) -> None:
    """Render a saved analysis as a text or HTML report."""
    console: Console = ctx.obj.get("console", Console())
    record = load_analysis_json(analysis)

    targets = _targets(fmt.lower(), output)
    if not targets:
        console.print(generate_text_report(record), markup=False, highlight=False)
        return

    for kind, path in targets:
        _WRITERS[kind][1](record, str(path))
        console.print(f"[green]{kind.upper()} report saved:[/green] {path}")
