"""CLI command for resolving a single thermodynamic state."""

from __future__ import annotations

import click
from rich.console import Console

from thermosim.cli.tables import states_table
from thermosim.core.config import AnalysisRecord, ProjectMeta, SolverOptions, save_analysis_json
from thermosim.core.errors import ThermoError
from thermosim.core.state import PROPERTY_NAMES, resolve_state
from thermosim.core.substances import get_substance

_PROPERTY_CHOICE = click.Choice(list(PROPERTY_NAMES))


@click.command("state")
@click.argument("substance")
@click.option("--prop1", type=_PROPERTY_CHOICE, required=True, help="First input property.")
@click.option("--value1", type=float, required=True, help="Value of the first property.")
@click.option("--unit1", type=str, default="", help="Unit of the first property (P or T only).")
@click.option("--prop2", type=_PROPERTY_CHOICE, required=True, help="Second input property.")
@click.option("--value2", type=float, required=True, help="Value of the second property.")
@click.option("--unit2", type=str, default="", help="Unit of the second property (P or T only).")
@click.option("--name", type=str, default="State 1", show_default=True, help="State label.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.pass_context
def state(
    ctx: click.Context,
    substance: str,
    prop1: str,
    value1: float,
    unit1: str,
    prop2: str,
    value2: float,
    unit2: str,
    name: str,
    output: str | None,
) -> None:
    """Resolve a state of SUBSTANCE from two independent properties."""
    console: Console = ctx.obj.get("console", Console())
    options: SolverOptions = ctx.obj.get("options", SolverOptions())

    try:
        sub = get_substance(substance)
        point = resolve_state(sub, prop1, value1, unit1, prop2, value2, unit2, options).named(name)
    except KeyError as exc:
        raise click.ClickException(exc.args[0]) from exc
    except ThermoError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(f"\n[bold]ThermoSim — State of {sub.name}[/bold]\n")
    console.print(states_table([point]))

    if output:
        record = AnalysisRecord(
            meta=ProjectMeta(name=name),
            kind="state",
            substance=sub.key,
            states=[point.to_dict()],
            options=options.to_dict(),
        )
        save_analysis_json(record, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
