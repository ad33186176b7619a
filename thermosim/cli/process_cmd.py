"""CLI command for quasi-static process calculations."""

from __future__ import annotations

import click
from rich.console import Console

from thermosim.cli.tables import processes_table, states_table
from thermosim.core.config import SolverOptions, save_analysis_json
from thermosim.core.errors import ThermoError
from thermosim.core.process import ProcessType, compute_process
from thermosim.core.state import PROPERTY_NAMES, resolve_state
from thermosim.core.substances import get_substance

_PROPERTY_CHOICE = click.Choice(list(PROPERTY_NAMES))


@click.command("process")
@click.argument("substance")
@click.option(
    "--type",
    "process_type",
    type=click.Choice([p.value for p in ProcessType], case_sensitive=False),
    required=True,
    help="Process kind.",
)
@click.option("--prop1", type=_PROPERTY_CHOICE, required=True, help="First start-state property.")
@click.option("--value1", type=float, required=True, help="Value of the first property.")
@click.option("--unit1", type=str, default="", help="Unit of the first property.")
@click.option("--prop2", type=_PROPERTY_CHOICE, required=True, help="Second start-state property.")
@click.option("--value2", type=float, required=True, help="Value of the second property.")
@click.option("--unit2", type=str, default="", help="Unit of the second property.")
@click.option("--end-prop", type=_PROPERTY_CHOICE, required=True, help="End-condition property.")
@click.option(
    "--end-value", type=float, required=True, help="End-condition value (base units: kPa, °C)."
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.pass_context
def process(
    ctx: click.Context,
    substance: str,
    process_type: str,
    prop1: str,
    value1: float,
    unit1: str,
    prop2: str,
    value2: float,
    unit2: str,
    end_prop: str,
    end_value: float,
    output: str | None,
) -> None:
    """Compute a quasi-static process of SUBSTANCE from a start state."""
    console: Console = ctx.obj.get("console", Console())
    options: SolverOptions = ctx.obj.get("options", SolverOptions())

    try:
        sub = get_substance(substance)
        start = resolve_state(sub, prop1, value1, unit1, prop2, value2, unit2, options).named("Start")
        result = compute_process(sub, start, process_type, (end_prop, end_value), options)
    except KeyError as exc:
        raise click.ClickException(exc.args[0]) from exc
    except ThermoError as exc:
        raise click.ClickException(str(exc)) from exc

    end = result.end.named("End")
    console.print(f"\n[bold]ThermoSim — {process_type.title()} process of {sub.name}[/bold]\n")
    console.print(states_table([start, end]))
    console.print(processes_table([result]))

    if output:
        record = result.to_record(sub, options)
        record.meta.name = f"{process_type} process"
        save_analysis_json(record, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
