"""CLI commands for thermodynamic cycle analysis."""

from __future__ import annotations

import click
from rich.console import Console

from thermosim.cli.tables import processes_table, results_table, states_table
from thermosim.core.config import SolverOptions, save_analysis_json
from thermosim.core.errors import ThermoError
from thermosim.core.substances import get_substance
from thermosim.cycle.solver import CycleType, compute_cycle

_DEFAULT_SUBSTANCE = {
    CycleType.RANKINE: "water",
    CycleType.BRAYTON: "air",
    CycleType.CARNOT: "water",
}


@click.command("cycle")
@click.option(
    "--type",
    "cycle_type",
    type=click.Choice([c.value for c in CycleType], case_sensitive=False),
    default=CycleType.RANKINE.value,
    show_default=True,
    help="Cycle architecture.",
)
@click.option("--substance", type=str, default=None, help="Working substance (default per cycle).")
@click.option("--p-low", type=float, default=10.0, show_default=True, help="Rankine condenser pressure [kPa].")
@click.option("--p-high", type=float, default=3000.0, show_default=True, help="Rankine boiler pressure [kPa].")
@click.option("--pressure-ratio", type=float, default=8.0, show_default=True, help="Brayton pressure ratio.")
@click.option("--t-min", type=float, default=None, help="Minimum cycle temperature [°C].")
@click.option("--t-max", type=float, default=None, help="Maximum cycle temperature [°C].")
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.pass_context
def cycle(
    ctx: click.Context,
    cycle_type: str,
    substance: str | None,
    p_low: float,
    p_high: float,
    pressure_ratio: float,
    t_min: float | None,
    t_max: float | None,
    output: str | None,
) -> None:
    """Analyze a Rankine, Brayton or Carnot cycle."""
    console: Console = ctx.obj.get("console", Console())
    options: SolverOptions = ctx.obj.get("options", SolverOptions())
    ctype = CycleType(cycle_type.lower())

    if ctype == CycleType.RANKINE:
        params = {"p_low": p_low, "p_high": p_high}
    elif ctype == CycleType.BRAYTON:
        params = {
            "pressure_ratio": pressure_ratio,
            "t_min_c": 25.0 if t_min is None else t_min,
            "t_max_c": 1200.0 if t_max is None else t_max,
        }
    else:
        params = {
            "t_min_c": 50.0 if t_min is None else t_min,
            "t_max_c": 200.0 if t_max is None else t_max,
        }

    try:
        sub = get_substance(substance or _DEFAULT_SUBSTANCE[ctype])
        result = compute_cycle(sub, ctype, params, options)
    except KeyError as exc:
        raise click.ClickException(exc.args[0]) from exc
    except ThermoError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(f"\n[bold]ThermoSim — {ctype.value.title()} Cycle ({sub.name})[/bold]\n")
    console.print(states_table(result.states))
    console.print(processes_table(result.processes))
    console.print(results_table(result.results, title="Cycle Performance"))

    if output:
        record = result.to_record(options)
        record.meta.name = f"{ctype.value.title()} cycle"
        save_analysis_json(record, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
