"""CLI commands for the substance catalog and quick energy balances."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from thermosim.core.errors import ThermoError
from thermosim.core.process import heating_temperature_rise, internal_energy_change
from thermosim.core.state import supported_pairs
from thermosim.core.substances import get_substance, list_substances
from thermosim.utils.constants import SPECIFIC_HEATS


@click.group("info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Inspect the substance catalog."""
    pass


@info.command("substances")
@click.pass_context
def info_substances(ctx: click.Context) -> None:
    """List available substances."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Available Substances")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Formula", style="yellow")
    table.add_column("Model", style="dim")

    for key in list_substances():
        sub = get_substance(key)
        table.add_row(key, sub.name, sub.formula or "—", sub.kind.value)
    console.print(table)


@info.command("pairs")
@click.argument("substance")
@click.pass_context
def info_pairs(ctx: click.Context, substance: str) -> None:
    """List the input property pairs supported for SUBSTANCE."""
    console: Console = ctx.obj.get("console", Console())
    try:
        sub = get_substance(substance)
    except KeyError as exc:
        raise click.ClickException(exc.args[0]) from exc

    pairs = sorted(", ".join(sorted(pair)) for pair in supported_pairs(sub))
    table = Table(title=f"Supported Property Pairs — {sub.name}")
    table.add_column("Pair", style="cyan")
    for pair in pairs:
        table.add_row(f"({pair})")
    console.print(table)


@info.command("table")
@click.argument("substance")
@click.pass_context
def info_table(ctx: click.Context, substance: str) -> None:
    """Show the saturation table of SUBSTANCE."""
    console: Console = ctx.obj.get("console", Console())
    try:
        sub = get_substance(substance)
    except KeyError as exc:
        raise click.ClickException(exc.args[0]) from exc

    if not sub.is_real:
        raise click.ClickException(f"'{sub.key}' is an ideal gas and has no saturation table")

    table = Table(title=f"Saturation Table — {sub.name}")
    for col in ("P [kPa]", "T [°C]", "vf", "vg", "hf", "hg", "sf", "sg"):
        table.add_column(col, justify="right")
    for row in sub.saturation:
        table.add_row(*(f"{getattr(row, k):g}" for k in ("P", "T", "vf", "vg", "hf", "hg", "sf", "sg")))
    console.print(table)


@info.command("heating")
@click.option("--heat", "heat", type=float, required=True, help="Heat added Q [kJ].")
@click.option("--mass", type=float, default=1.0, show_default=True, help="Body mass [kg].")
@click.option(
    "--material",
    type=click.Choice(sorted(SPECIFIC_HEATS), case_sensitive=False),
    default="water",
    show_default=True,
)
@click.option("--t-initial", type=float, default=20.0, show_default=True, help="Initial temperature [°C].")
@click.pass_context
def info_heating(ctx: click.Context, heat: float, mass: float, material: str, t_initial: float) -> None:
    """Temperature rise of a body heated at constant specific heat."""
    console: Console = ctx.obj.get("console", Console())
    try:
        dT = heating_temperature_rise(heat, mass, material)
    except ThermoError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"ΔT = {dT:.3f} K, final temperature {t_initial + dT:.2f} °C", highlight=False)


@info.command("first-law")
@click.option("--heat", "heat", type=float, required=True, help="Heat added to the system Q.")
@click.option("--work", "work", type=float, required=True, help="Work done by the system W.")
@click.pass_context
def info_first_law(ctx: click.Context, heat: float, work: float) -> None:
    """Internal energy change of a closed system, ΔU = Q − W."""
    console: Console = ctx.obj.get("console", Console())
    dU = internal_energy_change(heat, work)
    console.print(f"ΔU = {dU:g} = {heat:g} − {work:g}", highlight=False)
