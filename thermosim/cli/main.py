"""ThermoSim command-line interface.

Entry point for the ``thermosim`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from thermosim import __app_name__, __version__
from thermosim.core.config import SolverOptions
from thermosim.core.saturation import LookupMode

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option(
    "--lookup",
    type=click.Choice([m.value for m in LookupMode], case_sensitive=False),
    default=LookupMode.LINEAR.value,
    show_default=True,
    help="Saturation-table lookup mode.",
)
@click.option("--lenient-units", is_flag=True, help="Pass unrecognised units through unchanged.")
@click.option(
    "--corrected-isothermal",
    is_flag=True,
    help="Use T·(s2 − s1) for real-substance isothermal heat.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    lookup: str,
    lenient_units: bool,
    corrected_isothermal: bool,
    verbose: bool,
) -> None:
    """ThermoSim — thermodynamic states, processes and cycles.

    Resolves states of ideal gases and tabulated real substances and
    solves Rankine, Brayton and Carnot cycles.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj["options"] = SolverOptions(
        lookup=LookupMode(lookup.lower()),
        strict_units=not lenient_units,
        corrected_isothermal_heat=corrected_isothermal,
    )


# Import and register sub-commands
from thermosim.cli.state_cmd import state  # noqa: E402
from thermosim.cli.process_cmd import process  # noqa: E402
from thermosim.cli.cycle_cmd import cycle  # noqa: E402
from thermosim.cli.report_cmd import report  # noqa: E402
from thermosim.cli.info_cmd import info  # noqa: E402

cli.add_command(state)
cli.add_command(process)
cli.add_command(cycle)
cli.add_command(report)
cli.add_command(info)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
