"""Rich table builders shared by the CLI commands."""

from __future__ import annotations

from typing import Iterable, Mapping

from rich.table import Table

from thermosim.core.process import Process
from thermosim.core.state import StatePoint


def states_table(states: Iterable[StatePoint], title: str = "States") -> Table:
    """Tabulate resolved states."""
    table = Table(title=title)
    table.add_column("State", style="cyan")
    for label in ("P [kPa]", "T [°C]", "v [m³/kg]", "u [kJ/kg]", "h [kJ/kg]", "s [kJ/kg·K]", "x"):
        table.add_column(label, style="green", justify="right")

    for i, st in enumerate(states, start=1):
        table.add_row(
            st.name or f"State {i}",
            f"{st.P:.2f}",
            f"{st.T:.2f}",
            f"{st.v:.6g}",
            f"{st.u:.2f}",
            f"{st.h:.2f}",
            f"{st.s:.4f}",
            "—" if st.x is None else f"{st.x:.4f}",
        )
    return table


def processes_table(processes: Iterable[Process], title: str = "Processes") -> Table:
    """Tabulate processes with their work and heat."""
    table = Table(title=title)
    table.add_column("Process", style="cyan")
    table.add_column("From → To", style="dim")
    table.add_column("W [kJ/kg]", style="green", justify="right")
    table.add_column("Q [kJ/kg]", style="green", justify="right")

    for proc in processes:
        route = f"{proc.start.name or 'start'} → {proc.end.name or 'end'}"
        table.add_row(proc.type, route, f"{proc.W:.3f}", f"{proc.Q:.3f}")
    return table


def results_table(results: Mapping[str, float], title: str = "Results") -> Table:
    """Tabulate named scalar metrics."""
    table = Table(title=title)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    for key, value in results.items():
        unit = "—" if key == "efficiency" else "kJ/kg"
        table.add_row(key, f"{value:.4f}", unit)
    return table
