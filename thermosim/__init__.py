"""ThermoSim — thermodynamic state, process and cycle calculations.

Resolves complete states of ideal gases and tabulated real substances from
two independent properties, computes quasi-static processes between states,
and solves Rankine, Brayton and Carnot cycles.
"""

__app_name__ = "ThermoSim"
__version__ = "0.1.0"

from thermosim.core.process import compute_process  # noqa: E402
from thermosim.core.state import resolve_state, supported_pairs  # noqa: E402
from thermosim.cycle.solver import compute_cycle  # noqa: E402

__all__ = [
    "__app_name__",
    "__version__",
    "compute_cycle",
    "compute_process",
    "resolve_state",
    "supported_pairs",
]
