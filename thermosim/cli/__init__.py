"""ThermoSim command-line interface package.

Supports ``python -m thermosim.cli`` as an alternative to the ``thermosim`` entry point.
"""

from thermosim.cli.main import cli, main

__all__ = ["cli", "main"]
