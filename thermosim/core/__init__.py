"""Core calculation modules for ThermoSim.

This package contains the property engine:
- errors: Exception taxonomy
- substances: Read-only substance catalog (ideal gases, saturation tables)
- saturation: Saturation-table lookup (linear or nearest-row)
- state: State resolution from two independent properties
- process: Quasi-static processes with first-law energy balances
- config: Solver options and analysis persistence (JSON)
"""
