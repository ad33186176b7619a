"""Thermodynamic cycle analysis for ThermoSim.

Provides a cycle solver for Rankine, Brayton and Carnot cycles built on
the state resolver.
"""
