"""Utility modules for ThermoSim."""

from thermosim.utils.constants import P_ATM_KPA, R_UNIVERSAL, T_CELSIUS_OFFSET
from thermosim.utils.units import convert, get_unit_registry

__all__ = ["P_ATM_KPA", "R_UNIVERSAL", "T_CELSIUS_OFFSET", "convert", "get_unit_registry"]
