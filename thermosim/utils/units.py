"""Unit conversion utilities for ThermoSim.

Provides a lightweight unit conversion layer built on top of pint that
brings user-facing pressure and temperature inputs into the library's
base units (kPa, °C).
"""

from __future__ import annotations

import logging
from functools import lru_cache

import pint

from thermosim.core.errors import UnsupportedUnitError

logger = logging.getLogger(__name__)

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()


def get_unit_registry() -> pint.UnitRegistry:
    """Return the shared pint UnitRegistry instance."""
    return _ureg


Q_ = _ureg.Quantity

# Accepted spellings (lower-cased) → pint unit names
PRESSURE_UNITS: dict[str, str] = {
    "kpa": "kPa",
    "pa": "Pa",
    "mpa": "MPa",
    "bar": "bar",
    "atm": "atm",
    "psi": "psi",
}

TEMPERATURE_UNITS: dict[str, str] = {
    "°c": "degC",
    "degc": "degC",
    "c": "degC",
    "k": "kelvin",
    "°f": "degF",
    "degf": "degF",
    "f": "degF",
}


def _pint_unit(unit: str, table: dict[str, str], quantity: str, strict: bool) -> str | None:
    """Map a user unit string onto a pint unit name.

    Returns None when the value should pass through unchanged.
    """
    pint_name = table.get(unit.strip().lower())
    if pint_name is not None:
        return pint_name
    if strict:
        raise UnsupportedUnitError(
            f"Unsupported {quantity} unit '{unit}'. Available: {sorted(table)}"
        )
    logger.warning("Unrecognised %s unit '%s'; value passed through unchanged", quantity, unit)
    return None


def pressure_to_kpa(value: float, unit: str | None, strict: bool = True) -> float:
    """Convert a pressure value to kPa.

    Args:
        value: Numeric pressure value.
        unit: Source unit string (e.g. "kPa", "bar", "atm"). Empty or None
            means the value is already in kPa.
        strict: Raise UnsupportedUnitError for unknown units. When False the
            value is returned unchanged.

    Returns:
        Pressure in kPa.
    """
    if not unit:
        return value
    pint_name = _pint_unit(unit, PRESSURE_UNITS, "pressure", strict)
    if pint_name is None:
        return value
    return convert(value, pint_name, "kPa")


def temperature_to_celsius(value: float, unit: str | None, strict: bool = True) -> float:
    """Convert a temperature value to °C.

    Args:
        value: Numeric temperature value.
        unit: Source unit string (e.g. "°C", "K", "°F"). Empty or None
            means the value is already in °C.
        strict: Raise UnsupportedUnitError for unknown units. When False the
            value is returned unchanged.

    Returns:
        Temperature in °C.
    """
    if not unit:
        return value
    pint_name = _pint_unit(unit, TEMPERATURE_UNITS, "temperature", strict)
    if pint_name is None:
        return value
    return convert(value, pint_name, "degC")


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Args:
        value: Numeric value in *from_unit*.
        from_unit: Source unit string.
        to_unit: Target unit string.

    Returns:
        Converted numeric value.
    """
    return float(Q_(value, from_unit).to(to_unit).magnitude)
