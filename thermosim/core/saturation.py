"""Saturation-table lookup for real substances.

Two lookup modes are supported:

- ``LINEAR`` interpolates every column between the two rows bracketing the
  query value. Queries outside the table are clamped to the end rows.
- ``NEAREST`` returns the row closest to the query value (ties resolve to
  the first row). Kept for parity with legacy outputs.
"""

from __future__ import annotations

import logging
from enum import Enum

from thermosim.core.errors import MissingPropertyDataError
from thermosim.core.substances import SATURATION_FIELDS, SaturationPoint, Substance
from thermosim.utils.interpolation import interp_clamped, nearest_index

logger = logging.getLogger(__name__)


class LookupMode(Enum):
    """Saturation-table lookup strategy."""

    LINEAR = "linear"
    NEAREST = "nearest"


def _lookup(substance: Substance, key: str, value: float, mode: LookupMode) -> SaturationPoint:
    if not substance.saturation:
        raise MissingPropertyDataError(f"No saturation data for '{substance.key}'")

    xs = substance.column(key)
    if mode is LookupMode.NEAREST:
        return substance.saturation[nearest_index(xs, value)]

    if value < xs[0] or value > xs[-1]:
        logger.warning(
            "%s=%g outside saturation table of '%s' [%g, %g]; clamping",
            key, value, substance.key, xs[0], xs[-1],
        )
    row = {
        name: interp_clamped(xs, substance.column(name), value)
        for name in SATURATION_FIELDS
    }
    return SaturationPoint(**row)


def saturation_at_pressure(
    substance: Substance, P: float, mode: LookupMode = LookupMode.LINEAR
) -> SaturationPoint:
    """Saturation properties at pressure *P* [kPa]."""
    return _lookup(substance, "P", P, mode)


def saturation_at_temperature(
    substance: Substance, T: float, mode: LookupMode = LookupMode.LINEAR
) -> SaturationPoint:
    """Saturation properties at temperature *T* [°C]."""
    return _lookup(substance, "T", T, mode)
