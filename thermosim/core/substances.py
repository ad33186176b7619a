"""Substance catalog for ThermoSim.

Substances are either ideal gases described by closed-form coefficients or
real substances described by a small saturation table. The catalog is
loaded once from the bundled JSON database and is read-only afterwards.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import numpy as np

from thermosim.utils.validation import validate_saturation_table

logger = logging.getLogger(__name__)

# Path to bundled substance database
_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_SUBSTANCE_DB_PATH = _DATA_DIR / "substances.json"


class SubstanceKind(Enum):
    """Property model used for a substance."""

    IDEAL_GAS = "ideal_gas"
    REAL = "real"


@dataclass(frozen=True)
class SaturationPoint:
    """One row of a saturation table.

    Pressure in kPa, temperature in °C, v in m³/kg, h/u in kJ/kg,
    s in kJ/(kg·K). Suffix ``f`` is saturated liquid, ``g`` saturated vapour.
    """

    P: float
    T: float
    vf: float
    vg: float
    hf: float
    hg: float
    sf: float
    sg: float
    uf: float
    ug: float


SATURATION_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(SaturationPoint))


@dataclass(frozen=True)
class Substance:
    """Immutable substance definition.

    Ideal gases carry ``R``, ``cp``, ``cv`` [kJ/(kg·K)], ``gamma`` and
    ``molar_mass`` [kg/kmol], any of which may be absent. Real substances
    carry a saturation table ordered by ascending P and T whose final row
    is the critical point.
    """

    key: str
    name: str
    kind: SubstanceKind
    formula: str = ""
    molar_mass: float | None = None
    R: float | None = None
    cp: float | None = None
    cv: float | None = None
    gamma: float | None = None
    saturation: tuple[SaturationPoint, ...] = ()

    @property
    def is_ideal_gas(self) -> bool:
        return self.kind is SubstanceKind.IDEAL_GAS

    @property
    def is_real(self) -> bool:
        return self.kind is SubstanceKind.REAL

    @property
    def critical_point(self) -> SaturationPoint | None:
        return self.saturation[-1] if self.saturation else None

    def column(self, name: str) -> np.ndarray:
        """Return one saturation-table column as a float array."""
        return np.array([getattr(row, name) for row in self.saturation], dtype=float)

    def __repr__(self) -> str:
        return f"Substance('{self.key}', kind='{self.kind.value}')"


def _build_substance(key: str, entry: Mapping[str, Any]) -> Substance:
    """Create a Substance from one database entry, validating its table."""
    kind = SubstanceKind(entry["type"])
    rows = tuple(SaturationPoint(**row) for row in entry.get("saturation", ()))

    if kind is SubstanceKind.REAL:
        check = validate_saturation_table(key, rows)
        if not check.is_valid:
            raise ValueError(f"Invalid saturation data for '{key}': {check.summary()}")
        for msg in check.warnings:
            logger.warning(msg.message)

    return Substance(
        key=key,
        name=entry.get("name", key),
        kind=kind,
        formula=entry.get("formula", ""),
        molar_mass=entry.get("molar_mass"),
        R=entry.get("R"),
        cp=entry.get("cp"),
        cv=entry.get("cv"),
        gamma=entry.get("gamma"),
        saturation=rows,
    )


@lru_cache(maxsize=1)
def load_catalog() -> Mapping[str, Substance]:
    """Load the substance database into a read-only mapping keyed by id."""
    with open(_SUBSTANCE_DB_PATH, encoding="utf-8") as f:
        raw = json.load(f)
    catalog = {key: _build_substance(key, entry) for key, entry in raw.items()}
    logger.debug("Loaded %d substances from %s", len(catalog), _SUBSTANCE_DB_PATH)
    return MappingProxyType(catalog)


def list_substances() -> list[str]:
    """Return the ids of all substances in the catalog."""
    return list(load_catalog().keys())


def get_substance(name: str) -> Substance:
    """Look up a substance by id or display name.

    Args:
        name: Substance id (e.g. "water") or display name (e.g. "Water");
            case-insensitive.

    Raises:
        KeyError: If the substance is not found.
    """
    catalog = load_catalog()
    wanted = name.strip().lower()
    for key, substance in catalog.items():
        if wanted in (key.lower(), substance.name.lower()):
            return substance
    raise KeyError(f"Substance '{name}' not found. Available: {list(catalog.keys())}")
