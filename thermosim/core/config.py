"""Solver options and analysis persistence for ThermoSim.

:class:`SolverOptions` is frozen configuration passed explicitly to the
state, process and cycle solvers. :class:`AnalysisRecord` captures the
outcome of a calculation and is saved/loaded as JSON.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from thermosim.core.saturation import LookupMode
from thermosim.utils.constants import CP_VAPOR

logger = logging.getLogger(__name__)


# --- Solver options ---


@dataclass(frozen=True)
class SolverOptions:
    """Frozen configuration for the property and cycle solvers."""

    lookup: LookupMode = LookupMode.LINEAR
    strict_units: bool = True
    corrected_isothermal_heat: bool = False
    vapor_cp: float = CP_VAPOR  # kJ/(kg·K)

    def with_changes(self, **changes: Any) -> SolverOptions:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["lookup"] = self.lookup.value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SolverOptions:
        data = dict(data)
        if "lookup" in data:
            data["lookup"] = LookupMode(data["lookup"])
        return cls(**data)


DEFAULT_OPTIONS = SolverOptions()

# Options reproducing legacy outputs exactly
LEGACY_OPTIONS = SolverOptions(lookup=LookupMode.NEAREST, strict_units=False)


# --- Project metadata ---


@dataclass
class ProjectMeta:
    """Top-level project metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    version: str = "0.1.0"
    created: str = ""
    modified: str = ""
    unit_system: str = "kPa/°C/kJ"

    def touch(self) -> None:
        """Update the modified timestamp."""
        self.modified = datetime.now(timezone.utc).isoformat()


@dataclass
class AnalysisRecord:
    """Saved outcome of a state, process or cycle calculation.

    States and processes are stored as plain dictionaries so the file can
    be read without importing the solver types.
    """

    meta: ProjectMeta = field(default_factory=ProjectMeta)
    kind: str = "state"  # "state", "process" or "cycle"
    substance: str = ""
    cycle_type: str = ""
    states: list[dict[str, Any]] = field(default_factory=list)
    processes: list[dict[str, Any]] = field(default_factory=list)
    results: dict[str, float] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        return super().default(obj)


def save_analysis_json(record: AnalysisRecord, path: str | Path) -> None:
    """Save an analysis record to a JSON file."""
    path = Path(path)
    if not record.meta.created:
        record.meta.created = datetime.now(timezone.utc).isoformat()
    record.meta.touch()

    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(record), f, indent=2, cls=_NumpyEncoder, ensure_ascii=False)

    logger.info("Saved analysis to %s", path)


def load_analysis_json(path: str | Path) -> AnalysisRecord:
    """Load an analysis record from a JSON file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    meta = ProjectMeta(**data.pop("meta", {}))
    return AnalysisRecord(meta=meta, **data)
