"""Quasi-static processes between two states.

Given a start state, a process kind and one end-condition property, the
end state is resolved with the other property held constant, and the
first-law work and heat per unit mass are computed.

Sign convention: W > 0 is work done by the substance, Q > 0 is heat
added to it. All energies in kJ/kg.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, NamedTuple

from thermosim.core.config import DEFAULT_OPTIONS, AnalysisRecord, SolverOptions
from thermosim.core.errors import (
    MissingPressureConditionError,
    MissingPropertyDataError,
    UnsupportedProcessError,
    UnsupportedPropertyPairError,
    ValidationError,
)
from thermosim.core.state import StatePoint, ideal_gas_state, resolve
from thermosim.core.substances import Substance
from thermosim.utils.constants import SPECIFIC_HEATS, c_to_k, k_to_c

logger = logging.getLogger(__name__)


class ProcessType(Enum):
    """Quasi-static process kind."""

    ISOBARIC = "isobaric"
    ISOCHORIC = "isochoric"
    ISOTHERMAL = "isothermal"
    ISENTROPIC = "isentropic"


class EndCondition(NamedTuple):
    """The one property fixed at the end of a process."""

    prop: str
    value: float


@dataclass(frozen=True)
class Process:
    """Record of one quasi-static transition."""

    start: StatePoint
    end: StatePoint
    type: str
    W: float  # kJ/kg
    Q: float  # kJ/kg

    @property
    def delta_u(self) -> float:
        return self.end.u - self.start.u

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "W": self.W,
            "Q": self.Q,
        }

    def to_record(self, substance: Substance, options: SolverOptions = DEFAULT_OPTIONS) -> AnalysisRecord:
        return AnalysisRecord(
            kind="process",
            substance=substance.key,
            states=[self.start.to_dict(), self.end.to_dict()],
            processes=[self.to_dict()],
            results={"W": self.W, "Q": self.Q, "delta_u": self.delta_u},
            options=options.to_dict(),
        )


def _parse_process_type(process_type: ProcessType | str) -> ProcessType:
    if isinstance(process_type, ProcessType):
        return process_type
    try:
        return ProcessType(str(process_type).strip().lower())
    except ValueError:
        raise UnsupportedProcessError(
            f"Process type '{process_type}' is not supported. "
            f"Available: {[p.value for p in ProcessType]}"
        ) from None


def _as_end_condition(end_condition: EndCondition | tuple[str, float] | Mapping[str, Any]) -> EndCondition:
    if isinstance(end_condition, Mapping):
        return EndCondition(end_condition["prop"], end_condition["value"])
    prop, value = end_condition
    return EndCondition(prop, value)


def _isochoric_end(substance: Substance, start: StatePoint, cond: EndCondition) -> StatePoint:
    """End state at v = start.v, closed through P·v = R·T."""
    if not substance.is_ideal_gas:
        raise UnsupportedPropertyPairError(
            f"Property pair (v, {cond.prop}) is not supported for real substance '{substance.key}'"
        )
    R = substance.R
    if R is None:
        raise MissingPropertyDataError(f"Gas constant R is not defined for '{substance.key}'")

    if cond.prop == "P":
        P2 = cond.value
        T2 = k_to_c(P2 * start.v / R)
    elif cond.prop == "T":
        T2 = cond.value
        P2 = R * c_to_k(T2) / start.v
    else:
        raise UnsupportedPropertyPairError(
            f"Property pair (v, {cond.prop}) is not supported for '{substance.key}'; use P or T"
        )
    return ideal_gas_state(substance, P2, T2)


def compute_process(
    substance: Substance,
    start: StatePoint,
    process_type: ProcessType | str,
    end_condition: EndCondition | tuple[str, float] | Mapping[str, Any],
    options: SolverOptions = DEFAULT_OPTIONS,
) -> Process:
    """Compute the end state, work and heat of a quasi-static process.

    End-condition values are in base units (kPa, °C).

    Args:
        substance: Substance undergoing the process.
        start: Start state.
        process_type: One of ``ProcessType`` (or its string value).
        end_condition: ``(prop, value)`` fixing the end state.
        options: Solver configuration.

    Returns:
        Process carrying the end state, W and Q.

    Raises:
        UnsupportedProcessError: If the process type is unknown.
        MissingPressureConditionError: For an ideal-gas isentropic process
            whose end condition is not a pressure.
    """
    kind = _parse_process_type(process_type)
    cond = _as_end_condition(end_condition)

    if kind is ProcessType.ISOBARIC:
        end = resolve(substance, "P", start.P, cond.prop, cond.value, options)
        W = start.P * (end.v - start.v)
        Q = end.h - start.h

    elif kind is ProcessType.ISOCHORIC:
        end = _isochoric_end(substance, start, cond)
        W = 0.0
        Q = end.u - start.u

    elif kind is ProcessType.ISOTHERMAL:
        end = resolve(substance, "T", start.T, cond.prop, cond.value, options)
        T_K = start.T_K
        if substance.is_ideal_gas:
            W = substance.R * T_K * math.log(end.v / start.v)
            Q = W
        else:
            if options.corrected_isothermal_heat:
                Q = T_K * (end.s - start.s)
            else:
                logger.warning(
                    "Isothermal heat for real substances uses the legacy formula T·(s2 − s2) = 0; "
                    "set corrected_isothermal_heat to use T·(s2 − s1)"
                )
                Q = T_K * (end.s - end.s)
            W = Q - (end.u - start.u)

    elif kind is ProcessType.ISENTROPIC:
        if substance.is_ideal_gas and None not in (substance.gamma, substance.R, substance.cv):
            if cond.prop != "P":
                raise MissingPressureConditionError(
                    "An ideal-gas isentropic process needs a final pressure (P) as end condition"
                )
            g = substance.gamma
            P2 = cond.value
            T2_K = start.T_K * (P2 / start.P) ** ((g - 1.0) / g)
            end = ideal_gas_state(substance, P2, k_to_c(T2_K))
        else:
            end = resolve(substance, "s", start.s, cond.prop, cond.value, options)
        Q = 0.0
        W = -(end.u - start.u)

    else:  # pragma: no cover - exhaustive over ProcessType
        raise UnsupportedProcessError(f"Process type '{kind.value}' is not supported")

    logger.debug("%s %s: W=%.4g kJ/kg, Q=%.4g kJ/kg", substance.key, kind.value, W, Q)
    return Process(start=start, end=end, type=kind.value, W=W, Q=Q)


# --- Closed-system energy balances ---


def internal_energy_change(Q: float, W: float) -> float:
    """First law for a closed system, ΔU = Q − W [kJ/kg or kJ]."""
    return Q - W


def heating_temperature_rise(Q: float, mass: float, material: str | float = "water") -> float:
    """Temperature rise ΔT = Q / (m·c) of a body heated at constant specific heat.

    Args:
        Q: Heat added [kJ].
        mass: Body mass [kg].
        material: Key of ``SPECIFIC_HEATS`` or a specific heat [kJ/(kg·K)].

    Returns:
        ΔT [K].
    """
    if isinstance(material, str):
        c = SPECIFIC_HEATS.get(material.strip().lower())
        if c is None:
            raise ValidationError(
                f"No specific heat for '{material}'. Available: {sorted(SPECIFIC_HEATS)}"
            )
    else:
        c = material
    if not mass > 0:
        raise ValidationError(f"Mass must be positive, got {mass} kg")
    if not c > 0:
        raise ValidationError(f"Specific heat must be positive, got {c} kJ/(kg·K)")
    return Q / (mass * c)
