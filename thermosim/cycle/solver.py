"""Thermodynamic cycle solver for ThermoSim.

Composes four resolved states into a fixed four-process cycle and solves
the energy balance for net work, heat exchanged and thermal efficiency.

Supported cycle architectures:
- Rankine: pump → boiler → turbine → condenser (real substance)
- Brayton: compressor → combustor → turbine → exhaust (ideal gas)
- Carnot: two isotherms joined by two isentropes inside the dome (real substance)

All energies are per unit mass [kJ/kg].
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from thermosim.core.config import DEFAULT_OPTIONS, AnalysisRecord, SolverOptions
from thermosim.core.errors import (
    MissingPropertyDataError,
    SubstanceIncompatibleError,
    UnsupportedCycleError,
    ValidationError,
)
from thermosim.core.process import Process
from thermosim.core.state import StatePoint, ideal_gas_state, resolve
from thermosim.core.substances import Substance, SubstanceKind
from thermosim.utils.constants import BRAYTON_P_LOW, c_to_k, k_to_c
from thermosim.utils.validation import validate_cycle_params

logger = logging.getLogger(__name__)


class CycleType(Enum):
    """Cycle architecture."""

    RANKINE = "rankine"
    BRAYTON = "brayton"
    CARNOT = "carnot"


# Substance kind each cycle is modelled for
_REQUIRED_KIND = {
    CycleType.RANKINE: SubstanceKind.REAL,
    CycleType.BRAYTON: SubstanceKind.IDEAL_GAS,
    CycleType.CARNOT: SubstanceKind.REAL,
}


@dataclass(frozen=True)
class CycleResult:
    """Solved cycle: four states, four processes and summary metrics.

    ``results`` is a read-only mapping.
    """

    cycle_type: str
    substance: str
    states: tuple[StatePoint, ...]
    processes: tuple[Process, ...]
    results: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    @property
    def efficiency(self) -> float:
        return self.results["efficiency"]

    @property
    def net_work(self) -> float:
        return self.results["W_net"]

    def to_record(self, options: SolverOptions = DEFAULT_OPTIONS) -> AnalysisRecord:
        return AnalysisRecord(
            kind="cycle",
            substance=self.substance,
            cycle_type=self.cycle_type,
            states=[s.to_dict() for s in self.states],
            processes=[
                {"type": p.type, "start": p.start.name, "end": p.end.name, "W": p.W, "Q": p.Q}
                for p in self.processes
            ],
            results=dict(self.results),
            options=options.to_dict(),
        )


def _parse_cycle_type(cycle_type: CycleType | str) -> CycleType:
    if isinstance(cycle_type, CycleType):
        return cycle_type
    try:
        return CycleType(str(cycle_type).strip().lower())
    except ValueError:
        raise UnsupportedCycleError(
            f"Cycle type '{cycle_type}' is not implemented. "
            f"Available: {[c.value for c in CycleType]}"
        ) from None


def _efficiency(W_net: float, Q_in: float, cycle: str) -> float:
    if Q_in <= 0:
        raise ValidationError(
            f"{cycle} cycle receives no heat (Q_in = {Q_in:.4g} kJ/kg); "
            "check that the operating limits lie inside the tabulated range"
        )
    return W_net / Q_in


def compute_cycle(
    substance: Substance,
    cycle_type: CycleType | str,
    params: Mapping[str, Any],
    options: SolverOptions = DEFAULT_OPTIONS,
) -> CycleResult:
    """Solve a thermodynamic cycle and compute its performance.

    Dispatches to the appropriate solver based on cycle type.

    Args:
        substance: Working substance.
        cycle_type: ``CycleType`` or its name ("Rankine", "brayton", ...).
        params: Operating limits in base units:
            Rankine ``p_low``, ``p_high`` [kPa];
            Brayton ``pressure_ratio``, ``t_min_c``, ``t_max_c`` [°C];
            Carnot ``t_min_c``, ``t_max_c`` [°C].
        options: Solver configuration.

    Returns:
        CycleResult with states, processes and metrics.

    Raises:
        UnsupportedCycleError: If the cycle type is unknown.
        SubstanceIncompatibleError: If the substance kind does not suit the cycle.
        ValidationError: If the parameters fail validation.
    """
    ctype = _parse_cycle_type(cycle_type)

    required = _REQUIRED_KIND[ctype]
    if substance.kind is not required:
        raise SubstanceIncompatibleError(
            f"The {ctype.value.title()} cycle requires "
            f"{'a real substance' if required is SubstanceKind.REAL else 'an ideal gas'}, "
            f"got '{substance.key}'"
        )

    params = dict(params)
    check = validate_cycle_params(ctype.value, params)
    for msg in check.warnings:
        logger.warning(msg.message)
    if not check.is_valid:
        raise ValidationError(f"Invalid {ctype.value} parameters: {check.summary()}", result=check)

    if ctype == CycleType.RANKINE:
        result = _solve_rankine(substance, params, options)
    elif ctype == CycleType.BRAYTON:
        result = _solve_brayton(substance, params)
    elif ctype == CycleType.CARNOT:
        result = _solve_carnot(substance, params, options)
    else:  # pragma: no cover - exhaustive over CycleType
        raise UnsupportedCycleError(f"Unknown cycle type: {ctype}")

    logger.info(
        "%s cycle on %s: W_net=%.2f kJ/kg, efficiency=%.4f",
        ctype.value, substance.key, result.results["W_net"], result.results["efficiency"],
    )
    return result


# --- Rankine cycle ---


def _solve_rankine(substance: Substance, params: dict[str, Any], options: SolverOptions) -> CycleResult:
    """Solve an ideal Rankine cycle.

    1 → 2  isentropic pump       (saturated liquid at p_low → p_high)
    2 → 3  isobaric heat addition (→ saturated vapour at p_high)
    3 → 4  isentropic turbine    (→ p_low)
    4 → 1  isobaric heat rejection
    """
    p_low, p_high = params["p_low"], params["p_high"]

    state1 = resolve(substance, "P", p_low, "x", 0.0, options).named("State 1 (pump inlet)")
    state2 = resolve(substance, "P", p_high, "s", state1.s, options).named("State 2 (boiler inlet)")
    state3 = resolve(substance, "P", p_high, "x", 1.0, options).named("State 3 (turbine inlet)")
    state4 = resolve(substance, "P", p_low, "s", state3.s, options).named("State 4 (condenser inlet)")

    W_pump = state2.h - state1.h
    Q_in = state3.h - state2.h
    W_turbine = state3.h - state4.h
    Q_out = state4.h - state1.h
    W_net = W_turbine - W_pump

    results = {
        "W_net": W_net,
        "Q_in": Q_in,
        "Q_out": Q_out,
        "efficiency": _efficiency(W_net, Q_in, "Rankine"),
        "W_pump": W_pump,
        "W_turbine": W_turbine,
    }
    processes = (
        Process(state1, state2, "isentropic compression", W=-W_pump, Q=0.0),
        Process(state2, state3, "isobaric heat addition", W=p_high * (state3.v - state2.v), Q=Q_in),
        Process(state3, state4, "isentropic expansion", W=W_turbine, Q=0.0),
        Process(state4, state1, "isobaric heat rejection", W=p_low * (state1.v - state4.v), Q=-Q_out),
    )
    return CycleResult(
        cycle_type=CycleType.RANKINE.value,
        substance=substance.key,
        states=(state1, state2, state3, state4),
        processes=processes,
        results=results,
    )


# --- Brayton cycle ---


def _solve_brayton(substance: Substance, params: dict[str, Any]) -> CycleResult:
    """Solve an air-standard Brayton cycle.

    The compressor inlet is fixed at ``BRAYTON_P_LOW``; temperatures across
    the isentropes follow T2/T1 = T3/T4 = r^((γ−1)/γ).
    """
    cp, gamma, R = substance.cp, substance.gamma, substance.R
    if cp is None or gamma is None or R is None:
        raise MissingPropertyDataError(
            f"Ideal-gas properties (cp, gamma, R) are not defined for '{substance.key}'"
        )

    ratio = params["pressure_ratio"]
    p_low = BRAYTON_P_LOW
    p_high = p_low * ratio
    k = (gamma - 1.0) / gamma

    state1 = ideal_gas_state(substance, p_low, params["t_min_c"]).named("State 1 (compressor inlet)")
    T1_K = state1.T_K
    T2_K = T1_K * ratio**k
    state2 = ideal_gas_state(substance, p_high, k_to_c(T2_K)).named("State 2 (combustor inlet)")
    state3 = ideal_gas_state(substance, p_high, params["t_max_c"]).named("State 3 (turbine inlet)")
    T3_K = state3.T_K
    T4_K = T3_K * ratio ** (-k)
    state4 = ideal_gas_state(substance, p_low, k_to_c(T4_K)).named("State 4 (exhaust)")

    if T3_K <= T2_K:
        raise ValidationError(
            f"Turbine inlet temperature ({params['t_max_c']} °C) must exceed the "
            f"compressor exit temperature ({k_to_c(T2_K):.1f} °C)"
        )

    W_compressor = cp * (T2_K - T1_K)
    Q_in = cp * (T3_K - T2_K)
    W_turbine = cp * (T3_K - T4_K)
    Q_out = cp * (T4_K - T1_K)
    W_net = W_turbine - W_compressor

    results = {
        "W_net": W_net,
        "Q_in": Q_in,
        "Q_out": Q_out,
        "efficiency": _efficiency(W_net, Q_in, "Brayton"),
        "W_compressor": W_compressor,
        "W_turbine": W_turbine,
    }
    processes = (
        Process(state1, state2, "isentropic compression", W=-W_compressor, Q=0.0),
        Process(state2, state3, "isobaric heat addition", W=R * (T3_K - T2_K), Q=Q_in),
        Process(state3, state4, "isentropic expansion", W=W_turbine, Q=0.0),
        Process(state4, state1, "isobaric heat rejection", W=R * (T1_K - T4_K), Q=-Q_out),
    )
    return CycleResult(
        cycle_type=CycleType.BRAYTON.value,
        substance=substance.key,
        states=(state1, state2, state3, state4),
        processes=processes,
        results=results,
    )


# --- Carnot cycle ---


def _solve_carnot(substance: Substance, params: dict[str, Any], options: SolverOptions) -> CycleResult:
    """Solve a Carnot heat engine operating inside the saturation dome.

    1 → 2  isothermal heat addition at T_H (saturated liquid → vapour)
    2 → 3  isentropic expansion to T_L
    3 → 4  isothermal heat rejection at T_L
    4 → 1  isentropic compression to T_H
    """
    t_high, t_low = params["t_max_c"], params["t_min_c"]
    T_H, T_L = c_to_k(t_high), c_to_k(t_low)

    state1 = resolve(substance, "T", t_high, "x", 0.0, options).named("State 1")
    state2 = resolve(substance, "T", t_high, "x", 1.0, options).named("State 2")
    state3 = resolve(substance, "T", t_low, "s", state2.s, options).named("State 3")
    state4 = resolve(substance, "T", t_low, "s", state1.s, options).named("State 4")

    Q_in = T_H * (state2.s - state1.s)
    Q_out = T_L * (state3.s - state4.s)
    W_net = Q_in - Q_out

    results = {
        "W_net": W_net,
        "Q_in": Q_in,
        "Q_out": Q_out,
        "efficiency": _efficiency(W_net, Q_in, "Carnot"),
    }
    processes = (
        Process(state1, state2, "isothermal heat addition", W=Q_in - (state2.u - state1.u), Q=Q_in),
        Process(state2, state3, "isentropic expansion", W=state2.u - state3.u, Q=0.0),
        Process(state3, state4, "isothermal heat rejection", W=-Q_out - (state4.u - state3.u), Q=-Q_out),
        Process(state4, state1, "isentropic compression", W=state4.u - state1.u, Q=0.0),
    )
    return CycleResult(
        cycle_type=CycleType.CARNOT.value,
        substance=substance.key,
        states=(state1, state2, state3, state4),
        processes=processes,
        results=results,
    )
