"""Thermodynamic state resolution.

Resolves a complete state (P, T, v, u, h, s, x) from two independent
property values. Ideal gases use closed-form equations of state; real
substances use a region-aware model built on the saturation table:

- compressed liquid: approximated from saturated-liquid values
- saturated mixture: quality-weighted blend of f- and g-values
- superheated vapour: constant-cp extension from the saturated vapour

Units: P [kPa], T [°C], v [m³/kg], u/h [kJ/kg], s [kJ/(kg·K)].
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable

from scipy.optimize import brentq

from thermosim.core.config import DEFAULT_OPTIONS, SolverOptions
from thermosim.core.errors import (
    AmbiguousMixtureError,
    FeatureNotImplementedError,
    InvalidQualityError,
    MissingPropertyDataError,
    UnsupportedPropertyPairError,
    ValidationError,
)
from thermosim.core.saturation import (
    LookupMode,
    saturation_at_pressure,
    saturation_at_temperature,
)
from thermosim.core.substances import SaturationPoint, Substance
from thermosim.utils.constants import c_to_k, k_to_c
from thermosim.utils.units import pressure_to_kpa, temperature_to_celsius

logger = logging.getLogger(__name__)

PROPERTY_NAMES: tuple[str, ...] = ("P", "T", "v", "u", "h", "s", "x")

IDEAL_GAS_PAIRS: frozenset[frozenset[str]] = frozenset({frozenset({"P", "T"})})

REAL_SUBSTANCE_PAIRS: frozenset[frozenset[str]] = frozenset(
    frozenset(pair)
    for pair in (("P", "T"), ("P", "x"), ("P", "s"), ("T", "x"), ("T", "s"))
)


@dataclass(frozen=True)
class StatePoint:
    """Fully resolved thermodynamic state.

    ``x`` is None unless the state was resolved inside the saturation dome.
    """

    P: float  # kPa
    T: float  # °C
    v: float  # m³/kg
    u: float  # kJ/kg
    h: float  # kJ/kg
    s: float  # kJ/(kg·K)
    x: float | None = None
    name: str = ""

    @property
    def T_K(self) -> float:
        """Temperature in Kelvin."""
        return c_to_k(self.T)

    @property
    def is_two_phase(self) -> bool:
        return self.x is not None

    def named(self, name: str) -> StatePoint:
        """Return a copy of this state carrying *name*."""
        return replace(self, name=name)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def supported_pairs(substance: Substance) -> frozenset[frozenset[str]]:
    """Property pairs from which *substance* can be resolved."""
    return IDEAL_GAS_PAIRS if substance.is_ideal_gas else REAL_SUBSTANCE_PAIRS


# --- Ideal gas ---


def ideal_gas_state(substance: Substance, P: float, T: float) -> StatePoint:
    """Resolve an ideal-gas state from pressure [kPa] and temperature [°C].

    v = R·T/P, u = cv·T (u = 0 at 0 K), h = u + P·v,
    s = cp·ln(T) − R·ln(P). Entropy has no reference state, so only
    differences are meaningful.
    """
    R, cv, cp = substance.R, substance.cv, substance.cp
    if R is None or cv is None or cp is None:
        raise MissingPropertyDataError(
            f"Ideal-gas properties (R, cv, cp) are not defined for '{substance.key}'"
        )

    T_K = c_to_k(T)
    if not (math.isfinite(P) and P > 0):
        raise ValidationError(f"Pressure must be positive and finite, got P={P} kPa")
    if not (math.isfinite(T_K) and T_K > 0):
        raise ValidationError(f"Temperature must be above absolute zero, got T={T} °C")

    v = R * T_K / P
    u = cv * T_K
    h = u + P * v
    s = cp * math.log(T_K) - R * math.log(P)
    return StatePoint(P=P, T=T, v=v, u=u, h=h, s=s, x=None)


# --- Real substance ---


def _check_quality(x: float) -> None:
    if not 0.0 <= x <= 1.0:
        raise InvalidQualityError(f"Quality (x) must be between 0 and 1, got {x}")


def _blend(f: float, g: float, x: float) -> float:
    return f + x * (g - f)


def _mixture_quality(sat: SaturationPoint, s: float) -> float:
    span = sat.sg - sat.sf
    # At the critical row f- and g-values coincide.
    return (s - sat.sf) / span if span > 0 else 0.0


def _superheated(sat: SaturationPoint, T: float, cp: float) -> tuple[float, float, float]:
    """(h, s, v) of vapour at *T* above the saturation row *sat*."""
    ratio = c_to_k(T) / c_to_k(sat.T)
    h = sat.hg + cp * (T - sat.T)
    s = sat.sg + cp * math.log(ratio)
    v = sat.vg * ratio
    return h, s, v


def _superheated_reference(
    substance: Substance, T: float, s: float, options: SolverOptions
) -> SaturationPoint:
    """Saturation row below which vapour at (T, s) is superheated.

    At fixed T the unknown is pressure: find the point on the saturation
    curve where ``sg + cp·ln(T/Tsat) = s``.
    """
    cp = options.vapor_cp
    T_K = c_to_k(T)

    def excess(sat: SaturationPoint) -> float:
        return sat.sg + cp * math.log(T_K / c_to_k(sat.T)) - s

    if options.lookup is LookupMode.NEAREST:
        candidates = [row for row in substance.saturation if row.T <= T]
        if not candidates:
            raise FeatureNotImplementedError(
                f"State with T={T} and s={s} lies below the saturation table of '{substance.key}'"
            )
        return min(candidates, key=lambda row: abs(excess(row)))

    def residual(P: float) -> float:
        return excess(saturation_at_pressure(substance, P, LookupMode.LINEAR))

    p_lo = substance.saturation[0].P
    p_hi = saturation_at_temperature(substance, T, LookupMode.LINEAR).P
    if residual(p_lo) < 0 or residual(p_hi) > 0:
        raise FeatureNotImplementedError(
            f"State with T={T} and s={s} lies outside the saturation table of '{substance.key}'"
        )
    P = brentq(residual, p_lo, p_hi, xtol=1e-9)
    return saturation_at_pressure(substance, P, LookupMode.LINEAR)


_Props = dict[str, float]
_Region = tuple[float, float, float, float, float, "float | None"]  # P, T, v, h, s, x


def _from_P_T(substance: Substance, props: _Props, options: SolverOptions) -> _Region:
    P, T = props["P"], props["T"]
    sat = saturation_at_pressure(substance, P, options.lookup)

    if math.isclose(T, sat.T, rel_tol=1e-9, abs_tol=1e-9):
        raise AmbiguousMixtureError(
            f"P={P} kPa and T={T} °C lie on the saturation line; "
            "provide quality (x) or another property"
        )
    if T > sat.T:
        logger.debug("%s: (P, T) superheated vapour", substance.key)
        h, s, v = _superheated(sat, T, options.vapor_cp)
        return P, T, v, h, s, None

    logger.debug("%s: (P, T) compressed liquid, saturated-liquid approximation", substance.key)
    liquid = saturation_at_temperature(substance, T, options.lookup)
    return P, T, liquid.vf, liquid.hf, liquid.sf, None


def _from_P_x(substance: Substance, props: _Props, options: SolverOptions) -> _Region:
    P, x = props["P"], props["x"]
    _check_quality(x)
    sat = saturation_at_pressure(substance, P, options.lookup)
    return (
        P,
        sat.T,
        _blend(sat.vf, sat.vg, x),
        _blend(sat.hf, sat.hg, x),
        _blend(sat.sf, sat.sg, x),
        x,
    )


def _from_P_s(substance: Substance, props: _Props, options: SolverOptions) -> _Region:
    P, s = props["P"], props["s"]
    sat = saturation_at_pressure(substance, P, options.lookup)

    if sat.sf <= s <= sat.sg:
        logger.debug("%s: (P, s) saturated mixture", substance.key)
        x = _mixture_quality(sat, s)
        return P, sat.T, _blend(sat.vf, sat.vg, x), _blend(sat.hf, sat.hg, x), s, x

    if s > sat.sg:
        logger.debug("%s: (P, s) superheated vapour", substance.key)
        cp = options.vapor_cp
        T_K = c_to_k(sat.T) * math.exp((s - sat.sg) / cp)
        T = k_to_c(T_K)
        h = sat.hg + cp * (T - sat.T)
        v = sat.vg * T_K / c_to_k(sat.T)
        return P, T, v, h, s, None

    # T is left at saturation; the real liquid would be slightly warmer.
    logger.debug("%s: (P, s) compressed liquid, incompressible approximation", substance.key)
    h = sat.hf + sat.vf * (P - sat.P)
    return P, sat.T, sat.vf, h, s, None


def _from_T_x(substance: Substance, props: _Props, options: SolverOptions) -> _Region:
    T, x = props["T"], props["x"]
    _check_quality(x)
    sat = saturation_at_temperature(substance, T, options.lookup)
    return (
        sat.P,
        T,
        _blend(sat.vf, sat.vg, x),
        _blend(sat.hf, sat.hg, x),
        _blend(sat.sf, sat.sg, x),
        x,
    )


def _from_T_s(substance: Substance, props: _Props, options: SolverOptions) -> _Region:
    T, s = props["T"], props["s"]
    sat = saturation_at_temperature(substance, T, options.lookup)

    if sat.sf <= s <= sat.sg:
        logger.debug("%s: (T, s) saturated mixture", substance.key)
        x = _mixture_quality(sat, s)
        return sat.P, T, _blend(sat.vf, sat.vg, x), _blend(sat.hf, sat.hg, x), s, x

    if s > sat.sg:
        logger.debug("%s: (T, s) superheated vapour", substance.key)
        ref = _superheated_reference(substance, T, s, options)
        h, _, v = _superheated(ref, T, options.vapor_cp)
        return ref.P, T, v, h, s, None

    raise FeatureNotImplementedError(
        f"State with T={T} and s={s} is a compressed liquid, "
        "which the simplified model does not cover for the (T, s) pair"
    )


_REAL_RESOLVERS: dict[frozenset[str], Callable[[Substance, _Props, SolverOptions], _Region]] = {
    frozenset({"P", "T"}): _from_P_T,
    frozenset({"P", "x"}): _from_P_x,
    frozenset({"P", "s"}): _from_P_s,
    frozenset({"T", "x"}): _from_T_x,
    frozenset({"T", "s"}): _from_T_s,
}


# --- Public API ---


def resolve(
    substance: Substance,
    prop1: str,
    val1: float,
    prop2: str,
    val2: float,
    options: SolverOptions = DEFAULT_OPTIONS,
) -> StatePoint:
    """Resolve a state from two property values given in base units.

    Args:
        substance: Substance definition.
        prop1: First property identifier (one of ``PROPERTY_NAMES``).
        val1: Value of the first property.
        prop2: Second property identifier, distinct from *prop1*.
        val2: Value of the second property.
        options: Solver configuration.

    Returns:
        Unnamed StatePoint.

    Raises:
        ValidationError: If both identifiers are equal or a value is not finite.
        UnsupportedPropertyPairError: If the pair is not supported for the substance.
    """
    if prop1 == prop2:
        raise ValidationError(f"The two input properties must differ, got '{prop1}' twice")
    for prop, value in ((prop1, val1), (prop2, val2)):
        # NaN quality is rejected by the quality check
        if prop != "x" and not math.isfinite(value):
            raise ValidationError(f"Property {prop} must be finite, got {value}")

    pair = frozenset((prop1, prop2))
    if pair not in supported_pairs(substance):
        allowed = sorted("".join(sorted(p)) for p in supported_pairs(substance))
        raise UnsupportedPropertyPairError(
            f"Property pair ({prop1}, {prop2}) is not supported for '{substance.key}'. "
            f"Supported: {allowed}"
        )

    props = {prop1: val1, prop2: val2}
    if substance.is_ideal_gas:
        return ideal_gas_state(substance, props["P"], props["T"])

    P, T, v, h, s, x = _REAL_RESOLVERS[pair](substance, props, options)
    u = h - P * v
    return StatePoint(P=P, T=T, v=v, u=u, h=h, s=s, x=x)


def to_base_units(prop: str, value: float, unit: str | None, strict: bool = True) -> float:
    """Convert a P or T input to kPa / °C; other properties pass through."""
    if prop == "P":
        return pressure_to_kpa(value, unit, strict=strict)
    if prop == "T":
        return temperature_to_celsius(value, unit, strict=strict)
    return value


def resolve_state(
    substance: Substance,
    prop1: str,
    val1: float,
    unit1: str | None,
    prop2: str,
    val2: float,
    unit2: str | None,
    options: SolverOptions = DEFAULT_OPTIONS,
) -> StatePoint:
    """Resolve a state from two property values given in user units.

    Pressure and temperature inputs are first converted to kPa and °C.
    """
    base1 = to_base_units(prop1, val1, unit1, options.strict_units)
    base2 = to_base_units(prop2, val2, unit2, options.strict_units)
    return resolve(substance, prop1, base1, prop2, base2, options)
