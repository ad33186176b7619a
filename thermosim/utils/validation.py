"""Rule checking and input validation for ThermoSim."""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def summary(self) -> str:
        """Join all error messages into a single line."""
        return "; ".join(m.message for m in self.errors)


# --- Common validators ---


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}", value=value, limit=0)


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(severity, name, f"{name} = {value} is outside [{low}, {high}]", value=value)


def validate_greater(
    name: str, value: float, other_name: str, other: float, result: ValidationResult
) -> None:
    """Validate that *value* is strictly greater than *other*."""
    if value <= other:
        result.error(name, f"{name} ({value}) must exceed {other_name} ({other})", value=value, limit=other)


def validate_required(params: dict[str, Any], names: Sequence[str], result: ValidationResult) -> bool:
    """Check that every key in *names* is present and numeric.

    Returns:
        True if all parameters are present.
    """
    ok = True
    for name in names:
        value = params.get(name)
        if value is None:
            result.error(name, f"Missing required parameter '{name}'")
            ok = False
        elif not isinstance(value, numbers.Real) or isinstance(value, bool):
            result.error(name, f"Parameter '{name}' must be numeric, got {value!r}", value=value)
            ok = False
    return ok


# --- Domain validators ---


def validate_saturation_table(name: str, rows: Sequence[Any]) -> ValidationResult:
    """Check the ordering and critical-point invariants of a saturation table.

    Rows must be ordered by ascending P and ascending T, and the final row
    must be the critical point where f- and g-values coincide.
    """
    result = ValidationResult()
    if len(rows) < 2:
        result.error(name, f"{name}: saturation table needs at least two rows")
        return result

    for prev, curr in zip(rows, rows[1:]):
        if not (curr.P > prev.P and curr.T > prev.T):
            result.error(
                name,
                f"{name}: rows must ascend in both P and T "
                f"(P={prev.P}->{curr.P}, T={prev.T}->{curr.T})",
            )

    crit = rows[-1]
    for f_name, g_name in (("vf", "vg"), ("hf", "hg"), ("sf", "sg")):
        f_val, g_val = getattr(crit, f_name), getattr(crit, g_name)
        if abs(f_val - g_val) > 1e-9 * max(1.0, abs(g_val)):
            result.error(
                name,
                f"{name}: critical row must have {f_name} == {g_name}, got {f_val} vs {g_val}",
            )

    for row in rows[:-1]:
        if row.sf > row.sg:
            result.warning(name, f"{name}: sf > sg at T={row.T}")

    return result


def validate_cycle_params(cycle: str, params: dict[str, Any]) -> ValidationResult:
    """Run physical-reasonableness checks on cycle parameters.

    Args:
        cycle: Lower-case cycle name ("rankine", "brayton", "carnot").
        params: Parameter mapping as supplied by the caller.
    """
    result = ValidationResult()

    if cycle == "rankine":
        if validate_required(params, ("p_low", "p_high"), result):
            validate_positive("p_low", params["p_low"], result)
            validate_greater("p_high", params["p_high"], "p_low", params["p_low"], result)
    elif cycle == "brayton":
        if validate_required(params, ("pressure_ratio", "t_min_c", "t_max_c"), result):
            validate_greater("pressure_ratio", params["pressure_ratio"], "unity", 1.0, result)
            validate_greater("t_max_c", params["t_max_c"], "t_min_c", params["t_min_c"], result)
            validate_range("pressure_ratio", params["pressure_ratio"], 1.0, 60.0, result, Severity.WARNING)
    elif cycle == "carnot":
        if validate_required(params, ("t_min_c", "t_max_c"), result):
            validate_greater("t_max_c", params["t_max_c"], "t_min_c", params["t_min_c"], result)
            validate_greater("t_min_c", params["t_min_c"], "absolute zero", -273.15, result)

    return result
