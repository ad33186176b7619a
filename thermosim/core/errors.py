"""Exception taxonomy for ThermoSim.

Every failure raised by the state, process and cycle solvers derives from
:class:`ThermoError` and carries a descriptive message. Resolution is atomic:
an exception means no partial state was produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from thermosim.utils.validation import ValidationResult


class ThermoError(Exception):
    """Base class for all ThermoSim calculation errors."""


class ValidationError(ThermoError, ValueError):
    """Raised when inputs fail validation (equal properties, bad parameters)."""

    def __init__(self, message: str, result: ValidationResult | None = None):
        super().__init__(message)
        self.result = result


class InvalidQualityError(ValidationError):
    """Raised when a quality value lies outside [0, 1]."""


class UnsupportedUnitError(ValidationError):
    """Raised when a unit string is not recognised."""


class UnsupportedPropertyPairError(ThermoError):
    """Raised when a substance cannot be resolved from the given property pair."""


class UnsupportedProcessError(ThermoError):
    """Raised for an unknown process type."""


class UnsupportedCycleError(ThermoError):
    """Raised for an unknown cycle type."""


class SubstanceIncompatibleError(ThermoError):
    """Raised when a cycle is requested for the wrong kind of substance."""


class MissingPropertyDataError(ThermoError):
    """Raised when a substance lacks the coefficients a calculation needs."""


class AmbiguousMixtureError(ThermoError):
    """Raised when P and T alone cannot fix a state inside the saturation dome."""


class FeatureNotImplementedError(ThermoError):
    """Raised for regions the simplified property model does not cover."""


class MissingPressureConditionError(ThermoError):
    """Raised when an ideal-gas isentropic process is not given an end pressure."""
