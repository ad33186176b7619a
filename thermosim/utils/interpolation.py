"""Table interpolation helpers for ThermoSim."""

from __future__ import annotations

import numpy as np
from scipy import interpolate


def interp_clamped(x: np.ndarray, y: np.ndarray, x_query: float) -> float:
    """Linearly interpolate ``y(x)`` at *x_query*.

    *x* must be strictly increasing. Queries outside ``[x[0], x[-1]]``
    return the end values ``y[0]`` / ``y[-1]``.
    """
    f = interpolate.interp1d(x, y, kind="linear", bounds_error=False, fill_value=(y[0], y[-1]))
    return float(f(x_query))


def nearest_index(x: np.ndarray, x_query: float) -> int:
    """Index of the entry in *x* closest to *x_query*.

    Ties resolve to the first matching entry.
    """
    return int(np.argmin(np.abs(np.asarray(x, dtype=float) - x_query)))
