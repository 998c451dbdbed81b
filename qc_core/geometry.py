"""
Reciprocal-space geometry for peak indexing.

All functions are pure and take angles in degrees. The angle shown and
entered as 2θ goes into Bragg's law as θ unchanged.
"""

import math

import numpy as np

from .errors import GeometryDomainError
from .types import XpeakConfig, convert_units

DEG_TO_RAD = convert_units(1.0, "degree", "radian")
RAD_TO_DEG = convert_units(1.0, "radian", "degree")

_S5 = math.sqrt(5)

# 6D -> physical projection for icosahedral indices (h, k, l, m, n, o)
PROJECTION_MATRIX = np.array(
    [
        [_S5, 1, 1, 1, 1, 1],
        [1, _S5, 1, -1, -1, 1],
        [1, 1, _S5, 1, -1, -1],
        [1, -1, 1, _S5, 1, -1],
        [1, -1, -1, 1, _S5, 1],
        [1, 1, -1, -1, 1, _S5],
    ]
)

# Normalization of the projected norm
QUASICRYSTAL_SCALE = 20.0


def squared_norm(*components: float) -> float:
    """Sum of squares of the components."""
    return float(sum(c * c for c in components))


def crystal_norm(h: float, k: float, l: float) -> float:  # noqa: E741
    """Squared reciprocal norm N for Miller indices."""
    return squared_norm(h, k, l)


def quasicrystal_norm(h: float, k: float, l: float, m: float, n: float, o: float) -> float:  # noqa: E741
    """Squared reciprocal norm N for 6-index quasicrystal indices."""
    r = PROJECTION_MATRIX @ np.array([h, k, l, m, n, o], dtype=float)
    return squared_norm(*r.tolist()) / QUASICRYSTAL_SCALE


def predicted_two_theta(n: float, config: XpeakConfig) -> float:
    """Predicted peak position (degrees) for squared norm ``n``.

    Raises:
        GeometryDomainError: If the reflection cannot diffract at this
            wavelength and lattice constant.
    """
    arg = config.wavelength * math.sqrt(n) / 2 / config.lattice_constant
    if not -1.0 <= arg <= 1.0:
        raise GeometryDomainError(f"asin argument {arg:g} out of range for N={n:g}")
    return math.asin(arg) * RAD_TO_DEG


def inverse_lattice_constant(n: float, theta: float, config: XpeakConfig) -> float:
    """Lattice constant reproducing the observed angle ``theta`` for norm ``n``."""
    s = math.sin(theta * DEG_TO_RAD)
    if s == 0.0:
        raise GeometryDomainError(f"sin({theta:g} deg) is zero")
    return config.wavelength * math.sqrt(n) / 2 / s


def nelson_riley(theta: float) -> float:
    """Nelson-Riley style term cos²θ/sinθ + cos²θ/θ (θ in radians inside the formula)."""
    r = theta * DEG_TO_RAD
    s = math.sin(r)
    if r == 0.0 or s == 0.0:
        raise GeometryDomainError(f"NR undefined at {theta:g} deg")
    i = math.cos(r) ** 2
    value = i / s + i / r
    if not math.isfinite(value):
        raise GeometryDomainError(f"NR not finite at {theta:g} deg")
    return value


def format_float(value: float) -> str:
    """Shortest round-trip decimal, positional, without trailing zeros."""
    if not math.isfinite(value):
        raise GeometryDomainError(f"cannot format non-finite value {value}")
    return np.format_float_positional(value, trim="-")
