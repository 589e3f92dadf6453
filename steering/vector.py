"""2D vector helpers used by every steering behavior.

Vectors are float64 numpy arrays of shape (2,). Helpers never modify their
inputs in place.
"""

import math
import numpy as np

from .errors import DomainError

TWO_PI = 2.0 * math.pi

ZERO = np.zeros(2)
ZERO.setflags(write=False)


def vec(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    """Build a 2D vector."""
    return np.array([x, y], dtype=np.float64)


def as_vec(v) -> np.ndarray:
    """Copy any 2-sequence into a fresh float64 vector."""
    return np.array(v, dtype=np.float64).reshape(2)


def length(v: np.ndarray) -> float:
    return math.hypot(v[0], v[1])


def normalize(v: np.ndarray) -> np.ndarray:
    """
    Unit vector in the direction of v.

    A zero vector has no direction and is returned unchanged (as a copy).
    """
    v = np.asarray(v, dtype=np.float64)
    n = length(v)
    if n == 0:
        return v.copy()
    return v / n


def clamp_magnitude(v: np.ndarray, max_value: float) -> np.ndarray:
    """Shrink v to max_value if it is longer, keeping its direction."""
    v = np.asarray(v, dtype=np.float64)
    if length(v) > max_value:
        return normalize(v) * max_value
    return v.copy()


def clamp_scalar(x: float, max_value: float) -> float:
    """Clamp x to [-max_value, max_value]."""
    if abs(x) > max_value:
        return max_value if x > 0 else -max_value
    return x


def wrap_angle(angle: float) -> float:
    """
    Map an angle in radians into [-pi, pi].

    Uses an IEEE remainder so huge inputs wrap in constant time.
    """
    if not math.isfinite(angle):
        raise DomainError(f"cannot wrap non-finite angle {angle!r}")
    return math.remainder(angle, TWO_PI)


def heading(v: np.ndarray) -> float:
    """Angle of v measured from the +x axis."""
    return math.atan2(v[1], v[0])


def from_angle(angle: float, magnitude: float = 1.0) -> np.ndarray:
    return vec(math.cos(angle) * magnitude, math.sin(angle) * magnitude)
