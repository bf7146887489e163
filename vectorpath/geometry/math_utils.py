"""
Scalar helpers shared by the geometry classes.
"""

import math

from ..config import EPSILON


def equals(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Compare two floats within an absolute tolerance."""
    return abs(a - b) < epsilon


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def to_rad(degrees: float) -> float:
    return degrees * math.pi / 180


def to_deg(radians: float) -> float:
    return radians * 180 / math.pi


def round_to(value: float, precision: int = 3) -> float:
    """Round half up to a fixed number of decimals, never returning -0.0."""
    factor = 10 ** precision
    result = math.floor(value * factor + 0.5) / factor
    return result if result != 0 else 0.0
