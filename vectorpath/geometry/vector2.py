"""
Immutable 2D point/vector value.
"""

from dataclasses import dataclass
from typing import Tuple, Union
import math

from ..config import EPSILON
from ..errors import GeometricDegeneracyError
from .math_utils import equals, lerp, round_to


@dataclass(frozen=True)
class Vector2:
    """A 2D point or direction. All operations return new instances."""
    x: float = 0.0
    y: float = 0.0
    
    # --- Factories ---
    
    @staticmethod
    def zero() -> 'Vector2':
        return Vector2(0.0, 0.0)
    
    @staticmethod
    def one() -> 'Vector2':
        return Vector2(1.0, 1.0)
    
    @staticmethod
    def from_tuple(values: Tuple[float, float]) -> 'Vector2':
        return Vector2(float(values[0]), float(values[1]))
    
    # --- Arithmetic ---
    
    def add(self, other: Union['Vector2', float]) -> 'Vector2':
        """Add a vector, or a scalar to both components."""
        if isinstance(other, Vector2):
            return Vector2(self.x + other.x, self.y + other.y)
        return Vector2(self.x + other, self.y + other)
    
    def sub(self, other: Union['Vector2', float]) -> 'Vector2':
        """Subtract a vector, or a scalar from both components."""
        if isinstance(other, Vector2):
            return Vector2(self.x - other.x, self.y - other.y)
        return Vector2(self.x - other, self.y - other)
    
    def mul(self, scalar: float) -> 'Vector2':
        return Vector2(self.x * scalar, self.y * scalar)
    
    def div(self, scalar: float) -> 'Vector2':
        """
        Divide both components by a scalar.
        
        Raises:
            GeometricDegeneracyError: if the scalar is within EPSILON of zero.
        """
        if abs(scalar) < EPSILON:
            raise GeometricDegeneracyError(f"Vector2 division by near-zero scalar {scalar!r}")
        return Vector2(self.x / scalar, self.y / scalar)
    
    def negate(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)
    
    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __rmul__ = mul
    __truediv__ = div
    __neg__ = negate
    
    # --- Products ---
    
    def dot(self, other: 'Vector2') -> float:
        return self.x * other.x + self.y * other.y
    
    def cross(self, other: 'Vector2') -> float:
        """Z component of the 3D cross product (signed parallelogram area)."""
        return self.x * other.y - self.y * other.x
    
    # --- Geometric properties ---
    
    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y
    
    def length(self) -> float:
        return math.sqrt(self.length_sq())
    
    def normalize(self) -> 'Vector2':
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length < EPSILON:
            return Vector2.zero()
        return self.div(length)
    
    def distance_to(self, other: 'Vector2') -> float:
        return self.sub(other).length()
    
    def distance_to_sq(self, other: 'Vector2') -> float:
        return self.sub(other).length_sq()
    
    def angle(self) -> float:
        """Angle from the +X axis in radians."""
        return math.atan2(self.y, self.x)
    
    # --- Utilities ---
    
    def equals(self, other: 'Vector2', epsilon: float = EPSILON) -> bool:
        """Component-wise comparison within epsilon."""
        return equals(self.x, other.x, epsilon) and equals(self.y, other.y, epsilon)
    
    def lerp(self, other: 'Vector2', t: float) -> 'Vector2':
        return Vector2(lerp(self.x, other.x, t), lerp(self.y, other.y, t))
    
    def round(self, precision: int = 3) -> 'Vector2':
        return Vector2(round_to(self.x, precision), round_to(self.y, precision))
    
    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)
    
    def __str__(self) -> str:
        return f"Vector2({self.x}, {self.y})"
