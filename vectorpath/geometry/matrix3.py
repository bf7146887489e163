"""
Immutable 3x3 affine transform.

Coefficients are stored row-major:
    
    [ m00, m01, m02 ]
    [ m10, m11, m12 ]
    [ m20, m21, m22 ]

For an affine map the bottom row is [0, 0, 1] and a point transforms as
x' = m00*x + m01*y + m02, y' = m10*x + m11*y + m12.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple
import logging
import math

import numpy as np

from ..config import EPSILON
from ..errors import UnsupportedInputError
from .vector2 import Vector2

logger = logging.getLogger(__name__)

_IDENTITY = (1.0, 0.0, 0.0,
             0.0, 1.0, 0.0,
             0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Matrix3:
    """A 2D affine transform. Identity by default."""
    elements: Tuple[float, ...] = _IDENTITY
    
    def __post_init__(self):
        values = tuple(float(v) for v in self.elements)
        if len(values) != 9:
            raise UnsupportedInputError(f"Matrix3 needs 9 coefficients, got {len(values)}")
        object.__setattr__(self, 'elements', values)
    
    # --- Factories ---
    
    @staticmethod
    def identity() -> 'Matrix3':
        return Matrix3()
    
    @staticmethod
    def from_list(values: Iterable[float]) -> 'Matrix3':
        return Matrix3(tuple(values))
    
    @staticmethod
    def from_array(array: np.ndarray) -> 'Matrix3':
        """Build from a 3x3 numpy array."""
        return Matrix3(tuple(np.asarray(array, dtype=float).reshape(9)))
    
    @staticmethod
    def translate(tx: float, ty: float) -> 'Matrix3':
        return Matrix3((1, 0, tx,
                        0, 1, ty,
                        0, 0, 1))
    
    @staticmethod
    def scale(sx: float, sy: float) -> 'Matrix3':
        return Matrix3((sx, 0, 0,
                        0, sy, 0,
                        0, 0, 1))
    
    @staticmethod
    def rotate(radians: float) -> 'Matrix3':
        c = math.cos(radians)
        s = math.sin(radians)
        return Matrix3((c, -s, 0,
                        s, c, 0,
                        0, 0, 1))
    
    # --- Operations ---
    
    def as_array(self) -> np.ndarray:
        return np.array(self.elements, dtype=float).reshape(3, 3)
    
    def multiply(self, other: 'Matrix3') -> 'Matrix3':
        """Matrix product self * other (other is applied to points first)."""
        return Matrix3.from_array(self.as_array() @ other.as_array())
    
    __matmul__ = multiply
    
    def determinant(self) -> float:
        return float(np.linalg.det(self.as_array()))
    
    def inverse(self) -> 'Matrix3':
        """
        Exact inverse.
        
        A singular matrix has no inverse; in that case a warning is logged
        and the identity is returned so callers keep a usable transform.
        """
        if abs(self.determinant()) < EPSILON:
            logger.warning(f"Matrix3.inverse: singular matrix {self}, returning identity")
            return Matrix3.identity()
        return Matrix3.from_array(np.linalg.inv(self.as_array()))
    
    def transform_point(self, point: Vector2) -> Vector2:
        e = self.elements
        return Vector2(
            e[0] * point.x + e[1] * point.y + e[2],
            e[3] * point.x + e[4] * point.y + e[5]
        )
    
    def is_identity(self, epsilon: float = EPSILON) -> bool:
        return all(abs(a - b) < epsilon for a, b in zip(self.elements, _IDENTITY))
    
    def to_list(self) -> List[float]:
        return list(self.elements)
    
    def __str__(self) -> str:
        return f"Matrix3[{', '.join(str(v) for v in self.elements)}]"
