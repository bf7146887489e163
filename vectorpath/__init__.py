"""
VectorPath - geometry kernel for node-based vector path editing.

Cubic Bezier curves, node paths, point containment, curve-curve
intersection and boolean union/subtraction of closed shapes.
"""

__version__ = "0.1.0"

from .errors import VectorPathError, GeometricDegeneracyError, UnsupportedInputError
from .config import BooleanSettings, GeometryTolerances, DEFAULT_TOLERANCES
from .geometry import (
    Vector2, Matrix3, Rect, LineSegment, CubicBezier, Intersection
)
from .core import Path, PathNode, NodeType, NodeUpdate
from .ops import BooleanOps, BooleanOperation, union, subtract, find_hit

__all__ = [
    'VectorPathError', 'GeometricDegeneracyError', 'UnsupportedInputError',
    'BooleanSettings', 'GeometryTolerances', 'DEFAULT_TOLERANCES',
    'Vector2', 'Matrix3', 'Rect', 'LineSegment', 'CubicBezier', 'Intersection',
    'Path', 'PathNode', 'NodeType', 'NodeUpdate',
    'BooleanOps', 'BooleanOperation', 'union', 'subtract', 'find_hit',
]
