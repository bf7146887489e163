"""
VectorPath Geometry Module

Leaf math types of the kernel:
- Vector2: Immutable 2D point/vector
- Matrix3: Affine transform
- Rect: Axis-aligned bounding box
- LineSegment: Projection and exact segment intersection
- CubicBezier: Evaluation, subdivision, bounds and curve intersection
"""

# Import order matters - vectors first, then the types built on them
from .math_utils import equals, clamp, lerp, to_rad, to_deg, round_to
from .vector2 import Vector2
from .matrix3 import Matrix3
from .rect import Rect
from .line_segment import LineSegment
from .bezier import CubicBezier, Intersection

__all__ = [
    'equals', 'clamp', 'lerp', 'to_rad', 'to_deg', 'round_to',
    'Vector2', 'Matrix3', 'Rect', 'LineSegment',
    'CubicBezier', 'Intersection',
]
