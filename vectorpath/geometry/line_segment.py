"""
Straight line segment: point projection and segment-segment intersection.

Flat Bezier sub-curves are reduced to their chords and intersected here,
which makes this the base case of curve subdivision.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import EPSILON
from .math_utils import clamp
from .vector2 import Vector2


@dataclass(frozen=True)
class LineSegment:
    """A segment from start to end."""
    start: Vector2
    end: Vector2
    
    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)
    
    @property
    def length_sq(self) -> float:
        return self.start.distance_to_sq(self.end)
    
    @property
    def direction(self) -> Vector2:
        return self.end.sub(self.start).normalize()
    
    def point_at(self, t: float) -> Vector2:
        """Point at parameter t (0 = start, 1 = end)."""
        return self.start.lerp(self.end, t)
    
    def project_point(self, point: Vector2) -> Vector2:
        """
        Closest point on the segment to point.
        
        The projection parameter onto the infinite line is clamped to [0, 1]
        so points beyond either end snap to that endpoint.
        """
        l2 = self.length_sq
        if l2 == 0:
            return self.start
        d = self.end.sub(self.start)
        t = point.sub(self.start).dot(d) / l2
        return self.start.add(d.mul(clamp(t, 0.0, 1.0)))
    
    def distance_to_point_sq(self, point: Vector2) -> float:
        return point.distance_to_sq(self.project_point(point))
    
    def distance_to_point(self, point: Vector2) -> float:
        return point.distance_to(self.project_point(point))
    
    def intersects(self, other: 'LineSegment') -> Optional[Tuple[Vector2, float, float]]:
        """
        Exact intersection with another segment (cross-product method).
        
        Solves start + t*r = other.start + u*s.
        
        Returns:
            (point, t, u) with t on this segment and u on other, both in
            [0, 1]; None when the segments miss each other or are parallel
            or collinear (no determinate crossing).
        """
        r = self.end.sub(self.start)
        s = other.end.sub(other.start)
        denom = r.cross(s)
        if abs(denom) < EPSILON:
            return None
        
        qp = other.start.sub(self.start)
        t = qp.cross(s) / denom
        u = qp.cross(r) / denom
        
        if t < -EPSILON or t > 1 + EPSILON or u < -EPSILON or u > 1 + EPSILON:
            return None
        
        t = clamp(t, 0.0, 1.0)
        u = clamp(u, 0.0, 1.0)
        return self.point_at(t), t, u
