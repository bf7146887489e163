"""
Axis-aligned bounding box used to prune expensive geometric tests.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .vector2 import Vector2


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box defined by its min and max corners."""
    min: Vector2 = field(default_factory=Vector2.zero)
    max: Vector2 = field(default_factory=Vector2.zero)
    
    @staticmethod
    def empty() -> 'Rect':
        """The zero-area box at the origin, returned for empty geometry."""
        return Rect()
    
    @staticmethod
    def from_points(points: Iterable[Vector2]) -> 'Rect':
        points = list(points)
        if not points:
            return Rect.empty()
        return Rect(
            Vector2(min(p.x for p in points), min(p.y for p in points)),
            Vector2(max(p.x for p in points), max(p.y for p in points))
        )
    
    @property
    def x(self) -> float:
        return self.min.x
    
    @property
    def y(self) -> float:
        return self.min.y
    
    @property
    def width(self) -> float:
        return self.max.x - self.min.x
    
    @property
    def height(self) -> float:
        return self.max.y - self.min.y
    
    @property
    def center(self) -> Vector2:
        return self.min.add(self.max).mul(0.5)
    
    def contains(self, point: Vector2) -> bool:
        """Check if point is inside the box (edges included)."""
        return (self.min.x <= point.x <= self.max.x and
                self.min.y <= point.y <= self.max.y)
    
    def intersects(self, other: 'Rect') -> bool:
        """Check if two boxes overlap; touching edges count as overlap."""
        return (self.min.x <= other.max.x and self.max.x >= other.min.x and
                self.min.y <= other.max.y and self.max.y >= other.min.y)
    
    def union(self, other: 'Rect') -> 'Rect':
        return Rect(
            Vector2(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            Vector2(max(self.max.x, other.max.x), max(self.max.y, other.max.y))
        )
    
    def expand(self, amount: float) -> 'Rect':
        """Grow the box by amount on every side."""
        return Rect(self.min.sub(amount), self.max.add(amount))
    
    def __str__(self) -> str:
        return f"Rect(min:{self.min}, max:{self.max})"
