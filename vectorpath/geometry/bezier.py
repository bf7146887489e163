"""
Cubic Bezier curves.

Evaluation, exact de Casteljau subdivision, tight bounding boxes, flattening
and curve-curve intersection by adaptive subdivision.
"""

from dataclasses import dataclass
from typing import List, Tuple
import math

import numpy as np

from ..config import EPSILON, DEFAULT_MERGE_THRESHOLD, DEFAULT_MAX_DEPTH
from .line_segment import LineSegment
from .math_utils import clamp
from .matrix3 import Matrix3
from .rect import Rect
from .vector2 import Vector2


@dataclass(frozen=True)
class Intersection:
    """A crossing point with its parameter on each of the two curves."""
    point: Vector2
    t1: float
    t2: float


def _extrema_parameters(p0: float, p1: float, p2: float, p3: float) -> List[float]:
    """
    Roots in (0, 1) of one coordinate's derivative.
    
    x'(t) = a*t^2 + b*t + c with
    a = 3(-p0 + 3p1 - 3p2 + p3), b = 6(p0 - 2p1 + p2), c = 3(p1 - p0).
    A near-zero leading coefficient falls back to the linear equation.
    """
    a = 3 * (-p0 + 3 * p1 - 3 * p2 + p3)
    b = 6 * (p0 - 2 * p1 + p2)
    c = 3 * (p1 - p0)
    
    if abs(a) < EPSILON:
        if abs(b) < EPSILON:
            return []
        candidates = [-c / b]
    else:
        disc = b * b - 4 * a * c
        if disc < 0:
            return []
        s = math.sqrt(disc)
        candidates = [(-b + s) / (2 * a), (-b - s) / (2 * a)]
    
    return [t for t in candidates if 0 < t < 1]


def _merge_close(hits: List[Intersection], threshold: float) -> List[Intersection]:
    """Drop hits closer than threshold to an already accepted one (first wins)."""
    threshold_sq = threshold * threshold
    unique: List[Intersection] = []
    for hit in hits:
        if all(hit.point.distance_to_sq(u.point) >= threshold_sq for u in unique):
            unique.append(hit)
    return unique


def _refine_crossing(c1: 'CubicBezier', c2: 'CubicBezier',
                     u1: float, u2: float, iterations: int = 8) -> Tuple[float, float]:
    """
    Newton iteration on c1(u1) - c2(u2) = 0 from a chord estimate.
    
    Stops when the tangents are parallel (no determinate crossing) or the
    parameters leave the neighbourhood of the sub-curves; the pair with the
    smallest gap seen is returned.
    """
    best = (u1, u2)
    best_gap = c1.evaluate(u1).distance_to_sq(c2.evaluate(u2))
    
    for _ in range(iterations):
        if best_gap < EPSILON * EPSILON:
            break
        diff = c1.evaluate(u1).sub(c2.evaluate(u2))
        d1 = c1.derivative(u1)
        d2 = c2.derivative(u2)
        det = -d1.cross(d2)
        if abs(det) < EPSILON:
            break
        u1 += diff.cross(d2) / det
        u2 += diff.cross(d1) / det
        if not (-1.0 <= u1 <= 2.0 and -1.0 <= u2 <= 2.0):
            break
        gap = c1.evaluate(u1).distance_to_sq(c2.evaluate(u2))
        if gap < best_gap:
            best = (u1, u2)
            best_gap = gap
    
    return best


@dataclass(frozen=True)
class CubicBezier:
    """
    Cubic Bezier curve defined by 4 control points.
    
    p0: start point
    p1: first control point
    p2: second control point
    p3: end point
    """
    p0: Vector2
    p1: Vector2
    p2: Vector2
    p3: Vector2
    
    @property
    def start(self) -> Vector2:
        return self.p0
    
    @property
    def end(self) -> Vector2:
        return self.p3
    
    @property
    def points(self) -> Tuple[Vector2, Vector2, Vector2, Vector2]:
        return (self.p0, self.p1, self.p2, self.p3)
    
    # --- Evaluation ---
    
    def evaluate(self, t: float) -> Vector2:
        """
        Point at parameter t.
        
        B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3
        """
        mt = 1 - t
        mt2 = mt * mt
        mt3 = mt2 * mt
        t2 = t * t
        t3 = t2 * t
        return Vector2(
            self.p0.x * mt3 + self.p1.x * 3 * mt2 * t + self.p2.x * 3 * mt * t2 + self.p3.x * t3,
            self.p0.y * mt3 + self.p1.y * 3 * mt2 * t + self.p2.y * 3 * mt * t2 + self.p3.y * t3
        )
    
    def derivative(self, t: float) -> Vector2:
        """
        Unnormalized first derivative.
        
        The derivative is a quadratic Bezier with control points
        3(p1-p0), 3(p2-p1), 3(p3-p2).
        """
        mt = 1 - t
        d0 = self.p1.sub(self.p0).mul(3)
        d1 = self.p2.sub(self.p1).mul(3)
        d2 = self.p3.sub(self.p2).mul(3)
        return Vector2(
            d0.x * mt * mt + d1.x * 2 * mt * t + d2.x * t * t,
            d0.y * mt * mt + d1.y * 2 * mt * t + d2.y * t * t
        )
    
    def second_derivative(self, t: float) -> Vector2:
        a = self.p2.sub(self.p1.mul(2)).add(self.p0)
        b = self.p3.sub(self.p2.mul(2)).add(self.p1)
        return a.mul(6 * (1 - t)).add(b.mul(6 * t))
    
    def tangent(self, t: float) -> Vector2:
        """Unit tangent at t, or the zero vector where the derivative vanishes."""
        return self.derivative(t).normalize()
    
    def sample(self, count: int) -> np.ndarray:
        """
        Evaluate the curve at count evenly spaced parameters in [0, 1].
        
        Returns:
            (count, 2) float array of points
        """
        ts = np.linspace(0.0, 1.0, count)
        mt = 1.0 - ts
        basis = np.stack([mt ** 3, 3 * mt ** 2 * ts, 3 * mt * ts ** 2, ts ** 3], axis=1)
        control = np.array([p.to_tuple() for p in self.points], dtype=float)
        return basis @ control
    
    # --- Subdivision ---
    
    def split(self, t: float) -> Tuple['CubicBezier', 'CubicBezier']:
        """Split at t into (left, right), each reparametrized to [0, 1]."""
        p01 = self.p0.lerp(self.p1, t)
        p12 = self.p1.lerp(self.p2, t)
        p23 = self.p2.lerp(self.p3, t)
        
        p012 = p01.lerp(p12, t)
        p123 = p12.lerp(p23, t)
        
        p0123 = p012.lerp(p123, t)
        
        return (CubicBezier(self.p0, p01, p012, p0123),
                CubicBezier(p0123, p123, p23, self.p3))
    
    def reverse(self) -> 'CubicBezier':
        return CubicBezier(self.p3, self.p2, self.p1, self.p0)
    
    def transform(self, matrix: Matrix3) -> 'CubicBezier':
        return CubicBezier(*(matrix.transform_point(p) for p in self.points))
    
    # --- Bounds and shape tests ---
    
    def get_bounding_box(self) -> Rect:
        """
        Tightest axis-aligned box containing the curve on [0, 1].
        
        Starts from the endpoints and folds in every axis-local extremum,
        found where the derivative of that coordinate is zero.
        """
        min_x = min(self.p0.x, self.p3.x)
        max_x = max(self.p0.x, self.p3.x)
        min_y = min(self.p0.y, self.p3.y)
        max_y = max(self.p0.y, self.p3.y)
        
        for t in _extrema_parameters(self.p0.x, self.p1.x, self.p2.x, self.p3.x):
            x = self.evaluate(t).x
            min_x = min(min_x, x)
            max_x = max(max_x, x)
        
        for t in _extrema_parameters(self.p0.y, self.p1.y, self.p2.y, self.p3.y):
            y = self.evaluate(t).y
            min_y = min(min_y, y)
            max_y = max(max_y, y)
        
        return Rect(Vector2(min_x, min_y), Vector2(max_x, max_y))
    
    def is_flat(self, tolerance: float = 0.5) -> bool:
        """True if both control points lie within tolerance of the chord p0-p3."""
        chord = LineSegment(self.p0, self.p3)
        tol_sq = tolerance * tolerance
        return (chord.distance_to_point_sq(self.p1) < tol_sq and
                chord.distance_to_point_sq(self.p2) < tol_sq)
    
    def closest_parameter(self, point: Vector2, initial_t: float,
                          iterations: int = 16) -> float:
        """
        Refine initial_t towards the parameter whose point is nearest to point.
        
        Guarded Newton iteration on (B(t) - P) . B'(t) = 0; the best
        parameter seen is returned, so the result is never worse than
        initial_t.
        """
        t = clamp(initial_t, 0.0, 1.0)
        best_t = t
        best_dist = self.evaluate(t).distance_to_sq(point)
        
        for _ in range(iterations):
            offset = self.evaluate(t).sub(point)
            d1 = self.derivative(t)
            numerator = offset.dot(d1)
            if abs(numerator) < EPSILON:
                break
            denominator = d1.dot(d1) + offset.dot(self.second_derivative(t))
            if abs(denominator) < EPSILON:
                break
            t = clamp(t - numerator / denominator, 0.0, 1.0)
            dist = self.evaluate(t).distance_to_sq(point)
            if dist < best_dist:
                best_t = t
                best_dist = dist
        
        return best_t
    
    # --- Intersection ---
    
    def intersects(self, other: 'CubicBezier',
                   threshold: float = DEFAULT_MERGE_THRESHOLD,
                   max_depth: int = DEFAULT_MAX_DEPTH) -> List[Intersection]:
        """
        Find intersection points with another cubic Bezier.
        
        Adaptive subdivision: pairs whose bounding boxes miss are pruned;
        once both halves are flat (or max_depth is exceeded) their chords
        are intersected exactly and the chord crossing is polished by Newton
        iteration on the two sub-curves; otherwise both curves are split at
        0.5 and all four sub-pairs are searched. Hits closer than threshold
        are merged, first found wins.
        
        Tangential contacts and shared endpoints are found best-effort only,
        and parallel chords report no crossing.
        
        Args:
            other: Curve to intersect with
            threshold: Flatness tolerance and merge distance
            max_depth: Subdivision depth cap
        
        Returns:
            Intersections with t1 on this curve and t2 on other
        """
        hits: List[Intersection] = []
        
        def subdivide(c1: 'CubicBezier', c2: 'CubicBezier',
                      range1: Tuple[float, float], range2: Tuple[float, float],
                      depth: int) -> None:
            if not c1.get_bounding_box().intersects(c2.get_bounding_box()):
                return
            
            if depth > max_depth or (c1.is_flat(threshold) and c2.is_flat(threshold)):
                crossing = LineSegment(c1.p0, c1.p3).intersects(LineSegment(c2.p0, c2.p3))
                if crossing is None:
                    return
                point, u1, u2 = crossing
                # Chord parameters differ from curve parameters when speed is non-uniform
                u1 = c1.closest_parameter(point, u1)
                u2 = c2.closest_parameter(point, u2)
                u1, u2 = _refine_crossing(c1, c2, u1, u2)
                hits.append(Intersection(
                    c1.evaluate(u1).lerp(c2.evaluate(u2), 0.5),
                    clamp(range1[0] + u1 * (range1[1] - range1[0]), 0.0, 1.0),
                    clamp(range2[0] + u2 * (range2[1] - range2[0]), 0.0, 1.0)
                ))
                return
            
            mid1 = (range1[0] + range1[1]) / 2
            mid2 = (range2[0] + range2[1]) / 2
            left1, right1 = c1.split(0.5)
            left2, right2 = c2.split(0.5)
            halves1 = ((left1, (range1[0], mid1)), (right1, (mid1, range1[1])))
            halves2 = ((left2, (range2[0], mid2)), (right2, (mid2, range2[1])))
            
            for sub1, sub_range1 in halves1:
                for sub2, sub_range2 in halves2:
                    subdivide(sub1, sub2, sub_range1, sub_range2, depth + 1)
        
        subdivide(self, other, (0.0, 1.0), (0.0, 1.0), 0)
        return _merge_close(hits, threshold)
    
    # --- Flattening ---
    
    def flatten(self, tolerance: float = 0.01, max_depth: int = 16) -> List[Vector2]:
        """
        Approximate the curve by a polyline using recursive subdivision.
        
        Returns:
            Points from p0 to p3 inclusive
        """
        def flat_enough(c: 'CubicBezier') -> bool:
            # Distance from control points to line p0-p3
            ux = 3 * c.p1.x - 2 * c.p0.x - c.p3.x
            uy = 3 * c.p1.y - 2 * c.p0.y - c.p3.y
            vx = 3 * c.p2.x - 2 * c.p3.x - c.p0.x
            vy = 3 * c.p2.y - 2 * c.p3.y - c.p0.y
            return max(ux * ux, vx * vx) + max(uy * uy, vy * vy) <= 16 * tolerance * tolerance
        
        def subdivide(c: 'CubicBezier', depth: int, points: List[Vector2]) -> None:
            if depth >= max_depth or flat_enough(c):
                points.append(c.p3)
            else:
                left, right = c.split(0.5)
                subdivide(left, depth + 1, points)
                subdivide(right, depth + 1, points)
        
        points = [self.p0]
        subdivide(self, 0, points)
        return points
