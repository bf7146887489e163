"""
VectorPath Path

An ordered, immutable sequence of nodes that defines connected cubic
curves, optionally closed back to its first node.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

import numpy as np

from ..errors import UnsupportedInputError
from ..geometry.bezier import CubicBezier
from ..geometry.matrix3 import Matrix3
from ..geometry.rect import Rect
from ..geometry.vector2 import Vector2
from .ids import new_id
from .path_node import PathNode

# How far past the right edge of the bounds the containment ray extends
RAY_OVERSHOOT = 1000.0


@dataclass(frozen=True)
class Path:
    """
    A node-based path.
    
    Every edit returns a new Path with the same id; the transform is
    carried along but not applied by curve extraction (see apply_transform).
    """
    nodes: Tuple[PathNode, ...] = ()
    closed: bool = False
    transform: Matrix3 = field(default_factory=Matrix3.identity)
    id: str = field(default_factory=new_id)
    
    def __post_init__(self):
        object.__setattr__(self, 'nodes', tuple(self.nodes))
    
    def __len__(self) -> int:
        return len(self.nodes)
    
    @property
    def length(self) -> int:
        """Number of nodes."""
        return len(self.nodes)
    
    # --- Geometry ---
    
    def to_curves(self) -> List[CubicBezier]:
        """
        Convert the path to cubic curves.
        
        One curve per consecutive node pair, plus one from the last node
        back to the first when the path is closed. Fewer than 2 nodes
        produce no curves.
        """
        curves: List[CubicBezier] = []
        if len(self.nodes) < 2:
            return curves
        
        for current, following in zip(self.nodes, self.nodes[1:]):
            curves.append(CubicBezier(
                current.position, current.handle_out,
                following.handle_in, following.position
            ))
        
        if self.closed:
            last = self.nodes[-1]
            first = self.nodes[0]
            curves.append(CubicBezier(
                last.position, last.handle_out,
                first.handle_in, first.position
            ))
        
        return curves
    
    def get_bounding_box(self) -> Rect:
        curves = self.to_curves()
        if not curves:
            if len(self.nodes) == 1:
                p = self.nodes[0].position
                return Rect(p, p)
            return Rect.empty()
        
        bounds = curves[0].get_bounding_box()
        for curve in curves[1:]:
            bounds = bounds.union(curve.get_bounding_box())
        return bounds
    
    def contains_point(self, point: Vector2) -> bool:
        """
        Even-odd containment test by ray casting.
        
        A flat curve is cast from point to the right, past the bounding
        box, and crossings to the right of point are counted; an odd count
        means inside. Open paths contain nothing. Rays grazing a vertex or
        running along a horizontal edge can miscount.
        """
        if not self.closed:
            return False
        
        bounds = self.get_bounding_box()
        if not bounds.contains(point):
            return False
        
        ray_end = Vector2(bounds.max.x + RAY_OVERSHOOT, point.y)
        ray = CubicBezier(
            point,
            point.lerp(ray_end, 1 / 3),
            point.lerp(ray_end, 2 / 3),
            ray_end
        )
        
        crossings = 0
        for curve in self.to_curves():
            for hit in curve.intersects(ray):
                if hit.point.x > point.x:
                    crossings += 1
        
        return crossings % 2 == 1
    
    def signed_area(self, tolerance: float = 0.01) -> float:
        """
        Shoelace area of the flattened outline, closed implicitly.
        
        Positive when the nodes run counter-clockwise in a y-up frame
        (clockwise on a y-down canvas); the sign flips under reversed().
        Fewer than 3 outline points give 0.0.
        """
        points = self.flatten(tolerance)
        if len(points) < 3:
            return 0.0
        xy = np.array([p.to_tuple() for p in points], dtype=float)
        x = xy[:, 0]
        y = xy[:, 1]
        return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))
    
    def flatten(self, tolerance: float = 0.01) -> List[Vector2]:
        """
        Approximate the path by a polyline.
        
        Closed paths end with a copy of their first point.
        """
        curves = self.to_curves()
        if not curves:
            return [node.position for node in self.nodes]
        
        points = [curves[0].p0]
        for curve in curves:
            points.extend(curve.flatten(tolerance)[1:])
        return points
    
    # --- Immutable edits ---
    
    def add_node(self, node: PathNode) -> 'Path':
        return replace(self, nodes=self.nodes + (node,))
    
    def insert_node(self, index: int, node: PathNode) -> 'Path':
        nodes = list(self.nodes)
        nodes.insert(index, node)
        return replace(self, nodes=tuple(nodes))
    
    def remove_node(self, node_id: str) -> 'Path':
        return replace(self, nodes=tuple(n for n in self.nodes if n.id != node_id))
    
    def update_node(self, index: int, node: PathNode) -> 'Path':
        """Replace the node at index; an out-of-range index returns self."""
        if index < 0 or index >= len(self.nodes):
            return self
        nodes = list(self.nodes)
        nodes[index] = node
        return replace(self, nodes=tuple(nodes))
    
    def with_closed(self, closed: bool) -> 'Path':
        return replace(self, closed=closed)
    
    def with_transform(self, transform: Matrix3) -> 'Path':
        return replace(self, transform=transform)
    
    def apply_transform(self) -> 'Path':
        """Bake the transform into node coordinates and reset it to identity."""
        if self.transform.is_identity():
            return self
        return replace(
            self,
            nodes=tuple(node.transform(self.transform) for node in self.nodes),
            transform=Matrix3.identity()
        )
    
    def reversed(self) -> 'Path':
        """Same outline traversed in the opposite direction."""
        nodes = tuple(
            replace(node, handle_in=node.handle_out, handle_out=node.handle_in)
            for node in reversed(self.nodes)
        )
        return replace(self, nodes=nodes)
    
    # --- Serialization ---
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert Path to dictionary."""
        return {
            'id': self.id,
            'nodes': [node.to_dict() for node in self.nodes],
            'closed': self.closed,
            'transform': self.transform.to_list()
        }
    
    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Path':
        """
        Convert dictionary to Path.
        
        Raises:
            UnsupportedInputError: if the data does not describe a path
        """
        try:
            nodes = tuple(PathNode.from_dict(n) for n in data['nodes'])
            closed = bool(data.get('closed', False))
            transform_data = data.get('transform')
            transform = (Matrix3.from_list(transform_data)
                         if transform_data is not None else Matrix3.identity())
        except (KeyError, TypeError) as e:
            raise UnsupportedInputError(f"Invalid path data: {e}") from e
        
        path_id = data.get('id')
        if path_id is None:
            return Path(nodes, closed, transform)
        return Path(nodes, closed, transform, str(path_id))
