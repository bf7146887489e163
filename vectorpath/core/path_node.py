"""
Path nodes: an anchor position with absolute incoming/outgoing handles.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import UnsupportedInputError
from ..geometry.matrix3 import Matrix3
from ..geometry.vector2 import Vector2
from .ids import new_id


class NodeType(Enum):
    """
    How editing tools keep the two handles related.
    
    The kernel stores the type but never enforces it.
    """
    CORNER = "corner"        # Handles are independent
    SMOOTH = "smooth"        # Handles are collinear, length independent
    SYMMETRIC = "symmetric"  # Handles are collinear and equal length
    
    @classmethod
    def parse(cls, value: str) -> 'NodeType':
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedInputError(f"Unknown node type: {value!r}") from None


@dataclass(frozen=True)
class NodeUpdate:
    """Fields of a PathNode that an edit may change. None leaves a field as is."""
    position: Optional[Vector2] = None
    handle_in: Optional[Vector2] = None
    handle_out: Optional[Vector2] = None
    type: Optional[NodeType] = None


@dataclass(frozen=True)
class PathNode:
    """
    A path anchor.
    
    Handles are absolute positions; a handle equal to the position means
    the adjoining curve leaves or enters the node without a tangent pull.
    """
    position: Vector2
    handle_in: Optional[Vector2] = None   # Defaults to position
    handle_out: Optional[Vector2] = None  # Defaults to position
    type: NodeType = NodeType.CORNER
    id: str = field(default_factory=new_id)
    
    def __post_init__(self):
        if self.handle_in is None:
            object.__setattr__(self, 'handle_in', self.position)
        if self.handle_out is None:
            object.__setattr__(self, 'handle_out', self.position)
    
    @staticmethod
    def corner(x: float, y: float, node_id: Optional[str] = None) -> 'PathNode':
        """Corner node with both handles collapsed onto the position."""
        pos = Vector2(x, y)
        if node_id is None:
            return PathNode(pos, pos, pos, NodeType.CORNER)
        return PathNode(pos, pos, pos, NodeType.CORNER, node_id)
    
    @property
    def has_handle_in(self) -> bool:
        return not self.handle_in.equals(self.position)
    
    @property
    def has_handle_out(self) -> bool:
        return not self.handle_out.equals(self.position)
    
    def update(self, changes: NodeUpdate) -> 'PathNode':
        """Copy with the given fields replaced; the id is kept."""
        return replace(
            self,
            position=changes.position if changes.position is not None else self.position,
            handle_in=changes.handle_in if changes.handle_in is not None else self.handle_in,
            handle_out=changes.handle_out if changes.handle_out is not None else self.handle_out,
            type=changes.type if changes.type is not None else self.type
        )
    
    def translate(self, delta: Vector2) -> 'PathNode':
        """Move the anchor and both handles together."""
        return replace(
            self,
            position=self.position.add(delta),
            handle_in=self.handle_in.add(delta),
            handle_out=self.handle_out.add(delta)
        )
    
    def transform(self, matrix: Matrix3) -> 'PathNode':
        return replace(
            self,
            position=matrix.transform_point(self.position),
            handle_in=matrix.transform_point(self.handle_in),
            handle_out=matrix.transform_point(self.handle_out)
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary; collapsed handles are omitted."""
        data = {
            'id': self.id,
            'x': self.position.x,
            'y': self.position.y,
            'type': self.type.value
        }
        if self.has_handle_in:
            data['in_x'] = self.handle_in.x
            data['in_y'] = self.handle_in.y
        if self.has_handle_out:
            data['out_x'] = self.handle_out.x
            data['out_y'] = self.handle_out.y
        return data
    
    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'PathNode':
        """
        Build a node from to_dict() output.
        
        Raises:
            UnsupportedInputError: if required keys are missing or not numeric
        """
        try:
            pos = Vector2(float(data['x']), float(data['y']))
            handle_in = pos
            if 'in_x' in data and 'in_y' in data:
                handle_in = Vector2(float(data['in_x']), float(data['in_y']))
            handle_out = pos
            if 'out_x' in data and 'out_y' in data:
                handle_out = Vector2(float(data['out_x']), float(data['out_y']))
            node_type = NodeType.parse(data.get('type', NodeType.CORNER.value))
        except (KeyError, TypeError, ValueError) as e:
            raise UnsupportedInputError(f"Invalid path node data: {e}") from e
        
        node_id = data.get('id')
        if node_id is None:
            return PathNode(pos, handle_in, handle_out, node_type)
        return PathNode(pos, handle_in, handle_out, node_type, str(node_id))
