"""
VectorPath Core Module

Contains the editable data structures:
- PathNode: Anchor with absolute handles and a node type
- Path: Ordered node sequence, curve extraction and containment
- ids: Injectable id generation
"""

# Import order matters - ids first, then nodes, then paths
from .ids import (
    IdGenerator, UuidIdGenerator, CounterIdGenerator,
    new_id, get_id_generator, set_id_generator
)
from .path_node import PathNode, NodeType, NodeUpdate
from .path import Path

__all__ = [
    'IdGenerator', 'UuidIdGenerator', 'CounterIdGenerator',
    'new_id', 'get_id_generator', 'set_id_generator',
    'PathNode', 'NodeType', 'NodeUpdate',
    'Path',
]
