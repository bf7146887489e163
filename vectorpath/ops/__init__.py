"""
VectorPath Operations Module

Queries and transforms over paths:
- Boolean union / subtraction of closed paths
- Hit testing of nodes, handles and curves
"""

from .boolean_ops import (
    BooleanOps, BooleanOperation, CurveSegment, CurveHit, Operand,
    union, subtract,
    compute_intersections, match_winding, split_path, classify_segments,
    filter_segments, reconstruct_paths
)
from .hit_test import find_hit, HitResult, HitKind

__all__ = [
    # Boolean operations
    'BooleanOps', 'BooleanOperation', 'CurveSegment', 'CurveHit', 'Operand',
    'union', 'subtract',
    'compute_intersections', 'match_winding', 'split_path', 'classify_segments',
    'filter_segments', 'reconstruct_paths',
    # Hit testing
    'find_hit', 'HitResult', 'HitKind',
]
