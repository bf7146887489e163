"""
Boolean Operations on Closed Paths

Union and subtraction of two closed curved shapes:

1. Turn B to run the same way round as A
2. Intersect every curve of A with every curve of B
3. Split both paths at the hits into curve segments
4. Classify each segment as inside/outside the other path
5. Keep (and orient) the segments the operation needs
6. Stitch the survivors back into closed loops

Every call is a pure function of its inputs. Open input, tangential hits
and stitching dead ends degrade to an empty or partial result instead of
raising.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union
import logging

from ..config import BooleanSettings
from ..core.ids import IdGenerator, get_id_generator
from ..core.path import Path
from ..core.path_node import PathNode, NodeType
from ..errors import UnsupportedInputError
from ..geometry.bezier import CubicBezier

logger = logging.getLogger(__name__)


class Operand(Enum):
    """Which input path a segment came from."""
    A = 0
    B = 1


class BooleanOperation(Enum):
    UNION = "union"
    SUBTRACT = "subtract"
    
    @classmethod
    def parse(cls, value: Union['BooleanOperation', str]) -> 'BooleanOperation':
        if isinstance(value, BooleanOperation):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedInputError(f"Unknown boolean operation: {value!r}") from None


@dataclass(frozen=True)
class CurveHit:
    """An intersection parameter on one curve of a path."""
    curve_index: int
    t: float


@dataclass(frozen=True)
class CurveSegment:
    """
    A piece [t1, t2] of one source curve, transient to a single operation.
    
    inside_other tells whether the piece lies inside the other operand.
    """
    curve: CubicBezier
    t1: float
    t2: float
    source: Operand
    curve_index: int
    inside_other: bool = False
    
    @property
    def start(self):
        return self.curve.p0
    
    @property
    def end(self):
        return self.curve.p3
    
    def reversed(self) -> 'CurveSegment':
        """Opposite direction: curve control points and [t1, t2] both swapped."""
        return replace(self, curve=self.curve.reverse(), t1=self.t2, t2=self.t1)


# Keep predicate: (inside_a, inside_b, from_a) -> keep
SegmentFilter = Callable[[bool, bool, bool], bool]


def _union_filter(inside_a: bool, inside_b: bool, from_a: bool) -> bool:
    # Keep A outside B, keep B outside A
    if from_a:
        return not inside_b
    return not inside_a


def _subtract_filter(inside_a: bool, inside_b: bool, from_a: bool) -> bool:
    # Keep A outside B, keep B inside A (the cut edge)
    if from_a:
        return not inside_b
    return inside_a


_FILTERS: Dict[BooleanOperation, SegmentFilter] = {
    BooleanOperation.UNION: _union_filter,
    BooleanOperation.SUBTRACT: _subtract_filter,
}


# --- Pipeline steps ---

def match_winding(path_a: Path, path_b: Path) -> Path:
    """
    path_b, reversed if it winds opposite to path_a.
    
    Stitching chains segment ends to segment starts, so both operands must
    run the same way round. A zero-area operand is left as is.
    """
    area_a = path_a.signed_area()
    area_b = path_b.signed_area()
    if area_a * area_b < 0:
        logger.debug(f"Reversing path {path_b.id} to match the winding of {path_a.id}")
        return path_b.reversed()
    return path_b


def compute_intersections(path_a: Path, path_b: Path,
                          threshold: float = 0.1,
                          max_depth: int = 12) -> Tuple[List[CurveHit], List[CurveHit]]:
    """
    Intersect every curve of path_a with every curve of path_b.
    
    Returns:
        (hits on path_a, hits on path_b), one entry per intersection on each
    """
    curves_a = path_a.to_curves()
    curves_b = path_b.to_curves()
    hits_a: List[CurveHit] = []
    hits_b: List[CurveHit] = []
    
    for i, curve_a in enumerate(curves_a):
        for j, curve_b in enumerate(curves_b):
            for hit in curve_a.intersects(curve_b, threshold, max_depth):
                hits_a.append(CurveHit(i, hit.t1))
                hits_b.append(CurveHit(j, hit.t2))
    
    return hits_a, hits_b


def split_parameters(ts: List[float], parameter_merge: float = 1e-5) -> List[float]:
    """
    Sorted split parameters for one curve, always bounded by 0 and 1.
    
    Parameters within parameter_merge of each other or of either end are
    dropped.
    """
    params = [0.0]
    for t in sorted(ts):
        if t <= parameter_merge or t >= 1.0 - parameter_merge:
            continue
        if t - params[-1] > parameter_merge:
            params.append(t)
    params.append(1.0)
    return params


def extract_sub_curve(curve: CubicBezier, t_start: float, t_end: float) -> CubicBezier:
    """
    The part of curve between t_start and t_end as its own [0, 1] curve.
    
    Splits at t_start, then splits the remainder at the renormalized end.
    """
    remainder = curve if t_start <= 0.0 else curve.split(t_start)[1]
    if t_end >= 1.0:
        return remainder
    return remainder.split((t_end - t_start) / (1.0 - t_start))[0]


def split_path(path: Path, hits: List[CurveHit], source: Operand,
               parameter_merge: float = 1e-5) -> List[CurveSegment]:
    """Cut each curve of path at its hit parameters."""
    by_curve: Dict[int, List[float]] = {}
    for hit in hits:
        by_curve.setdefault(hit.curve_index, []).append(hit.t)
    
    segments: List[CurveSegment] = []
    for index, curve in enumerate(path.to_curves()):
        params = split_parameters(by_curve.get(index, []), parameter_merge)
        for t_start, t_end in zip(params, params[1:]):
            segments.append(CurveSegment(
                curve=extract_sub_curve(curve, t_start, t_end),
                t1=t_start,
                t2=t_end,
                source=source,
                curve_index=index
            ))
    return segments


def classify_segments(segments: List[CurveSegment], other: Path) -> List[CurveSegment]:
    """Mark each segment by whether its midpoint lies inside other."""
    return [
        replace(seg, inside_other=other.contains_point(seg.curve.evaluate(0.5)))
        for seg in segments
    ]


def filter_segments(segments: List[CurveSegment],
                    operation: BooleanOperation) -> List[CurveSegment]:
    """
    Keep the segments that bound the result of operation.
    
    For subtraction the kept B segments are reversed so they run in the
    direction of the surrounding A boundary. Both operands are expected to
    wind the same way (see match_winding).
    """
    keep = _FILTERS[operation]
    kept: List[CurveSegment] = []
    for seg in segments:
        from_a = seg.source is Operand.A
        inside_a = seg.inside_other and not from_a
        inside_b = seg.inside_other and from_a
        if not keep(inside_a, inside_b, from_a):
            continue
        if operation is BooleanOperation.SUBTRACT and not from_a:
            seg = seg.reversed()
        kept.append(seg)
    return kept


def _loop_to_path(loop: List[CurveSegment], id_generator: IdGenerator) -> Path:
    nodes = []
    for i, seg in enumerate(loop):
        previous = loop[i - 1]
        nodes.append(PathNode(
            position=seg.curve.p0,
            handle_in=previous.curve.p2,
            handle_out=seg.curve.p1,
            type=NodeType.CORNER,
            id=id_generator()
        ))
    return Path(tuple(nodes), closed=True, id=id_generator())


def reconstruct_paths(segments: List[CurveSegment],
                      stitch_tolerance_sq: float = 0.01,
                      id_generator: Optional[IdGenerator] = None) -> List[Path]:
    """
    Greedily trace closed loops through segments.
    
    Each loop starts at the first unvisited segment and repeatedly appends
    the unvisited segment whose start is nearest to the current end (within
    stitch_tolerance_sq, squared distance) until the loop returns to its own
    start. A loop that runs out of continuations is dropped and logged;
    loops found before and after it are still returned.
    
    Returns:
        New closed paths with fresh ids
    """
    if id_generator is None:
        id_generator = get_id_generator()
    
    visited = [False] * len(segments)
    paths: List[Path] = []
    
    for start_index, first in enumerate(segments):
        if visited[start_index]:
            continue
        visited[start_index] = True
        loop = [first]
        loop_start = first.start
        
        while True:
            current_end = loop[-1].end
            if len(loop) > 1 and current_end.distance_to_sq(loop_start) < stitch_tolerance_sq:
                paths.append(_loop_to_path(loop, id_generator))
                break
            
            next_index = None
            best_dist = stitch_tolerance_sq
            for j, candidate in enumerate(segments):
                if visited[j]:
                    continue
                dist = candidate.start.distance_to_sq(current_end)
                if dist < best_dist:
                    best_dist = dist
                    next_index = j
            
            if next_index is None:
                logger.warning(
                    f"Discarding open loop of {len(loop)} segment(s): "
                    f"no continuation from ({current_end.x:.3f}, {current_end.y:.3f})"
                )
                break
            
            visited[next_index] = True
            loop.append(segments[next_index])
    
    return paths


# --- Operations ---

class BooleanOps:
    """
    Boolean operations between two closed paths.
    
    Holds only configuration; every call is independent.
    """
    
    def __init__(self, settings: Optional[BooleanSettings] = None,
                 id_generator: Optional[IdGenerator] = None):
        self.settings = settings or BooleanSettings()
        is_valid, error = self.settings.validate()
        if not is_valid:
            raise UnsupportedInputError(error)
        self.id_generator = id_generator
    
    def union(self, path_a: Path, path_b: Path) -> List[Path]:
        """Area covered by either path."""
        return self.apply(BooleanOperation.UNION, path_a, path_b)
    
    def subtract(self, path_a: Path, path_b: Path) -> List[Path]:
        """Area of path_a not covered by path_b; a contained B becomes a hole loop."""
        return self.apply(BooleanOperation.SUBTRACT, path_a, path_b)
    
    def apply(self, operation: Union[BooleanOperation, str],
              path_a: Path, path_b: Path) -> List[Path]:
        """
        Run operation on two closed paths.
        
        Returns:
            New paths (possibly empty); empty when either input is open
        """
        operation = BooleanOperation.parse(operation)
        settings = self.settings
        
        if not path_a.closed or not path_b.closed:
            logger.debug(f"{operation.value}: open input path, nothing to do")
            return []
        
        if settings.bake_transforms:
            path_a = path_a.apply_transform()
            path_b = path_b.apply_transform()
        path_b = match_winding(path_a, path_b)
        
        hits_a, hits_b = compute_intersections(
            path_a, path_b, settings.merge_threshold, settings.max_depth
        )
        segments_a = classify_segments(
            split_path(path_a, hits_a, Operand.A, settings.parameter_merge), path_b
        )
        segments_b = classify_segments(
            split_path(path_b, hits_b, Operand.B, settings.parameter_merge), path_a
        )
        kept = filter_segments(segments_a + segments_b, operation)
        paths = reconstruct_paths(
            kept, settings.stitch_tolerance_sq,
            self.id_generator or get_id_generator()
        )
        
        logger.debug(
            f"{operation.value}: {len(hits_a)} hits, "
            f"{len(segments_a) + len(segments_b)} segments, "
            f"{len(kept)} kept, {len(paths)} loops"
        )
        return paths


def union(path_a: Path, path_b: Path, settings: Optional[BooleanSettings] = None,
          id_generator: Optional[IdGenerator] = None) -> List[Path]:
    return BooleanOps(settings, id_generator).union(path_a, path_b)


def subtract(path_a: Path, path_b: Path, settings: Optional[BooleanSettings] = None,
             id_generator: Optional[IdGenerator] = None) -> List[Path]:
    return BooleanOps(settings, id_generator).subtract(path_a, path_b)
