"""
Tests for boolean operations on closed paths.

Covers the individual pipeline steps (intersection, splitting,
classification, filtering, loop reconstruction) and the end-to-end
union/subtract results on squares and circles.
"""

import unittest

from vectorpath import BooleanSettings, DEFAULT_TOLERANCES
from vectorpath.core import CounterIdGenerator, Path, PathNode, NodeType
from vectorpath.errors import UnsupportedInputError
from vectorpath.geometry import CubicBezier, Matrix3, Vector2
from vectorpath.ops import (
    BooleanOps, BooleanOperation, CurveSegment, Operand,
    union, subtract,
    compute_intersections, match_winding, split_path, classify_segments,
    filter_segments, reconstruct_paths
)
from vectorpath.ops.boolean_ops import extract_sub_curve, split_parameters

KAPPA = 0.5522847498


def make_rect(x0, y0, x1, y1, closed=True):
    return Path((
        PathNode.corner(x0, y0),
        PathNode.corner(x1, y0),
        PathNode.corner(x1, y1),
        PathNode.corner(x0, y1),
    ), closed=closed)


def make_circle(cx, cy, r):
    k = r * KAPPA
    points = [(cx + r, cy), (cx, cy + r), (cx - r, cy), (cx, cy - r)]
    handles = [((0, -k), (0, k)), ((k, 0), (-k, 0)), ((0, k), (0, -k)), ((-k, 0), (k, 0))]
    nodes = []
    for (x, y), ((ix, iy), (ox, oy)) in zip(points, handles):
        pos = Vector2(x, y)
        nodes.append(PathNode(pos, pos.add(Vector2(ix, iy)), pos.add(Vector2(ox, oy)),
                              NodeType.SYMMETRIC))
    return Path(tuple(nodes), closed=True)


class BoundsAssertions:
    """Mixin for comparing path bounds."""
    
    def assertBounds(self, path, x0, y0, x1, y1, delta=1e-6):
        box = path.get_bounding_box()
        self.assertAlmostEqual(box.min.x, x0, delta=delta)
        self.assertAlmostEqual(box.min.y, y0, delta=delta)
        self.assertAlmostEqual(box.max.x, x1, delta=delta)
        self.assertAlmostEqual(box.max.y, y1, delta=delta)
    
    def assertContinuous(self, path, tolerance=0.1):
        """Each curve starts where the previous one ends, closing back on the first."""
        curves = path.to_curves()
        for prev, curve in zip(curves, curves[1:] + curves[:1]):
            self.assertLess(prev.p3.distance_to(curve.p0), tolerance)


class TestSplitting(unittest.TestCase):
    """Test split parameters and sub-curve extraction."""
    
    def test_split_parameters(self):
        self.assertEqual(split_parameters([]), [0.0, 1.0])
        self.assertEqual(split_parameters([0.7, 0.3]), [0.0, 0.3, 0.7, 1.0])
    
    def test_split_parameters_drop_ends_and_duplicates(self):
        params = split_parameters([1e-7, 0.5, 0.5 + 1e-7, 1 - 1e-7])
        self.assertEqual(params, [0.0, 0.5, 1.0])
    
    def test_extract_sub_curve(self):
        curve = CubicBezier(Vector2(0, 0), Vector2(2, 8), Vector2(9, 6), Vector2(12, -1))
        sub = extract_sub_curve(curve, 0.2, 0.6)
        for u, t in ((0.0, 0.2), (0.5, 0.4), (1.0, 0.6)):
            a = sub.evaluate(u)
            b = curve.evaluate(t)
            self.assertAlmostEqual(a.x, b.x)
            self.assertAlmostEqual(a.y, b.y)
    
    def test_extract_whole_curve(self):
        curve = CubicBezier(Vector2(0, 0), Vector2(2, 8), Vector2(9, 6), Vector2(12, -1))
        self.assertEqual(extract_sub_curve(curve, 0.0, 1.0), curve)
        self.assertEqual(extract_sub_curve(curve, 0.0, 0.5), curve.split(0.5)[0])
        self.assertEqual(extract_sub_curve(curve, 0.5, 1.0), curve.split(0.5)[1])


class TestPipelineSteps(unittest.TestCase):
    """Test the steps of union/subtract on two overlapping squares."""
    
    def setUp(self):
        self.a = make_rect(0, 0, 100, 100)
        self.b = make_rect(50, 50, 150, 150)
    
    def test_compute_intersections(self):
        hits_a, hits_b = compute_intersections(self.a, self.b)
        self.assertEqual(len(hits_a), 2)
        self.assertEqual(len(hits_b), 2)
        # Right and top edges of A
        self.assertEqual(sorted(h.curve_index for h in hits_a), [1, 2])
        # Bottom and left edges of B
        self.assertEqual(sorted(h.curve_index for h in hits_b), [0, 3])
        for hit in hits_a + hits_b:
            self.assertAlmostEqual(hit.t, 0.5, delta=0.01)
    
    def test_split_path(self):
        hits_a, _ = compute_intersections(self.a, self.b)
        segments = split_path(self.a, hits_a, Operand.A)
        self.assertEqual(len(segments), 6)
        self.assertTrue(all(seg.source is Operand.A for seg in segments))
        for prev, seg in zip(segments, segments[1:] + segments[:1]):
            self.assertLess(prev.end.distance_to(seg.start), 0.1)
    
    def test_classify_segments(self):
        hits_a, _ = compute_intersections(self.a, self.b)
        segments = classify_segments(split_path(self.a, hits_a, Operand.A), self.b)
        inside = [seg for seg in segments if seg.inside_other]
        self.assertEqual(len(inside), 2)
        for seg in inside:
            mid = seg.curve.evaluate(0.5)
            self.assertGreater(mid.x, 50)
            self.assertGreater(mid.y, 50)
    
    def _classified(self):
        hits_a, hits_b = compute_intersections(self.a, self.b)
        return (
            classify_segments(split_path(self.a, hits_a, Operand.A), self.b) +
            classify_segments(split_path(self.b, hits_b, Operand.B), self.a)
        )
    
    def test_filter_union(self):
        kept = filter_segments(self._classified(), BooleanOperation.UNION)
        self.assertEqual(len(kept), 8)
        self.assertFalse(any(seg.inside_other for seg in kept))
    
    def test_filter_subtract_reverses_b(self):
        kept = filter_segments(self._classified(), BooleanOperation.SUBTRACT)
        from_b = [seg for seg in kept if seg.source is Operand.B]
        from_a = [seg for seg in kept if seg.source is Operand.A]
        self.assertEqual(len(from_a), 4)
        self.assertEqual(len(from_b), 2)
        for seg in from_b:
            self.assertTrue(seg.inside_other)
            self.assertGreater(seg.t1, seg.t2)
    
    def test_reconstruct(self):
        kept = filter_segments(self._classified(), BooleanOperation.UNION)
        paths = reconstruct_paths(kept)
        self.assertEqual(len(paths), 1)
        self.assertTrue(paths[0].closed)
        self.assertEqual(len(paths[0].nodes), 8)
    
    def test_dead_end_is_dropped(self):
        """A chain that never returns to its start yields no path."""
        line = CubicBezier(Vector2(0, 0), Vector2(3, 0), Vector2(7, 0), Vector2(10, 0))
        seg = CurveSegment(line, 0.0, 1.0, Operand.A, 0)
        with self.assertLogs('vectorpath.ops.boolean_ops', level='WARNING'):
            paths = reconstruct_paths([seg])
        self.assertEqual(paths, [])
    
    def test_segment_reversed(self):
        line = CubicBezier(Vector2(0, 0), Vector2(3, 0), Vector2(7, 0), Vector2(10, 0))
        seg = CurveSegment(line, 0.25, 0.75, Operand.B, 2, inside_other=True)
        rev = seg.reversed()
        self.assertEqual(rev.start, Vector2(10, 0))
        self.assertEqual(rev.end, Vector2(0, 0))
        self.assertEqual((rev.t1, rev.t2), (0.75, 0.25))
        self.assertEqual(rev.curve_index, 2)
        self.assertTrue(rev.inside_other)


class TestUnion(BoundsAssertions, unittest.TestCase):
    """Test union of closed paths."""
    
    def test_disjoint_squares(self):
        s1 = make_rect(0, 0, 100, 100)
        s2 = make_rect(200, 0, 300, 100)
        result = union(s1, s2)
        self.assertEqual(len(result), 2)
        self.assertTrue(all(p.closed for p in result))
        boxes = sorted((p.get_bounding_box() for p in result), key=lambda r: r.min.x)
        self.assertEqual(boxes[0].min, Vector2(0, 0))
        self.assertEqual(boxes[0].max, Vector2(100, 100))
        self.assertEqual(boxes[1].min, Vector2(200, 0))
        self.assertEqual(boxes[1].max, Vector2(300, 100))
    
    def test_overlapping_squares(self):
        result = union(make_rect(0, 0, 100, 100), make_rect(50, 50, 150, 150))
        self.assertEqual(len(result), 1)
        self.assertTrue(result[0].closed)
        self.assertBounds(result[0], 0, 0, 150, 150)
        self.assertContinuous(result[0])
        self.assertTrue(result[0].contains_point(Vector2(25, 25)))
        self.assertTrue(result[0].contains_point(Vector2(125, 125)))
        self.assertFalse(result[0].contains_point(Vector2(125, 25)))
    
    def test_offset_squares(self):
        """Crossings away from the middle of an edge still stitch."""
        result = union(make_rect(0, 0, 100, 100), make_rect(30, 30, 130, 130))
        self.assertEqual(len(result), 1)
        self.assertBounds(result[0], 0, 0, 130, 130)
        self.assertContinuous(result[0])
    
    def test_circles(self):
        result = union(make_circle(0, 0, 50), make_circle(60, 0, 50))
        self.assertEqual(len(result), 1)
        self.assertBounds(result[0], -50, -50, 110, 50, delta=0.5)
        self.assertContinuous(result[0])
    
    def test_transforms_are_baked(self):
        a = make_rect(0, 0, 100, 100)
        b = make_rect(0, 0, 100, 100).with_transform(Matrix3.translate(50, 50))
        result = union(a, b)
        self.assertEqual(len(result), 1)
        self.assertBounds(result[0], 0, 0, 150, 150)
        self.assertTrue(result[0].transform.is_identity())
    
    def test_opposite_winding(self):
        """Operands drawn in opposite directions still stitch into one loop."""
        b = make_rect(50, 50, 150, 150).reversed()
        result = union(make_rect(0, 0, 100, 100), b)
        self.assertEqual(len(result), 1)
        self.assertBounds(result[0], 0, 0, 150, 150)
        self.assertContinuous(result[0])
        self.assertTrue(result[0].contains_point(Vector2(125, 125)))
        
        result = union(make_rect(0, 0, 100, 100).reversed(), make_rect(50, 50, 150, 150))
        self.assertEqual(len(result), 1)
        self.assertBounds(result[0], 0, 0, 150, 150)
    
    def test_opposite_winding_disjoint(self):
        result = union(make_rect(0, 0, 100, 100), make_rect(200, 0, 300, 100).reversed())
        self.assertEqual(len(result), 2)
    
    def test_opposite_winding_circles(self):
        result = union(make_circle(0, 0, 50), make_circle(60, 0, 50).reversed())
        self.assertEqual(len(result), 1)
        self.assertBounds(result[0], -50, -50, 110, 50, delta=0.5)
    
    def test_open_input_gives_nothing(self):
        open_path = make_rect(0, 0, 100, 100, closed=False)
        self.assertEqual(union(open_path, make_rect(50, 50, 150, 150)), [])
        self.assertEqual(union(make_rect(50, 50, 150, 150), open_path), [])
    
    def test_result_has_fresh_ids(self):
        ops = BooleanOps(id_generator=CounterIdGenerator("bool"))
        result = ops.union(make_rect(0, 0, 100, 100), make_rect(200, 0, 300, 100))
        self.assertEqual([n.id for n in result[0].nodes],
                         ["bool-1", "bool-2", "bool-3", "bool-4"])
        self.assertEqual(result[0].id, "bool-5")
        self.assertEqual(result[1].id, "bool-10")
    
    def test_inputs_are_untouched(self):
        a = make_rect(0, 0, 100, 100)
        b = make_rect(50, 50, 150, 150)
        a_dict = a.to_dict()
        union(a, b)
        self.assertEqual(a.to_dict(), a_dict)


class TestSubtract(BoundsAssertions, unittest.TestCase):
    """Test subtraction of closed paths."""
    
    def test_overlapping_squares(self):
        result = subtract(make_rect(0, 0, 100, 100), make_rect(50, 50, 150, 150))
        self.assertEqual(len(result), 1)
        shape = result[0]
        self.assertBounds(shape, 0, 0, 100, 100)
        self.assertEqual(len(shape.nodes), 6)
        self.assertContinuous(shape)
        self.assertTrue(shape.contains_point(Vector2(25, 25)))
        self.assertFalse(shape.contains_point(Vector2(75, 75)))
    
    def test_hole(self):
        """A fully contained B yields the outer loop plus a hole loop."""
        outer = make_rect(0, 0, 100, 100)
        inner = make_rect(25, 25, 75, 75)
        result = subtract(outer, inner)
        self.assertEqual(len(result), 2)
        self.assertTrue(all(p.closed for p in result))
        boxes = sorted((p.get_bounding_box() for p in result), key=lambda r: r.width)
        self.assertEqual(boxes[0].min, Vector2(25, 25))
        self.assertEqual(boxes[0].max, Vector2(75, 75))
        self.assertEqual(boxes[1].min, Vector2(0, 0))
        self.assertEqual(boxes[1].max, Vector2(100, 100))
    
    def test_disjoint_subtract_keeps_a(self):
        result = subtract(make_rect(0, 0, 100, 100), make_rect(200, 0, 300, 100))
        self.assertEqual(len(result), 1)
        self.assertBounds(result[0], 0, 0, 100, 100)
    
    def test_opposite_winding(self):
        """B drawn the other way round gives the same L-shape."""
        b = make_rect(50, 50, 150, 150).reversed()
        result = subtract(make_rect(0, 0, 100, 100), b)
        self.assertEqual(len(result), 1)
        shape = result[0]
        self.assertBounds(shape, 0, 0, 100, 100)
        self.assertEqual(len(shape.nodes), 6)
        self.assertContinuous(shape)
        self.assertTrue(shape.contains_point(Vector2(25, 25)))
        self.assertFalse(shape.contains_point(Vector2(75, 75)))
    
    def test_opposite_winding_hole(self):
        outer = make_rect(0, 0, 100, 100)
        inner = make_rect(25, 25, 75, 75).reversed()
        result = subtract(outer, inner)
        self.assertEqual(len(result), 2)
        boxes = sorted((p.get_bounding_box() for p in result), key=lambda r: r.width)
        self.assertEqual(boxes[0].min, Vector2(25, 25))
        self.assertEqual(boxes[0].max, Vector2(75, 75))
        self.assertEqual(boxes[1].min, Vector2(0, 0))
        self.assertEqual(boxes[1].max, Vector2(100, 100))


class TestMatchWinding(unittest.TestCase):
    """Test operand winding alignment."""
    
    def test_same_winding_untouched(self):
        a = make_rect(0, 0, 100, 100)
        b = make_rect(50, 50, 150, 150)
        self.assertIs(match_winding(a, b), b)
    
    def test_opposite_winding_reversed(self):
        a = make_rect(0, 0, 100, 100)
        b = make_rect(50, 50, 150, 150).reversed()
        matched = match_winding(a, b)
        self.assertEqual(matched.id, b.id)
        self.assertGreater(matched.signed_area() * a.signed_area(), 0)
    
    def test_zero_area_untouched(self):
        a = make_rect(0, 0, 100, 100)
        flat = Path((PathNode.corner(0, 0), PathNode.corner(10, 0)), closed=True)
        self.assertIs(match_winding(a, flat), flat)


class TestBooleanOps(unittest.TestCase):
    """Test configuration and dispatch."""
    
    def test_invalid_settings(self):
        with self.assertRaises(UnsupportedInputError):
            BooleanOps(BooleanSettings(merge_threshold=0))
        with self.assertRaises(UnsupportedInputError):
            BooleanOps(BooleanSettings(stitch_tolerance_sq=-1))
    
    def test_settings_validate(self):
        is_valid, error = BooleanSettings().validate()
        self.assertTrue(is_valid)
        self.assertEqual(error, "")
        is_valid, error = BooleanSettings(max_depth=-1).validate()
        self.assertFalse(is_valid)
        self.assertIn("max_depth", error)
    
    def test_default_settings_match_tolerances(self):
        settings = BooleanSettings()
        self.assertEqual(settings.merge_threshold, DEFAULT_TOLERANCES.merge_threshold)
        self.assertEqual(settings.max_depth, DEFAULT_TOLERANCES.max_depth)
        self.assertEqual(settings.stitch_tolerance_sq, DEFAULT_TOLERANCES.stitch_tolerance_sq)
        self.assertEqual(settings.parameter_merge, DEFAULT_TOLERANCES.parameter_merge)
        self.assertEqual(DEFAULT_TOLERANCES.epsilon, 1e-9)
    
    def test_apply_by_name(self):
        ops = BooleanOps()
        a = make_rect(0, 0, 100, 100)
        b = make_rect(50, 50, 150, 150)
        self.assertEqual(len(ops.apply("union", a, b)), 1)
        self.assertEqual(len(ops.apply("SUBTRACT", a, b)), 1)
        with self.assertRaises(UnsupportedInputError):
            ops.apply("xor", a, b)
    
    def test_parse(self):
        self.assertIs(BooleanOperation.parse(BooleanOperation.UNION), BooleanOperation.UNION)
        self.assertIs(BooleanOperation.parse("subtract"), BooleanOperation.SUBTRACT)


if __name__ == '__main__':
    unittest.main()
