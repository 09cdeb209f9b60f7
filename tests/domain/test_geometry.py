# tests/domain/test_geometry.py
import math

import numpy as np
import pytest

from roadnet.domain.entities.network import Node, PathType, Segment
from roadnet.domain.geometry import (
    find_closest_segment,
    find_node_at_point,
    pixel_threshold,
    polyline_length,
    project_point_to_segment,
    split_segment_at_point,
)
from roadnet.domain.ids import MonotonicIds


def test_polyline_length():
    assert polyline_length([(0.0, 0.0)]) == 0.0
    assert np.isclose(polyline_length([(0, 0), (3, 4), (3, 5)]), 6.0)


def test_projection_inside_segment():
    p = project_point_to_segment((1.0, 1.0), (0.0, 0.0), (2.0, 0.0))
    assert np.allclose(p.closest_point, (1.0, 0.0))
    assert np.isclose(p.distance, 1.0)
    assert np.isclose(p.t, 0.5)


def test_projection_clamps_to_endpoints():
    before = project_point_to_segment((-1.0, 1.0), (0.0, 0.0), (2.0, 0.0))
    after = project_point_to_segment((5.0, 0.0), (0.0, 0.0), (2.0, 0.0))
    assert before.closest_point == (0.0, 0.0) and before.t == 0.0
    assert np.isclose(before.distance, math.sqrt(2))
    assert after.closest_point == (2.0, 0.0) and after.t == 1.0


def test_projection_onto_zero_length_piece():
    p = project_point_to_segment((3.0, 4.0), (0.0, 0.0), (0.0, 0.0))
    assert p.closest_point == (0.0, 0.0)
    assert np.isclose(p.distance, 5.0)


def test_find_closest_segment_picks_nearest_piece():
    a = Segment(1, [(0.0, 0.0), (0.001, 0.0), (0.001, 0.001)], 1, 2, "sub")
    b = Segment(2, [(0.0, 0.0002), (0.001, 0.0002)], 3, 4, "main")
    hit = find_closest_segment((0.0005, 0.00003), [a, b])
    assert hit is not None
    assert hit.segment.id == 1 and hit.segment_index == 0
    assert np.allclose(hit.closest_point, (0.0005, 0.0))

    hit2 = find_closest_segment((0.00099, 0.0005), [a, b])
    assert hit2.segment.id == 1 and hit2.segment_index == 1


def test_find_closest_segment_respects_tolerance():
    a = Segment(1, [(0.0, 0.0), (1.0, 0.0)], 1, 2, "sub")
    assert find_closest_segment((0.5, 0.001), [a]) is None
    assert find_closest_segment((0.5, 0.001), [a], tolerance=0.01) is not None


def test_split_segment_at_point():
    ids = MonotonicIds(start=500)
    seg = Segment(9, [(0, 0), (1, 0), (2, 0), (3, 0)], 1, 2, PathType.MAIN)
    first, second = split_segment_at_point(seg, (1.5, 0.0), 1, 77, ids=ids)
    assert first.points == ((0, 0), (1, 0), (1.5, 0))
    assert second.points == ((1.5, 0), (2, 0), (3, 0))
    assert (first.start_node, first.end_node) == (1, 77)
    assert (second.start_node, second.end_node) == (77, 2)
    assert first.path_type is second.path_type is PathType.MAIN
    assert (first.id, second.id) == (500, 501)
    assert np.isclose(
        polyline_length(first.points) + polyline_length(second.points),
        polyline_length(seg.points),
    )


def test_split_rejects_bad_index():
    seg = Segment(9, [(0, 0), (1, 0)], 1, 2, "sub")
    with pytest.raises(ValueError):
        split_segment_at_point(seg, (0.5, 0.0), 1, 3, ids=MonotonicIds())


def test_find_node_at_point():
    nodes = [Node(1, (-74.0185, 40.7065)), Node(2, (-74.0180, 40.7070))]
    assert find_node_at_point((-74.01855, 40.70652), nodes).id == 1
    assert find_node_at_point((-74.0170, 40.7070), nodes) is None


def test_pixel_threshold_shrinks_with_zoom():
    t15 = pixel_threshold(40.7, 15)
    t16 = pixel_threshold(40.7, 16)
    assert np.isclose(t15, 2 * t16)
    # at the equator, zoom 0, one pixel spans 40075016.686 / 256 metres
    assert np.isclose(pixel_threshold(0.0, 0, pixels=1), 40075016.686 / 256 / 111320)


def test_segment_requires_two_points():
    with pytest.raises(ValueError):
        Segment(1, [(0.0, 0.0)], 1, 2, "sub")
