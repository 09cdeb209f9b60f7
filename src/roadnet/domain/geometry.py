# roadnet/domain/geometry.py
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from roadnet.app.protocols import IdSource
from roadnet.domain.entities.network import Coord, Node, Segment

# Coordinate-space thresholds (degrees), tuned for city-block editing.
NODE_PICK_THRESHOLD = 0.00008
SEGMENT_PICK_TOLERANCE = 0.00005

EARTH_CIRCUMFERENCE_M = 40075016.686
DEGREES_PER_METER = 1 / 111320


@dataclass(frozen=True)
class Projection:
    closest_point: Coord
    distance: float
    t: float  # clamped parameter along a->b


@dataclass(frozen=True)
class SegmentHit:
    segment: Segment
    closest_point: Coord
    segment_index: int  # index of the polyline piece (points[i], points[i+1])
    distance: float


def polyline_length(points: Sequence[Coord]) -> float:
    """Planar length: sum of Euclidean steps between consecutive vertices."""
    if len(points) < 2:
        return 0.0
    arr = np.asarray(points, dtype=float)
    steps = np.diff(arr, axis=0)
    return float(np.hypot(steps[:, 0], steps[:, 1]).sum())


def project_point_to_segment(point: Coord, a: Coord, b: Coord) -> Projection:
    px, py = point
    ax, ay = a
    dx, dy = b[0] - ax, b[1] - ay
    len_sq = dx * dx + dy * dy
    # degenerate piece: everything projects onto a
    t = 0.0 if len_sq == 0 else ((px - ax) * dx + (py - ay) * dy) / len_sq
    t = min(1.0, max(0.0, t))
    cx, cy = ax + t * dx, ay + t * dy
    return Projection((cx, cy), math.hypot(px - cx, py - cy), t)


def find_closest_segment(
    point: Coord,
    segments: Iterable[Segment],
    tolerance: float = SEGMENT_PICK_TOLERANCE,
) -> SegmentHit | None:
    best: SegmentHit | None = None
    best_d = tolerance
    for seg in segments:
        pts = seg.points
        for i in range(len(pts) - 1):
            proj = project_point_to_segment(point, pts[i], pts[i + 1])
            if proj.distance < best_d:
                best_d = proj.distance
                best = SegmentHit(seg, proj.closest_point, i, proj.distance)
    return best


def split_segment_at_point(
    segment: Segment,
    split_point: Coord,
    segment_index: int,
    new_node_id: int,
    *,
    ids: IdSource,
) -> tuple[Segment, Segment]:
    """
    Cut `segment` at `split_point`, which lies on piece `segment_index`.
    The caller swaps the original for the two halves and adds the new node.
    """
    n_pieces = len(segment.points) - 1
    if not 0 <= segment_index < n_pieces:
        raise ValueError(
            f"segment_index {segment_index} out of range for segment {segment.id} "
            f"with {n_pieces} pieces"
        )
    sp = (float(split_point[0]), float(split_point[1]))
    head = (*segment.points[: segment_index + 1], sp)
    tail = (sp, *segment.points[segment_index + 1 :])
    first = Segment(ids.next(), head, segment.start_node, new_node_id, segment.path_type)
    second = Segment(ids.next(), tail, new_node_id, segment.end_node, segment.path_type)
    return first, second


def find_node_at_point(
    point: Coord, nodes: Iterable[Node], threshold: float = NODE_PICK_THRESHOLD
) -> Node | None:
    lng, lat = point
    for n in nodes:
        if abs(n.coordinates[0] - lng) < threshold and abs(n.coordinates[1] - lat) < threshold:
            return n
    return None


def pixel_threshold(latitude: float, zoom: float, pixels: float = 10.0) -> float:
    """Screen-pixel pick radius expressed in degrees at the given latitude/zoom."""
    m_per_px = EARTH_CIRCUMFERENCE_M * abs(math.cos(math.radians(latitude))) / 2 ** (zoom + 8)
    return pixels * m_per_px * DEGREES_PER_METER
