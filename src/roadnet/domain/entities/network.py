# roadnet/domain/entities/network.py
from dataclasses import dataclass, field
from enum import Enum

Coord = tuple[float, float]  # (lng, lat)

DEFAULT_NODE_COLOR = "#FF9800"


def _to_coord(p) -> Coord:
    return (float(p[0]), float(p[1]))


class PathType(str, Enum):
    MAIN = "main"
    SUB = "sub"


@dataclass(frozen=True)
class Node:
    id: int
    coordinates: Coord
    color: str = DEFAULT_NODE_COLOR  # cosmetic only

    def __post_init__(self):
        object.__setattr__(self, "coordinates", _to_coord(self.coordinates))

    def moved_to(self, coordinates) -> "Node":
        return Node(self.id, _to_coord(coordinates), self.color)


@dataclass(frozen=True)
class Segment:
    """
    A drawn road/path piece between two nodes. Geometrically a polyline,
    semantically an undirected edge: start/end only fix which terminal point
    follows which node.
    """

    id: int
    points: tuple[Coord, ...]
    start_node: int
    end_node: int
    path_type: PathType = PathType.SUB

    def __post_init__(self):
        pts = tuple(_to_coord(p) for p in self.points)
        if len(pts) < 2:
            raise ValueError(f"segment {self.id} needs at least 2 points, got {len(pts)}")
        object.__setattr__(self, "points", pts)
        object.__setattr__(self, "path_type", PathType(self.path_type))

    @property
    def is_main(self) -> bool:
        return self.path_type is PathType.MAIN

    def with_points(self, points) -> "Segment":
        return Segment(self.id, tuple(points), self.start_node, self.end_node, self.path_type)


@dataclass(frozen=True)
class GraphEdge:
    source: int
    target: int
    weight: float
    path_type: PathType
    segment_id: int


# node id -> outgoing edges; rebuilt per query, never stored
Graph = dict[int, list[GraphEdge]]


@dataclass
class ShortestPathResult:
    path: list[int]
    distance: float
    lines: list[Segment] = field(default_factory=list)

    @property
    def hops(self) -> int:
        return max(0, len(self.path) - 1)

    def coordinates(self, nodes) -> list[Coord]:
        """Node coordinates along the path; ids missing from `nodes` are skipped."""
        by_id = {n.id: n for n in nodes}
        return [by_id[i].coordinates for i in self.path if i in by_id]

    def line_coordinates(self) -> list[Coord]:
        """
        Concatenated segment polylines in travel order. Each segment is
        flipped when it was traversed end->start; shared junction points
        appear once.
        """
        out: list[Coord] = []
        remaining = list(self.lines)
        for a, b in zip(self.path, self.path[1:]):
            seg = next((s for s in remaining if {s.start_node, s.end_node} == {a, b}), None)
            if seg is None:  # stale hop, no geometry
                continue
            remaining.remove(seg)
            pts = list(seg.points) if seg.start_node == a else list(reversed(seg.points))
            if out and out[-1] == pts[0]:
                pts = pts[1:]
            out.extend(pts)
        return out
