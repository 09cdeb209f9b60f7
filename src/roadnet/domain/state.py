# roadnet/domain/state.py
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from roadnet.domain.entities.network import DEFAULT_NODE_COLOR, Coord, Node, PathType, Segment
from roadnet.domain.errors import UnknownNodeError, UnknownSegmentError
from roadnet.domain.geometry import (
    NODE_PICK_THRESHOLD,
    SEGMENT_PICK_TOLERANCE,
    SegmentHit,
    find_closest_segment,
    find_node_at_point,
    split_segment_at_point,
)
from roadnet.domain.ids import MonotonicIds


@dataclass
class NetworkState:
    """
    The editable node/segment collections. Pathfinding never reads this
    directly; callers hand it `snapshot()` views.
    """

    nodes: dict[int, Node] = field(default_factory=dict)
    segments: dict[int, Segment] = field(default_factory=dict)
    ids: MonotonicIds = field(default_factory=MonotonicIds)

    @classmethod
    def from_collections(
        cls, nodes: Iterable[Node], segments: Iterable[Segment], ids: MonotonicIds | None = None
    ) -> "NetworkState":
        st = cls(ids=ids or MonotonicIds())
        for n in nodes:
            if n.id in st.nodes:
                raise ValueError(f"duplicate node id {n.id}")
            st.nodes[n.id] = n
            st.ids.bump(n.id)
        for s in segments:
            if s.id in st.segments:
                raise ValueError(f"duplicate segment id {s.id}")
            st.segments[s.id] = s
            st.ids.bump(s.id)
        return st

    # ------------- queries -----------------------------

    def snapshot(self) -> tuple[tuple[Node, ...], tuple[Segment, ...]]:
        return tuple(self.nodes.values()), tuple(self.segments.values())

    def node(self, node_id: int) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def node_at(self, point: Coord, threshold: float = NODE_PICK_THRESHOLD) -> Node | None:
        return find_node_at_point(point, self.nodes.values(), threshold)

    def segment_at(
        self, point: Coord, tolerance: float = SEGMENT_PICK_TOLERANCE
    ) -> SegmentHit | None:
        return find_closest_segment(point, self.segments.values(), tolerance)

    def segments_touching(self, node_id: int) -> list[Segment]:
        return [s for s in self.segments.values() if node_id in (s.start_node, s.end_node)]

    def counts(self) -> dict[str, int]:
        main = sum(1 for s in self.segments.values() if s.is_main)
        return {"nodes": len(self.nodes), "main": main, "sub": len(self.segments) - main}

    # ------------- edits -------------------------------

    def add_node(self, coordinates: Coord, color: str | None = None) -> Node:
        n = Node(self.ids.next(), coordinates, color or DEFAULT_NODE_COLOR)
        self.nodes[n.id] = n
        return n

    def add_segment(
        self,
        points: Sequence[Coord],
        start_node: int,
        end_node: int,
        path_type: PathType | str = PathType.SUB,
    ) -> Segment:
        a, b = self.node(start_node), self.node(end_node)
        if len(points) < 2:
            raise ValueError(f"a segment needs at least 2 points, got {len(points)}")
        # terminal vertices sit exactly on their nodes
        pts = [a.coordinates, *points[1:-1], b.coordinates]
        seg = Segment(self.ids.next(), tuple(pts), a.id, b.id, PathType(path_type))
        self.segments[seg.id] = seg
        return seg

    def split_segment(self, hit: SegmentHit, color: str | None = None) -> tuple[Node, Segment, Segment]:
        if hit.segment.id not in self.segments:
            raise UnknownSegmentError(hit.segment.id)
        node = self.add_node(hit.closest_point, color)
        first, second = split_segment_at_point(
            hit.segment, hit.closest_point, hit.segment_index, node.id, ids=self.ids
        )
        del self.segments[hit.segment.id]
        self.segments[first.id] = first
        self.segments[second.id] = second
        return node, first, second

    def break_segment_at(
        self, point: Coord, tolerance: float = SEGMENT_PICK_TOLERANCE, color: str | None = None
    ) -> Node | None:
        """Split whichever segment lies under `point`; None if nothing is close enough."""
        hit = self.segment_at(point, tolerance)
        if hit is None:
            return None
        node, _, _ = self.split_segment(hit, color)
        return node

    def move_node(self, node_id: int, coordinates: Coord) -> Node:
        """Drag a node; terminal points of attached segments follow it."""
        moved = self.node(node_id).moved_to(coordinates)
        self.nodes[node_id] = moved
        for seg in self.segments_touching(node_id):
            pts = list(seg.points)
            if seg.start_node == node_id:
                pts[0] = moved.coordinates
            if seg.end_node == node_id:
                pts[-1] = moved.coordinates
            self.segments[seg.id] = seg.with_points(pts)
        return moved

    def clear(self) -> None:
        self.nodes.clear()
        self.segments.clear()
