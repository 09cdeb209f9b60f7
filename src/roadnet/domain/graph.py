# roadnet/domain/graph.py
from collections.abc import Iterable

from roadnet.domain.entities.network import Graph, GraphEdge, Node, Segment
from roadnet.domain.geometry import polyline_length

# main paths cost less per unit length, so they win over equal-length sub paths
MAIN_WEIGHT_FACTOR = 0.8


def segment_weight(seg: Segment, main_weight_factor: float = MAIN_WEIGHT_FACTOR) -> float:
    length = polyline_length(seg.points)
    return length * main_weight_factor if seg.is_main else length


def build_graph(
    nodes: Iterable[Node],
    segments: Iterable[Segment],
    *,
    main_weight_factor: float = MAIN_WEIGHT_FACTOR,
) -> Graph:
    """
    Undirected weighted graph as directed adjacency: each segment yields
    start->end and end->start with the same weight and segment id.
    Endpoints missing from `nodes` still get an entry; nothing is validated.
    """
    graph: Graph = {n.id: [] for n in nodes}
    for seg in segments:
        w = segment_weight(seg, main_weight_factor)
        graph.setdefault(seg.start_node, []).append(
            GraphEdge(seg.start_node, seg.end_node, w, seg.path_type, seg.id)
        )
        graph.setdefault(seg.end_node, []).append(
            GraphEdge(seg.end_node, seg.start_node, w, seg.path_type, seg.id)
        )
    return graph
