# roadnet/domain/solvers.py
import heapq
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from roadnet.app.protocols import PathSolver, SearchHooks
from roadnet.domain.entities.network import Graph, GraphEdge, Node, Segment, ShortestPathResult
from roadnet.domain.graph import MAIN_WEIGHT_FACTOR, build_graph
from roadnet.domain.hooks import NoopHooks

INF = math.inf


@dataclass
class SearchOutcome:
    distances: dict[int, float]
    previous: dict[int, tuple[int, GraphEdge]] = field(default_factory=dict)
    settled: int = 0
    reached: bool = False


def _relax(graph: Graph, u: int, outcome: SearchOutcome, visited: set[int], hooks) -> list[int]:
    """Relax u's edges; return the neighbours whose distance improved."""
    improved = []
    du = outcome.distances[u]
    for edge in graph.get(u, ()):
        v = edge.target
        if v in visited:
            continue
        nd = du + edge.weight
        if nd < outcome.distances.get(v, INF):
            outcome.distances[v] = nd
            outcome.previous[v] = (u, edge)
            improved.append(v)
            hooks.relax(node_id=v, edge=edge, distance=nd)
    return improved


class ScanDijkstra(PathSolver):
    """O(V^2) selection: linear scan of the unvisited set each round."""

    kind = "scan"

    def solve(self, graph: Graph, start_id: int, end_id: int, hooks=None) -> SearchOutcome:
        hooks = hooks or NoopHooks()
        out = SearchOutcome(distances={nid: INF for nid in graph})
        out.distances[start_id] = 0.0
        unvisited = set(graph)
        visited: set[int] = set()
        while unvisited:
            u = min(unvisited, key=lambda n: (out.distances[n], n))
            unvisited.discard(u)
            if u == end_id:
                out.reached = out.distances[u] < INF
                break
            if out.distances[u] == INF:
                break
            visited.add(u)
            out.settled += 1
            _relax(graph, u, out, visited, hooks)
        return out


class HeapDijkstra(PathSolver):
    """Binary heap keyed by (distance, node id) with lazy deletion."""

    kind = "heap"

    def solve(self, graph: Graph, start_id: int, end_id: int, hooks=None) -> SearchOutcome:
        hooks = hooks or NoopHooks()
        out = SearchOutcome(distances={nid: INF for nid in graph})
        out.distances[start_id] = 0.0
        heap: list[tuple[float, int]] = [(0.0, start_id)]
        visited: set[int] = set()
        while heap:
            d, u = heapq.heappop(heap)
            if u in visited or d > out.distances[u]:
                continue  # stale entry
            if u == end_id:
                out.reached = True
                break
            visited.add(u)
            out.settled += 1
            for v in _relax(graph, u, out, visited, hooks):
                heapq.heappush(heap, (out.distances[v], v))
        return out


def reconstruct(
    outcome: SearchOutcome,
    segments: Sequence[Segment],
    start_id: int,
    end_id: int,
    hooks: SearchHooks | None = None,
) -> ShortestPathResult:
    hooks = hooks or NoopHooks()
    by_id = {s.id: s for s in segments}
    path: list[int] = []
    lines: list[Segment] = []
    cur: int | None = end_id
    while cur is not None:
        path.append(cur)
        if cur == start_id:
            break
        prev = outcome.previous.get(cur)
        if prev is None:
            break
        u, edge = prev
        seg = by_id.get(edge.segment_id)
        if seg is not None:
            lines.append(seg)
        else:
            # segment vanished between graph build and lookup; hop keeps no geometry
            hooks.stale_segment(segment_id=edge.segment_id, source=u, target=cur)
        cur = u
    path.reverse()
    lines.reverse()
    return ShortestPathResult(path=path, distance=outcome.distances[end_id], lines=lines)


def find_shortest_path(
    nodes: Iterable[Node],
    segments: Iterable[Segment],
    start_id: int,
    end_id: int,
    *,
    solver: PathSolver | None = None,
    main_weight_factor: float = MAIN_WEIGHT_FACTOR,
    hooks: SearchHooks | None = None,
) -> ShortestPathResult | None:
    """
    Shortest path between two node ids over the graph built from `nodes` and
    `segments`. Returns None when either id is unknown or the two are not
    connected; never raises for those cases.
    """
    hooks = hooks or NoopHooks()
    solver = solver or HeapDijkstra()
    segments = list(segments)
    graph = build_graph(nodes, segments, main_weight_factor=main_weight_factor)
    hooks.search_start(
        start_id=start_id,
        end_id=end_id,
        nodes=len(graph),
        edges=sum(len(v) for v in graph.values()),
        solver=solver.kind,
    )
    result = None
    settled = 0
    if start_id in graph and end_id in graph:
        outcome = solver.solve(graph, start_id, end_id, hooks=hooks)
        settled = outcome.settled
        if outcome.reached:
            result = reconstruct(outcome, segments, start_id, end_id, hooks=hooks)
    hooks.search_end(start_id=start_id, end_id=end_id, result=result, settled=settled)
    return result
