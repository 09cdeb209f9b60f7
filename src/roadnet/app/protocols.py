from typing import Protocol, runtime_checkable

from roadnet.domain.entities.network import Graph, GraphEdge, ShortestPathResult


@runtime_checkable
class PathSolver(Protocol):
    """
    Responsibilities:
      • Run single-source shortest-path search over a built Graph.
      • Stop once `end_id` is settled or the frontier is unreachable.
    Ties between equal tentative distances go to the smallest node id.
    """

    kind: str

    def solve(self, graph: Graph, start_id: int, end_id: int, hooks=None): ...


@runtime_checkable
class IdSource(Protocol):
    def next(self) -> int: ...
    def bump(self, seen: int) -> None: ...


@runtime_checkable
class SearchHooks(Protocol):
    def search_start(self, *, start_id: int, end_id: int, nodes: int, edges: int, solver: str): ...
    def relax(self, *, node_id: int, edge: GraphEdge, distance: float): ...
    def stale_segment(self, *, segment_id: int, source: int, target: int): ...
    def search_end(self, *, start_id: int, end_id: int, result: ShortestPathResult | None, settled: int): ...
