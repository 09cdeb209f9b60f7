# roadnet/services/pathfinding.py
from typing import Any

from roadnet.app.protocols import SearchHooks
from roadnet.config.models import PathfindingModel, load_config
from roadnet.domain.entities.network import Coord, Node, ShortestPathResult
from roadnet.domain.solvers import find_shortest_path
from roadnet.domain.state import NetworkState
from roadnet.io.geojson import path_to_feature_collection
from roadnet.io.search_logging import SearchLogging
from roadnet.runtime.registries import make_solver


class PathfindingService:
    """
    Binds a config, a solver and logging hooks to a NetworkState.
    Every query rebuilds the graph from a fresh snapshot, so edits made
    between calls are always picked up.
    """

    def __init__(
        self,
        cfg: PathfindingModel,
        state: NetworkState | None = None,
        *,
        hooks: SearchHooks | None = None,
    ):
        self.cfg = cfg
        self.state = state if state is not None else NetworkState()
        self.solver = make_solver(cfg.solver)
        self.hooks = hooks or SearchLogging(level=cfg.log.level, debug=cfg.log.debug)

    @classmethod
    def from_config(
        cls, data: dict[str, Any] | None = None, state: NetworkState | None = None, **kw
    ) -> "PathfindingService":
        return cls(load_config(data), state, **kw)

    def shortest_path(self, start_id: int, end_id: int) -> ShortestPathResult | None:
        nodes, segments = self.state.snapshot()
        return find_shortest_path(
            nodes,
            segments,
            start_id,
            end_id,
            solver=self.solver,
            main_weight_factor=self.cfg.main_weight_factor,
            hooks=self.hooks,
        )

    def highlight(self, start_id: int, end_id: int, *, follow_lines: bool = False) -> dict:
        result = self.shortest_path(start_id, end_id)
        return path_to_feature_collection(result, self.state.nodes.values(), follow_lines=follow_lines)

    def pick_node(self, point: Coord) -> Node | None:
        return self.state.node_at(point, self.cfg.snap.node_threshold)

    def route_between_points(self, a: Coord, b: Coord) -> ShortestPathResult | None:
        """Click-to-route: pick the nodes under two points, then search."""
        na, nb = self.pick_node(a), self.pick_node(b)
        if na is None or nb is None:
            return None
        return self.shortest_path(na.id, nb.id)

    def break_segment_at(self, point: Coord) -> Node | None:
        return self.state.break_segment_at(point, self.cfg.snap.segment_tolerance)
