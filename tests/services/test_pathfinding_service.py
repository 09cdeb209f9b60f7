# tests/services/test_pathfinding_service.py
import numpy as np
import pytest
from pydantic import ValidationError

from roadnet.config.models import PathfindingModel, SolverScanModel, load_config
from roadnet.domain.hooks import NoopHooks
from roadnet.domain.solvers import HeapDijkstra, ScanDijkstra
from roadnet.domain.state import NetworkState
from roadnet.io.search_logging import SearchLogging
from roadnet.runtime.registries import make_solver, register_solver, solver_kinds
from roadnet.services.pathfinding import PathfindingService

# ---------- Fixtures


@pytest.fixture
def block():
    """
    Square block, ~100 m per side near lower Manhattan.
    Top and bottom are main streets, the sides are sub paths.
    """
    st = NetworkState()
    sw = st.add_node((-74.0190, 40.7060))
    se = st.add_node((-74.0178, 40.7060))
    ne = st.add_node((-74.0178, 40.7069))
    nw = st.add_node((-74.0190, 40.7069))
    st.add_segment([sw.coordinates, se.coordinates], sw.id, se.id, "main")
    st.add_segment([se.coordinates, ne.coordinates], se.id, ne.id, "sub")
    st.add_segment([ne.coordinates, nw.coordinates], ne.id, nw.id, "main")
    st.add_segment([nw.coordinates, sw.coordinates], nw.id, sw.id, "sub")
    return st


@pytest.fixture
def service(block):
    return PathfindingService(load_config({"solver": {"kind": "scan"}}), block, hooks=NoopHooks())


# ---------- Config


def test_defaults():
    cfg = load_config()
    assert cfg.solver.kind == "heap"
    assert cfg.main_weight_factor == 0.8
    assert cfg.snap.node_threshold == 0.00008
    assert cfg.snap.segment_tolerance == 0.00005
    assert cfg.log.level == "INFO"


@pytest.mark.parametrize(
    "bad",
    [
        {"solver": {"kind": "astar"}},
        {"main_weight_factor": 0},
        {"main_weight_factor": -1.0},
        {"snap": {"node_threshold": 0}},
        {"unknown": 1},
        {"log": {"level": "TRACE"}},
    ],
)
def test_invalid_config(bad):
    with pytest.raises(ValidationError):
        load_config(bad)


def test_registry():
    assert {"scan", "heap"} <= set(solver_kinds())
    assert isinstance(make_solver(SolverScanModel()), ScanDijkstra)
    assert isinstance(make_solver(PathfindingModel().solver), HeapDijkstra)


def test_registry_unknown_kind():
    class _Fake:
        kind = "nope"

    with pytest.raises(ValueError):
        make_solver(_Fake())


def test_register_custom_solver():
    @register_solver("scan_alias")
    def _make(cfg):
        return ScanDijkstra()

    class _Cfg:
        kind = "scan_alias"

    assert isinstance(make_solver(_Cfg()), ScanDijkstra)


# ---------- Service


def test_shortest_path_uses_state(service):
    res = service.shortest_path(1, 3)
    assert res is not None
    assert res.path[0] == 1 and res.path[-1] == 3
    assert len(res.lines) == 2


def test_tied_routes_are_stable_across_solvers(service):
    # 1 -> 3 can go sw-se-ne (main then sub) or sw-nw-ne (sub then main);
    # both cost the same, the result must be stable across solvers
    heap = PathfindingService(PathfindingModel(), service.state, hooks=NoopHooks())
    assert service.shortest_path(1, 3).path == heap.shortest_path(1, 3).path


def test_edits_are_seen_by_next_query(service):
    before = service.shortest_path(1, 2).distance
    service.state.move_node(2, (-74.0170, 40.7060))
    after = service.shortest_path(1, 2).distance
    assert after > before
    assert np.isclose(after, (-74.0170 + 74.0190) * 0.8)


def test_break_then_route(service):
    mid = service.break_segment_at((-74.0184, 40.70601))
    assert mid is not None
    res = service.shortest_path(1, mid.id)
    assert res.path == [1, mid.id]
    assert np.isclose(res.distance, 0.0006 * 0.8)


def test_route_between_points(service):
    res = service.route_between_points((-74.01901, 40.70601), (-74.01781, 40.7060))
    assert res.path == [1, 2]
    assert service.route_between_points((0.0, 0.0), (-74.0178, 40.7060)) is None


def test_highlight(service):
    fc = service.highlight(1, 2)
    (feature,) = fc["features"]
    assert feature["geometry"]["coordinates"] == [[-74.0190, 40.7060], [-74.0178, 40.7060]]
    assert service.highlight(1, 99) == {"type": "FeatureCollection", "features": []}


def test_from_config_builds_logging_hooks(block):
    svc = PathfindingService.from_config({"log": {"level": "WARNING"}}, block)
    assert isinstance(svc.hooks, SearchLogging)
    assert isinstance(svc.solver, HeapDijkstra)
    assert svc.shortest_path(1, 4).path == [1, 4]
