# runtime/registries.py
from collections.abc import Callable

from roadnet.app.protocols import PathSolver
from roadnet.config.models import SolverHeapModel, SolverScanModel, SolverUnion
from roadnet.domain.solvers import HeapDijkstra, ScanDijkstra

SolverFactory = Callable[[SolverUnion], PathSolver]

_solver_registry: dict[str, SolverFactory] = {}


def register_solver(kind: str):
    def deco(fn: SolverFactory):
        _solver_registry[kind] = fn
        return fn

    return deco


def make_solver(cfg: SolverUnion) -> PathSolver:
    try:
        factory = _solver_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown solver kind {cfg.kind!r}") from None
    return factory(cfg)


def solver_kinds() -> list[str]:
    return sorted(_solver_registry)


@register_solver("scan")
def _make_scan(cfg: SolverScanModel):
    return ScanDijkstra()


@register_solver("heap")
def _make_heap(cfg: SolverHeapModel):
    return HeapDijkstra()
