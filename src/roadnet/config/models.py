from math import isfinite
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # emit per-edge relax events


class SnapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    node_threshold: float = 0.00008  # degrees, box half-width
    segment_tolerance: float = 0.00005  # degrees, perpendicular distance

    @field_validator("node_threshold", "segment_tolerance")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be a positive finite number")
        return v


# ----------------- SOLVERS ---------------------


class SolverScanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["scan"] = "scan"


class SolverHeapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["heap"] = "heap"


SolverUnion = Annotated[SolverScanModel | SolverHeapModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class PathfindingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    solver: SolverUnion = Field(default_factory=SolverHeapModel)
    main_weight_factor: float = 0.8
    snap: SnapModel = Field(default_factory=SnapModel)
    log: LogModel = Field(default_factory=LogModel)

    @field_validator("main_weight_factor")
    @classmethod
    def _factor_positive(cls, v: float) -> float:
        # zero or negative weights break Dijkstra's settle order
        if not isfinite(v) or v <= 0:
            raise ValueError("main_weight_factor must be > 0")
        return v


def load_config(data: dict[str, Any] | None = None) -> PathfindingModel:
    return PathfindingModel.model_validate(data or {})
