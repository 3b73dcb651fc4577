import math
import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- GRAPH ---------------------


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    x: float
    y: float
    label: str = ""
    category: str = "default"


class EdgeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    u: str
    v: str
    weight: float | None = None  # None => rounded straight-line distance

    @field_validator("weight")
    @classmethod
    def _finite_nonneg(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is None:
            return v
        if not math.isfinite(v):
            raise ValueError(f"{info.field_name} must be finite")
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class GraphDataModel(BaseModel):
    """Node/edge tables; also the on-disk JSON layout for ``fmt="json"``."""

    model_config = ConfigDict(extra="forbid")
    nodes: list[NodeModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)


class GraphInline(GraphDataModel):
    by: Literal["inline"] = "inline"


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["json", "pickle"] = "json"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


GraphRef = Annotated[GraphInline | GraphByPath, Field(discriminator="by")]


# ----------------- SEARCH ---------------------


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    algorithm: Literal["bfs", "dfs", "dijkstra", "astar"] = "dijkstra"


# ----------------- CADENCE ---------------------


class CadenceImmediateModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["immediate"] = "immediate"


class CadenceFixedDelayModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["fixed_delay"] = "fixed_delay"
    speed: float = Field(default=1.0, gt=0)
    step_ms: float = 350.0
    leg_pause_ms: float = 300.0

    @field_validator("step_ms", "leg_pause_ms")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


CadenceUnion = Annotated[
    CadenceImmediateModel | CadenceFixedDelayModel, Field(discriminator="kind")
]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    log: LogModel = LogModel()
    graph: GraphRef
    search: SearchModel = SearchModel()
    cadence: CadenceUnion = Field(default_factory=CadenceImmediateModel)
    route: list[str] = Field(default_factory=list)  # checked by the trip runner, not here
