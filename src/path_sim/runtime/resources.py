# runtime/resources.py
import json
import logging
import pickle
from pathlib import Path

from path_sim.config.models import GraphByPath, GraphDataModel, GraphInline, GraphRef
from path_sim.domain.entities.geography import Graph

log = logging.getLogger(__name__)


def graph_from_model(data: GraphDataModel) -> Graph:
    """Nodes first, then edges; an edge to a missing node raises NodeNotFound."""
    g = Graph()
    for n in data.nodes:
        g.add_node(n.id, n.x, n.y, n.label, n.category)
    for e in data.edges:
        g.add_edge(e.u, e.v, e.weight)
    return g


def load_graph_from_path(file: str, fmt: str) -> Graph | None:
    path = Path(file)
    if not path.exists():
        return None
    if fmt == "json":
        with path.open("r", encoding="utf-8") as f:
            data = GraphDataModel.model_validate(json.load(f))
        return graph_from_model(data)
    if fmt == "pickle":
        with path.open("rb") as f:
            g = pickle.load(f)
        if not isinstance(g, Graph):
            raise TypeError(f"{file} does not contain a Graph (got {type(g).__name__})")
        return g
    raise ValueError(f"Unsupported graph fmt {fmt!r}")


def resolve_graph(ref: GraphRef) -> Graph:
    if isinstance(ref, GraphInline):
        return graph_from_model(ref)
    if isinstance(ref, GraphByPath):
        g = load_graph_from_path(ref.file, ref.fmt)
        if g is None:
            if ref.must_exist:
                raise FileNotFoundError(ref.file)
            log.warning("graph file %s missing, using an empty graph", ref.file)
            g = Graph()
        return g
    raise TypeError(ref)
