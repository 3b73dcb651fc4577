# runtime/registries.py
from collections.abc import Callable
from dataclasses import dataclass

from path_sim.app.protocols import SearchEngine
from path_sim.domain.entities.geography import Graph
from path_sim.search.engines import (
    AStarSearch,
    BreadthFirstSearch,
    DepthFirstSearch,
    DijkstraSearch,
)

EngineFactory = Callable[[Graph, str, str], SearchEngine]


@dataclass(frozen=True)
class AlgorithmSpec:
    key: str
    name: str  # display name
    weighted: bool  # engine reports its own path cost
    factory: EngineFactory

    def engine(self, graph: Graph, start: str, end: str) -> SearchEngine:
        return self.factory(graph, start, end)


_algorithm_registry: dict[str, AlgorithmSpec] = {}


# ------------------- Search algorithm registry ---------------------------


def register_algorithm(key: str, *, name: str, weighted: bool):
    def deco(fn: EngineFactory):
        _algorithm_registry[key] = AlgorithmSpec(key, name, weighted, fn)
        return fn

    return deco


def get_algorithm(key: str) -> AlgorithmSpec:
    try:
        return _algorithm_registry[key]
    except KeyError:
        raise ValueError(f"Unknown algorithm {key!r}") from None


def available_algorithms() -> list[AlgorithmSpec]:
    return list(_algorithm_registry.values())


@register_algorithm("bfs", name="Breadth-First Search (BFS)", weighted=False)
def _make_bfs(graph, start, end):
    return BreadthFirstSearch(graph, start, end)


@register_algorithm("dfs", name="Depth-First Search (DFS)", weighted=False)
def _make_dfs(graph, start, end):
    return DepthFirstSearch(graph, start, end)


@register_algorithm("dijkstra", name="Dijkstra's Algorithm", weighted=True)
def _make_dijkstra(graph, start, end):
    return DijkstraSearch(graph, start, end)


@register_algorithm("astar", name="A* Search", weighted=True)
def _make_astar(graph, start, end):
    return AStarSearch(graph, start, end)
