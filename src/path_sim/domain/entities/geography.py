# domain/entities/geography.py
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from path_sim.domain.errors import NodeNotFound, UnknownNode


@dataclass(frozen=True)
class Point:
    x: float  # plane coordinates, only used for weights and the A* heuristic
    y: float


@dataclass(frozen=True)
class Place:
    id: str
    point: Point
    label: str = ""
    category: str = "default"


@dataclass(frozen=True)
class Neighbor:
    node: str
    weight: int


def _round_half_up(w: float) -> int:
    return int(math.floor(w + 0.5))


class Graph:
    """Weighted undirected graph of named places.

    Built once, then shared read-only by every search. Edge weights are
    non-negative integers; omitted weights default to the rounded straight-line
    distance so the Euclidean heuristic stays admissible.
    """

    def __init__(self):
        self._places: dict[str, Place] = {}
        self._adj: dict[str, list[Neighbor]] = {}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._places

    def __len__(self) -> int:
        return len(self._places)

    def __iter__(self) -> Iterator[str]:
        return iter(self._places)

    # ---------------- construction ----------------

    def add_node(
        self, node_id: str, x: float, y: float, label: str = "", category: str = "default"
    ) -> Place:
        place = Place(node_id, Point(float(x), float(y)), label or node_id, category)
        self._places[node_id] = place
        self._adj.setdefault(node_id, [])
        return place

    def add_edge(self, u: str, v: str, weight: float | None = None) -> int:
        a, b = self._places.get(u), self._places.get(v)
        if a is None or b is None:
            raise NodeNotFound.for_edge(u, v)
        if weight is None:
            weight = math.hypot(b.point.x - a.point.x, b.point.y - a.point.y)
        elif not math.isfinite(weight):
            raise ValueError(f"edge {u!r}-{v!r} has non-finite weight {weight}")
        elif weight < 0:
            raise ValueError(f"edge {u!r}-{v!r} has negative weight {weight}")
        w = _round_half_up(weight)
        self._adj[u].append(Neighbor(v, w))
        self._adj[v].append(Neighbor(u, w))
        return w

    # ---------------- queries ----------------

    def node(self, node_id: str) -> Place:
        try:
            return self._places[node_id]
        except KeyError:
            raise UnknownNode.for_id(node_id) from None

    def nodes(self) -> list[Place]:
        return list(self._places.values())

    def neighbors(self, node_id: str) -> Sequence[Neighbor]:
        return self._adj.get(node_id, ())

    def edges(self) -> list[tuple[str, str, int]]:
        seen: set[frozenset[str]] = set()
        out = []
        for u, nbrs in self._adj.items():
            for n in nbrs:
                key = frozenset((u, n.node))
                if key not in seen:
                    seen.add(key)
                    out.append((u, n.node, n.weight))
        return out

    def edge_weight(self, u: str, v: str) -> int | None:
        for n in self._adj.get(u, ()):
            if n.node == v:
                return n.weight
        return None

    def path_distance(self, path: Iterable[str]) -> int:
        """Sum of edge weights along ``path``; hops without an edge add nothing."""
        nodes = list(path)
        total = 0
        for u, v in zip(nodes, nodes[1:]):
            w = self.edge_weight(u, v)
            if w is not None:
                total += w
        return total

    def heuristic(self, a: str, b: str) -> float:
        pa, pb = self.node(a).point, self.node(b).point
        return math.hypot(pb.x - pa.x, pb.y - pa.y)
