# tests/conftest.py
import pytest

from path_sim.domain.entities.geography import Graph
from path_sim.sim.hooks import NoopHooks


@pytest.fixture
def triangle() -> Graph:
    """A-B 10, A-C 10, B-C 5, plus an isolated D."""
    g = Graph()
    g.add_node("A", 0, 0, "Alpha")
    g.add_node("B", 10, 0, "Bravo")
    g.add_node("C", 0, 10, "Charlie")
    g.add_node("D", 50, 50, "Delta")
    g.add_edge("A", "B", 10)
    g.add_edge("A", "C", 10)
    g.add_edge("B", "C", 5)
    return g


@pytest.fixture
def shortcut() -> Graph:
    """Direct A-B hop is heavy; A-C-B is two cheap hops."""
    g = Graph()
    g.add_node("A", 0, 0)
    g.add_node("B", 2, 0)
    g.add_node("C", 1, 0)
    g.add_edge("A", "B", 100)
    g.add_edge("A", "C", 1)
    g.add_edge("C", "B", 1)
    return g


@pytest.fixture
def star() -> Graph:
    """Hub O with four straight arms of three nodes each, 10 apart."""
    g = Graph()
    g.add_node("O", 0, 0)
    for arm, (dx, dy) in {"E": (1, 0), "W": (-1, 0), "N": (0, 1), "S": (0, -1)}.items():
        prev = "O"
        for i in range(1, 4):
            nid = f"{arm}{i}"
            g.add_node(nid, 10 * i * dx, 10 * i * dy)
            g.add_edge(prev, nid)
            prev = nid
    return g


# --- test hook that records the trip lifecycle ---
class TraceHooks(NoopHooks):
    def __init__(self):
        self.calls = []
        self.progress = []

    def trip_start(self, *, route, algorithm):
        self.calls.append(("trip_start", tuple(route), algorithm))

    def leg_start(self, *, leg_index, start, end):
        self.calls.append(("leg_start", leg_index, start, end))

    def visit(self, progress):
        self.progress.append(progress)

    def leg_end(self, leg):
        self.calls.append(("leg_end", leg.leg_index))

    def trip_end(self, result):
        self.calls.append(("trip_end", result.leg_count))

    def no_path(self, outcome):
        self.calls.append(("no_path", outcome.leg_index))

    def cancelled(self, *, leg_index, nodes_visited, elapsed_ms):
        self.calls.append(("cancelled", leg_index, nodes_visited))

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def trace() -> TraceHooks:
    return TraceHooks()
