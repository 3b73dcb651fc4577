# search/engines.py
"""Interruptible graph searches.

Each engine owns its frontier/visited/parent state and performs one unit of
work per ``advance()`` call, returning a ``Visit`` for every expanded node and
finally a single ``Done``:

    ready -> Visit* -> Done

A node's ``Visit`` is reported before the node is expanded; the next call
expands it and pops the following node. When the popped node is the goal the
next call returns ``Done`` with the path rebuilt from the parent links.
"""

import math
from collections import deque
from collections.abc import Mapping
from typing import ClassVar, Literal

from path_sim.domain.entities.geography import Graph
from path_sim.domain.errors import UnknownNode
from path_sim.search.events import Done, SearchEvent, Visit
from path_sim.search.heap import MinHeap

Status = Literal["ready", "running", "done"]


def reconstruct_path(parent: Mapping[str, str | None], end: str) -> list[str]:
    path = []
    node: str | None = end
    while node is not None:
        path.append(node)
        node = parent[node]
    path.reverse()
    return path


class BaseSearch:
    weighted: ClassVar[bool] = False

    def __init__(self, graph: Graph, start: str, end: str):
        for node_id in (start, end):
            if node_id not in graph:
                raise UnknownNode.for_id(node_id)
        self.graph = graph
        self.start = start
        self.end = end
        self.parent: dict[str, str | None] = {start: None}
        self._visited: dict[str, None] = {}  # insertion-ordered set
        self._current: str | None = None
        self._status: Status = "ready"

    @property
    def status(self) -> Status:
        return self._status

    @property
    def visited(self) -> tuple[str, ...]:
        return tuple(self._visited)

    def advance(self) -> SearchEvent:
        if self._status == "done":
            raise RuntimeError(f"{type(self).__name__} already finished")
        self._status = "running"

        if self._current is not None:
            if self._current == self.end:
                return self._finish(found=True)
            self._expand(self._current)

        node = self._pop()
        if node is None:
            return self._finish(found=False)
        self._visited[node] = None
        self._current = node
        return Visit(
            node=node,
            visited=self.visited,
            frontier=frozenset(self._frontier()),
            distances=self._distances(),
        )

    def run(self) -> Done:
        """Advance until the terminal event and return it."""
        while True:
            ev = self.advance()
            if isinstance(ev, Done):
                return ev

    # ------------- algorithm hooks ---------------

    def _pop(self) -> str | None:
        """Remove and return the next node to expand, or None when exhausted."""
        raise NotImplementedError

    def _expand(self, node: str) -> None:
        raise NotImplementedError

    def _frontier(self) -> list[str]:
        raise NotImplementedError

    def _distances(self) -> dict[str, float] | None:
        return None

    def _goal_distance(self) -> float | None:
        return None

    # ---------------------------------------------

    def _finish(self, *, found: bool) -> Done:
        self._status = "done"
        self._current = None
        if found:
            return Done(
                path=reconstruct_path(self.parent, self.end),
                visited=self.visited,
                total_distance=self._goal_distance(),
            )
        return Done(
            path=[], visited=self.visited, total_distance=math.inf if self.weighted else None
        )


class BreadthFirstSearch(BaseSearch):
    """FIFO frontier; shortest path by hop count, weights ignored."""

    def __init__(self, graph: Graph, start: str, end: str):
        super().__init__(graph, start, end)
        self._queue: deque[str] = deque([start])

    def _pop(self):
        return self._queue.popleft() if self._queue else None

    def _expand(self, node):
        for n in self.graph.neighbors(node):
            # a node is discovered once; its parent is one hop closer to start
            if n.node not in self.parent:
                self.parent[n.node] = node
                self._queue.append(n.node)

    def _frontier(self):
        return list(self._queue)


class DepthFirstSearch(BaseSearch):
    """LIFO frontier; first-listed neighbour explored first. No optimality."""

    def __init__(self, graph: Graph, start: str, end: str):
        super().__init__(graph, start, end)
        self._stack: list[str] = [start]

    def _pop(self):
        while self._stack:
            node = self._stack.pop()
            if node not in self._visited:
                return node
        return None

    def _expand(self, node):
        for n in reversed(self.graph.neighbors(node)):
            if n.node not in self._visited:
                self.parent[n.node] = node
                self._stack.append(n.node)

    def _frontier(self):
        return [n for n in self._stack if n not in self._visited]


class DijkstraSearch(BaseSearch):
    weighted = True

    def __init__(self, graph: Graph, start: str, end: str):
        super().__init__(graph, start, end)
        self.dist: dict[str, float] = {node_id: math.inf for node_id in graph}
        self.dist[start] = 0
        self._heap: MinHeap[str] = MinHeap()
        self._heap.push(self._priority(start), start)

    def _priority(self, node: str) -> float:
        return self.dist[node]

    def _pop(self):
        while self._heap:
            _, node = self._heap.pop()
            if node not in self._visited:  # stale entry
                return node
        return None

    def _expand(self, node):
        base = self.dist[node]
        for n in self.graph.neighbors(node):
            if n.node in self._visited:
                continue
            cand = base + n.weight
            if cand < self.dist.get(n.node, math.inf):
                self.dist[n.node] = cand
                self.parent[n.node] = node
                self._heap.push(self._priority(n.node), n.node)

    def _frontier(self):
        return [n for n in self._heap.items() if n not in self._visited]

    def _distances(self):
        return dict(self.dist)

    def _goal_distance(self):
        return self.dist[self.end]


class AStarSearch(DijkstraSearch):
    """Dijkstra ordered by g + straight-line distance to the goal.

    ``dist`` holds the true cost so far (g); only the heap priority includes
    the heuristic, so relaxation still compares g.
    """

    def _priority(self, node: str) -> float:
        return self.dist[node] + self.graph.heuristic(node, self.end)
