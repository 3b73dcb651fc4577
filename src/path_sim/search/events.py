# search/events.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Visit:
    node: str
    visited: tuple[str, ...]  # expanded so far, in expansion order
    frontier: frozenset[str]  # pending, not yet expanded
    distances: dict[str, float] | None = None  # Dijkstra / A* only


@dataclass(frozen=True)
class Done:
    path: list[str]  # empty when the goal is unreachable
    visited: tuple[str, ...]
    total_distance: float | None = None  # None for unweighted searches

    @property
    def found(self) -> bool:
        return bool(self.path)


SearchEvent = Visit | Done
