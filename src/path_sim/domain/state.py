# domain/state.py
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LegResult:
    leg_index: int
    start: str
    end: str
    path: list[str]
    total_distance: float
    nodes_visited: int  # Visit events in this leg


@dataclass(frozen=True)
class TripResult:
    algorithm: str
    route: list[str]
    legs: tuple[LegResult, ...]
    total_distance: float
    nodes_visited: int  # Visit events across all legs
    unique_nodes_visited: int
    elapsed_ms: float

    @property
    def leg_count(self) -> int:
        return len(self.legs)

    @property
    def path(self) -> list[str]:
        """Whole trip as one node sequence; shared leg endpoints appear once."""
        out: list[str] = []
        for leg in self.legs:
            out.extend(leg.path[1:] if out else leg.path)
        return out


@dataclass(frozen=True)
class NoPathForLeg:
    """Terminal trip outcome: one leg's search exhausted without reaching its target."""

    leg_index: int
    start: str
    end: str
    completed_legs: tuple[LegResult, ...] = ()
    nodes_visited: int = 0
    elapsed_ms: float = 0.0


@dataclass(frozen=True)
class TripProgress:
    leg_index: int
    node: str
    nodes_visited: int  # across the trip so far
    unique_nodes_visited: int
    distance_so_far: float  # completed legs only
    elapsed_ms: float
    frontier: frozenset[str] = field(default_factory=frozenset)
    distances: dict[str, float] | None = None
