from typing import Protocol, runtime_checkable

from path_sim.domain.state import TripProgress
from path_sim.search.events import SearchEvent


# ------------- Search --------------------
@runtime_checkable
class SearchEngine(Protocol):
    """
    Responsibilities:
      • Hold one leg's frontier / visited / parent state.
      • Perform exactly one unit of work per advance() call.
    Once a Done event has been returned the engine must not be advanced again.
    """

    start: str
    end: str

    def advance(self) -> SearchEvent: ...


# ------------- Pacing --------------------
@runtime_checkable
class Cadence(Protocol):
    """
    Scheduling policy between search steps. Purely about pacing (animation);
    never affects which events a search produces.
    """

    def after_step(self, progress: TripProgress) -> None: ...
    def between_legs(self, leg_index: int) -> None:
        """Called after leg ``leg_index`` completes and before the next leg starts."""
