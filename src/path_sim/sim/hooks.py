# sim/hooks.py
from typing import Protocol

from path_sim.domain.state import LegResult, NoPathForLeg, TripProgress, TripResult


class TripHooks(Protocol):
    def trip_start(self, *, route: list[str], algorithm: str): ...
    def leg_start(self, *, leg_index: int, start: str, end: str): ...
    def visit(self, progress: TripProgress): ...
    def leg_end(self, leg: LegResult): ...
    def trip_end(self, result: TripResult): ...
    def no_path(self, outcome: NoPathForLeg): ...
    def cancelled(self, *, leg_index: int, nodes_visited: int, elapsed_ms: float): ...


class NoopHooks:
    def trip_start(self, **_):
        pass

    def leg_start(self, **_):
        pass

    def visit(self, *_, **__):
        pass

    def leg_end(self, *_, **__):
        pass

    def trip_end(self, *_, **__):
        pass

    def no_path(self, *_, **__):
        pass

    def cancelled(self, **_):
        pass
