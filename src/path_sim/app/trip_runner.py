# app/trip_runner.py
import logging
import threading
import time
from collections.abc import Callable, Sequence

from path_sim.app.protocols import Cadence
from path_sim.domain.entities.geography import Graph
from path_sim.domain.errors import InvalidRoute, UnknownNode
from path_sim.domain.state import LegResult, NoPathForLeg, TripProgress, TripResult
from path_sim.policy.cadence import ImmediateCadence
from path_sim.runtime.registries import AlgorithmSpec, get_algorithm
from path_sim.search.events import Done
from path_sim.sim.hooks import NoopHooks, TripHooks

log = logging.getLogger(__name__)

TripOutcome = TripResult | NoPathForLeg | None


def validate_route(graph: Graph, route: Sequence[str]) -> list[str]:
    stops = list(route)
    if len(stops) < 2:
        raise InvalidRoute(
            f"route needs a start and at least one stop, got {len(stops)}",
            route=stops,
            reason="too_short",
        )
    for a, b in zip(stops, stops[1:]):
        if a == b:
            raise InvalidRoute(
                f"consecutive duplicate stop: {a!r}", route=stops, reason="consecutive_duplicate"
            )
    for stop in stops:
        if stop not in graph:
            raise UnknownNode.for_id(stop)
    return stops


class _Cancelled(Exception):
    pass


class TripRunner:
    """Runs one search per consecutive pair of stops and aggregates the trip.

    Exactly one engine is alive at a time, and one trip per runner: a second
    ``run()`` while a trip is in progress raises ``RuntimeError``.
    ``cancel()`` may be called from a hook, the cadence, or another thread; the
    flag is checked before every step, and a cancelled run returns ``None``
    without reporting a result. Each ``run()`` starts with the flag cleared.
    """

    def __init__(
        self,
        graph: Graph,
        algorithm: str | AlgorithmSpec,
        *,
        cadence: Cadence | None = None,
        hooks: TripHooks | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.graph = graph
        if not isinstance(algorithm, AlgorithmSpec):
            algorithm = get_algorithm(algorithm)
        self.algorithm = algorithm
        self.cadence = cadence or ImmediateCadence()
        self.hooks = hooks or NoopHooks()
        self._clock = clock
        self._cancel = threading.Event()
        self._busy = threading.Lock()

    # ---------------- cancellation ----------------

    def cancel(self) -> None:
        """Stop the trip in progress; a no-op when nothing is running."""
        if self._busy.locked():
            self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def running(self) -> bool:
        return self._busy.locked()

    # ---------------- main loop ----------------

    def run(self, route: Sequence[str]) -> TripOutcome:
        stops = validate_route(self.graph, route)
        if not self._busy.acquire(blocking=False):
            raise RuntimeError("a trip is already running on this runner")
        try:
            self._cancel.clear()
            return self._run_trip(stops)
        finally:
            self._busy.release()

    def _run_trip(self, stops: list[str]) -> TripOutcome:
        self._t0 = self._clock()
        self._nodes_visited = 0
        self._seen: set[str] = set()
        self._distance = 0.0
        legs: list[LegResult] = []

        self.hooks.trip_start(route=stops, algorithm=self.algorithm.key)
        leg_index = 0
        try:
            for leg_index, (a, b) in enumerate(zip(stops, stops[1:])):
                if leg_index > 0:
                    self.cadence.between_legs(leg_index - 1)
                self._check_cancel()
                done, visits = self._run_leg(leg_index, a, b)

                if not done.found:
                    outcome = NoPathForLeg(
                        leg_index=leg_index,
                        start=a,
                        end=b,
                        completed_legs=tuple(legs),
                        nodes_visited=self._nodes_visited,
                        elapsed_ms=self._elapsed_ms(),
                    )
                    log.info("no path for leg %d: %s -> %s", leg_index, a, b)
                    self.hooks.no_path(outcome)
                    return outcome

                leg = LegResult(
                    leg_index=leg_index,
                    start=a,
                    end=b,
                    path=done.path,
                    total_distance=self._leg_distance(done),
                    nodes_visited=visits,
                )
                self._distance += leg.total_distance
                legs.append(leg)
                self.hooks.leg_end(leg)
        except _Cancelled:
            self.hooks.cancelled(
                leg_index=leg_index,
                nodes_visited=self._nodes_visited,
                elapsed_ms=self._elapsed_ms(),
            )
            return None

        result = TripResult(
            algorithm=self.algorithm.key,
            route=stops,
            legs=tuple(legs),
            total_distance=self._distance,
            nodes_visited=self._nodes_visited,
            unique_nodes_visited=len(self._seen),
            elapsed_ms=self._elapsed_ms(),
        )
        self.hooks.trip_end(result)
        return result

    def _run_leg(self, leg_index: int, start: str, end: str) -> tuple[Done, int]:
        engine = self.algorithm.engine(self.graph, start, end)
        self.hooks.leg_start(leg_index=leg_index, start=start, end=end)
        visits = 0
        while True:
            self._check_cancel()
            ev = engine.advance()
            if isinstance(ev, Done):
                return ev, visits
            visits += 1
            self._nodes_visited += 1
            self._seen.add(ev.node)
            progress = TripProgress(
                leg_index=leg_index,
                node=ev.node,
                nodes_visited=self._nodes_visited,
                unique_nodes_visited=len(self._seen),
                distance_so_far=self._distance,
                elapsed_ms=self._elapsed_ms(),
                frontier=ev.frontier,
                distances=ev.distances,
            )
            self.hooks.visit(progress)
            self.cadence.after_step(progress)

    def _leg_distance(self, done: Done) -> float:
        # BFS/DFS have no cost model; report the physical length of their path
        if self.algorithm.weighted and done.total_distance is not None:
            return done.total_distance
        return self.graph.path_distance(done.path)

    def _check_cancel(self) -> None:
        if self._cancel.is_set():
            raise _Cancelled

    def _elapsed_ms(self) -> float:
        return (self._clock() - self._t0) * 1000
