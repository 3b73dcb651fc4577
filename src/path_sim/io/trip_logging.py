# io/trip_logging.py
import json
import logging
import sys

from path_sim.domain.state import LegResult, NoPathForLeg, TripProgress, TripResult
from path_sim.io.business_events import (
    LegCompletedBiz,
    NoPathBiz,
    TripCancelledBiz,
    TripCompletedBiz,
    TripStartedBiz,
)
from path_sim.io.recorder import Recorder
from path_sim.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="path_sim.trips", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class TripLogging(NoopHooks):
    """
    One place to shape and emit structured logs and analytics events for a trip.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _biz(self, cls, name: str, **fields):
        if self.recorder is None:
            return
        self._seq += 1
        self.recorder.emit(cls(run_id=self.run_id, seq=self._seq, name=name, **fields))

    # --------------------------------------------------------

    def trip_start(self, *, route: list[str], algorithm: str):
        self._emit("INFO", "trip_start", algorithm=algorithm, route=route, legs=len(route) - 1)
        self._biz(TripStartedBiz, "trip_started", algorithm=algorithm, route=list(route))

    def leg_start(self, *, leg_index: int, start: str, end: str):
        self._emit("INFO", "leg_start", leg=leg_index, start=start, end=end)

    def visit(self, progress: TripProgress):
        if self.debug and (progress.nodes_visited % self.sample_every) == 0:
            self._emit(
                "DEBUG",
                "visit",
                leg=progress.leg_index,
                node=progress.node,
                visited=progress.nodes_visited,
                frontier=len(progress.frontier),
                elapsed_ms=round(progress.elapsed_ms, 3),
            )

    def leg_end(self, leg: LegResult):
        self._emit(
            "INFO",
            "leg_end",
            leg=leg.leg_index,
            start=leg.start,
            end=leg.end,
            hops=len(leg.path) - 1,
            distance=leg.total_distance,
            visited=leg.nodes_visited,
        )
        self._biz(
            LegCompletedBiz,
            "leg_completed",
            leg_index=leg.leg_index,
            start=leg.start,
            end=leg.end,
            path=list(leg.path),
            distance=leg.total_distance,
            nodes_visited=leg.nodes_visited,
        )

    def trip_end(self, result: TripResult):
        self._emit(
            "INFO",
            "trip_end",
            algorithm=result.algorithm,
            legs=result.leg_count,
            distance=result.total_distance,
            visited=result.nodes_visited,
            elapsed_ms=round(result.elapsed_ms, 3),
        )
        self._biz(
            TripCompletedBiz,
            "trip_completed",
            algorithm=result.algorithm,
            legs=result.leg_count,
            total_distance=result.total_distance,
            nodes_visited=result.nodes_visited,
            unique_nodes_visited=result.unique_nodes_visited,
            elapsed_ms=result.elapsed_ms,
        )

    def no_path(self, outcome: NoPathForLeg):
        self._emit(
            "WARNING",
            "no_path",
            leg=outcome.leg_index,
            start=outcome.start,
            end=outcome.end,
            visited=outcome.nodes_visited,
        )
        self._biz(
            NoPathBiz,
            "no_path",
            leg_index=outcome.leg_index,
            start=outcome.start,
            end=outcome.end,
            nodes_visited=outcome.nodes_visited,
        )

    def cancelled(self, *, leg_index: int, nodes_visited: int, elapsed_ms: float):
        self._emit("INFO", "trip_cancelled", leg=leg_index, visited=nodes_visited)
        self._biz(
            TripCancelledBiz, "trip_cancelled", leg_index=leg_index, nodes_visited=nodes_visited
        )
