# policy/cadence.py
import time
from collections.abc import Callable

from path_sim.app.protocols import Cadence
from path_sim.domain.state import TripProgress


class ImmediateCadence(Cadence):
    """Run steps back to back (tests, batch runs)."""

    def after_step(self, progress: TripProgress) -> None:
        pass

    def between_legs(self, leg_index: int) -> None:
        pass


class FixedDelayCadence(Cadence):
    """Fixed wall-clock delay per step, scaled by an animation speed factor."""

    def __init__(
        self,
        speed: float = 1.0,
        step_ms: float = 350.0,
        leg_pause_ms: float = 300.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if speed <= 0:
            raise ValueError(f"speed must be > 0, got {speed}")
        self.speed = speed
        self.step_s = step_ms / speed / 1000.0
        self.leg_pause_s = leg_pause_ms / speed / 1000.0
        self._sleep = sleep

    def after_step(self, progress: TripProgress) -> None:
        if self.step_s > 0:
            self._sleep(self.step_s)

    def between_legs(self, leg_index: int) -> None:
        if self.leg_pause_s > 0:
            self._sleep(self.leg_pause_s)
