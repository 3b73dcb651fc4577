from collections.abc import Callable

from path_sim.app.protocols import Cadence
from path_sim.config.models import CadenceFixedDelayModel, CadenceImmediateModel, CadenceUnion
from path_sim.policy.cadence import FixedDelayCadence, ImmediateCadence


def make_cadence(cfg: CadenceUnion, *, sleep: Callable[[float], None] | None = None) -> Cadence:
    if isinstance(cfg, CadenceImmediateModel):
        return ImmediateCadence()
    elif isinstance(cfg, CadenceFixedDelayModel):
        kw = {"sleep": sleep} if sleep is not None else {}
        return FixedDelayCadence(
            speed=cfg.speed, step_ms=cfg.step_ms, leg_pause_ms=cfg.leg_pause_ms, **kw
        )
    else:
        raise TypeError(cfg)
