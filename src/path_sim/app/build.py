# path_sim/app/build.py
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from path_sim.app.protocols import Cadence
from path_sim.app.trip_runner import TripOutcome, TripRunner
from path_sim.config.models import ScenarioModel
from path_sim.domain.entities.geography import Graph
from path_sim.io.recorder import JsonlSink, Recorder
from path_sim.io.trip_logging import TripLogging  # JSON logs
from path_sim.runtime.policy_factory import make_cadence
from path_sim.runtime.resources import resolve_graph
from path_sim.sim.hooks import NoopHooks, TripHooks


@dataclass
class App:
    model: ScenarioModel
    graph: Graph
    cadence: Cadence
    hooks: TripHooks
    runner: TripRunner

    def run(self) -> TripOutcome:
        return self.runner.run(self.model.route)


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    sleep: Callable[[float], None] | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Graph (immutable from here on)
    graph = resolve_graph(model.graph)

    # 2) Hooks
    hooks = (
        TripLogging(
            run_id=model.run_id,
            recorder=recorder or Recorder(JsonlSink()),
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Pacing policy & runner
    cadence = make_cadence(model.cadence, sleep=sleep)
    runner = TripRunner(graph, model.search.algorithm, cadence=cadence, hooks=hooks)

    return App(model, graph, cadence, hooks, runner)
