# main.py
import json
import os
import sys

from path_sim.app.build import build
from path_sim.config.models import GraphByPath, ScenarioModel
from path_sim.domain.state import NoPathForLeg, TripResult


def run(scenario_path: str) -> int:
    with open(scenario_path, encoding="utf-8") as f:
        model = ScenarioModel.model_validate(json.load(f))
    # graph files are relative to the scenario, not the working directory
    if isinstance(model.graph, GraphByPath) and not os.path.isabs(model.graph.file):
        base = os.path.dirname(os.path.abspath(scenario_path))
        model.graph.file = os.path.join(base, model.graph.file)
    app = build(model)

    outcome = app.run()
    if isinstance(outcome, TripResult):
        print(
            f"Trip complete: {outcome.leg_count} leg(s), total distance "
            f"{round(outcome.total_distance)}, {outcome.nodes_visited} nodes visited, "
            f"{outcome.elapsed_ms:.0f}ms"
        )
        print(" -> ".join(outcome.path))
        return 0
    if isinstance(outcome, NoPathForLeg):
        print(f"No path found: {outcome.start} -> {outcome.end}")
        return 1
    print("Trip cancelled")
    return 2


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python main.py <scenario.json>", file=sys.stderr)
        sys.exit(64)
    sys.exit(run(sys.argv[1]))
