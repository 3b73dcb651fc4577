# tests/app/test_build_and_run.py
import json
import pickle
from pathlib import Path

import pytest

from path_sim.app.build import build
from path_sim.domain.errors import NodeNotFound, UnknownNode
from path_sim.domain.state import TripResult
from path_sim.io.recorder import MemorySink, Recorder
from path_sim.policy.cadence import FixedDelayCadence, ImmediateCadence
from path_sim.runtime.resources import load_graph_from_path
from path_sim.search.engines import BreadthFirstSearch
from path_sim.sim.hooks import NoopHooks

GRAPH = {
    "nodes": [
        {"id": "A", "x": 0, "y": 0, "label": "Alpha"},
        {"id": "B", "x": 10, "y": 0},
        {"id": "C", "x": 0, "y": 10},
    ],
    "edges": [
        {"u": "A", "v": "B", "weight": 10},
        {"u": "A", "v": "C", "weight": 10},
        {"u": "B", "v": "C", "weight": 5},
    ],
}


def scenario(**over):
    cfg = {
        "name": "test",
        "run_id": "t-1",
        "graph": {"by": "inline", **GRAPH},
        "search": {"algorithm": "dijkstra"},
        "route": ["A", "C", "B"],
    }
    cfg.update(over)
    return cfg


def test_build_runs():
    app = build(scenario(), use_logging=False)
    assert isinstance(app.hooks, NoopHooks)
    assert isinstance(app.cadence, ImmediateCadence)
    assert app.graph.node("A").label == "Alpha"
    result = app.run()
    assert isinstance(result, TripResult)
    assert result.total_distance == 15
    assert result.leg_count == 2


def test_build_with_logging_records_business_events():
    sink = MemorySink()
    app = build(scenario(), recorder=Recorder(sink))
    app.run()
    assert sink.names() == ["trip_started", "leg_completed", "leg_completed", "trip_completed"]
    assert [ev.seq for ev in sink.events] == [1, 2, 3, 4]
    assert sink.events[-1].total_distance == 15


def test_build_fixed_delay_cadence_uses_injected_sleep():
    slept = []
    app = build(
        scenario(cadence={"kind": "fixed_delay", "speed": 10.0}),
        use_logging=False,
        sleep=slept.append,
    )
    assert isinstance(app.cadence, FixedDelayCadence)
    result = app.run()
    assert len(slept) == result.nodes_visited + 1


def test_graph_from_json_file(tmp_path):
    f = tmp_path / "g.json"
    f.write_text(json.dumps(GRAPH), encoding="utf-8")
    app = build(scenario(graph={"by": "path", "file": str(f)}), use_logging=False)
    assert app.run().total_distance == 15


def test_graph_from_pickle_file(tmp_path):
    g = build(scenario(), use_logging=False).graph
    f = tmp_path / "g.pkl"
    f.write_bytes(pickle.dumps(g))
    app = build(scenario(graph={"by": "path", "file": str(f), "fmt": "pickle"}), use_logging=False)
    assert app.graph.edges() == g.edges()


def test_missing_graph_file(tmp_path):
    missing = str(tmp_path / "nope.json")
    with pytest.raises(FileNotFoundError):
        build(scenario(graph={"by": "path", "file": missing}), use_logging=False)

    app = build(
        scenario(graph={"by": "path", "file": missing, "must_exist": False}), use_logging=False
    )
    assert len(app.graph) == 0
    with pytest.raises(UnknownNode):
        app.run()


def test_edge_to_unknown_node_fails_graph_build():
    bad = {"nodes": GRAPH["nodes"], "edges": [{"u": "A", "v": "Z"}]}
    with pytest.raises(NodeNotFound):
        build(scenario(graph={"by": "inline", **bad}), use_logging=False)


def test_main_runs_scenario_file(tmp_path, capsys):
    import main

    f = tmp_path / "scenario.json"
    f.write_text(json.dumps(scenario(run_id="cli")), encoding="utf-8")
    assert main.run(str(f)) == 0
    out = capsys.readouterr().out
    assert "Trip complete: 2 leg(s), total distance 15" in out
    assert "A -> C -> B" in out


def test_main_resolves_graph_relative_to_scenario(tmp_path, monkeypatch, capsys):
    import main

    (tmp_path / "maps").mkdir()
    (tmp_path / "maps" / "g.json").write_text(json.dumps(GRAPH), encoding="utf-8")
    f = tmp_path / "maps" / "scenario.json"
    f.write_text(json.dumps(scenario(graph={"by": "path", "file": "g.json"})), encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    assert main.run(str(f.relative_to(tmp_path))) == 0
    assert "total distance 15" in capsys.readouterr().out


# ---------- bundled city map

SCENARIOS = Path(__file__).resolve().parents[2] / "scenarios"


def test_city_map_loads_and_is_connected():
    g = load_graph_from_path(str(SCENARIOS / "city_map.json"), "json")
    assert len(g) == 89
    assert len(g.edges()) == 146
    assert g.node("home").label == "My Home"
    assert {p.category for p in g.nodes()} >= {"home", "park", "station", "hospital"}

    # a search for an unreachable target expands every reachable node once
    g.add_node("island", -1000, -1000)
    done = BreadthFirstSearch(g, "home", "island").run()
    assert not done.found
    assert len(done.visited) == 89


def test_city_tour_scenario_runs_with_weighted_searches():
    with (SCENARIOS / "city_tour.json").open(encoding="utf-8") as f:
        cfg = json.load(f)
    cfg["graph"]["file"] = str(SCENARIOS / cfg["graph"]["file"])
    cfg["cadence"] = {"kind": "immediate"}

    astar = build(cfg, use_logging=False).run()
    cfg["search"] = {"algorithm": "dijkstra"}
    dijkstra = build(cfg, use_logging=False).run()

    assert isinstance(astar, TripResult)
    assert astar.route == ["home", "airport", "lighthouse", "monastery"]
    assert astar.total_distance >= dijkstra.total_distance
    graph = build(cfg, use_logging=False).graph
    for leg in astar.legs + dijkstra.legs:
        assert leg.total_distance == graph.path_distance(leg.path)
