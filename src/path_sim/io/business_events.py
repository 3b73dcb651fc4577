# path_sim/io/business_events.py

from dataclasses import dataclass


# Base type for analytics events
@dataclass
class BizEvent:
    run_id: str
    seq: int  # emission order within the run
    name: str  # stable event name


@dataclass
class TripStartedBiz(BizEvent):
    algorithm: str
    route: list[str]


@dataclass
class LegCompletedBiz(BizEvent):
    leg_index: int
    start: str
    end: str
    path: list[str]
    distance: float
    nodes_visited: int


@dataclass
class TripCompletedBiz(BizEvent):
    algorithm: str
    legs: int
    total_distance: float
    nodes_visited: int
    unique_nodes_visited: int
    elapsed_ms: float


@dataclass
class NoPathBiz(BizEvent):
    leg_index: int
    start: str
    end: str
    nodes_visited: int


@dataclass
class TripCancelledBiz(BizEvent):
    leg_index: int
    nodes_visited: int
