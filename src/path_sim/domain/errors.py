# domain/errors.py
"""Typed structural errors raised while building graphs and starting searches.

A leg that simply finds no path is not an error; see
``path_sim.domain.state.NoPathForLeg``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PathSimError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class NodeNotFound(PathSimError):
    """An edge referenced a node that was never added to the graph."""

    u: str = ""
    v: str = ""

    @classmethod
    def for_edge(cls, u: str, v: str) -> NodeNotFound:
        return cls(f"Node not found: {u!r} or {v!r}", u=u, v=v)


@dataclass
class UnknownNode(PathSimError):
    """A search or lookup named a node id absent from the graph."""

    node_id: str = ""

    @classmethod
    def for_id(cls, node_id: str) -> UnknownNode:
        return cls(f"Unknown node: {node_id!r}", node_id=node_id)


@dataclass
class InvalidRoute(PathSimError):
    """Route rejected before any leg runs."""

    route: list[str] = field(default_factory=list)
    reason: str = ""
