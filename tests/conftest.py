"""Shared fixtures: small hand-built graphs and a controllable clock."""

from __future__ import annotations

import pytest

from graph import Graph, GraphStore


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, t: float = 0.0):
        self.t = t

    def __call__(self) -> float:
        return self.t


def build_graph(labels: int, edges, directed: bool = False) -> Graph:
    """`labels` vertices (v0.., A..) and edges given as index pairs."""
    g = Graph(is_directed=directed)
    for i in range(labels):
        g.create_vertex(100.0 * i, 100.0)
    for a, b in edges:
        g.add_edge(f"v{a}", f"v{b}")
    return g


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def path_graph():
    """A – B – C, undirected."""
    return build_graph(3, [(0, 1), (1, 2)])


@pytest.fixture()
def store():
    return GraphStore()
