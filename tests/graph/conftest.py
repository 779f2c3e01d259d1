"""Shared fixtures for graph tests."""
from __future__ import annotations

from typing import Any

import pytest

from adjgraph.graph.acyclic import DirectedAcyclicGraph
from adjgraph.graph.directed import DirectedGraph

SEED = 42

Node = dict[str, Any]


def by_name(node: Node) -> str:
    return node["name"]


def n(name: str, **extra: Any) -> Node:
    return {"name": name, **extra}


def make_directed(names: str, edges: list[tuple[str, str]]) -> DirectedGraph[Node]:
    g: DirectedGraph[Node] = DirectedGraph(by_name)
    for name in names:
        g.insert(n(name))
    for src, dst in edges:
        g.add_edge(src, dst)
    return g


def make_dag(names: str, edges: list[tuple[str, str]]) -> DirectedAcyclicGraph[Node]:
    g: DirectedAcyclicGraph[Node] = DirectedAcyclicGraph(by_name)
    for name in names:
        g.insert(n(name))
    for src, dst in edges:
        g.add_edge(src, dst)
    return g


def names_of(nodes: list[Node]) -> list[str]:
    return [node["name"] for node in nodes]


@pytest.fixture
def empty_directed() -> DirectedGraph[Node]:
    return DirectedGraph(by_name)


@pytest.fixture
def empty_dag() -> DirectedAcyclicGraph[Node]:
    return DirectedAcyclicGraph(by_name)


@pytest.fixture
def linear_dag() -> DirectedAcyclicGraph[Node]:
    """A -> B -> C -> D"""
    return make_dag("ABCD", [("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def diamond_dag() -> DirectedAcyclicGraph[Node]:
    """
    A -> B -> D
    A -> C -> D
    """
    return make_dag("ABCD", [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])


@pytest.fixture
def fan_out_graph() -> DirectedGraph[Node]:
    """A -> B, B -> C, B -> D"""
    return make_directed("ABCD", [("A", "B"), ("B", "C"), ("B", "D")])
