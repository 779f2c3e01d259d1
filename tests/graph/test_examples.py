"""End-to-end usage examples, as shown in the README."""
from __future__ import annotations

import pytest

from adjgraph import (
    CycleError,
    DirectedAcyclicGraph,
    DirectedGraph,
    Graph,
    NodeAlreadyExistsError,
)

from conftest import by_name


class TestExamples:
    def test_graph_with_custom_identity(self) -> None:
        graph = Graph(by_name)
        node1 = graph.insert({"name": "node1", "count": 45, "metadata": {"color": "green"}})
        node2 = graph.insert({"name": "node2", "count": 5, "metadata": {"color": "red"}})
        node3 = graph.insert({"name": "node3", "count": 15, "metadata": {"size": "large"}})

        graph.add_edge(node1, node2)
        graph.add_edge(node2, node3)

        assert isinstance(graph, Graph)
        assert (node1, node2, node3) == ("node1", "node2", "node3")
        assert graph.edge_count == 2

    def test_directed_to_dag(self) -> None:
        graph = DirectedGraph(by_name)
        node1 = graph.insert({"name": "node1", "count": 45})
        node2 = graph.insert({"name": "node2", "count": 5})
        node3 = graph.insert({"name": "node3", "count": 15})

        assert graph.is_acyclic()

        graph.add_edge(node1, node2)
        graph.add_edge(node2, node3)
        assert graph.is_acyclic()

        dag = DirectedAcyclicGraph.from_directed_graph(graph)
        with pytest.raises(CycleError):
            dag.add_edge(node3, node1)

        # the plain directed graph still accepts it
        graph.add_edge(node3, node1)
        assert not graph.is_acyclic()

        with pytest.raises(CycleError):
            DirectedAcyclicGraph.from_directed_graph(graph)

    def test_dag_topological_order(self) -> None:
        graph = DirectedAcyclicGraph(by_name)
        node1 = graph.insert({"name": "node1"})
        node2 = graph.insert({"name": "node2"})
        node3 = graph.insert({"name": "node3"})
        node4 = graph.insert({"name": "node4"})
        node5 = graph.insert({"name": "node5"})

        graph.add_edge(node1, node2)
        graph.add_edge(node1, node3)
        graph.add_edge(node1, node5)
        graph.add_edge(node3, node4)
        graph.add_edge(node4, node5)

        assert graph.topologically_sorted_nodes() == [
            {"name": "node1"},
            {"name": "node2"},
            {"name": "node3"},
            {"name": "node4"},
            {"name": "node5"},
        ]

    def test_default_identity_rejects_duplicates(self) -> None:
        graph: Graph[dict] = Graph()
        graph.insert({"a": 1, "b": "b"})
        with pytest.raises(NodeAlreadyExistsError):
            graph.insert({"b": "b", "a": 1})
        assert len(graph) == 1
