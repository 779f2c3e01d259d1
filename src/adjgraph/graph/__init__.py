"""Adjacency-matrix graphs in three tiers: base, directed, acyclic."""

from adjgraph.graph.acyclic import DirectedAcyclicGraph
from adjgraph.graph.adjacency import AdjacencyMatrix
from adjgraph.graph.base import Graph
from adjgraph.graph.cache import Cached
from adjgraph.graph.container import NodeContainer
from adjgraph.graph.directed import DirectedGraph
from adjgraph.graph.errors import (
    CycleError,
    GraphError,
    NodeAlreadyExistsError,
    NodeDoesntExistError,
)
from adjgraph.graph.identity import Identity, IdentityFn, structural_hash

__all__ = [
    "AdjacencyMatrix",
    "Cached",
    "CycleError",
    "DirectedAcyclicGraph",
    "DirectedGraph",
    "Graph",
    "GraphError",
    "Identity",
    "IdentityFn",
    "NodeAlreadyExistsError",
    "NodeContainer",
    "NodeDoesntExistError",
    "structural_hash",
]
