"""adjgraph: generic in-memory graphs over identity-keyed nodes."""

from adjgraph.graph import (
    CycleError,
    DirectedAcyclicGraph,
    DirectedGraph,
    Graph,
    GraphError,
    Identity,
    NodeAlreadyExistsError,
    NodeDoesntExistError,
    structural_hash,
)

__all__ = [
    "CycleError",
    "DirectedAcyclicGraph",
    "DirectedGraph",
    "Graph",
    "GraphError",
    "Identity",
    "NodeAlreadyExistsError",
    "NodeDoesntExistError",
    "structural_hash",
]
