"""Directed acyclic graph tier with a cached topological order.

DirectedAcyclicGraph wraps a DirectedGraph and refuses any edge that
would close a cycle, so the matrix never encodes one.  Node insertion
can't create a cycle on its own and needs no check.

On top of that it caches the topological order:

  insert      -> the new node has no edges yet, so in-degree 0, so it
                 may go first: prepend it to the cached order.
  replace     -> values change, identities don't: the cache holds
                 identities, so it stays valid.
  add_edge    -> ordering constraints changed: drop the cache.

The cache stores identities and values are looked up on the way out,
so a replaced node shows up with its new value.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from adjgraph.graph import topological
from adjgraph.graph.base import Comparator
from adjgraph.graph.cache import Cached
from adjgraph.graph.directed import DirectedGraph
from adjgraph.graph.errors import CycleError
from adjgraph.graph.identity import Identity, IdentityFn

T = TypeVar("T")

log = logging.getLogger(__name__)


class DirectedAcyclicGraph(Generic[T]):
    """Directed graph that enforces acyclicity at edge insertion.

    Usage:
        dag = DirectedAcyclicGraph(lambda n: n["name"])
        a = dag.insert({"name": "a"})
        b = dag.insert({"name": "b"})
        dag.add_edge(a, b)
        dag.add_edge(b, a)            # raises CycleError
        dag.topologically_sorted_nodes()
    """

    __slots__ = ("_graph", "_topo_order")

    def __init__(self, identity: IdentityFn[T] | None = None) -> None:
        self._graph: DirectedGraph[T] = DirectedGraph(identity)
        self._topo_order: Cached[list[Identity]] = Cached()

    @classmethod
    def _adopt(cls, graph: DirectedGraph[T]) -> DirectedAcyclicGraph[T]:
        # caller guarantees *graph* is acyclic and not referenced elsewhere
        dag: DirectedAcyclicGraph[T] = cls.__new__(cls)
        dag._graph = graph
        dag._topo_order = Cached()
        return dag

    @classmethod
    def from_directed_graph(cls, graph: DirectedGraph[T]) -> DirectedAcyclicGraph[T]:
        """Build a DAG holding a copy of *graph*'s nodes and edges.

        Raises CycleError if *graph* contains a cycle.  The copy is
        independent: later changes to *graph* do not reach the DAG.
        """
        if not graph.is_acyclic():
            raise CycleError(
                "Can't convert that graph to a DAG because it contains a cycle"
            )
        return cls._adopt(graph.copy())

    # ---- mutation --------------------------------------------------------

    def insert(self, node: T) -> Identity:
        identity = self._graph.insert(node)
        if self._topo_order.known:
            self._topo_order.set([identity, *self._topo_order.get()])
        return identity

    def replace(self, node: T) -> None:
        self._graph.replace(node)

    def upsert(self, node: T) -> Identity:
        identity = self._graph.identity_fn(node)
        if identity in self._graph:
            self._graph.replace(node)
            return identity
        return self.insert(node)

    def add_edge(self, from_id: Identity, to_id: Identity) -> None:
        """Add from_id -> to_id unless it would create a cycle.

        Raises NodeDoesntExistError for a missing endpoint, or
        CycleError naming both endpoints; neither changes the graph.
        """
        self._graph.ordinal_of(from_id)
        self._graph.ordinal_of(to_id)

        if self._graph.would_adding_edge_create_cycle(from_id, to_id):
            log.debug("Rejected edge %s -> %s: would create a cycle", from_id, to_id)
            raise CycleError(
                f"Can't add edge from {from_id} to {to_id} it would create a cycle",
                from_identity=from_id,
                to_identity=to_id,
            )

        self._topo_order.invalidate()
        # safety is proven above, so the cycle cache is only cleared
        self._graph.add_edge(from_id, to_id, skip_cycle_check=True)

    # ---- queries ---------------------------------------------------------

    def topologically_sorted_nodes(self) -> list[T]:
        """Nodes ordered so every edge's source precedes its target.

        Kahn's algorithm; cached until the next add_edge.  Ties between
        nodes that are ready at the same time are not part of the
        contract.
        """
        if not self._topo_order.known:
            self._topo_order.set(self._sort())
        container = self._graph.container
        return [container.value_of(i) for i in self._topo_order.get()]

    def _sort(self) -> list[Identity]:
        container = self._graph.container
        identities = container.identities()

        if not any(container.matrix.in_degrees()):
            # no edges at all: insertion order is already valid
            return identities

        # acyclicity is enforced on every add_edge, so Kahn's walk
        # reaches every node; no remaining-node check is needed here
        order = [identities[o] for o in topological.kahn_order(container.matrix)]
        log.debug("Topological order recomputed over %d node(s)", len(order))
        return order

    def get_subgraph_starting_from(self, start: Identity) -> DirectedAcyclicGraph[T]:
        """Closure of *start* as a new DAG.  Raises NodeDoesntExistError."""
        # a subgraph of an acyclic graph is acyclic
        return DirectedAcyclicGraph._adopt(self._graph.get_subgraph_starting_from(start))

    def indegree_of_node(self, identity: Identity) -> int:
        return self._graph.indegree_of_node(identity)

    def is_acyclic(self) -> bool:
        return self._graph.is_acyclic()

    def can_reach_from(self, start: Identity, end: Identity) -> bool:
        return self._graph.can_reach_from(start, end)

    def would_adding_edge_create_cycle(self, from_id: Identity, to_id: Identity) -> bool:
        return self._graph.would_adding_edge_create_cycle(from_id, to_id)

    def get_nodes(
        self,
        comparator: Comparator[T] | None = None,
        *,
        key: Callable[[T], Any] | None = None,
    ) -> list[T]:
        return self._graph.get_nodes(comparator, key=key)

    def get_node(self, identity: Identity) -> T | None:
        return self._graph.get_node(identity)

    def ordinal_of(self, identity: Identity) -> int:
        return self._graph.ordinal_of(identity)

    def has_edge(self, from_id: Identity, to_id: Identity) -> bool:
        return self._graph.has_edge(from_id, to_id)

    def to_directed_graph(self) -> DirectedGraph[T]:
        """Independent copy as a plain DirectedGraph (cycles allowed)."""
        return self._graph.copy()

    @property
    def node_count(self) -> int:
        return self._graph.node_count

    @property
    def edge_count(self) -> int:
        return self._graph.edge_count

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, identity: object) -> bool:
        return identity in self._graph

    def __len__(self) -> int:
        return self.node_count

    def __repr__(self) -> str:
        return f"DirectedAcyclicGraph(nodes={self.node_count}, edges={self.edge_count})"
