"""Directed graph tier: in-degree, cycle detection, reachability, closure.

DirectedGraph keeps a tri-state cycle cache next to its container:
unknown, known acyclic, or known cyclic.  is_acyclic() fills it
lazily with Kahn's algorithm.  add_edge() keeps it current by asking,
before writing the edge, whether that edge would close a cycle, which
is a single reachability walk instead of a full Kahn pass.  Once the
graph is known to be cyclic it stays cyclic (edges are never removed),
so that check is skipped entirely.

Cycles are allowed at this tier.  DirectedAcyclicGraph builds on top
of it and refuses them.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from adjgraph.graph import reachability, topological
from adjgraph.graph.base import Comparator, sorted_nodes
from adjgraph.graph.cache import Cached
from adjgraph.graph.container import NodeContainer
from adjgraph.graph.identity import Identity, IdentityFn

T = TypeVar("T")

log = logging.getLogger(__name__)


class DirectedGraph(Generic[T]):
    """Directed graph with a cached acyclicity flag."""

    __slots__ = ("_container", "_has_cycle")

    def __init__(self, identity: IdentityFn[T] | None = None) -> None:
        self._container: NodeContainer[T] = NodeContainer(identity)
        self._has_cycle: Cached[bool] = Cached()

    @classmethod
    def _from_container(cls, container: NodeContainer[T]) -> DirectedGraph[T]:
        graph: DirectedGraph[T] = cls.__new__(cls)
        graph._container = container
        graph._has_cycle = Cached()
        return graph

    # ---- mutation --------------------------------------------------------

    def insert(self, node: T) -> Identity:
        # a fresh node has no edges, so the cycle cache stays valid
        return self._container.insert(node)

    def replace(self, node: T) -> None:
        self._container.replace(node)

    def upsert(self, node: T) -> Identity:
        identity, _ = self._container.upsert(node)
        return identity

    def add_edge(
        self,
        from_id: Identity,
        to_id: Identity,
        skip_cycle_check: bool = False,
    ) -> None:
        """Add a directed edge from_id -> to_id.

        With *skip_cycle_check* the cycle cache is just invalidated;
        callers that have already proven the edge safe use it to avoid
        a second reachability walk.  Otherwise the cache is updated
        with whether this edge closes a cycle.

        Raises NodeDoesntExistError (from endpoint first) before
        anything is changed.
        """
        self.ordinal_of(from_id)
        self.ordinal_of(to_id)

        if skip_cycle_check:
            self._has_cycle.invalidate()
            log.debug("Cycle cache invalidated by unchecked edge %s -> %s", from_id, to_id)
        elif not self._has_cycle.is_known_as(True):
            # resolve first so a known-acyclic flag is never derived
            # from a graph that already had a cycle
            if not self._has_cycle.known:
                self.is_acyclic()
            if self._has_cycle.is_known_as(False):
                creates = self.would_adding_edge_create_cycle(from_id, to_id)
                self._has_cycle.set(creates)
                if creates:
                    log.debug("Edge %s -> %s closes a cycle", from_id, to_id)

        self._container.set_edge(from_id, to_id)

    # ---- queries ---------------------------------------------------------

    def indegree_of_node(self, identity: Identity) -> int:
        """Number of edges pointing at *identity*."""
        return self._container.matrix.in_degree(self._container.ordinal(identity))

    def is_acyclic(self) -> bool:
        """True if the graph has no directed cycle.

        O(1) when cached, otherwise one Kahn pass, O(V + E) in the
        number of matrix cells touched.
        """
        if self._has_cycle.known:
            return not self._has_cycle.get()

        acyclic = topological.is_acyclic(self._container.matrix)
        self._has_cycle.set(not acyclic)
        log.debug(
            "Cycle cache recomputed over %d node(s): acyclic=%s",
            len(self._container), acyclic,
        )
        return acyclic

    def can_reach_from(self, start: Identity, end: Identity) -> bool:
        """Depth-first search along directed edges from *start* to *end*.

        Caveat: returns False for start == end unless a cycle actually
        leads back to *start*.
        """
        return reachability.can_reach(
            self._container.matrix,
            self._container.ordinal(start),
            self._container.ordinal(end),
        )

    def would_adding_edge_create_cycle(self, from_id: Identity, to_id: Identity) -> bool:
        """True if the edge from_id -> to_id would leave a cycle.

        O(1) when the graph is already known to be cyclic or the edge
        is a self-loop; otherwise a reachability walk back from *to_id*.
        """
        if self._has_cycle.is_known_as(True) or from_id == to_id:
            return True
        return self.can_reach_from(to_id, from_id)

    def get_subgraph_starting_from(self, start: Identity) -> DirectedGraph[T]:
        """Closure of *start*: every node reachable from it (itself
        included) with the edges among them, as a new graph sharing
        this graph's identity function.

        Raises NodeDoesntExistError if *start* is absent.
        """
        reached = reachability.closure(
            self._container.matrix, self._container.ordinal(start)
        )
        log.debug("Subgraph from %s spans %d node(s)", start, len(reached))
        return DirectedGraph._from_container(self._container.induced(reached))

    def ordinal_of(self, identity: Identity) -> int:
        """Matrix row/column owned by *identity*; never changes once
        assigned.  Raises NodeDoesntExistError."""
        return self._container.ordinal(identity)

    def get_nodes(
        self,
        comparator: Comparator[T] | None = None,
        *,
        key: Callable[[T], Any] | None = None,
    ) -> list[T]:
        return sorted_nodes(self._container.values(), comparator, key)

    def get_node(self, identity: Identity) -> T | None:
        return self._container.get(identity)

    def has_edge(self, from_id: Identity, to_id: Identity) -> bool:
        return self._container.has_edge(from_id, to_id)

    def copy(self) -> DirectedGraph[T]:
        """Independent copy: nodes and edges are not shared."""
        clone = DirectedGraph._from_container(self._container.copy())
        if self._has_cycle.known:
            clone._has_cycle.set(self._has_cycle.get())
        return clone

    @property
    def identity_fn(self) -> IdentityFn[T]:
        return self._container.identity_fn

    @property
    def container(self) -> NodeContainer[T]:
        """Underlying store.  Read it freely; write only through the
        graph, or the cycle cache goes stale."""
        return self._container

    @property
    def node_count(self) -> int:
        return len(self._container)

    @property
    def edge_count(self) -> int:
        return self._container.matrix.edge_count

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, identity: object) -> bool:
        return identity in self._container

    def __len__(self) -> int:
        return self.node_count

    def __repr__(self) -> str:
        return f"DirectedGraph(nodes={self.node_count}, edges={self.edge_count})"
