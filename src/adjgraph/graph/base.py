"""Base graph tier.

Graph[T] stores nodes of any type T, keyed by the identity function
given at construction, and single-direction edge markers between
them.  It is documented as the undirected tier, but add_edge marks
only the from -> to cell and nothing at this tier reads the matrix
symmetrically; the directed tiers rely on that.

Usage:
    graph = Graph(lambda n: n["name"])
    a = graph.insert({"name": "a", "count": 1})
    b = graph.insert({"name": "b", "count": 2})
    graph.add_edge(a, b)
    graph.upsert({"name": "a", "count": 10})   # replaces, keeps edges
"""
from __future__ import annotations

import functools
from typing import Any, Callable, Generic, TypeVar

from adjgraph.graph.container import NodeContainer
from adjgraph.graph.identity import Identity, IdentityFn

T = TypeVar("T")

Comparator = Callable[[T, T], int]


def sorted_nodes(
    nodes: list[T],
    comparator: Comparator[T] | None = None,
    key: Callable[[T], Any] | None = None,
) -> list[T]:
    """Stable sort by a cmp-style *comparator* or a *key*; neither
    means insertion order."""
    if comparator is not None and key is not None:
        raise ValueError("Pass either comparator or key, not both")
    if comparator is not None:
        return sorted(nodes, key=functools.cmp_to_key(comparator))
    if key is not None:
        return sorted(nodes, key=key)
    return nodes


class Graph(Generic[T]):
    """Adjacency-matrix graph over identity-keyed nodes."""

    __slots__ = ("_container",)

    def __init__(self, identity: IdentityFn[T] | None = None) -> None:
        self._container: NodeContainer[T] = NodeContainer(identity)

    # ---- mutation --------------------------------------------------------

    def insert(self, node: T) -> Identity:
        """Add *node*.  Raises NodeAlreadyExistsError if its identity is
        already present.  Returns the identity."""
        return self._container.insert(node)

    def replace(self, node: T) -> None:
        """Swap in a new value for an existing identity.

        Raises NodeDoesntExistError if the identity is absent.  With
        the default structural identity a changed value has a changed
        identity, so this only succeeds for identical values.
        """
        self._container.replace(node)

    def upsert(self, node: T) -> Identity:
        """Insert *node* if new, otherwise replace it."""
        identity, _ = self._container.upsert(node)
        return identity

    def add_edge(self, from_id: Identity, to_id: Identity) -> None:
        """Mark an edge from *from_id* to *to_id*.

        Raises NodeDoesntExistError for the first missing endpoint.
        """
        self._container.set_edge(from_id, to_id)

    # ---- queries ---------------------------------------------------------

    def get_nodes(
        self,
        comparator: Comparator[T] | None = None,
        *,
        key: Callable[[T], Any] | None = None,
    ) -> list[T]:
        return sorted_nodes(self._container.values(), comparator, key)

    def get_node(self, identity: Identity) -> T | None:
        return self._container.get(identity)

    def ordinal_of(self, identity: Identity) -> int:
        """Matrix row/column owned by *identity*.  Raises
        NodeDoesntExistError."""
        return self._container.ordinal(identity)

    def has_edge(self, from_id: Identity, to_id: Identity) -> bool:
        return self._container.has_edge(from_id, to_id)

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
        return f"Graph(nodes={self.node_count}, edges={self.edge_count})"
