"""Node storage shared by every graph tier.

NodeContainer pairs an insertion-ordered identity -> value map with an
AdjacencyMatrix.  The position of an identity in that order is its
ordinal: the row/column it owns in the matrix.  Since nodes are never
removed, ordinals are assigned once and never move.

The tiers wrap a container rather than inheriting from each other, so
the cached state each tier layers on top (cycle flag, topological
order) lives with the tier that knows when to invalidate it.
"""
from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

from adjgraph.graph.adjacency import AdjacencyMatrix
from adjgraph.graph.errors import NodeAlreadyExistsError, NodeDoesntExistError
from adjgraph.graph.identity import Identity, IdentityFn, structural_hash

T = TypeVar("T")


class NodeContainer(Generic[T]):
    """Identity-keyed node store plus its adjacency matrix."""

    __slots__ = ("_identity", "_nodes", "_ordinals", "_matrix")

    def __init__(self, identity: IdentityFn[T] | None = None) -> None:
        self._identity: IdentityFn[T] = identity or structural_hash
        self._nodes: dict[Identity, T] = {}
        self._ordinals: dict[Identity, int] = {}
        self._matrix = AdjacencyMatrix()

    @property
    def identity_fn(self) -> IdentityFn[T]:
        return self._identity

    @property
    def matrix(self) -> AdjacencyMatrix:
        return self._matrix

    # ---- mutation --------------------------------------------------------

    def insert(self, node: T) -> Identity:
        """Store a new node and grow the matrix by one row and column.

        Raises NodeAlreadyExistsError if the identity is taken.
        """
        identity = self._identity(node)
        if identity in self._nodes:
            raise NodeAlreadyExistsError(node, self._nodes[identity], identity)
        self._add(identity, node)
        return identity

    def replace(self, node: T) -> None:
        """Overwrite the stored value.  Edges are untouched."""
        identity = self._identity(node)
        if identity not in self._nodes:
            raise NodeDoesntExistError(identity)
        self._nodes[identity] = node

    def upsert(self, node: T) -> tuple[Identity, bool]:
        """Insert or replace.  Returns (identity, created)."""
        identity = self._identity(node)
        if identity in self._nodes:
            self._nodes[identity] = node
            return identity, False
        self._add(identity, node)
        return identity, True

    def set_edge(self, from_id: Identity, to_id: Identity) -> None:
        """Mark the edge from_id -> to_id.  Both endpoints are checked,
        from first, before the matrix is written."""
        src = self.ordinal(from_id)
        dst = self.ordinal(to_id)
        self._matrix.set(src, dst)

    def _add(self, identity: Identity, node: T) -> None:
        self._nodes[identity] = node
        self._ordinals[identity] = self._matrix.grow()

    # ---- queries ---------------------------------------------------------

    def ordinal(self, identity: Identity) -> int:
        try:
            return self._ordinals[identity]
        except KeyError:
            raise NodeDoesntExistError(identity) from None

    def get(self, identity: Identity) -> T | None:
        return self._nodes.get(identity)

    def value_of(self, identity: Identity) -> T:
        try:
            return self._nodes[identity]
        except KeyError:
            raise NodeDoesntExistError(identity) from None

    def identities(self) -> list[Identity]:
        return self._order()

    def values(self) -> list[T]:
        return list(self._nodes.values())

    def has_edge(self, from_id: Identity, to_id: Identity) -> bool:
        if from_id not in self._ordinals or to_id not in self._ordinals:
            return False
        return self._matrix.get(self._ordinals[from_id], self._ordinals[to_id])

    def _order(self) -> list[Identity]:
        # dicts keep insertion order, which is ordinal order
        return list(self._nodes)

    # ---- derived containers ----------------------------------------------

    def copy(self) -> NodeContainer[T]:
        """Independent store and matrix; node values are shared."""
        clone: NodeContainer[T] = NodeContainer(self._identity)
        clone._nodes = dict(self._nodes)
        clone._ordinals = dict(self._ordinals)
        clone._matrix = self._matrix.copy()
        return clone

    def induced(self, ordinals: Iterable[int]) -> NodeContainer[T]:
        """New container with only *ordinals* and the edges among them.

        Nodes keep their original relative order, so the sub-container's
        ordinals are the originals compacted.
        """
        keep = sorted(set(ordinals))
        order = self._order()
        sub: NodeContainer[T] = NodeContainer(self._identity)
        for new_ordinal, old_ordinal in enumerate(keep):
            identity = order[old_ordinal]
            sub._nodes[identity] = self._nodes[identity]
            sub._ordinals[identity] = new_ordinal
        sub._matrix = self._matrix.induced(keep)
        return sub

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, identity: object) -> bool:
        return identity in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Identity]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"NodeContainer(nodes={len(self._nodes)}, edges={self._matrix.edge_count})"
