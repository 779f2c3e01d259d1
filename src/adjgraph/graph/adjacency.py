"""Square boolean adjacency matrix indexed by insertion ordinal.

Cell [i][j] is True when there is an edge from ordinal i to ordinal j.
The matrix only ever grows: each new node appends one column to every
existing row and then one new row, so an ordinal handed out once keeps
pointing at the same row and column for the lifetime of the matrix.

Storage is a plain list of lists of bools.  That costs O(N^2) space,
but makes edge writes and edge lookups O(1) and keeps in-degree a
simple column scan.  Parallel edges collapse into the single marker.
"""
from __future__ import annotations

from typing import Iterable, Iterator


class AdjacencyMatrix:
    """Growable N x N boolean matrix."""

    __slots__ = ("_rows",)

    def __init__(self) -> None:
        self._rows: list[list[bool]] = []

    # ---- mutation --------------------------------------------------------

    def grow(self) -> int:
        """Append one row and one column.  Returns the new ordinal."""
        for row in self._rows:
            row.append(False)
        self._rows.append([False] * (len(self._rows) + 1))
        return len(self._rows) - 1

    def set(self, src: int, dst: int) -> None:
        self._rows[src][dst] = True

    def clear(self, src: int, dst: int) -> None:
        self._rows[src][dst] = False

    # ---- queries ---------------------------------------------------------

    def get(self, src: int, dst: int) -> bool:
        return self._rows[src][dst]

    def successors(self, src: int) -> list[int]:
        """Ordinals with an edge from *src*."""
        return [dst for dst, marked in enumerate(self._rows[src]) if marked]

    def in_degree(self, dst: int) -> int:
        """Number of rows with column *dst* set."""
        return sum(1 for row in self._rows if row[dst])

    def in_degrees(self) -> list[int]:
        """In-degree of every ordinal, computed in one pass."""
        degrees = [0] * len(self._rows)
        for row in self._rows:
            for dst, marked in enumerate(row):
                if marked:
                    degrees[dst] += 1
        return degrees

    def edges(self) -> Iterator[tuple[int, int]]:
        for src, row in enumerate(self._rows):
            for dst, marked in enumerate(row):
                if marked:
                    yield src, dst

    @property
    def size(self) -> int:
        return len(self._rows)

    @property
    def edge_count(self) -> int:
        return sum(sum(row) for row in self._rows)

    def is_square(self) -> bool:
        n = len(self._rows)
        return all(len(row) == n for row in self._rows)

    # ---- derived matrices ------------------------------------------------

    def copy(self) -> AdjacencyMatrix:
        """Independent copy; writes to either side are not shared."""
        clone = AdjacencyMatrix()
        clone._rows = [list(row) for row in self._rows]
        return clone

    def induced(self, ordinals: Iterable[int]) -> AdjacencyMatrix:
        """Matrix restricted to *ordinals*, renumbered 0..k-1 in the
        order given.  Only edges with both endpoints kept survive."""
        keep = list(ordinals)
        sub = AdjacencyMatrix()
        sub._rows = [[self._rows[src][dst] for dst in keep] for src in keep]
        return sub

    # ---- dunder ----------------------------------------------------------

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"AdjacencyMatrix(size={self.size}, edges={self.edge_count})"
