"""Kahn's algorithm (BFS with in-degree tracking) over an adjacency matrix.

Both cycle detection and topological sorting in this package are the
same walk:
  1.  Compute the in-degree of every ordinal.
  2.  Seed a queue with every ordinal whose in-degree is 0.
  3.  Pop an ordinal, append it to the result, and clear its out-edges
      in a working copy of the matrix, decrementing the in-degree of
      each target.  Any target that drops to 0 enters the queue.
  4.  When the queue is empty, the result holds every ordinal iff the
      graph has no cycle.  Nodes on (or downstream of) a cycle never
      reach in-degree 0, so they are simply missing from the result.

The queue is FIFO, which yields a layer-by-layer order.  Ties between
equally ready nodes are broken by ordinal, i.e. insertion order.
"""
from __future__ import annotations

from collections import deque

from adjgraph.graph.adjacency import AdjacencyMatrix


def kahn_order(matrix: AdjacencyMatrix) -> list[int]:
    """Return ordinals in dependency order (sources first).

    The result is shorter than the matrix when the graph has a cycle.
    *matrix* itself is never modified.
    """
    in_deg = matrix.in_degrees()
    work = matrix.copy()

    q: deque[int] = deque(node for node, deg in enumerate(in_deg) if deg == 0)

    result: list[int] = []
    while q:
        node = q.popleft()
        result.append(node)
        for succ in work.successors(node):
            work.clear(node, succ)
            in_deg[succ] -= 1
            if in_deg[succ] == 0:
                q.append(succ)

    return result


def is_acyclic(matrix: AdjacencyMatrix) -> bool:
    """True iff Kahn's walk visits every ordinal."""
    return len(kahn_order(matrix)) == matrix.size
