"""Reachability and closure over an adjacency matrix.

Directed graphs in this package may contain cycles (including
self-loops), so both walks keep an explicit visited set and an
explicit stack rather than recursing.
"""
from __future__ import annotations

from adjgraph.graph.adjacency import AdjacencyMatrix


def can_reach(matrix: AdjacencyMatrix, start: int, end: int) -> bool:
    """True if a path of one or more edges leads from *start* to *end*.

    start == end is only reachable through an actual cycle (or a
    self-loop); a node is not trivially reachable from itself.
    """
    if matrix.get(start, end):
        return True

    visited: set[int] = set()
    stack = matrix.successors(start)
    while stack:
        current = stack.pop()
        if current == end:
            return True
        if current in visited:
            continue
        visited.add(current)
        stack.extend(s for s in matrix.successors(current) if s not in visited)
    return False


def closure(matrix: AdjacencyMatrix, start: int) -> set[int]:
    """Every ordinal reachable from *start*, *start* included."""
    visited: set[int] = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for succ in matrix.successors(current):
            if succ not in visited:
                visited.add(succ)
                stack.append(succ)
    return visited
