"""Exceptions raised by the graph tiers.

Every mutating operation validates before it writes, so catching one
of these always leaves the graph exactly as it was before the call.
"""
from __future__ import annotations

from typing import Any


class GraphError(Exception):
    """Base class for all graph errors."""


class NodeAlreadyExistsError(GraphError):
    """Raised by insert() when the identity is already taken."""

    def __init__(self, new_node: Any, old_node: Any, identity: str) -> None:
        self.new_node = new_node
        self.old_node = old_node
        self.identity = identity
        super().__init__(
            f"{new_node!r} shares an identity ({identity}) with {old_node!r}"
        )


class NodeDoesntExistError(GraphError):
    """Raised when an identity is not present in the graph."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(
            f"A node with identity {identity} doesn't exist in the graph"
        )


class CycleError(GraphError):
    """Raised when an operation would leave a DAG with a cycle."""

    def __init__(
        self,
        message: str,
        from_identity: str | None = None,
        to_identity: str | None = None,
    ) -> None:
        self.from_identity = from_identity
        self.to_identity = to_identity
        super().__init__(message)
