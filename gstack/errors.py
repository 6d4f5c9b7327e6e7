"""Exceptions raised by graph-stack stores and enumerators.

All of them signal a broken caller contract (bad ids, cyclic data, mutation
during traversal); none is raised for environmental faults.
"""

from __future__ import annotations

from typing import Any, Hashable, Sequence, Tuple


class GraphStackError(Exception):
    """Base exception for graph-stack operations."""


class InvalidAncestorError(GraphStackError, ValueError):
    """Raised when an ancestor id does not name an existing node."""

    def __init__(self, ancestors: Sequence[Any], size: int) -> None:
        self.ancestors = tuple(ancestors)
        self.size = size
        super().__init__(
            f"Invalid ancestors {list(self.ancestors)} for graph-stack of size {size}"
        )


class InvalidNodeIdError(GraphStackError, ValueError):
    """Raised when a node id does not exist in the store."""

    def __init__(self, node_id: Any, size: int) -> None:
        self.node_id = node_id
        self.size = size
        super().__init__(f"Invalid node id {node_id!r} for graph-stack of size {size}")


class CycleDetectedError(GraphStackError):
    """Raised when ancestor data loops back onto a node.

    Attributes:
        cycle: Nodes forming the loop, starting and ending at the same id.
    """

    def __init__(self, cycle: Sequence[Hashable]) -> None:
        self.cycle: Tuple[Hashable, ...] = tuple(cycle)
        path = " -> ".join(str(node_id) for node_id in self.cycle)
        super().__init__(f"Ancestor cycle detected: {path}")


class StoreModifiedError(GraphStackError, RuntimeError):
    """Raised when a store is mutated while one of its enumerators is in use."""
