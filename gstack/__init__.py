"""gstack: a stack whose items may sit on more than one ancestor.

A `GraphStack` stores items in an append-only arena; each item keeps an
ordered list of ancestor ids. `GraphStack.stacks()` lazily enumerates every
path from a start item down to a root, one ancestor choice per branch point,
in deterministic depth-first order.

Primary API:
    GraphStack - append-only item/ancestor store
    Stacks - lazy iterator over the paths from one start item
    GraphStackConfig - validation switches
    from_networkx(), to_networkx() - NetworkX interop

Example:
    from gstack import GraphStack

    gs = GraphStack()
    a = gs.push("a")
    b = gs.push("b", [a])
    c = gs.push("c", [a])
    d = gs.push("d", [b, c])

    for stack in gs.stacks(d):
        print(stack)  # ['d', 'b', 'a'] then ['d', 'c', 'a']
"""

from __future__ import annotations

from gstack import logging
from gstack._version import __version__
from gstack.config import DEFAULT_CONFIG, GraphStackConfig
from gstack.convert import NodeMap, from_networkx, to_networkx
from gstack.errors import (
    CycleDetectedError,
    GraphStackError,
    InvalidAncestorError,
    InvalidNodeIdError,
    StoreModifiedError,
)
from gstack.graph_stack import GraphStack
from gstack.stacks import Cursor, Stacks

__all__ = [
    # Version
    "__version__",
    # Core
    "GraphStack",
    "Stacks",
    "Cursor",
    # Configuration
    "GraphStackConfig",
    "DEFAULT_CONFIG",
    # Errors
    "GraphStackError",
    "InvalidAncestorError",
    "InvalidNodeIdError",
    "CycleDetectedError",
    "StoreModifiedError",
    # Library integrations (NetworkX)
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Utilities
    "logging",
]
