"""Lazy enumeration of the stacks encoded in a `GraphStack`.

`Stacks` walks the ancestor lists depth-first without recursion. It keeps one
`Cursor` per depth level (the item at that depth and which of its ancestors is
being explored) and a parallel buffer of the values along the current path.
Each `next()` call descends to a root, emits a copy of the buffer, then
advances the deepest cursor that still has an unexplored ancestor. The buffer
prefix shared with the next stack is kept, so consecutive stacks reuse it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, List, Set, TypeVar

from gstack.errors import CycleDetectedError, InvalidNodeIdError, StoreModifiedError
from gstack.logging import get_logger

if TYPE_CHECKING:
    from gstack.graph_stack import GraphStack

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass
class Cursor:
    """Traversal state for one depth level.

    Attributes:
        item: Id of the item at this depth.
        ancestor: Index into the item's ancestor list currently being explored.
    """

    item: int
    ancestor: int = 0


class Stacks(Generic[T]):
    """Iterator over the stacks reachable from one start item.

    Yields lists ordered from the start item down to a root. Every yielded
    list is a fresh copy; later steps never change it.

    Reads the store only through `GraphStack.value_at` and
    `GraphStack.ancestor_ids`, which skip validation: the start id is checked
    by `GraphStack.stacks` and every descended id by `_descend`.

    The store must not be mutated while the iterator is in use. A mutation is
    detected on the next step and raises `StoreModifiedError`. Abandoning the
    iterator needs no cleanup.
    """

    def __init__(self, gs: GraphStack[T], start: int, ids: bool = False) -> None:
        self._gs = gs
        self._start = start
        self._ids = ids
        self._revision = gs.revision
        self._detect_cycles = gs.config.detect_cycles
        self._emitted = 0

        self._cursors: List[Cursor] = [Cursor(start)]
        self._unstack: List[Any] = [self._entry(start)]
        # Items on the active cursor stack; only tracked for the cycle guard.
        self._on_path: Set[int] = {start}

    def __repr__(self) -> str:
        return (
            f"Stacks(start={self._start}, depth={len(self._cursors)}, "
            f"emitted={self._emitted})"
        )

    def __iter__(self) -> Stacks[T]:
        return self

    def __next__(self) -> List[Any]:
        if not self._cursors:
            raise StopIteration
        if self._gs.revision != self._revision:
            self._finish()
            raise StoreModifiedError(
                f"GraphStack was modified while enumerating stacks from item "
                f"{self._start}"
            )

        self._descend()
        snapshot = list(self._unstack)
        self._advance()

        self._emitted += 1
        if not self._cursors:
            logger.debug(
                "Stacks from item %d exhausted after %d stack(s)",
                self._start,
                self._emitted,
            )
        return snapshot

    @property
    def start(self) -> int:
        """Id of the item every stack begins with."""
        return self._start

    @property
    def exhausted(self) -> bool:
        """True once no further stacks will be produced."""
        return not self._cursors

    def _entry(self, node_id: int) -> Any:
        return node_id if self._ids else self._gs.value_at(node_id)

    def _descend(self) -> None:
        """Push cursors along the current ancestor choices until a root."""
        while True:
            cursor = self._cursors[-1]
            item_ancestors = self._gs.ancestor_ids(cursor.item)
            if not item_ancestors:
                break
            prev_id = item_ancestors[cursor.ancestor]
            if not self._gs.is_valid_id(prev_id):
                self._finish()
                raise InvalidNodeIdError(prev_id, len(self._gs))
            if self._detect_cycles:
                if prev_id in self._on_path:
                    cycle = self._cycle_to(prev_id)
                    self._finish()
                    logger.debug("Cycle detected below item %d: %s", self._start, cycle)
                    raise CycleDetectedError(cycle)
                self._on_path.add(prev_id)
            self._cursors.append(Cursor(prev_id))
            self._unstack.append(self._entry(prev_id))

    def _advance(self) -> None:
        """Move to the next unexplored ancestor choice, depth-first."""
        while self._cursors:
            cursor = self._cursors[-1]
            if cursor.ancestor + 1 < len(self._gs.ancestor_ids(cursor.item)):
                cursor.ancestor += 1
                break
            self._cursors.pop()
            self._on_path.discard(cursor.item)
        # keep the part of the stack that is common for other ancestors
        del self._unstack[len(self._cursors) :]

    def _cycle_to(self, node_id: int) -> List[int]:
        path = [cursor.item for cursor in self._cursors]
        return path[path.index(node_id) :] + [node_id]

    def _finish(self) -> None:
        self._cursors.clear()
        self._unstack.clear()
        self._on_path.clear()
