"""Append-only graph-stack store.

A `GraphStack` generalises a stack so that an item may sit on top of more than
one other item. Items live in an append-only list and are addressed by their
insertion index; each item keeps an ordered list of ancestor indices. The
order of that list fixes the order in which `stacks()` enumerates paths.

Nothing is ever removed. Acyclicity is a convention of the caller: `push()`
can only reference existing items, so a store built purely with `push()` is a
DAG, but `add_ancestors()` can close a loop. Use `is_acyclic()` or
`find_cycle()` to audit a store, or rely on the enumerator's cycle guard
(`GraphStackConfig.detect_cycles`).

Example:
    >>> gs = GraphStack()
    >>> a = gs.push("a")
    >>> d = gs.push("d")
    >>> b = gs.push("b", [a, d])
    >>> list(gs.stacks(b))
    [['b', 'a'], ['b', 'd']]
"""

from __future__ import annotations

from typing import Dict, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from gstack.config import DEFAULT_CONFIG, GraphStackConfig
from gstack.errors import InvalidAncestorError, InvalidNodeIdError
from gstack.logging import get_logger
from gstack.stacks import Stacks

T = TypeVar("T")

NodeID = int

logger = get_logger(__name__)


class GraphStack(Generic[T]):
    """Append-only store of items and their ordered ancestor lists.

    Attributes:
        config: Validation switches shared by the store and its enumerators.
    """

    def __init__(self, config: Optional[GraphStackConfig] = None) -> None:
        self.config: GraphStackConfig = config or DEFAULT_CONFIG
        self._items: List[T] = []
        self._ancestors: Dict[NodeID, List[NodeID]] = {}
        # Bumped on every mutation; enumerators compare against it.
        self._revision: int = 0

    def __repr__(self) -> str:
        return f"GraphStack(size={len(self._items)}, revision={self._revision})"

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, node_id: object) -> bool:
        return self.is_valid_id(node_id)

    def __getitem__(self, node_id: NodeID) -> T:
        """Return the value stored under `node_id`.

        Raises:
            InvalidNodeIdError: If `node_id` does not exist.
        """
        self._check_node_id(node_id)
        return self._items[node_id]

    def __iter__(self) -> Iterator[NodeID]:
        """Iterate over node ids in insertion order."""
        return iter(range(len(self._items)))

    @property
    def revision(self) -> int:
        """Number of mutations applied to this store so far."""
        return self._revision

    def is_valid_id(self, node_id: object) -> bool:
        """Return True if `node_id` names an existing item."""
        return (
            isinstance(node_id, int)
            and not isinstance(node_id, bool)
            and 0 <= node_id < len(self._items)
        )

    #
    # Mutation
    #
    def push(self, value: T, ancestors: Iterable[NodeID] = ()) -> NodeID:
        """Add an item and return its id.

        The id can later be passed to `add_ancestors()` or used as another
        item's ancestor.

        Args:
            value: Item to store. Any object; it is stored by reference.
            ancestors: Ids of the items this one sits on, in enumeration order.

        Returns:
            The new item's id, equal to the number of items pushed before it.

        Raises:
            InvalidAncestorError: If any ancestor id does not exist yet. The
                store is left unchanged.
        """
        ancestor_ids = list(ancestors)
        self._check_ancestors(ancestor_ids)

        self._items.append(value)
        node_id = len(self._items) - 1
        self._ancestors[node_id] = ancestor_ids
        self._revision += 1

        logger.debug("Pushed item %d with ancestors %s", node_id, ancestor_ids)
        return node_id

    def add_ancestors(self, node_id: NodeID, ancestors: Iterable[NodeID]) -> None:
        """Append ancestor ids to an existing item.

        New ids go after the existing ones, so enumeration visits them last.
        No cycle check is done here.

        Args:
            node_id: Item to extend.
            ancestors: Ancestor ids to append.

        Raises:
            InvalidNodeIdError: If `node_id` does not exist.
            InvalidAncestorError: If `config.validate_added_ancestors` is set
                and an ancestor id does not exist. The store is left unchanged.
        """
        self._check_node_id(node_id)
        ancestor_ids = list(ancestors)
        if self.config.validate_added_ancestors:
            self._check_ancestors(ancestor_ids)

        self._ancestors[node_id].extend(ancestor_ids)
        self._revision += 1

        logger.debug("Added ancestors %s to item %d", ancestor_ids, node_id)

    #
    # Queries
    #
    def ancestors(self, node_id: NodeID) -> Tuple[NodeID, ...]:
        """Return a copy of the ancestor ids of `node_id`, in order.

        Raises:
            InvalidNodeIdError: If `node_id` does not exist.
        """
        self._check_node_id(node_id)
        return tuple(self._ancestors[node_id])

    def roots(self) -> List[NodeID]:
        """Return ids of items with no ancestors, ascending."""
        return [node_id for node_id in self if not self._ancestors[node_id]]

    def tops(self) -> List[NodeID]:
        """Return ids of items that are no other item's ancestor, ascending.

        A graph-stack may have several tops; each is a natural start for
        `stacks()`.
        """
        referenced = {a for ancestor_ids in self._ancestors.values() for a in ancestor_ids}
        return [node_id for node_id in self if node_id not in referenced]

    def stacks(self, start: NodeID, ids: bool = False) -> Stacks[T]:
        """Build a lazy iterator over the stacks that start at `start`.

        A start item is required because there may be multiple top items.
        Each call returns an independent iterator; on an unmodified store two
        iterators yield the same stacks in the same order.

        Args:
            start: Id of the item each stack begins with.
            ids: If True, yield lists of node ids instead of values.

        Returns:
            A `Stacks` iterator.

        Raises:
            InvalidNodeIdError: If `start` does not exist.
        """
        self._check_node_id(start)
        return Stacks(self, start, ids=ids)

    def is_acyclic(self) -> bool:
        """Return True if no chain of ancestors leads back to its origin.

        Raises:
            InvalidNodeIdError: If an ancestor list names a missing node.
        """
        import networkx as nx

        from gstack.convert import to_networkx

        return nx.is_directed_acyclic_graph(to_networkx(self))

    def find_cycle(self) -> Optional[Tuple[NodeID, ...]]:
        """Return one ancestor cycle as a tuple of ids, or None if acyclic.

        The returned tuple starts and ends with the same id, e.g. ``(0, 2, 0)``
        when 0 lists 2 as an ancestor and 2 lists 0.

        Raises:
            InvalidNodeIdError: If an ancestor list names a missing node.
        """
        import networkx as nx

        from gstack.convert import to_networkx

        try:
            edges = nx.find_cycle(to_networkx(self))
        except nx.NetworkXNoCycle:
            return None
        cycle = [edge[0] for edge in edges]
        cycle.append(edges[0][0])
        return tuple(cycle)

    #
    # Unchecked access for Stacks
    #
    def value_at(self, node_id: NodeID) -> T:
        """Return the value of `node_id` without validating the id."""
        return self._items[node_id]

    def ancestor_ids(self, node_id: NodeID) -> List[NodeID]:
        """Return the live ancestor list of an existing `node_id`.

        No copy is made and the id is not validated; `Stacks` reads it on
        every step. Callers must not mutate the list.
        """
        return self._ancestors[node_id]

    #
    # Validation
    #
    def _check_node_id(self, node_id: object) -> None:
        if not self.is_valid_id(node_id):
            raise InvalidNodeIdError(node_id, len(self._items))

    def _check_ancestors(self, ancestor_ids: List[NodeID]) -> None:
        if not all(self.is_valid_id(a) for a in ancestor_ids):
            raise InvalidAncestorError(ancestor_ids, len(self._items))
