"""NetworkX conversion utilities.

A graph-stack maps naturally onto a directed multigraph: one node per item and
one edge ``item -> ancestor`` per ancestor-list entry. Duplicate ancestors
become parallel edges, and each edge carries an ``order`` attribute holding its
position in the ancestor list so that enumeration order survives the trip.

Example:
    >>> import networkx as nx
    >>> from gstack.convert import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("b", "a")
    >>> G.add_edge("c", "b")
    >>> gs, node_map = from_networkx(G)
    >>> list(gs.stacks(node_map.to_index["c"]))
    [['c', 'b', 'a']]
    >>> to_networkx(gs).number_of_edges()
    2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple, Union

import networkx as nx

from gstack.config import GraphStackConfig
from gstack.errors import CycleDetectedError, InvalidNodeIdError
from gstack.graph_stack import GraphStack
from gstack.logging import get_logger

if TYPE_CHECKING:
    NxDiGraph = Union[nx.DiGraph, nx.MultiDiGraph]
else:
    NxDiGraph = Any

logger = get_logger(__name__)


@dataclass
class NodeMap:
    """Bidirectional mapping between NetworkX node names and graph-stack ids.

    Attributes:
        to_index: Maps original node names to graph-stack ids.
        to_name: Maps graph-stack ids back to original node names.

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap from a list of node names in id order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        """Return the number of nodes in the mapping."""
        return len(self.to_index)


def to_networkx(gs: GraphStack, order_attr: str = "order") -> nx.MultiDiGraph:
    """Convert a graph-stack to a NetworkX MultiDiGraph.

    Nodes are graph-stack ids with the stored item under the ``value``
    attribute. Each ancestor-list entry becomes an edge ``item -> ancestor``.

    Args:
        gs: Graph-stack to convert.
        order_attr: Edge attribute receiving the ancestor-list position.

    Returns:
        A new MultiDiGraph; later changes to `gs` are not reflected in it.

    Raises:
        InvalidNodeIdError: If an ancestor list names a node that does not
            exist (possible when `add_ancestors` validation is switched off).
    """
    nx_graph = nx.MultiDiGraph()
    for node_id in gs:
        nx_graph.add_node(node_id, value=gs[node_id])
    for node_id in gs:
        for position, ancestor_id in enumerate(gs.ancestors(node_id)):
            if not gs.is_valid_id(ancestor_id):
                raise InvalidNodeIdError(ancestor_id, len(gs))
            nx_graph.add_edge(node_id, ancestor_id, **{order_attr: position})
    return nx_graph


def from_networkx(
    G: NxDiGraph,
    *,
    value_attr: str = "value",
    order_attr: str = "order",
    config: Optional[GraphStackConfig] = None,
) -> Tuple[GraphStack, NodeMap]:
    """Build a graph-stack from a directed NetworkX graph.

    An edge ``u -> v`` means ``v`` is an ancestor of ``u``. Items are pushed
    ancestors first, so every node gets its full ancestor list at insertion
    and the result is a DAG by construction. Ties in that order are broken by
    ``str(node)`` so the mapping is deterministic.

    Args:
        G: NetworkX DiGraph or MultiDiGraph.
        value_attr: Node attribute holding the item value. Nodes without it
            store their own name.
        order_attr: Edge attribute giving the ancestor position. Either all
            out-edges of a node carry it or none do; in the latter case the
            edges keep their iteration order.
        config: Configuration for the new graph-stack.

    Returns:
        Tuple of (graph_stack, node_map).

    Raises:
        TypeError: If G is not a directed NetworkX graph.
        CycleDetectedError: If G contains a directed cycle.
        ValueError: If only some out-edges of a node carry `order_attr`.
    """
    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph)):
        raise TypeError(
            f"Expected directed NetworkX graph (DiGraph, MultiDiGraph), "
            f"got {type(G).__name__}"
        )

    try:
        names = list(nx.lexicographical_topological_sort(G.reverse(copy=False), key=str))
    except nx.NetworkXUnfeasible:
        cycle = [edge[0] for edge in nx.find_cycle(G)]
        cycle.append(cycle[0])
        raise CycleDetectedError(cycle) from None

    node_map = NodeMap.from_names(names)
    gs: GraphStack = GraphStack(config)
    for name in names:
        edges = list(G.out_edges(name, data=True))
        ranked = _rank_edges(name, edges, order_attr)
        ancestor_ids = [node_map.to_index[v] for _, v, _ in ranked]
        gs.push(G.nodes[name].get(value_attr, name), ancestor_ids)

    logger.debug(
        "Converted NetworkX graph with %d nodes and %d edges",
        G.number_of_nodes(),
        G.number_of_edges(),
    )
    return gs, node_map


def _rank_edges(
    name: Hashable, edges: List[Tuple[Any, Any, dict]], order_attr: str
) -> List[Tuple[Any, Any, dict]]:
    """Order a node's out-edges by `order_attr`, or keep them as they are."""
    with_order = [order_attr in data for _, _, data in edges]
    if not any(with_order):
        return edges
    if not all(with_order):
        raise ValueError(
            f"Node {name!r}: '{order_attr}' is set on {sum(with_order)} of "
            f"{len(edges)} out-edges; set it on all of them or on none"
        )
    # stable sort keeps parallel edges with equal order in iteration order
    return sorted(edges, key=lambda edge: edge[2][order_attr])
