"""
Visible subgraph derivation.

Full recomputation on every call; datasets are small enough that diffing
would only add state.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List

from .store import GraphStore
from .types import Edge, FilterState, Node

# Group key meaning "no group filter"
ALL_GROUPS = "all"


@dataclass(frozen=True)
class VisibleGraph:
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def node_ids(self) -> FrozenSet[str]:
        return frozenset(node.id for node in self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


def normalize_group(group: str | None) -> str | None:
    """Map the "all" sentinel and empty values to no filter."""
    if not group or group == ALL_GROUPS:
        return None
    return group


def node_is_visible(node: Node, state: FilterState) -> bool:
    if state.active_group is not None and node.group != state.active_group:
        return False
    return node.matches(state.search_term)


def compute_visible(store: GraphStore, state: FilterState) -> VisibleGraph:
    """
    Compute the visible nodes and edges for a filter state.

    An edge is visible only when both of its endpoints are. An unknown
    group simply yields an empty graph.
    """
    nodes = [node for node in store.iter_nodes() if node_is_visible(node, state)]
    ids = {node.id for node in nodes}
    edges = [
        edge for edge in store.iter_edges()
        if edge.source_id in ids and edge.target_id in ids
    ]
    return VisibleGraph(nodes=nodes, edges=edges)
