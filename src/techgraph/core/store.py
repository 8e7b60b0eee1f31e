"""
Graph store backed by rustworkx.

Holds the technologies, their relationships and category metadata for one
session. The store is populated once through ``GraphStore.build`` and is
read-only afterwards, so any component may query it without coordination.

It manages:
- The bimap between string Node IDs and rustworkx integer indices.
- Referential integrity on load (dangling edges, unknown groups).
- Neighbourhood queries used by the detail panel and layout.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

import rustworkx as rx

from .errors import ReferentialIntegrityError
from .types import Category, CategoryMeta, Edge, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeDetail:
    """Everything the detail panel shows for a node."""
    node: Node
    category: Category
    connected: List[Node] = field(default_factory=list)


class GraphStore:
    """
    Immutable-per-session holder of nodes, edges and category metadata.

    Features:
    - O(1) node lookup via ID-to-Index bimap
    - Undirected adjacency for neighbour and degree queries
    - Load-time dropping of inconsistent items with a logged warning
    """

    def __init__(self, categories: Optional[CategoryMeta] = None):
        self._graph = rx.PyGraph(multigraph=True)
        self._id_to_idx: Dict[str, int] = {}
        self._edges: List[Edge] = []
        self._categories: CategoryMeta = dict(categories or {})
        self._sealed = False

    @classmethod
    def build(
        cls,
        nodes: Iterable[Node],
        edges: Iterable[Edge],
        categories: CategoryMeta,
    ) -> "GraphStore":
        """
        Populate a store, dropping anything that breaks referential integrity.

        Nodes whose group is missing from ``categories`` are dropped, and so
        is every edge touching an unknown (or dropped) node.
        """
        store = cls(categories)
        dropped = 0
        for node in nodes:
            try:
                store._add_node(node)
            except ReferentialIntegrityError as e:
                logger.warning(f"Dropping node '{e.item_id}': {e}")
                dropped += 1
        for edge in edges:
            try:
                store._add_edge(edge)
            except ReferentialIntegrityError as e:
                logger.warning(f"Dropping edge {e.item_id}: {e}")
                dropped += 1

        store._sealed = True
        logger.info(
            f"Graph store loaded: {store.node_count} nodes, "
            f"{store.edge_count} edges ({dropped} dropped)"
        )
        return store

    def with_categories(self, categories: CategoryMeta) -> "GraphStore":
        """Rebuild the store against other category metadata."""
        return GraphStore.build(self.iter_nodes(), self.iter_edges(), categories)

    def _add_node(self, node: Node) -> None:
        if self._sealed:
            raise RuntimeError("GraphStore is read-only after build()")
        if node.group not in self._categories:
            raise ReferentialIntegrityError(
                f"group '{node.group}' has no category metadata", node.id
            )
        if node.id in self._id_to_idx:
            raise ReferentialIntegrityError("duplicate node id", node.id)
        self._id_to_idx[node.id] = self._graph.add_node(node)

    def _add_edge(self, edge: Edge) -> None:
        if self._sealed:
            raise RuntimeError("GraphStore is read-only after build()")
        label = f"{edge.source_id} -> {edge.target_id}"
        for endpoint in edge.key:
            if endpoint not in self._id_to_idx:
                raise ReferentialIntegrityError(f"unknown node '{endpoint}'", label)
        self._graph.add_edge(
            self._id_to_idx[edge.source_id], self._id_to_idx[edge.target_id], edge
        )
        self._edges.append(edge)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def categories(self) -> CategoryMeta:
        return dict(self._categories)

    def get_category(self, group: str) -> Optional[Category]:
        return self._categories.get(group)

    def get_node(self, node_id: str) -> Optional[Node]:
        """Retrieve a node by ID."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        return self._graph[idx]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_idx

    def iter_nodes(self) -> Iterator[Node]:
        """Nodes in load order."""
        return (self._graph[idx] for idx in self._id_to_idx.values())

    def iter_edges(self) -> Iterator[Edge]:
        """Edges in load order."""
        return iter(self._edges)

    @property
    def nodes(self) -> List[Node]:
        return list(self.iter_nodes())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def neighbors(self, node_id: str) -> Set[str]:
        """IDs of nodes sharing at least one edge with ``node_id``."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return set()
        return {self._graph[n].id for n in self._graph.neighbors(idx)}

    def degree(self, node_id: str) -> int:
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return 0
        return self._graph.degree(idx)

    def connected_nodes(self, node_id: str) -> List[Node]:
        """
        Direct connections of a node across the whole dataset.

        Ordered by edge load order; one entry per incident edge.
        """
        connected = []
        for edge in self._edges:
            other = edge.other_end(node_id)
            if other is not None:
                connected.append(self.get_node(other))
        return connected

    def group_counts(self) -> Dict[str, int]:
        """Node count per group, in category order, skipping empty groups."""
        counts: Dict[str, int] = {}
        for node in self.iter_nodes():
            counts[node.group] = counts.get(node.group, 0) + 1
        return {key: counts[key] for key in self._categories if counts.get(key)}

    def describe(self, node_id: str) -> Optional[NodeDetail]:
        node = self.get_node(node_id)
        if node is None:
            return None
        return NodeDetail(
            node=node,
            category=self._categories[node.group],
            connected=self.connected_nodes(node_id),
        )

    def get_stats(self) -> Dict[str, Any]:
        orphans = len([
            idx for idx in self._graph.node_indices() if self._graph.degree(idx) == 0
        ])
        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "nodes_by_group": self.group_counts(),
            "orphans": orphans,
            "backend": "rustworkx",
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.model_dump(by_alias=True) for node in self.iter_nodes()],
            "edges": [edge.model_dump(by_alias=True) for edge in self.iter_edges()],
            "stats": self.get_stats(),
        }
