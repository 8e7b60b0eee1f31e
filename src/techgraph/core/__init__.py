"""
Core modules for techgraph.

This package contains the fundamental building blocks:
- types: Data structures (Node, Edge, FilterState, ...)
- store: Read-only graph store
- filtering: Visible subgraph derivation
- errors: Error taxonomy
"""

from .errors import FatalLoadError, InteractionError, ReferentialIntegrityError, TechGraphError
from .filtering import ALL_GROUPS, VisibleGraph, compute_visible, normalize_group
from .store import GraphStore, NodeDetail
from .types import (
    Category, CategoryMeta, Edge, FilterState, Node, Point,
    SelectionState, Viewport, category_meta_from_maps,
)

__all__ = [
    # Types
    "Category", "CategoryMeta", "Edge", "FilterState", "Node", "Point",
    "SelectionState", "Viewport", "category_meta_from_maps",
    # Store
    "GraphStore", "NodeDetail",
    # Filtering
    "ALL_GROUPS", "VisibleGraph", "compute_visible", "normalize_group",
    # Errors
    "FatalLoadError", "InteractionError", "ReferentialIntegrityError", "TechGraphError",
]
