"""
Core type definitions for techgraph.

Nodes and edges are validated with pydantic so that dataset files written in
camelCase (``shortDesc``, ``useCases``...) load into snake_case attributes.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Ids longer than this are shortened in labels
LABEL_MAX_LENGTH = 12
LABEL_KEEP = 10

Point = Tuple[float, float]


class Node(BaseModel):
    """
    A technology in the ecosystem.
    """
    id: str = Field(min_length=1)
    group: str = Field(min_length=1)
    short_desc: str = Field(default="", alias="shortDesc")
    full_desc: str = Field(default="", alias="fullDesc")
    difficulty: str = ""
    learn_time: str = Field(default="", alias="learnTime")
    market_share: str = Field(default="", alias="marketShare")
    use_cases: List[str] = Field(default_factory=list, alias="useCases")

    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)

    @property
    def display_label(self) -> str:
        if len(self.id) > LABEL_MAX_LENGTH:
            return self.id[:LABEL_KEEP] + "..."
        return self.id

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match against id and short description."""
        if not term:
            return True
        needle = term.lower()
        return needle in self.id.lower() or needle in self.short_desc.lower()

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Node):
            return self.id == other.id
        return False


class Edge(BaseModel):
    """
    Relationship between two technologies.

    Stored with source/target roles but treated as undirected when
    computing highlights.
    """
    source_id: str = Field(alias="source")
    target_id: str = Field(alias="target")
    strength: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)

    def touches(self, node_id: str) -> bool:
        return self.source_id == node_id or self.target_id == node_id

    def other_end(self, node_id: str) -> Optional[str]:
        """Return the opposite endpoint, or None if the edge is not incident."""
        if self.source_id == node_id:
            return self.target_id
        if self.target_id == node_id:
            return self.source_id
        return None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source_id, self.target_id)


class Category(BaseModel):
    """Display metadata for one group key."""
    label: str
    icon: str = ""
    color: str = ""

    model_config = ConfigDict(frozen=True)


CategoryMeta = Dict[str, Category]


def category_meta_from_maps(
    labels: Dict[str, str],
    icons: Optional[Dict[str, str]] = None,
    colors: Optional[Dict[str, str]] = None,
) -> CategoryMeta:
    """
    Build CategoryMeta from the three parallel maps used by dataset files.

    Every key of ``labels`` becomes a category; missing icons or colors
    default to empty strings.
    """
    icons = icons or {}
    colors = colors or {}
    return {
        key: Category(label=label, icon=icons.get(key, ""), color=colors.get(key, ""))
        for key, label in labels.items()
    }


class FilterState(BaseModel):
    """Active category filter and free-text search."""
    active_group: Optional[str] = None
    search_term: str = ""

    model_config = ConfigDict(frozen=True)


class SelectionState(BaseModel):
    """
    Selected and hovered node ids.

    The two are independent; either may be unset.
    """
    selected_id: Optional[str] = None
    hovered_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def focal_id(self) -> Optional[str]:
        """Selection always wins over hover."""
        return self.selected_id if self.selected_id is not None else self.hovered_id


class Viewport(BaseModel):
    width: float = Field(default=900.0, gt=0)
    height: float = Field(default=600.0, gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def center(self) -> Point:
        return (self.width / 2, self.height / 2)
