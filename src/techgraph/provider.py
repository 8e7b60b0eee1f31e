"""
Data providers.

A provider returns the raw dataset; ``load_store`` turns it into a
``GraphStore``. Shape problems (missing file, bad JSON, empty node list,
missing required fields) are fatal. Consistency problems between otherwise
well-formed items are handled by the store, which drops the offenders.

On-disk layout (all in one directory):

    techdata.json   {"nodes": [{"id": ..., "group": ..., "shortDesc": ...}, ...]}
    techlinks.json  {"links": [{"source": ..., "target": ..., "strength": 0.8}, ...]}
    config.json     {"groupLabels": {...}, "groupIcons": {...}, "groupColors": {...}}
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import DATA_FILE, LINKS_FILE, META_FILE
from .core.errors import FatalLoadError
from .core.store import GraphStore
from .core.types import CategoryMeta, Edge, Node, category_meta_from_maps

logger = logging.getLogger(__name__)


class GraphPayload(BaseModel):
    nodes: List[Node] = Field(min_length=1)
    edges: List[Edge] = Field(default_factory=list)


class _NodesFile(BaseModel):
    nodes: List[Node] = Field(min_length=1)


class _LinksFile(BaseModel):
    links: List[Edge]


class _MetaFile(BaseModel):
    group_labels: Dict[str, str] = Field(alias="groupLabels")
    group_icons: Dict[str, str] = Field(default_factory=dict, alias="groupIcons")
    group_colors: Dict[str, str] = Field(default_factory=dict, alias="groupColors")

    model_config = ConfigDict(extra='ignore', populate_by_name=True)


class DataProvider(Protocol):
    def load_graph(self) -> GraphPayload: ...

    def load_category_meta(self) -> CategoryMeta: ...


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" + (
        f" (+{error.error_count() - 1} more)" if error.error_count() > 1 else ""
    )


class JsonDataProvider:
    """Reads the three dataset files from a directory."""

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)

    def _read(self, name: str) -> Any:
        path = self.data_dir / name
        if not path.exists():
            raise FatalLoadError("Dataset file not found", str(path))
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise FatalLoadError(f"Invalid JSON: {e}", str(path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise FatalLoadError(f"Could not read dataset file: {e}", str(path)) from e

    def load_graph(self) -> GraphPayload:
        try:
            nodes = _NodesFile.model_validate(self._read(DATA_FILE)).nodes
        except ValidationError as e:
            raise FatalLoadError(f"Invalid node data: {_describe(e)}", DATA_FILE) from e
        try:
            links = _LinksFile.model_validate(self._read(LINKS_FILE)).links
        except ValidationError as e:
            raise FatalLoadError(f"Invalid link data: {_describe(e)}", LINKS_FILE) from e

        logger.debug(f"Read {len(nodes)} nodes and {len(links)} links from {self.data_dir}")
        return GraphPayload(nodes=nodes, edges=links)

    def load_category_meta(self) -> CategoryMeta:
        try:
            meta = _MetaFile.model_validate(self._read(META_FILE))
        except ValidationError as e:
            raise FatalLoadError(f"Invalid category metadata: {_describe(e)}", META_FILE) from e
        return category_meta_from_maps(meta.group_labels, meta.group_icons, meta.group_colors)


class StaticDataProvider:
    """Provider over in-memory data, e.g. an embedded demo dataset."""

    def __init__(self, graph: Dict[str, Any], meta: Dict[str, Any]):
        self._graph = graph
        self._meta = meta

    def load_graph(self) -> GraphPayload:
        data = dict(self._graph)
        if "edges" not in data and "links" in data:
            data["edges"] = data["links"]
        try:
            return GraphPayload.model_validate(data)
        except ValidationError as e:
            raise FatalLoadError(f"Invalid graph data: {_describe(e)}") from e

    def load_category_meta(self) -> CategoryMeta:
        try:
            meta = _MetaFile.model_validate(self._meta)
        except ValidationError as e:
            raise FatalLoadError(f"Invalid category metadata: {_describe(e)}") from e
        return category_meta_from_maps(meta.group_labels, meta.group_icons, meta.group_colors)


def load_store(provider: DataProvider) -> GraphStore:
    """
    Load and assemble a store.

    Raises:
        FatalLoadError: If the dataset is malformed, or nothing survives the
            integrity checks.
    """
    payload = provider.load_graph()
    categories = provider.load_category_meta()
    store = GraphStore.build(payload.nodes, payload.edges, categories)
    if store.node_count == 0:
        raise FatalLoadError("No node has a known category")
    return store
