"""
Shared fixtures.

The "ABC" dataset is the three-node example used throughout:

    A (g1) --0.5-- B (g2) --0.8-- C (g1)
"""

import json

import pytest

from techgraph.config import DATA_FILE, LINKS_FILE, META_FILE
from techgraph.core.store import GraphStore
from techgraph.core.types import Category, Edge, Node


@pytest.fixture
def categories():
    return {
        "g1": Category(label="Group One", icon="1", color="#111111"),
        "g2": Category(label="Group Two", icon="2", color="#222222"),
    }


@pytest.fixture
def abc_nodes():
    return [
        Node(id="A", group="g1", short_desc="alpha tool"),
        Node(id="B", group="g2", short_desc="second thing"),
        Node(id="C", group="g1", short_desc="gamma"),
    ]


@pytest.fixture
def abc_edges():
    return [
        Edge(source_id="A", target_id="B", strength=0.5),
        Edge(source_id="B", target_id="C", strength=0.8),
    ]


@pytest.fixture
def abc_store(abc_nodes, abc_edges, categories):
    return GraphStore.build(abc_nodes, abc_edges, categories)


@pytest.fixture
def dataset_dir(tmp_path):
    """A valid on-disk dataset with the ABC graph."""
    (tmp_path / DATA_FILE).write_text(json.dumps({
        "nodes": [
            {"id": "A", "group": "g1", "shortDesc": "alpha tool", "fullDesc": "The A tool",
             "difficulty": "Easy", "learnTime": "1 week", "marketShare": "10%",
             "useCases": ["one", "two"]},
            {"id": "B", "group": "g2", "shortDesc": "second thing"},
            {"id": "C", "group": "g1", "shortDesc": "gamma"},
        ]
    }))
    (tmp_path / LINKS_FILE).write_text(json.dumps({
        "links": [
            {"source": "A", "target": "B", "strength": 0.5},
            {"source": "B", "target": "C", "strength": 0.8},
        ]
    }))
    (tmp_path / META_FILE).write_text(json.dumps({
        "groupLabels": {"g1": "Group One", "g2": "Group Two"},
        "groupIcons": {"g1": "1", "g2": "2"},
        "groupColors": {"g1": "#111111", "g2": "#222222"},
    }))
    return tmp_path
