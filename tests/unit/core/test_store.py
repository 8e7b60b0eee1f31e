"""Unit tests for the GraphStore."""

import logging

import pytest

from techgraph.core.store import GraphStore
from techgraph.core.types import Category, Edge, Node


class TestBuild:
    def test_loads_everything_when_consistent(self, abc_store):
        assert abc_store.node_count == 3
        assert abc_store.edge_count == 2
        assert [n.id for n in abc_store.iter_nodes()] == ["A", "B", "C"]

    def test_drops_edge_with_unknown_endpoint(self, abc_nodes, categories, caplog):
        edges = [
            Edge(source_id="A", target_id="B", strength=0.5),
            Edge(source_id="A", target_id="Z", strength=0.5),
        ]
        with caplog.at_level(logging.WARNING):
            store = GraphStore.build(abc_nodes, edges, categories)

        assert store.edge_count == 1
        assert "unknown node 'Z'" in caplog.text

    def test_drops_node_with_unknown_group_and_its_edges(self, abc_edges, categories, caplog):
        nodes = [
            Node(id="A", group="g1"),
            Node(id="B", group="missing"),
            Node(id="C", group="g1"),
        ]
        with caplog.at_level(logging.WARNING):
            store = GraphStore.build(nodes, abc_edges, categories)

        assert not store.has_node("B")
        assert store.node_count == 2
        assert store.edge_count == 0
        assert "group 'missing'" in caplog.text

    def test_drops_duplicate_ids(self, categories):
        nodes = [Node(id="A", group="g1", short_desc="first"), Node(id="A", group="g2", short_desc="second")]
        store = GraphStore.build(nodes, [], categories)
        assert store.node_count == 1
        assert store.get_node("A").short_desc == "first"

    def test_read_only_after_build(self, abc_store):
        with pytest.raises(RuntimeError):
            abc_store._add_node(Node(id="D", group="g1"))


class TestQueries:
    def test_get_node(self, abc_store):
        assert abc_store.get_node("B").group == "g2"
        assert abc_store.get_node("nope") is None

    def test_neighbors_and_degree(self, abc_store):
        assert abc_store.neighbors("B") == {"A", "C"}
        assert abc_store.neighbors("A") == {"B"}
        assert abc_store.neighbors("nope") == set()
        assert abc_store.degree("B") == 2
        assert abc_store.degree("nope") == 0

    def test_connected_nodes_follow_edge_order(self, abc_store):
        assert [n.id for n in abc_store.connected_nodes("B")] == ["A", "C"]
        assert abc_store.connected_nodes("nope") == []

    def test_group_counts_in_category_order_without_empty_groups(self):
        categories = {
            "empty": Category(label="Nothing"),
            "g2": Category(label="Two"),
            "g1": Category(label="One"),
        }
        nodes = [Node(id="A", group="g1"), Node(id="B", group="g2"), Node(id="C", group="g1")]
        store = GraphStore.build(nodes, [], categories)
        assert list(store.group_counts().items()) == [("g2", 1), ("g1", 2)]

    def test_describe(self, abc_store):
        detail = abc_store.describe("A")
        assert detail.node.id == "A"
        assert detail.category.label == "Group One"
        assert [n.id for n in detail.connected] == ["B"]
        assert abc_store.describe("nope") is None

    def test_stats_counts_orphans(self, categories):
        nodes = [Node(id="A", group="g1"), Node(id="B", group="g1"), Node(id="lonely", group="g2")]
        store = GraphStore.build(nodes, [Edge(source_id="A", target_id="B", strength=1.0)], categories)
        stats = store.get_stats()
        assert stats["total_nodes"] == 3
        assert stats["total_edges"] == 1
        assert stats["orphans"] == 1
        assert stats["nodes_by_group"] == {"g1": 2, "g2": 1}

    def test_to_dict_uses_dataset_field_names(self, abc_store):
        data = abc_store.to_dict()
        assert data["nodes"][0]["shortDesc"] == "alpha tool"
        assert data["edges"][0]["source"] == "A"

    def test_with_categories_drops_undescribed_groups(self, abc_store, caplog):
        with caplog.at_level(logging.WARNING):
            store = abc_store.with_categories({"g1": Category(label="One")})

        assert [n.id for n in store.iter_nodes()] == ["A", "C"]
        assert store.edge_count == 0
        assert abc_store.node_count == 3
