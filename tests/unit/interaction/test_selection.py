"""Unit tests for selection, hover and highlight."""

from techgraph.core.types import Edge
from techgraph.interaction.selection import SelectionController, SelectionPhase, highlight_set


class TestSelectionController:
    def test_select_toggles(self):
        controller = SelectionController()

        controller.select("A")
        assert controller.selected_id == "A"
        assert controller.phase == SelectionPhase.SELECTED

        controller.select("A")
        assert controller.selected_id is None
        assert controller.phase == SelectionPhase.EMPTY

    def test_replacing_selection_skips_empty_state(self):
        controller = SelectionController()
        seen = []
        controller.subscribe(lambda state: seen.append(state.selected_id))

        controller.select("A")
        controller.select("B")

        assert seen == ["A", "B"]

    def test_set_selected_does_not_toggle(self):
        controller = SelectionController()
        seen = []
        controller.subscribe(seen.append)

        controller.set_selected("A")
        controller.set_selected("A")

        assert controller.selected_id == "A"
        assert len(seen) == 1

    def test_hover_never_overwrites_selection(self):
        controller = SelectionController()
        controller.select("A")

        controller.hover("C")
        assert controller.selected_id == "A"
        assert controller.hovered_id == "C"
        assert controller.focal_id == "A"

        controller.end_hover()
        assert controller.selected_id == "A"
        assert controller.hovered_id is None

    def test_hover_without_selection(self):
        controller = SelectionController()
        controller.hover("B")
        assert controller.phase == SelectionPhase.HOVERING
        assert controller.focal_id == "B"

    def test_prune_forgets_hidden_nodes(self):
        controller = SelectionController()
        controller.select("B")
        controller.hover("A")

        controller.prune({"A", "C"})

        assert controller.selected_id is None
        assert controller.hovered_id == "A"

    def test_silent_prune(self):
        controller = SelectionController()
        seen = []
        controller.select("B")
        controller.subscribe(seen.append)

        controller.prune(set(), notify=False)

        assert controller.selected_id is None
        assert seen == []


class TestHighlight:
    def test_one_hop_neighbourhood(self, abc_edges):
        result = highlight_set("A", abc_edges)
        assert result.nodes == {"A", "B"}
        assert result.edges == (abc_edges[0],)
        assert not result.is_node_emphasized("C")
        assert not result.is_edge_emphasized(abc_edges[1])

    def test_middle_node_reaches_both_sides(self, abc_edges):
        result = highlight_set("B", abc_edges)
        assert result.nodes == {"A", "B", "C"}
        assert len(result.edges) == 2

    def test_only_given_edges_count(self, abc_edges):
        result = highlight_set("B", [])
        assert result.nodes == {"B"}
        assert result.edges == ()

    def test_no_focal_emphasizes_everything(self, abc_edges):
        result = highlight_set(None, abc_edges)
        assert result.is_empty
        assert result.is_node_emphasized("C")
        assert result.is_edge_emphasized(abc_edges[1])

    def test_edges_are_undirected(self):
        edges = [Edge(source_id="X", target_id="A", strength=0.2)]
        assert highlight_set("A", edges).nodes == {"A", "X"}

    def test_controller_uses_focal(self, abc_edges):
        controller = SelectionController()
        controller.hover("C")
        assert controller.highlight(abc_edges).nodes == {"B", "C"}
