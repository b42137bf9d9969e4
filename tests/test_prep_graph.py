import networkx as nx
import pytest

from force_diagram.prep_graph import degree_filter, low_degree_nodes


class TestDegreeFilter:

    def test_outliers_removed(self, core_graph):
        meta = degree_filter(core_graph, 10)
        assert core_graph.number_of_nodes() == 100
        assert all(n < 100 for n in core_graph)
        assert meta["nodes_before"] == 110
        assert meta["nodes_after"] == 100
        assert meta["nodes_removed"] == 10
        assert meta["passes"] == 1

    @pytest.mark.parametrize("min_degree", [0, -3])
    def test_disabled_below_one(self, core_graph, min_degree):
        meta = degree_filter(core_graph, min_degree)
        assert core_graph.number_of_nodes() == 110
        assert meta["applied"] is False
        assert meta["passes"] == 0

    def test_threshold_below_every_degree_is_noop(self, core_graph):
        degree_filter(core_graph, 6)
        assert core_graph.number_of_nodes() == 110

    def test_cascade_limited_by_iterations(self):
        # Path of 10 nodes: each pass strips the two endpoints
        G = nx.path_graph(10, create_using=nx.DiGraph)
        meta = degree_filter(G, 2, max_iterations=2)
        assert G.number_of_nodes() == 6
        assert meta["removed_per_pass"] == [2, 2]

    def test_cascade_stops_when_nothing_left_to_remove(self):
        G = nx.path_graph(10, create_using=nx.DiGraph)
        meta = degree_filter(G, 2, max_iterations=100)
        assert G.number_of_nodes() == 0
        assert meta["passes"] == 5

    def test_batch_uses_degrees_at_pass_start(self):
        # a-b-c: only a and c are below 2 at the start of the pass
        G = nx.DiGraph([("a", "b"), ("b", "c")])
        degree_filter(G, 2, max_iterations=1)
        assert list(G.nodes()) == ["b"]

    def test_emit_log(self, core_graph):
        events = []
        degree_filter(core_graph, 10, emit=lambda k, p: events.append((k, p)))
        assert events[0][0] == "log"
        assert "removed 10 nodes" in events[0][1]["message"]

    def test_low_degree_nodes(self, core_graph):
        assert sorted(low_degree_nodes(core_graph, 7)) == list(range(100, 110))
