from movie_centrality.components import connected_components, find_largest_component, largest_component
from movie_centrality.graph import SimilarityGraph

from conftest import make_graph, make_movie


def test_empty_graph_has_no_components():
    components = connected_components(SimilarityGraph())

    assert components == []
    assert find_largest_component(components) == 0
    assert largest_component(components) == []


def test_components_partition_the_nodes():
    graph = make_graph(6, [(0, 1), (1, 2), (3, 4)])

    components = connected_components(graph)

    assert sorted(sorted(c) for c in components) == [[0, 1, 2], [3, 4], [5]]
    assert sorted(n for c in components for n in c) == graph.nodes()


def test_largest_component_is_selected():
    graph = make_graph(6, [(3, 4), (4, 5), (5, 3), (0, 1)])

    components = connected_components(graph)

    assert sorted(largest_component(components)) == [3, 4, 5]


def test_find_largest_component_tie_breaks_on_first_seen():
    assert find_largest_component([[], []]) == 0
    assert find_largest_component([[1], [2, 3], [4, 5]]) == 1
    assert find_largest_component([]) == 0


def test_components_use_movie_ids_not_positions():
    graph = SimilarityGraph(capacity=101)
    for node_id in (10, 50, 100):
        graph.add_node(make_movie(node_id))
    graph.add_edge(50, 100, 1.0)

    components = connected_components(graph)

    assert sorted(sorted(c) for c in components) == [[10], [50, 100]]
