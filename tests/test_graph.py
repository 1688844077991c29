import pytest

from graph import Graph, GraphFormatError


# ---------------------------------------------------------------------------
# Adjacency-list parsing
# ---------------------------------------------------------------------------
def test_parse_semicolon_entries():
    g = Graph.from_adjacency_list("0:1,2;1:0,3;2:0,4;3:1;4:2")

    assert g.node_ids() == [0, 1, 2, 3, 4]
    assert g.neighbours(0) == [1, 2]
    assert g.neighbours(3) == [1]
    assert g.edge_count() == 4


def test_parse_alternate_syntax():
    text = """
    # arrows, spaces and newlines
    0 -> 1 2
    1 → 2
    """
    g = Graph.from_adjacency_list(text)

    assert g.neighbours(0) == [1, 2]
    assert g.neighbours(1) == [2]
    assert g.neighbours(2) == []


def test_parse_weights():
    g = Graph.from_adjacency_list("0:1(5),2(2.5)")

    assert g.weight(0, 1) == 5
    assert g.weight(1, 0) == 5
    assert g.weight(0, 2) == 2.5
    assert g.weight(1, 2) == 1.0


def test_directed_parse_keeps_one_way_edges():
    g = Graph.from_adjacency_list("0:1;1:2", directed=True)

    assert g.neighbours(0) == [1]
    assert g.neighbours(1) == [2]
    assert g.neighbours(2) == []


@pytest.mark.parametrize("text, message", [
    ("0-1", "Malformed graph entry"),
    ("a:1", '"a" is not a valid node id'),
    ("0:x", '"x" is not a valid node id'),
    ("0:1(heavy)", '"heavy" is not a valid edge weight'),
])
def test_parse_errors(text, message):
    with pytest.raises(GraphFormatError, match=message):
        Graph.from_adjacency_list(text)


# ---------------------------------------------------------------------------
# Mapping import
# ---------------------------------------------------------------------------
def test_adjacency_is_stored_as_given():
    g = Graph.from_adjacency({0: [1, 2], 2: [1]})

    assert g.neighbours(0) == [1, 2]
    assert g.neighbours(2) == [1]
    assert g.neighbours(1) == []
    assert g.node_ids() == [0, 2, 1]


def test_undirected_weights_are_symmetric_without_reverse_entries():
    g = Graph.from_adjacency({0: [1]}, weights={(0, 1): 5})

    assert g.weight(1, 0) == 5
    assert g.neighbours(1) == []

    directed = Graph.from_adjacency({0: [1]}, weights={(0, 1): 5}, directed=True)
    assert directed.weight(0, 1) == 5
    assert directed.weight(1, 0) == 1.0


def test_unknown_nodes_have_no_neighbours():
    g = Graph.from_adjacency({0: [1]})
    assert g.neighbours(99) == []
    assert g.degree(99) == 0
    assert not g.has_node(99)


def test_coerce():
    g = Graph()
    assert Graph.coerce(g) is g
    assert Graph.coerce({0: [1]}).neighbours(1) == []
    with pytest.raises(TypeError):
        Graph.coerce([0, 1])


def test_snapshot_is_detached():
    g = Graph.from_adjacency({0: [1]})
    snap = g.adjacency_snapshot()
    g.add_edge(0, 2)

    assert snap == {0: (1,), 1: ()}
    assert g.neighbours(0) == [1, 2]


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def test_random_graph_is_reproducible_with_a_seed():
    a = Graph.generate_random(node_count=8, edge_probability=0.3, seed=42)
    b = Graph.generate_random(node_count=8, edge_probability=0.3, seed=42)

    assert a.to_dict() == b.to_dict()
    assert a.node_count() == 8
    for edge in a.edges.values():
        assert 1 <= edge.weight <= 10


def test_grid():
    g = Graph.generate_grid(2, 3)

    assert g.node_count() == 6
    assert g.edge_count() == 7
    assert g.neighbours(0) == [1, 3]
    assert g.neighbours(4) == [1, 3, 5]


def test_dict_round_trip():
    g = Graph.from_adjacency_list("0:1(3),2;2:3")
    h = Graph.from_dict(g.to_dict())

    assert h.adjacency() == g.adjacency()
    assert h.weight(1, 0) == 3
