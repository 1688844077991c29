from algorithms import generate_steps, run_algorithm
from algorithms.step import OpKind, StepKind
from graph import Graph


GRAPH = {0: [1, 2], 1: [0, 3], 2: [0, 4], 3: [1], 4: [2]}

# 0-2 (1), 2-1 (2), 1-3 (1) is the cheapest route to 3
WEIGHTED = "0:1(4),2(1);2:1(2),3(7);1:3(1)"


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------
def test_bfs_visits_layer_by_layer():
    result, steps = run_algorithm("bfs", graph=GRAPH, start=0)

    assert result == [0, 1, 2, 3, 4]
    assert steps[-1].visited == (0, 1, 2, 3, 4)
    assert all(s.kind is StepKind.GRAPH for s in steps)


def test_bfs_marks_nodes_visited_when_enqueued():
    steps = generate_steps("bfs", graph=GRAPH, start=0)
    for step in steps:
        assert len(set(step.queue)) == len(step.queue)
        assert set(step.queue) <= set(step.visited)

    visits = [op.indices[0] for s in steps for op in s.ops if op.kind is OpKind.VISIT]
    assert visits == [0, 1, 2, 3, 4]


def test_bfs_reaches_only_the_start_component():
    result, _ = run_algorithm("bfs", graph={0: [1], 2: [3]}, start=2)
    assert result == [2, 3]


def test_bfs_tolerates_missing_adjacency_keys():
    result, _ = run_algorithm("bfs", graph={0: [5]}, start=0)
    assert result == [0, 5]

    result, _ = run_algorithm("bfs", graph={0: [1]}, start=9)
    assert result == [9]


def test_bfs_follows_one_way_entries_only():
    result, steps = run_algorithm("bfs", graph={0: [1], 1: [2]}, start=2)

    assert result == [2]
    assert steps[0].graph == {0: (1,), 1: (2,), 2: ()}

    result, _ = run_algorithm("bfs", graph={0: [1], 1: [2]}, start=0)
    assert result == [0, 1, 2]


# ---------------------------------------------------------------------------
# DFS
# ---------------------------------------------------------------------------
def test_dfs_follows_adjacency_order():
    result, steps = run_algorithm("dfs", graph=GRAPH, start=0)

    assert result == [0, 1, 3, 2, 4]
    assert steps[-1].visited == (0, 1, 3, 2, 4)


def test_dfs_skips_nodes_already_visited():
    # triangle: 2 is pushed twice before it is popped
    steps = generate_steps("dfs", graph={0: [1, 2], 1: [2]}, start=0)
    skips = [s for s in steps if "already visited" in s.description]
    visits = [op.indices[0] for s in steps for op in s.ops if op.kind is OpKind.VISIT]

    assert skips
    assert visits == [0, 1, 2]


def test_dfs_follows_one_way_entries_only():
    result, _ = run_algorithm("dfs", graph={0: [1], 1: []}, start=1)
    assert result == [1]

    result, _ = run_algorithm("dfs", graph={0: [1], 2: [0]}, start=0)
    assert result == [0, 1]


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
def test_dijkstra_finds_the_cheapest_path():
    graph = Graph.from_adjacency_list(WEIGHTED)
    result, steps = run_algorithm("dijkstra", graph=graph, start=0, end=3)

    assert result == [0, 2, 1, 3]
    last = steps[-1]
    assert last.path == (0, 2, 1, 3)
    assert last.distances[3] == 4
    assert any(op.kind is OpKind.FOUND for op in last.ops)

    cost = sum(graph.weight(a, b) for a, b in zip(result, result[1:]))
    assert cost == last.distances[3]


def test_dijkstra_only_relaxes_on_strictly_shorter_distance():
    graph = Graph.from_adjacency_list(WEIGHTED)
    steps = generate_steps("dijkstra", graph=graph, start=0, end=3)
    updates = [s.description for s in steps if s.description.startswith("Updated distance")]

    assert updates == [
        "Updated distance to node 1 via 0: 4.",
        "Updated distance to node 2 via 0: 1.",
        "Updated distance to node 1 via 2: 3.",
        "Updated distance to node 3 via 2: 8.",
        "Updated distance to node 3 via 1: 4.",
    ]


def test_dijkstra_skips_stale_queue_entries():
    graph = Graph.from_adjacency_list(WEIGHTED)
    steps = generate_steps("dijkstra", graph=graph, start=0, end=3)
    assert any("skipping stale entry" in s.description for s in steps)


def test_dijkstra_reports_unreachable_target():
    result, steps = run_algorithm("dijkstra", graph={0: [1], 2: []}, start=0, end=2)

    assert result == []
    assert steps[-1].description == "No path found from node 0 to node 2."
    assert steps[-1].path == ()


def test_dijkstra_start_is_end():
    result, _ = run_algorithm("dijkstra", graph=GRAPH, start=3, end=3)
    assert result == [3]


def test_steps_serialise_infinite_distances_as_null():
    steps = generate_steps("dijkstra", graph=GRAPH, start=0, end=4)
    first = steps[0].to_dict()
    assert first["distances"][4] is None
    assert first["distances"][0] == 0


def test_graph_algorithms_leave_the_graph_alone():
    graph = Graph.from_adjacency(GRAPH)
    before = graph.adjacency()
    for key, extra in (("bfs", {}), ("dfs", {}), ("dijkstra", {"end": 4})):
        generate_steps(key, graph=graph, start=0, **extra)
    assert graph.adjacency() == before
