import copy

import pytest

from algorithms import REGISTRY, generate_steps, run_algorithm
from algorithms.step import StepKind
from graph import Graph
from tree import build_bst, tree_to_dict


def sample_inputs(family):
    if family is StepKind.SORT:
        return {"array": [9, 4, 7, 1, 3, 4]}
    if family is StepKind.SEARCH:
        return {"array": [1, 3, 4, 7, 9], "target": 7}
    if family is StepKind.GRAPH:
        return {"graph": {0: [1, 2], 1: [3], 2: [3, 4], 3: [4]}, "start": 0, "end": 4}
    return {"tree": build_bst([5, 3, 8, 1, 4, 9]), "value": 3}


def plain(inputs):
    """Comparable copy of an input bundle."""
    out = copy.deepcopy(inputs)
    if "tree" in out:
        out["tree"] = tree_to_dict(out["tree"])
    if isinstance(out.get("graph"), Graph):
        out["graph"] = out["graph"].to_dict()
    return out


@pytest.mark.parametrize("key", list(REGISTRY))
def test_same_input_gives_the_same_trace(key):
    inputs = sample_inputs(REGISTRY[key].family)

    first_result, first = run_algorithm(key, **inputs)
    second_result, second = run_algorithm(key, **inputs)

    assert first == second
    assert first_result == second_result
    assert all(step.kind is REGISTRY[key].family for step in first)


@pytest.mark.parametrize("key", list(REGISTRY))
def test_inputs_are_left_untouched(key):
    inputs = sample_inputs(REGISTRY[key].family)
    before = plain(inputs)

    generate_steps(key, **inputs)

    assert plain(inputs) == before


@pytest.mark.parametrize("key", [k for k, info in REGISTRY.items() if info.family is StepKind.GRAPH])
def test_graph_objects_are_left_untouched(key):
    graph = Graph.from_adjacency_list("0:1(2),2(5);1:2(1),3;2:3")
    before = graph.to_dict()

    generate_steps(key, graph=graph, start=0, end=3)

    assert graph.to_dict() == before
