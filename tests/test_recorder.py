import asyncio

from algorithms import generate_steps
from algorithms.step import OpKind
from engine import PlaybackController, Recorder
from graph import Graph
from tree import build_bst


def test_record_sorting_run():
    rec = Recorder()
    metrics = rec.record("bubble", array=[5, 2, 9, 1, 6])
    steps = generate_steps("bubble", array=[5, 2, 9, 1, 6])

    assert rec.get_metrics() is metrics
    assert metrics.algo_label == "Bubble Sort"
    assert metrics.family == "sort"
    assert metrics.total_steps == len(steps)
    assert metrics.comparisons == sum(1 for s in steps for op in s.ops if op.kind is OpKind.COMPARE)
    assert metrics.swaps == sum(1 for s in steps for op in s.ops if op.kind is OpKind.SWAP)
    assert metrics.writes == 0
    assert metrics.visited_count == 5
    assert metrics.result == [1, 2, 5, 6, 9]
    assert metrics.wall_time_ms >= 0
    assert metrics.memory_bytes > 0


def test_record_counts_writes_and_inspections():
    merge = Recorder().record("merge", array=[4, 3, 2, 1])
    assert merge.writes > 0
    assert merge.swaps == 0

    search = Recorder().record("binary", array=[1, 2, 3, 4, 5], target=4)
    assert search.comparisons == 2
    assert search.result == 3


def test_export_is_plain_data():
    rec = Recorder()
    rec.record("dijkstra", graph=Graph.from_adjacency({0: [1], 1: [2]}), start=0, end=2)
    data = rec.export()

    assert data["algo_key"] == "dijkstra"
    assert data["inputs"]["start"] == 0
    assert data["inputs"]["graph"]["adjacency"] == {"0": [1], "1": [2], "2": []}
    assert data["metrics"]["result"] == [0, 1, 2]
    assert data["steps"][0]["kind"] == "graph"


def test_export_tree_result():
    rec = Recorder()
    metrics = rec.record("bst_insert", tree=build_bst([5, 3]), value=8)

    assert metrics.result["value"] == 5
    assert metrics.result["right"]["value"] == 8
    assert metrics.visited_count == 2


def test_record_step_captures_a_live_run():
    rec = Recorder()
    ctl = PlaybackController(on_step=rec.record_step, speed=1000)
    ctl.load("linear", array=[3, 1, 2], target=2)

    async def scenario():
        ctl.start()
        await ctl.wait()

    asyncio.run(scenario())
    assert rec.steps == ctl.steps
