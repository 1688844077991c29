import asyncio

import pytest

from algorithms import generate_steps
from algorithms.step import OpKind, write
from engine import ExecutionContext, dispatch, execute


GRAPH = {0: [1, 2], 1: [0, 3], 2: [0, 4], 3: [1], 4: [2]}


class RecordingContext(ExecutionContext):
    """Logs every hook call as (OpKind, indices)."""

    def __init__(self):
        self.calls = []
        self.shown = []

    def show(self, step):
        self.shown.append(step)

    async def compare_elements(self, i, j, value=None):
        self.calls.append((OpKind.COMPARE, (i, j)))
        return False

    async def swap_elements(self, i, j):
        self.calls.append((OpKind.SWAP, (i, j)))

    async def write_element(self, index, value):
        self.calls.append((OpKind.WRITE, (index,)))

    async def mark_sorted(self, indices):
        self.calls.append((OpKind.MARK_SORTED, tuple(indices)))

    async def compare_element(self, index, target):
        self.calls.append((OpKind.INSPECT, (index,)))
        return False

    async def mark_visited(self, index):
        self.calls.append((OpKind.VISIT, (index,)))

    async def mark_found(self, index):
        self.calls.append((OpKind.FOUND, (index,)))


class LiveArray(ExecutionContext):
    """Applies swaps and writes to its own copy of the array."""

    def __init__(self, array):
        self.array = list(array)

    async def swap_elements(self, i, j):
        self.array[i], self.array[j] = self.array[j], self.array[i]

    async def write_element(self, index, value):
        self.array[index] = value


class AnsweringArray(LiveArray):
    """LiveArray that also answers comparisons from its own data."""

    def __init__(self, array):
        super().__init__(array)
        self.answers = []

    async def compare_elements(self, i, j, value=None):
        greater = self.array[i] > (self.array[j] if value is None else value)
        self.answers.append(greater)
        return greater


def announced(steps):
    return [(op.kind, op.indices) for step in steps for op in step.ops]


@pytest.mark.parametrize("key, inputs", [
    ("bubble",     {"array": [3, 1, 2]}),
    ("insertion",  {"array": [4, 1, 3, 2]}),
    ("merge",      {"array": [4, 1, 3, 2]}),
    ("binary",     {"array": [1, 3, 5, 7], "target": 5}),
    ("bfs",        {"graph": GRAPH, "start": 0}),
    ("dijkstra",   {"graph": GRAPH, "start": 0, "end": 4}),
])
def test_hooks_follow_the_step_trace(key, inputs):
    ctx = RecordingContext()
    result = asyncio.run(execute(ctx, key, **inputs))
    steps = generate_steps(key, **inputs)

    assert ctx.calls == announced(steps)
    assert ctx.shown == steps
    assert result is not None


@pytest.mark.parametrize("key", ["bubble", "insertion", "selection", "quick", "merge"])
def test_live_array_ends_sorted(key):
    ctx = LiveArray([6, 2, 9, 1, 5, 2])
    result = asyncio.run(execute(ctx, key, array=[6, 2, 9, 1, 5, 2]))

    assert ctx.array == [1, 2, 2, 5, 6, 9]
    assert result == ctx.array


def test_insertion_compares_against_the_key_not_the_shifted_slot():
    # after 3 shifts right, slot 1 holds 3 while the key being placed is 1
    ctx = AnsweringArray([2, 3, 1])
    asyncio.run(execute(ctx, "insertion", array=[2, 3, 1]))

    assert ctx.answers == [False, True, True]
    assert ctx.array == [1, 2, 3]


@pytest.mark.parametrize("key", ["bubble", "insertion", "selection", "quick", "merge"])
def test_live_answers_match_the_generator(key):
    # answers read from the live array agree with each compare step's snapshot
    ctx = AnsweringArray([6, 2, 9, 1, 5, 2])
    asyncio.run(execute(ctx, key, array=[6, 2, 9, 1, 5, 2]))
    steps = generate_steps(key, array=[6, 2, 9, 1, 5, 2])

    expected = []
    for step in steps:
        for op in step.ops:
            if op.kind is OpKind.COMPARE:
                i, j = op.indices
                right = step.array[j] if op.value is None else op.value
                expected.append(step.array[i] > right)

    assert ctx.answers == expected


def test_base_context_runs_to_completion():
    result = asyncio.run(execute(ExecutionContext(), "dfs", graph=GRAPH, start=0))
    assert result == [0, 1, 3, 2, 4]


def test_cancellation_stops_before_the_next_hook():
    class StopAfterFirstCompare(RecordingContext):
        running = True

        @property
        def is_sorting(self):
            return self.running

        async def compare_elements(self, i, j, value=None):
            self.running = False
            return await super().compare_elements(i, j, value)

    ctx = StopAfterFirstCompare()
    result = asyncio.run(execute(ctx, "bubble", array=[3, 1, 2]))

    assert result is None
    assert ctx.calls == [(OpKind.COMPARE, (0, 1))]
    assert len(ctx.shown) == 2


def test_cancellation_between_ops_of_one_step():
    class StopOnInspect(RecordingContext):
        running = True

        @property
        def is_sorting(self):
            return self.running

        async def compare_element(self, index, target):
            self.running = False
            return await super().compare_element(index, target)

    # the first linear-search step announces INSPECT then VISIT
    ctx = StopOnInspect()
    assert asyncio.run(execute(ctx, "linear", array=[1, 2], target=2)) is None
    assert ctx.calls == [(OpKind.INSPECT, (0,))]


def test_dispatch_routes_by_kind():
    ctx = RecordingContext()
    asyncio.run(dispatch(ctx, write(2, 7)))
    assert ctx.calls == [(OpKind.WRITE, (2,))]


def test_unknown_algorithm_and_missing_inputs():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        asyncio.run(execute(ExecutionContext(), "bogo", array=[1]))
    with pytest.raises(ValueError, match="needs input"):
        asyncio.run(execute(ExecutionContext(), "binary", array=[1, 2]))
