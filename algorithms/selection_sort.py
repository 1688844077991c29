"""
selection_sort.py — Selection Sort
===================================
Each pass scans the unsorted suffix for its minimum and swaps it into
position i.  Comparisons are announced as COMPARE(min_index, j) so a
live `compare_elements` hook answering "arr[a] > arr[b]" agrees with the
generator's own `arr[j] < arr[min_index]` test.
"""

from typing import Generator, List, Sequence

from algorithms.step import SortStep, compare, mark_sorted, swap


PSEUDOCODE: List[str] = [
    "for i from 0 to n - 2:",                        # 0
    "    min ← i",                                   # 1
    "    for j from i + 1 to n - 1:",                # 2
    "        if arr[j] < arr[min]:",                 # 3
    "            min ← j",                           # 4
    "    if min ≠ i:",                               # 5
    "        swap(arr[i], arr[min])",                # 6
]


def selection_sort(array: Sequence[float]) -> Generator[SortStep, None, List[float]]:
    arr = list(array)
    n = len(arr)
    done: List[int] = []

    def frame(description, code_line, **extra) -> SortStep:
        return SortStep(
            array=tuple(arr),
            sorted_indices=tuple(done),
            description=description,
            code_line=code_line,
            **extra,
        )

    yield frame("Initial array state.", 0)

    for i in range(n - 1):
        min_index = i
        yield frame(f"Finding the minimum element for index {i}.", 1, comparing=(i, i))

        for j in range(i + 1, n):
            yield frame(
                f"Comparing current minimum ({arr[min_index]} at index {min_index}) "
                f"with element at index {j} ({arr[j]}).",
                3, comparing=(min_index, j), ops=(compare(min_index, j),),
            )
            if arr[j] < arr[min_index]:
                min_index = j
                yield frame(f"New minimum found: {arr[min_index]} at index {min_index}.", 4, comparing=(min_index, j))

        if min_index != i:
            yield frame(
                f"Swapping minimum element {arr[min_index]} (at index {min_index}) "
                f"with element {arr[i]} (at index {i}).",
                6, swapping=(i, min_index),
            )
            arr[i], arr[min_index] = arr[min_index], arr[i]
            yield frame("Array state after swapping.", 6, swapping=(i, min_index), ops=(swap(i, min_index),))
        else:
            yield frame(
                f"Element {arr[i]} at index {i} is already the minimum in the unsorted part. No swap needed.",
                5, comparing=(i, i),
            )

        done.append(i)
        yield frame(f"Element {arr[i]} is now in its final sorted position.", 0, ops=(mark_sorted(i),))

    rest = [k for k in range(n) if k not in done]
    done = list(range(n))
    yield frame("Final sorted array.", 0, ops=(mark_sorted(*rest),) if rest else ())
    return arr
