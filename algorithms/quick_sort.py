"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
Pivot = last element of the partition, scan left to right, elements
strictly smaller than the pivot move to the front.  The left partition is
always sorted before the right one.

A one-element partition is settled immediately (MARK_SORTED); each pivot
is settled the moment it lands in its final slot.
"""

from typing import Generator, List, Sequence

from algorithms.step import SortStep, compare, mark_sorted, swap


PSEUDOCODE: List[str] = [
    "quickSort(arr, lo, hi):",                       # 0
    "    if lo ≥ hi: return",                        # 1
    "    pivot ← arr[hi]; i ← lo",                   # 2
    "    for j from lo to hi - 1:",                  # 3
    "        if arr[j] < pivot:",                    # 4
    "            swap(arr[i], arr[j]); i ← i + 1",   # 5
    "    swap(arr[i], arr[hi])",                     # 6
    "    quickSort(arr, lo, i - 1)",                 # 7
    "    quickSort(arr, i + 1, hi)",                 # 8
]


def quick_sort(array: Sequence[float]) -> Generator[SortStep, None, List[float]]:
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

    def sort(start: int, end: int):
        if start >= end:
            if start == end and start not in done:
                done.append(start)
                yield frame(
                    f"Element at index {start} is in its final sorted position.",
                    1, ops=(mark_sorted(start),),
                )
            return

        pivot = arr[end]
        i = start
        yield frame(f"Pivot selected: {pivot} at index {end}.", 2, comparing=(end, end))

        for j in range(start, end):
            yield frame(
                f"Comparing element at index {j} ({arr[j]}) with pivot ({pivot}).",
                4, comparing=(j, end), ops=(compare(end, j),),
            )
            if arr[j] < pivot:
                yield frame(
                    f"Swapping {arr[i]} at index {i} with {arr[j]} at index {j} (less than pivot).",
                    5, swapping=(i, j),
                )
                arr[i], arr[j] = arr[j], arr[i]
                yield frame("Array state after swap.", 5, swapping=(i, j), ops=(swap(i, j),))
                i += 1

        yield frame(f"Placing pivot {pivot} at index {i}.", 6, swapping=(i, end))
        arr[i], arr[end] = arr[end], arr[i]
        yield frame(f"Pivot {pivot} moved to index {i}.", 6, swapping=(i, end), ops=(swap(i, end),))

        done.append(i)
        yield frame(f"Pivot {pivot} is now in its final sorted position.", 6, ops=(mark_sorted(i),))

        yield frame(f"Recursively sorting left partition [{start}, {i - 1}].", 7)
        yield from sort(start, i - 1)
        yield frame(f"Recursively sorting right partition [{i + 1}, {end}].", 8)
        yield from sort(i + 1, end)

    yield frame("Initial array state.", 0)
    yield from sort(0, n - 1)

    rest = [k for k in range(n) if k not in done]
    done = list(range(n))
    yield frame("Final sorted array.", 0, ops=(mark_sorted(*rest),) if rest else ())
    return arr
