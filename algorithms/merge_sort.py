"""
merge_sort.py — Merge Sort (top-down, in-place write-back)
===========================================================
Splits at mid = (lo + hi) // 2, sorts the left half before the right, then
merges.  Merging is stable: on equal keys the left element wins (`<=`).
The merged run is written back into the shared working array one index at
a time, each write being its own step with a WRITE op.
"""

from typing import Generator, List, Sequence

from algorithms.step import SortStep, compare, mark_sorted, write


PSEUDOCODE: List[str] = [
    "mergeSort(arr, lo, hi):",                       # 0
    "    if lo ≥ hi: return",                        # 1
    "    mid ← (lo + hi) / 2",                       # 2
    "    mergeSort(arr, lo, mid)",                   # 3
    "    mergeSort(arr, mid + 1, hi)",               # 4
    "    merge(arr, lo, mid, hi)",                   # 5
    "        take left while arr[l] ≤ arr[r]",       # 6
    "        copy merged run back into arr",         # 7
]


def merge_sort(array: Sequence[float]) -> Generator[SortStep, None, List[float]]:
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
            return
        mid = (start + end) // 2

        yield frame(f"Recursively sorting left half [{start}, {mid}].", 3)
        yield from sort(start, mid)
        yield frame(f"Recursively sorting right half [{mid + 1}, {end}].", 4)
        yield from sort(mid + 1, end)

        left, right = start, mid + 1
        merged: List[float] = []
        while left <= mid and right <= end:
            yield frame(
                f"Comparing elements at index {left} ({arr[left]}) and {right} ({arr[right]}) for merging.",
                6, comparing=(left, right), ops=(compare(left, right),),
            )
            if arr[left] <= arr[right]:
                merged.append(arr[left])
                left += 1
            else:
                merged.append(arr[right])
                right += 1
        merged.extend(arr[left:mid + 1])
        merged.extend(arr[right:end + 1])

        for offset, value in enumerate(merged):
            k = start + offset
            arr[k] = value
            yield frame(f"Writing {value} to index {k}.", 7, swapping=(k, k), ops=(write(k, value),))

        if start == 0 and end == n - 1:
            done[:] = range(n)
            yield frame(f"Merged segment [{start}, {end}].", 5, ops=(mark_sorted(*range(n)),))
        else:
            yield frame(f"Merged segment [{start}, {end}].", 5)

    yield frame("Initial array state.", 0)
    yield from sort(0, n - 1)

    rest = [k for k in range(n) if k not in done]
    done[:] = range(n)
    yield frame("Final sorted array.", 0, ops=(mark_sorted(*rest),) if rest else ())
    return arr
