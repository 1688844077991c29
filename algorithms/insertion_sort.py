"""
insertion_sort.py — Insertion Sort
===================================
Grows a sorted prefix one element at a time.  The key is lifted out, every
larger element of the prefix is shifted one slot right (one WRITE op per
shift) and the key is written into the gap.
"""

from typing import Generator, List, Sequence

from algorithms.step import Operation, OpKind, SortStep, mark_sorted, write


PSEUDOCODE: List[str] = [
    "for i from 1 to n - 1:",                        # 0
    "    key ← arr[i]",                              # 1
    "    j ← i - 1",                                 # 2
    "    while j ≥ 0 and arr[j] > key:",             # 3
    "        arr[j + 1] ← arr[j]",                   # 4
    "        j ← j - 1",                             # 5
    "    arr[j + 1] ← key",                          # 6
]


def insertion_sort(array: Sequence[float]) -> Generator[SortStep, None, List[float]]:
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

    for i in range(1, n):
        key = arr[i]
        j = i - 1
        yield frame(
            f"Inserting element {key} at index {i} into the sorted part of the array.",
            1, comparing=(j, i),
        )

        while j >= 0:
            yield frame(
                f"Comparing {arr[j]} at index {j} with key {key}.",
                3, comparing=(j, j + 1),
                ops=(Operation(OpKind.COMPARE, (j, j + 1), key),),
            )
            if not arr[j] > key:
                break
            arr[j + 1] = arr[j]
            yield frame(
                f"Element {arr[j]} at index {j} is greater than {key}. Shifting it to index {j + 1}.",
                4, swapping=(j, j + 1), ops=(write(j + 1, arr[j]),),
            )
            j -= 1

        arr[j + 1] = key
        yield frame(
            f"Inserted element {key} at index {j + 1}.",
            6, swapping=(j + 1, i), ops=(write(j + 1, key),),
        )
        done.append(i)
        yield frame(f"Elements up to index {i} are sorted.", 0, ops=(mark_sorted(i),))

    rest = [k for k in range(n) if k not in done]
    done = list(range(n))
    yield frame("Final sorted array.", 0, ops=(mark_sorted(*rest),) if rest else ())
    return arr
