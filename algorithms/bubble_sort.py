"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort.  Yields a SortStep at every event:
  1. Compare arr[j] and arr[j+1]          →  COMPARE op
  2. Out of order: announce, then swap    →  SWAP op on the post-swap frame
  3. End of pass                          →  MARK_SORTED op for the settled index
  4. Early exit when a pass made no swaps →  every index marked sorted

The generator works on a private copy and returns the sorted list.
"""

from typing import Generator, List, Sequence

from algorithms.step import SortStep, compare, mark_sorted, swap


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "for i from 0 to n - 2:",                        # 0
    "    for j from 0 to n - i - 2:",                # 1
    "        if arr[j] > arr[j + 1]:",               # 2
    "            swap(arr[j], arr[j + 1])",          # 3
    "    if no swaps this pass: break",              # 4
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bubble_sort(array: Sequence[float]) -> Generator[SortStep, None, List[float]]:
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
        swapped = False
        for j in range(n - i - 1):
            yield frame(
                f"Comparing elements at index {j} ({arr[j]}) and index {j + 1} ({arr[j + 1]}).",
                2, comparing=(j, j + 1), ops=(compare(j, j + 1),),
            )

            if arr[j] > arr[j + 1]:
                yield frame(f"Swapping elements {arr[j]} and {arr[j + 1]}.", 3, swapping=(j, j + 1))
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                yield frame("Array state after swapping.", 3, swapping=(j, j + 1), ops=(swap(j, j + 1),))
            else:
                yield frame(
                    f"Elements {arr[j]} and {arr[j + 1]} are in order, no swap needed.",
                    2, comparing=(j, j + 1),
                )

        settled = n - 1 - i
        done.append(settled)
        yield frame(
            f"End of pass {i + 1}. Element {arr[settled]} is in its final sorted position.",
            0, ops=(mark_sorted(settled),),
        )

        if not swapped:
            rest = [k for k in range(n) if k not in done]
            done = list(range(n))
            yield frame("No swaps in the last pass. Array is sorted.", 4, ops=(mark_sorted(*rest),) if rest else ())
            break

    # the outer loop never settles index 0 on its own
    rest = [k for k in range(n) if k not in done]
    done = list(range(n))
    yield frame("Final sorted array.", 0, ops=(mark_sorted(*rest),) if rest else ())
    return arr
