"""
binary_search.py — Binary Search
=================================
Requires sorted input (the registry flags it with `requires_sorted`, and
the playback controller sorts unsorted input before the first run).

    mid = (left + right) // 2
    arr[mid] == target  →  found
    arr[mid] <  target  →  left  = mid + 1
    otherwise           →  right = mid - 1

A single "not found" step is emitted once left > right.
"""

from typing import Generator, List, Sequence

from algorithms.step import SearchStep, found, inspect, visit


PSEUDOCODE: List[str] = [
    "left ← 0; right ← n - 1",                       # 0
    "while left ≤ right:",                           # 1
    "    mid ← (left + right) / 2",                  # 2
    "    if arr[mid] == target:",                    # 3
    "        return mid",                            # 4
    "    else if arr[mid] < target:",                # 5
    "        left ← mid + 1",                        # 6
    "    else:",                                     # 7
    "        right ← mid - 1",                       # 8
    "return -1",                                     # 9
]


def binary_search(array: Sequence[float], target: float) -> Generator[SearchStep, None, int]:
    arr = tuple(array)
    left, right = 0, len(arr) - 1
    checked: List[int] = []

    while left <= right:
        mid = (left + right) // 2
        checked.append(mid)
        common = dict(array=arr, target=target, left=left, right=right, mid=mid, current_index=mid)

        yield SearchStep(
            visited=tuple(checked),
            description=f"Checking middle index {mid}: {arr[mid]}.",
            code_line=2, ops=(inspect(mid, target), visit(mid)),
            **common,
        )

        if arr[mid] == target:
            yield SearchStep(
                visited=tuple(checked), found_index=mid,
                description=f"Found target {target} at index {mid}.",
                code_line=4, ops=(found(mid),),
                **common,
            )
            return mid
        if arr[mid] < target:
            yield SearchStep(
                visited=tuple(checked),
                description=f"Target {target} is greater than {arr[mid]}. Searching right half.",
                code_line=6,
                **common,
            )
            left = mid + 1
        else:
            yield SearchStep(
                visited=tuple(checked),
                description=f"Target {target} is less than {arr[mid]}. Searching left half.",
                code_line=8,
                **common,
            )
            right = mid - 1

    yield SearchStep(
        array=arr, target=target, left=left, right=right, mid=None,
        visited=tuple(checked),
        description=f"Target {target} not found in the array.",
        code_line=9,
    )
    return -1
