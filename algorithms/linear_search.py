"""
linear_search.py — Linear Search
=================================
Checks every index left to right and stops at the first exact match.
"""

from typing import Generator, List, Sequence

from algorithms.step import SearchStep, found, inspect, visit


PSEUDOCODE: List[str] = [
    "for i from 0 to n - 1:",                        # 0
    "    if arr[i] == target:",                      # 1
    "        return i",                              # 2
    "return -1",                                     # 3
]


def linear_search(array: Sequence[float], target: float) -> Generator[SearchStep, None, int]:
    arr = tuple(array)
    checked: List[int] = []

    for i, value in enumerate(arr):
        checked.append(i)
        relation = "is equal to" if value == target else "is not equal to"
        yield SearchStep(
            array=arr, target=target, current_index=i, visited=tuple(checked),
            description=f"Checking index {i}: {value} {relation} target {target}.",
            code_line=1, ops=(inspect(i, target), visit(i)),
        )
        if value == target:
            yield SearchStep(
                array=arr, target=target, current_index=i, found_index=i, visited=tuple(checked),
                description=f"Found target {target} at index {i}.",
                code_line=2, ops=(found(i),),
            )
            return i

    yield SearchStep(
        array=arr, target=target, current_index=len(arr) - 1, visited=tuple(checked),
        description=f"Target {target} not found in the array.",
        code_line=3,
    )
    return -1
