"""
insertion_sort.py — Insertion Sort
==================================
Takes each value in turn and shifts the larger values of the sorted prefix
one slot to the right, then drops the value into the hole.

Events per insertion:
  - Compare(j, j+1)       before testing a[j] against the value being placed
  - Overwrite(j+1, a[j])  for every shift (one write per shift, not a swap)
  - Overwrite(hole, v)    placing the value, only when something was shifted

Returns the sorted list.  Stable: equal values are never shifted past
each other.
"""

from typing import List

from algorithms.step import Compare, EventStream, Overwrite


PSEUDOCODE: List[str] = [
    "def InsertionSort(a):",                     # 0
    "    for i in 1 .. n-1:",                    # 1
    "        current ← a[i]",                    # 2
    "        j ← i - 1",                         # 3
    "        while j ≥ 0 and a[j] > current:",   # 4
    "            a[j+1] ← a[j]",                 # 5
    "            j ← j - 1",                     # 6
    "        a[j+1] ← current",                  # 7
]


def insertion_sort(values: List[int]) -> EventStream:
    a = list(values)
    for i in range(1, len(a)):
        a, _ = yield from _insert(a, i)
    return a


def _insert(a: List[int], i: int):
    """Place a[i] into the sorted prefix a[:i]; returns (a, final index)."""
    current = a[i]
    j = i - 1
    while j >= 0:
        yield Compare(j, j + 1)
        if a[j] <= current:
            break
        a[j + 1] = a[j]
        yield Overwrite(j + 1, a[j])
        j -= 1
    if j + 1 != i:
        a[j + 1] = current
        yield Overwrite(j + 1, current)
    return a, j + 1
