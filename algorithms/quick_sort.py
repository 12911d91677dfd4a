"""
quick_sort.py — Quick Sort
==========================
Lomuto partition: the pivot is the LAST element of the current range.

Per partition:
  - Compare(j, high) for each element tested against the pivot
  - Swap(i, j) each time an element smaller than the pivot joins the
    left block (i == j is still reported, it is part of the scheme)
  - Swap(i+1, high) placing the pivot

Returns the sorted list.  Not stable.
"""

from typing import List

from algorithms.step import Compare, EventStream, Swap


PSEUDOCODE: List[str] = [
    "def QuickSort(a, low, high):",              # 0
    "    if low < high:",                        # 1
    "        p ← Partition(a, low, high)",       # 2
    "        QuickSort(a, low, p - 1)",          # 3
    "        QuickSort(a, p + 1, high)",         # 4
    "def Partition(a, low, high):",              # 5
    "    pivot ← a[high];  i ← low - 1",         # 6
    "    for j in low .. high-1:",               # 7
    "        if a[j] < pivot:",                  # 8
    "            i ← i + 1;  swap(a[i], a[j])",  # 9
    "    swap(a[i+1], a[high])",                 # 10
    "    return i + 1",                          # 11
]


def quick_sort(values: List[int]) -> EventStream:
    a = list(values)
    return (yield from _sort(a, 0, len(a) - 1))


def _sort(a: List[int], low: int, high: int):
    # explicit stack of ranges; left range is processed before the right
    ranges = [(low, high)]
    while ranges:
        lo, hi = ranges.pop()
        if lo >= hi:
            continue
        a, p = yield from _partition(a, lo, hi)
        ranges.append((p + 1, hi))
        ranges.append((lo, p - 1))
    return a


def _partition(a: List[int], low: int, high: int):
    pivot = a[high]
    i = low - 1
    for j in range(low, high):
        yield Compare(j, high)
        if a[j] < pivot:
            i += 1
            a[i], a[j] = a[j], a[i]
            yield Swap(i, j)
    a[i + 1], a[high] = a[high], a[i + 1]
    yield Swap(i + 1, high)
    return a, i + 1
