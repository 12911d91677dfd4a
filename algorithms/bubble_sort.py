"""
bubble_sort.py — Bubble Sort
============================
Adjacent-pair passes; each pass bubbles the largest remaining value to the
end.  Stops the moment a full pass makes no swap.

Yields Compare(j, j+1) for every adjacent comparison and Swap(j, j+1)
whenever the pair is out of order.  Returns the sorted list.
"""

from typing import List

from algorithms.step import Compare, EventStream, Swap


PSEUDOCODE: List[str] = [
    "def BubbleSort(a):",                        # 0
    "    for i in 0 .. n-2:",                    # 1
    "        swapped ← false",                   # 2
    "        for j in 0 .. n-i-2:",              # 3
    "            if a[j] > a[j+1]:",             # 4
    "                swap(a[j], a[j+1])",        # 5
    "                swapped ← true",            # 6
    "        if not swapped: break",             # 7
]


def bubble_sort(values: List[int]) -> EventStream:
    a = list(values)
    n = len(a)
    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            yield Compare(j, j + 1)
            if a[j] > a[j + 1]:
                a[j], a[j + 1] = a[j + 1], a[j]
                yield Swap(j, j + 1)
                swapped = True
        if not swapped:
            break
    return a
