"""
merge_sort.py — Merge Sort
==========================
Top-down merge sort.  Splits at mid = (left + right) // 2, sorts both
halves, then merges them back into a[left..right].

During a merge, Compare(left+i, mid+1+j) is yielded between the two
candidate heads before the winner is written with Overwrite(k, value).
Leftover elements of either half are copied with Overwrite only.
On equal values the LEFT head wins, which keeps the sort stable.

Returns the sorted list.
"""

from typing import List

from algorithms.step import Compare, EventStream, Overwrite


PSEUDOCODE: List[str] = [
    "def MergeSort(a, left, right):",            # 0
    "    if left < right:",                      # 1
    "        mid ← (left + right) // 2",         # 2
    "        MergeSort(a, left, mid)",           # 3
    "        MergeSort(a, mid + 1, right)",      # 4
    "        Merge(a, left, mid, right)",        # 5
    "def Merge(a, left, mid, right):",           # 6
    "    L ← a[left..mid];  R ← a[mid+1..right]",# 7
    "    while both non-empty:",                 # 8
    "        if L[i] ≤ R[j]: a[k] ← L[i++]",     # 9
    "        else:           a[k] ← R[j++]",     # 10
    "    copy what is left of L, then R",        # 11
]


def merge_sort(values: List[int]) -> EventStream:
    a = list(values)
    return (yield from _sort(a, 0, len(a) - 1))


def _sort(a: List[int], left: int, right: int):
    if left < right:
        mid = (left + right) // 2
        a = yield from _sort(a, left, mid)
        a = yield from _sort(a, mid + 1, right)
        a = yield from _merge(a, left, mid, right)
    return a


def _merge(a: List[int], left: int, mid: int, right: int):
    lo = a[left:mid + 1]
    hi = a[mid + 1:right + 1]
    i = j = 0
    k = left

    while i < len(lo) and j < len(hi):
        yield Compare(left + i, mid + 1 + j)
        if lo[i] <= hi[j]:
            a[k] = lo[i]
            i += 1
        else:
            a[k] = hi[j]
            j += 1
        yield Overwrite(k, a[k])
        k += 1

    for value in lo[i:] + hi[j:]:
        a[k] = value
        yield Overwrite(k, value)
        k += 1
    return a
