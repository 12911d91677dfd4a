"""
grid_search.py — Shared grid-search helpers
===========================================
Neighbour generation, the Manhattan heuristic, path reconstruction and the
SearchOutcome every pathfinding generator returns.

All four searches walk the same 4-connected board:
  - no diagonals
  - bounds-checked
  - walls excluded
  - fixed neighbour order Up, Right, Down, Left
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from models.cell import Coord
from models.grid import GridSnapshot
from algorithms.step import PathMark


DIRECTIONS = [(-1, 0), (0, 1), (1, 0), (0, -1)]   # up, right, down, left


@dataclass
class SearchOutcome:
    """
    Attributes:
        reached   : True when the end cell was finalised.
        path      : Coordinates start → end (empty when unreachable).
        distances : Tentative / final distance per discovered cell.
        previous  : Predecessor coordinate per discovered cell (None for start).
        f_scores  : distance + heuristic, A* only.
    """
    reached:   bool                          = False
    path:      List[Coord]                   = field(default_factory=list)
    distances: Dict[Coord, int]              = field(default_factory=dict)
    previous:  Dict[Coord, Optional[Coord]]  = field(default_factory=dict)
    f_scores:  Dict[Coord, int]              = field(default_factory=dict)

    @property
    def path_length(self) -> int:
        return len(self.path) - 1 if self.path else 0


def neighbours(grid: GridSnapshot, coord: Coord) -> Iterator[Coord]:
    r, c = coord
    for dr, dc in DIRECTIONS:
        nxt = (r + dr, c + dc)
        if grid.is_open(nxt):
            yield nxt


def manhattan(a: Coord, b: Coord) -> int:
    """|Δrow| + |Δcol|, admissible and consistent on a unit 4-connected grid."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reconstruct(previous: Dict[Coord, Optional[Coord]], end: Coord) -> List[Coord]:
    """Follow back-references end → start, then reverse to start → end."""
    path: List[Coord] = []
    cur: Optional[Coord] = end
    while cur is not None:
        path.append(cur)
        cur = previous.get(cur)
    path.reverse()
    return path


def mark_path(path: List[Coord]) -> Iterator[PathMark]:
    for r, c in path:
        yield PathMark(r, c)
