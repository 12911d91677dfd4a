"""
cell.py — Grid Cell
===================
One square of the pathfinding grid.

Design decisions:
  - `previous` is a (row, col) coordinate into the owning Grid, NOT a Cell
    reference.  The grid stays an arena of value cells addressable by
    coordinate, and cells serialise without cycles.
  - `distance` uses `UNREACHED` (infinity) as the "not reached yet" sentinel.
  - Flags (start / end / wall) are structural; visited / in_path / distance /
    previous / f_score are trace state wiped by `reset_trace()`.
"""

from typing import Optional, Tuple, Dict, Any


Coord = Tuple[int, int]

UNREACHED = float("inf")


class Cell:
    """
    Attributes:
        row, col : Position in the grid (immutable identity).
        is_start : Start marker.
        is_end   : End marker.
        is_wall  : Obstacle flag; never set together with start / end.
        distance : Steps from the start once reached, else UNREACHED.
        visited  : Set when a Visit event for this cell has been applied.
        in_path  : Set when a PathMark event for this cell has been applied.
        previous : Coordinate of the predecessor on the reconstructed path.
        f_score  : distance + heuristic, populated by A* runs.
    """

    __slots__ = ("row", "col", "is_start", "is_end", "is_wall",
                 "distance", "visited", "in_path", "previous", "f_score")

    def __init__(self, row: int, col: int, is_start: bool = False, is_end: bool = False):
        self.row:      int             = row
        self.col:      int             = col
        self.is_start: bool            = is_start
        self.is_end:   bool            = is_end
        self.is_wall:  bool            = False
        self.distance: float           = UNREACHED
        self.visited:  bool            = False
        self.in_path:  bool            = False
        self.previous: Optional[Coord] = None
        self.f_score:  float           = UNREACHED

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def reset_trace(self) -> None:
        """Wipe algorithm state, keep walls and start / end markers."""
        self.distance = UNREACHED
        self.visited  = False
        self.in_path  = False
        self.previous = None
        self.f_score  = UNREACHED

    def symbol(self) -> str:
        """Single-character rendering used by Grid.render()."""
        if self.is_start:
            return "S"
        if self.is_end:
            return "E"
        if self.is_wall:
            return "#"
        if self.in_path:
            return "*"
        if self.visited:
            return "o"
        return "."

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "row":      self.row,
            "col":      self.col,
            "isStart":  self.is_start,
            "isEnd":    self.is_end,
            "isWall":   self.is_wall,
            "distance": None if self.distance == UNREACHED else self.distance,
            "visited":  self.visited,
            "isInPath": self.in_path,
            "previous": list(self.previous) if self.previous else None,
            "fScore":   None if self.f_score == UNREACHED else self.f_score,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Cell(row={self.row}, col={self.col}, symbol={self.symbol()!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Cell) and self.coord == other.coord

    def __hash__(self) -> int:
        return hash(self.coord)
