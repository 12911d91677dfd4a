"""
grid.py — Grid Container
========================
Single source of truth for the pathfinding board.  Tool edits and the
engine both talk to this object.

Responsibilities:
  1. Tool-based mutation                   (toggle wall, move start / end)
  2. Reset helpers                         (clear walls, clear trace, reset)
  3. Immutable snapshots for the engines   (snapshot → GridSnapshot)
  4. Applying replayed events              (Visit / PathMark → cell flags)
  5. Text import / export                  (from_text / render / to_dict)

Design decisions:
  - Cells are stored row-major in a list of lists and addressed by (row, col).
  - The grid is never resized after construction.
  - Silent rejections (wall under start, start onto a wall, …) return False
    instead of raising, matching the tool semantics of the UI.  Out-of-range
    coordinates are invalid input and DO raise.
  - While `locked` (a run is active) every mutator raises
    ConcurrentRunRejected so the engine never sees a half-edited board.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterator, List, Optional, Any

from models.cell import Cell, Coord
from models.errors import ConcurrentRunRejected, InvalidGridState, InvalidInput


GRID_ROWS = 20
GRID_COLS = 40


def default_start(rows: int, cols: int) -> Coord:
    return (rows // 2, cols // 4)


def default_end(rows: int, cols: int) -> Coord:
    return (rows // 2, (3 * cols) // 4)


# ---------------------------------------------------------------------------
# GridSnapshot: what the engines read
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GridSnapshot:
    rows:  int
    cols:  int
    walls: FrozenSet[Coord]
    start: Coord
    end:   Coord

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_open(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and coord not in self.walls


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------
class Grid:
    """
    Attributes:
        rows, cols : Fixed dimensions.
        cells      : cells[row][col] → Cell
        locked     : True while a run is active.
    """

    def __init__(
        self,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        start: Optional[Coord] = None,
        end: Optional[Coord] = None,
        place_defaults: bool = True,
    ):
        if rows < 1 or cols < 1:
            raise InvalidInput(f"Grid must be at least 1x1, got {rows}x{cols}")
        self.rows:   int              = rows
        self.cols:   int              = cols
        self.locked: bool             = False
        self.cells:  List[List[Cell]] = []
        self._default_start: Optional[Coord] = start
        self._default_end:   Optional[Coord] = end
        self._place_defaults: bool = place_defaults
        self._build()

    def _build(self) -> None:
        start = self._default_start
        end   = self._default_end
        if self._place_defaults:
            start = start or default_start(self.rows, self.cols)
            end   = end or default_end(self.rows, self.cols)
        if start is not None and end is not None and start == end:
            raise InvalidInput("Start and end cannot share a cell")
        for coord in (start, end):
            if coord is not None:
                self._check_bounds(*coord)
        self.cells = [
            [Cell(r, c, is_start=(r, c) == start, is_end=(r, c) == end) for c in range(self.cols)]
            for r in range(self.rows)
        ]

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def cell(self, row: int, col: int) -> Cell:
        self._check_bounds(row, col)
        return self.cells[row][col]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    @property
    def start(self) -> Optional[Cell]:
        return next((c for c in self if c.is_start), None)

    @property
    def end(self) -> Optional[Cell]:
        return next((c for c in self if c.is_end), None)

    def walls(self) -> FrozenSet[Coord]:
        return frozenset(c.coord for c in self if c.is_wall)

    def visited_count(self) -> int:
        return sum(1 for c in self if c.visited)

    # ==================================================================
    # TOOL MUTATIONS
    # ==================================================================
    def toggle_wall(self, row: int, col: int) -> bool:
        """Flip the wall flag.  Start / end cells are left alone."""
        self._check_unlocked()
        cell = self.cell(row, col)
        if cell.is_start or cell.is_end:
            return False
        cell.is_wall = not cell.is_wall
        return True

    def set_start(self, row: int, col: int) -> bool:
        """Move the start marker.  Rejected onto a wall or onto the end."""
        self._check_unlocked()
        target = self.cell(row, col)
        if target.is_wall or target.is_end:
            return False
        old = self.start
        if old is not None:
            old.is_start = False
        target.is_start = True
        return True

    def set_end(self, row: int, col: int) -> bool:
        """Move the end marker.  Rejected onto a wall or onto the start."""
        self._check_unlocked()
        target = self.cell(row, col)
        if target.is_wall or target.is_start:
            return False
        old = self.end
        if old is not None:
            old.is_end = False
        target.is_end = True
        return True

    def clear_walls(self) -> None:
        self._check_unlocked()
        for cell in self:
            cell.is_wall = False

    def clear_trace(self) -> None:
        """Wipe visited / path / distance / previous, keep the board layout."""
        self._check_unlocked()
        for cell in self:
            cell.reset_trace()

    def reset(self) -> None:
        """Rebuild the default configuration: no walls, default start / end."""
        self._check_unlocked()
        self._build()

    # ==================================================================
    # ENGINE HAND-OFF
    # ==================================================================
    def snapshot(self) -> GridSnapshot:
        """Freeze the current layout for an engine run."""
        starts = [c.coord for c in self if c.is_start]
        ends   = [c.coord for c in self if c.is_end]
        if len(starts) != 1 or len(ends) != 1:
            raise InvalidGridState(
                f"Expected exactly one start and one end, found {len(starts)} start(s) and {len(ends)} end(s)"
            )
        return GridSnapshot(
            rows=self.rows,
            cols=self.cols,
            walls=self.walls(),
            start=starts[0],
            end=ends[0],
        )

    def apply(self, event) -> None:
        """Apply a replayed Visit / PathMark event to the trace flags."""
        if event.kind == "visit":
            self.cells[event.row][event.col].visited = True
        elif event.kind == "path":
            self.cells[event.row][event.col].in_path = True

    def record_outcome(self, outcome) -> None:
        """Copy distances, back-references and f-scores from a finished search."""
        for (r, c), dist in outcome.distances.items():
            self.cells[r][c].distance = dist
        for (r, c), prev in outcome.previous.items():
            self.cells[r][c].previous = prev
        for (r, c), f in outcome.f_scores.items():
            self.cells[r][c].f_score = f

    # ==================================================================
    # LOCKING  (driven by engine.runner)
    # ==================================================================
    def lock(self) -> None:
        if self.locked:
            raise ConcurrentRunRejected("Grid is already in use by an active run")
        self.locked = True

    def unlock(self) -> None:
        self.locked = False

    # ==================================================================
    # TEXT IMPORT / EXPORT
    # ==================================================================
    @classmethod
    def from_text(cls, text: str) -> "Grid":
        """
        Parse a board drawn with one character per cell:

            S..#
            .#..
            ...E

        '.' empty, '#' wall, 'S' start, 'E' end.  Blank lines are ignored.
        Start / end are optional here; a board without them cannot be run.
        """
        lines = [ln.strip() for ln in text.strip().splitlines() if ln.strip()]
        if not lines:
            raise InvalidInput("Grid text is empty")
        width = len(lines[0])
        if any(len(ln) != width for ln in lines):
            raise InvalidInput("Grid rows must all have the same width")

        start: Optional[Coord] = None
        end:   Optional[Coord] = None
        walls: List[Coord]     = []
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                if ch == "S":
                    if start is not None:
                        raise InvalidInput("Grid text has more than one start")
                    start = (r, c)
                elif ch == "E":
                    if end is not None:
                        raise InvalidInput("Grid text has more than one end")
                    end = (r, c)
                elif ch == "#":
                    walls.append((r, c))
                elif ch != ".":
                    raise InvalidInput(f"Unknown grid symbol {ch!r} at ({r}, {c})")

        grid = cls(rows=len(lines), cols=width, start=start, end=end, place_defaults=False)
        for r, c in walls:
            grid.cells[r][c].is_wall = True
        return grid

    def render(self) -> str:
        return "\n".join("".join(cell.symbol() for cell in row) for row in self.cells)

    def to_dict(self) -> Dict[str, Any]:
        start, end = self.start, self.end
        return {
            "rows":   self.rows,
            "cols":   self.cols,
            "start":  list(start.coord) if start else None,
            "end":    list(end.coord) if end else None,
            "walls":  [list(w) for w in sorted(self.walls())],
            "locked": self.locked,
            "text":   self.render(),
        }

    # ==================================================================
    # INTERNAL
    # ==================================================================
    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise InvalidInput(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} grid")

    def _check_unlocked(self) -> None:
        if self.locked:
            raise ConcurrentRunRejected("Grid cannot be edited while a run is active")

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, walls={len(self.walls())}, locked={self.locked})"
