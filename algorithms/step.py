"""
step.py — Step Events
=====================
Every algorithm is a generator that yields StepEvent objects.
A StepEvent describes ONE observable moment of the run, emitted in the
exact order the algorithm performs the corresponding mutation:

    Visit(row, col)          – a grid cell was examined
    PathMark(row, col)       – a cell lies on the reconstructed path
    Compare(i, j)            – two array positions were compared
    Swap(i, j)               – two array positions exchanged values
    Overwrite(index, value)  – one array position was assigned a value

Design decisions:
  - Events are frozen dataclasses.  The algorithm generator is the only
    writer; the player / recorder / models are pure readers.
  - Generators finish with `return result` so the caller can pick up the
    final outcome (SearchOutcome for grids, the sorted list for arrays)
    from StopIteration.value.  `drain()` does that for headless callers.
  - Engines hold no timers.  Pacing belongs to engine.player.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Generator, List, Tuple, TypeVar


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StepEvent:
    kind = "event"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind
        return data


@dataclass(frozen=True)
class Visit(StepEvent):
    row: int
    col: int
    kind = "visit"


@dataclass(frozen=True)
class PathMark(StepEvent):
    row: int
    col: int
    kind = "path"


@dataclass(frozen=True)
class Compare(StepEvent):
    i: int
    j: int
    kind = "compare"


@dataclass(frozen=True)
class Swap(StepEvent):
    i: int
    j: int
    kind = "swap"


@dataclass(frozen=True)
class Overwrite(StepEvent):
    index: int
    value: int
    kind = "overwrite"


EventStream = Generator[StepEvent, None, Any]

R = TypeVar("R")


# ---------------------------------------------------------------------------
# Headless consumption
# ---------------------------------------------------------------------------
def drain(stream: Generator[StepEvent, None, R]) -> Tuple[List[StepEvent], R]:
    """Exhaust a generator, returning (events, generator return value)."""
    events: List[StepEvent] = []
    while True:
        try:
            events.append(next(stream))
        except StopIteration as stop:
            return events, stop.value
