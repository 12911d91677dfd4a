"""
sequence.py — Array Model
=========================
The bar chart the sorting engines work on: a mutable list of integer values
plus transient per-bar annotations used only for presentation.

Responsibilities:
  1. Validating user-typed vectors       (parse_input_vector)
  2. Random generation                   (randomize / generate)
  3. Applying replayed sort events       (Compare / Swap / Overwrite)

Every replacement of the values is all-or-nothing: on InvalidInput the
previous values are left untouched.
"""

import random
import re
from dataclasses import dataclass
from typing import List, Optional, Dict, Any

from models.errors import ConcurrentRunRejected, InvalidInput


MIN_VALUE        = 1      # user-supplied lower bound
MAX_VALUE        = 100
RANDOM_MIN_VALUE = 5      # random bars start a little taller so they stay visible
MAX_ELEMENTS     = 100
DEFAULT_SIZE     = 20

_INTEGER = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------
def parse_input_vector(text: str) -> List[int]:
    """
    Parse "45, 23, 67" → [45, 23, 67].

    Empty tokens between commas are skipped.  Raises InvalidInput when no
    numbers remain, a token is not an integer, a value is outside
    [MIN_VALUE, MAX_VALUE] or there are more than MAX_ELEMENTS values.
    """
    tokens = [tok.strip() for tok in (text or "").split(",")]
    tokens = [tok for tok in tokens if tok]

    values: List[int] = []
    for tok in tokens:
        if not _INTEGER.fullmatch(tok):
            raise InvalidInput(f"Invalid number in input: {tok!r}")
        value = int(tok)
        if not MIN_VALUE <= value <= MAX_VALUE:
            raise InvalidInput(f"Numbers must be between {MIN_VALUE} and {MAX_VALUE}, got {value}")
        values.append(value)

    if not values:
        raise InvalidInput("Please enter at least one number")
    if len(values) > MAX_ELEMENTS:
        raise InvalidInput(f"Maximum {MAX_ELEMENTS} elements allowed, got {len(values)}")
    return values


# ---------------------------------------------------------------------------
# Bar: one value + presentation annotations
# ---------------------------------------------------------------------------
@dataclass
class Bar:
    value:     int
    comparing: bool = False
    swapping:  bool = False


# ---------------------------------------------------------------------------
# ArrayModel
# ---------------------------------------------------------------------------
class ArrayModel:
    """
    Attributes:
        bars   : List of Bar, index-aligned with the values the engines see.
        locked : True while a sorting run is active.
    """

    def __init__(self, values: Optional[List[int]] = None, rng: Optional[random.Random] = None):
        self._rng:   random.Random = rng or random.Random()
        self.bars:   List[Bar]     = []
        self.locked: bool          = False
        if values is None:
            self.randomize()
        else:
            self.set_values(values)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def values(self) -> List[int]:
        return [bar.value for bar in self.bars]

    def __len__(self) -> int:
        return len(self.bars)

    def snapshot(self) -> List[int]:
        """Copy handed to a sorting engine."""
        return self.values

    # ------------------------------------------------------------------
    # Replacement
    # ------------------------------------------------------------------
    def set_values(self, values: List[int]) -> None:
        self._check_unlocked()
        for v in values:
            if not isinstance(v, int) or isinstance(v, bool):
                raise InvalidInput(f"Values must be integers, got {v!r}")
            if not MIN_VALUE <= v <= MAX_VALUE:
                raise InvalidInput(f"Numbers must be between {MIN_VALUE} and {MAX_VALUE}, got {v}")
        if len(values) > MAX_ELEMENTS:
            raise InvalidInput(f"Maximum {MAX_ELEMENTS} elements allowed, got {len(values)}")
        self.bars = [Bar(v) for v in values]

    def load(self, text: str) -> List[int]:
        """Parse a typed vector and adopt it; previous values survive a failure."""
        self._check_unlocked()
        values = parse_input_vector(text)
        self.set_values(values)
        return values

    def randomize(self, size: int = DEFAULT_SIZE) -> None:
        """`size` bars with values in [RANDOM_MIN_VALUE, MAX_VALUE]."""
        if not 1 <= size <= MAX_ELEMENTS:
            raise InvalidInput(f"Size must be between 1 and {MAX_ELEMENTS}, got {size}")
        self.set_values([self._rng.randint(RANDOM_MIN_VALUE, MAX_VALUE) for _ in range(size)])

    def generate(self) -> None:
        """Random length in [10, MAX_ELEMENTS) with values in [MIN_VALUE, MAX_VALUE]."""
        size = self._rng.randint(10, MAX_ELEMENTS - 1)
        self.set_values([self._rng.randint(MIN_VALUE, MAX_VALUE) for _ in range(size)])

    # ------------------------------------------------------------------
    # Event replay
    # ------------------------------------------------------------------
    def apply(self, event) -> None:
        """Apply a replayed sorting event to the bars."""
        self.clear_annotations()
        if event.kind == "compare":
            self.bars[event.i].comparing = True
            self.bars[event.j].comparing = True
        elif event.kind == "swap":
            a, b = self.bars[event.i], self.bars[event.j]
            a.value, b.value = b.value, a.value
            a.swapping = b.swapping = True
        elif event.kind == "overwrite":
            bar = self.bars[event.index]
            bar.value    = event.value
            bar.swapping = True

    def clear_annotations(self) -> None:
        for bar in self.bars:
            bar.comparing = False
            bar.swapping  = False

    # ------------------------------------------------------------------
    # Locking  (driven by engine.runner)
    # ------------------------------------------------------------------
    def lock(self) -> None:
        if self.locked:
            raise ConcurrentRunRejected("Array is already in use by an active run")
        self.locked = True

    def unlock(self) -> None:
        self.locked = False

    def _check_unlocked(self) -> None:
        if self.locked:
            raise ConcurrentRunRejected("Array cannot be edited while a run is active")

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "values": self.values,
            "bars":   [{"value": b.value, "comparing": b.comparing, "swapping": b.swapping} for b in self.bars],
            "locked": self.locked,
        }

    def __repr__(self) -> str:
        return f"ArrayModel({self.values})"
