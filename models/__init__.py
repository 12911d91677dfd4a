"""
models/
-------
Core data layer.  Public API:

    from models import Grid, Cell, GridSnapshot, ArrayModel
    from models import parse_input_vector
    from models import InvalidInput, InvalidGridState, ConcurrentRunRejected
"""

from models.errors   import VisualizerError, InvalidInput, InvalidGridState, ConcurrentRunRejected
from models.cell     import Cell, Coord
from models.grid     import Grid, GridSnapshot, GRID_ROWS, GRID_COLS
from models.sequence import ArrayModel, Bar, parse_input_vector

__all__ = [
    "VisualizerError", "InvalidInput", "InvalidGridState", "ConcurrentRunRejected",
    "Cell",            "Coord",
    "Grid",            "GridSnapshot", "GRID_ROWS", "GRID_COLS",
    "ArrayModel",      "Bar",          "parse_input_vector",
]
