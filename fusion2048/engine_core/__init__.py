"""
Engine Core - Grid, tiles and move resolution.

The engine is the runtime that:
1. Holds the GameState (grid, score, flags)
2. Resolves moves: slide, fuse, spawn, decay
3. Detects the end of the game
4. Applies actions via the reducer
"""

from .grid import (
    Grid,
    Position,
    GridError,
    OutOfBoundsError,
    NoAvailableCellError,
    CellOccupiedError,
)
from .tile import Tile
from .state import GameState
from .action import Action, ActionType, ActionResult, Direction
from .move_engine import MoveEngine, MoveOutcome, FusionEvent, DecayEvent
from .reducer import Reducer, apply_action

__all__ = [
    "Grid",
    "Position",
    "GridError",
    "OutOfBoundsError",
    "NoAvailableCellError",
    "CellOccupiedError",
    "Tile",
    "GameState",
    "Action",
    "ActionType",
    "ActionResult",
    "Direction",
    "MoveEngine",
    "MoveOutcome",
    "FusionEvent",
    "DecayEvent",
    "Reducer",
    "apply_action",
]
