"""
Game State - Grid contents plus score and end-of-game flags.

Design principles:
- Serializable: can be saved and restored by the storage collaborator
- Cloneable: the reducer works on a deep copy, so the caller's state
  is never touched by a refused or stalled action
"""

from __future__ import annotations
import random
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from .grid import Grid, Position
from .tile import Tile
from ..rules.scoring import draw_decay_countdown

if TYPE_CHECKING:
    from ..rules import RuleSet


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    grid: Grid
    score: float = 0
    over: bool = False
    won: bool = False
    keep_playing: bool = False
    winning_nuclide: str = "56Iron"

    @property
    def terminated(self) -> bool:
        """Lost, or won without choosing to keep playing."""
        return self.over or (self.won and not self.keep_playing)

    @property
    def size(self) -> int:
        return self.grid.size

    @classmethod
    def empty(cls, size: int, winning_nuclide: str = "56Iron") -> GameState:
        return cls(grid=Grid(size), winning_nuclide=winning_nuclide)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: dict[str, Any],
        ruleset: RuleSet,
        rng: random.Random,
    ) -> GameState:
        """
        Rebuild a state from a serialized snapshot.

        The snapshot is assumed well-formed (storage rejects malformed
        ones). It carries nuclide ids only, so decaying tiles get a
        freshly drawn countdown.
        """
        grid_data = snapshot["grid"]
        grid = Grid(grid_data["size"])
        for x, column in enumerate(grid_data["cells"]):
            for y, nuclide in enumerate(column):
                if nuclide is None:
                    continue
                tile = Tile(Position(x, y), nuclide)
                rule = ruleset.elements.decay_rule(nuclide)
                if rule is not None:
                    tile.turns_until_decay = draw_decay_countdown(rule, rng)
                grid.insert_tile(tile)

        return cls(
            grid=grid,
            score=snapshot["score"],
            over=snapshot["over"],
            won=snapshot["won"],
            keep_playing=snapshot["keepPlaying"],
            winning_nuclide=ruleset.winning_nuclide,
        )

    def serialize(self) -> dict[str, Any]:
        """Persisted layout: grid, score, over, won, keepPlaying."""
        return {
            "grid": self.grid.serialize(),
            "score": self.score,
            "over": self.over,
            "won": self.won,
            "keepPlaying": self.keep_playing,
        }

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
