"""
Tile - One nuclide occupying one cell.

A tile belongs to exactly one grid cell at a time. merged_from is cleared
at the start of every move and is the only record of whether a tile has
already absorbed a fusion this move.
"""

from __future__ import annotations
from dataclasses import dataclass

from .grid import Position


@dataclass(eq=False)
class Tile:
    """
    A tile instance on the grid.

    turns_until_decay is None for nuclides without a decay rule.
    """
    position: Position
    nuclide: str
    merged_from: tuple[Tile, Tile] | None = None
    turns_until_decay: int | None = None
    previous_position: Position | None = None

    def save_position(self):
        self.previous_position = self.position

    def update_position(self, position: Position):
        self.position = position

    @property
    def has_moved(self) -> bool:
        return self.previous_position is not None and self.previous_position != self.position

    def tick(self) -> bool:
        """
        Advance the decay countdown by one turn.

        Returns True when the countdown expires on this tick.
        """
        if self.turns_until_decay is None:
            return False
        self.turns_until_decay -= 1
        return self.turns_until_decay <= 0

    def __repr__(self) -> str:
        return f"Tile({self.nuclide}@{self.position})"
