"""
Grid - N x N board of optional tiles.

Cells are addressed as cells[x][y] with x the column and y the row.
A coordinate holds at most one tile, and a tile's stored position is
always the coordinate of the cell holding it.

Contract violations (out-of-bounds access, inserting into an occupied
cell, asking a full grid for a free cell) raise GridError subclasses.
They are caller bugs and are not meant to be caught.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Callable, Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from .tile import Tile


class GridError(Exception):
    """Base class for grid contract violations."""


class OutOfBoundsError(GridError, IndexError):
    """A coordinate outside [0, size) was accessed."""


class NoAvailableCellError(GridError):
    """A random free cell was requested from a full grid."""


class CellOccupiedError(GridError):
    """A tile was inserted into a cell that already holds one."""


@dataclass(frozen=True)
class Position:
    """A cell coordinate."""
    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Grid:
    """
    The board.

    Usage:
        grid = Grid(4)
        grid.insert_tile(Tile(Position(0, 0), "Hydrogen"))
        grid.cell_content(Position(0, 0))  # -> Tile
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Grid size must be >= 1, got {size}")
        self.size = size
        self.cells: list[list[Tile | None]] = [
            [None] * size for _ in range(size)
        ]

    def within_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.size and 0 <= position.y < self.size

    def cell_content(self, position: Position) -> Tile | None:
        if not self.within_bounds(position):
            raise OutOfBoundsError(f"{position} is outside a {self.size}x{self.size} grid")
        return self.cells[position.x][position.y]

    def cell_available(self, position: Position) -> bool:
        return self.within_bounds(position) and self.cells[position.x][position.y] is None

    def available_cells(self) -> list[Position]:
        return [pos for pos, tile in self.each_cell() if tile is None]

    def cells_available(self) -> bool:
        return any(tile is None for _, tile in self.each_cell())

    def random_available_cell(self, rng: random.Random) -> Position:
        cells = self.available_cells()
        if not cells:
            raise NoAvailableCellError("No empty cell left on the grid")
        return rng.choice(cells)

    def insert_tile(self, tile: Tile):
        """Place a tile at its stored position. The cell must be empty."""
        if self.cell_content(tile.position) is not None:
            raise CellOccupiedError(f"Cell {tile.position} is already occupied")
        self.cells[tile.position.x][tile.position.y] = tile

    def remove_tile(self, tile: Tile):
        """Clear the cell at the tile's stored position."""
        if not self.within_bounds(tile.position):
            raise OutOfBoundsError(f"{tile.position} is outside a {self.size}x{self.size} grid")
        self.cells[tile.position.x][tile.position.y] = None

    def move_tile(self, tile: Tile, position: Position):
        """Transfer a tile from its cell to an empty one and update its position."""
        self.remove_tile(tile)
        tile.update_position(position)
        self.insert_tile(tile)

    def each_cell(self) -> Iterator[tuple[Position, Tile | None]]:
        """Every cell in fixed order: x outer, y inner."""
        for x in range(self.size):
            for y in range(self.size):
                yield Position(x, y), self.cells[x][y]

    def visit_cells(self, visit: Callable[[int, int, Tile | None], None]):
        for position, tile in self.each_cell():
            visit(position.x, position.y, tile)

    def tiles(self) -> list[Tile]:
        return [tile for _, tile in self.each_cell() if tile is not None]

    def tile_count(self) -> int:
        return len(self.tiles())

    def serialize(self) -> dict:
        """Snapshot layout: {"size": N, "cells": cells[x][y] of nuclide id or None}."""
        return {
            "size": self.size,
            "cells": [
                [tile.nuclide if tile else None for tile in column]
                for column in self.cells
            ],
        }

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, tiles={self.tile_count()})"
