"""
Move Engine - Resolves one full move.

A move:
1. Orders the traversal so tiles nearest the target wall go first
2. Clears merge markers and saves every tile's position
3. Slides each tile to its farthest free cell, or fuses it into the
   blocking tile if the pair is in the fusion graph
4. If anything moved: spawns one random tile, runs one decay sweep,
   and checks whether any move is left

Each tile absorbs at most one fusion per move (merged_from is the
marker). A move on a terminated game does nothing.

The engine mutates the state it is given; the reducer hands it a clone.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field

from .action import Direction
from .grid import Grid, Position
from .state import GameState
from .tile import Tile
from ..rules import RuleSet
from ..rules.scoring import draw_decay_countdown, point_value

logger = logging.getLogger(__name__)


@dataclass
class FusionEvent:
    """Two tiles fused into one."""
    position: Position
    stationary: str
    moving: str
    product: str
    points: float


@dataclass
class DecayEvent:
    """A tile decayed in place."""
    position: Position
    parent: str
    product: str
    score_delta: float


@dataclass
class MoveOutcome:
    """What happened during one move."""
    moved: bool = False
    fusions: list[FusionEvent] = field(default_factory=list)
    decays: list[DecayEvent] = field(default_factory=list)
    spawned: Tile | None = None
    score_delta: float = 0
    stalled_over: bool = False  # nothing moved, and nothing ever can

    @property
    def changed(self) -> bool:
        return self.moved or self.stalled_over


class MoveEngine:
    """
    Applies moves to a game state.

    All randomness (spawn cell, spawn nuclide, random fusion products,
    branching decays, countdowns) is drawn from the injected rng, so a
    seeded Random makes a game reproducible.
    """

    def __init__(
        self,
        ruleset: RuleSet,
        rng: random.Random | None = None,
        heavy_spawn_probability: float = 0.1,
    ):
        self.ruleset = ruleset
        self.rng = rng or random.Random()
        self.heavy_spawn_probability = heavy_spawn_probability

    # =========================================================================
    # Move resolution
    # =========================================================================

    def move(self, state: GameState, direction: Direction) -> MoveOutcome:
        """Resolve one move in place and report what happened."""
        outcome = MoveOutcome()
        if state.terminated:
            return outcome

        grid = state.grid
        dx, dy = direction.vector
        xs, ys = self.build_traversals(grid.size, direction)

        self.prepare_tiles(grid)

        for x in xs:
            for y in ys:
                tile = grid.cells[x][y]
                if tile is None:
                    continue

                farthest, next_cell = self.find_farthest_position(grid, tile.position, dx, dy)
                next_tile = grid.cell_content(next_cell) if grid.within_bounds(next_cell) else None

                if (
                    next_tile is not None
                    and next_tile.merged_from is None
                    and self.ruleset.fusion.can_fuse(next_tile.nuclide, tile.nuclide)
                ):
                    outcome.fusions.append(self._fuse(state, tile, next_tile))
                elif farthest != tile.position:
                    grid.move_tile(tile, farthest)

                if tile.has_moved:
                    outcome.moved = True

        for event in outcome.fusions:
            outcome.score_delta += event.points

        if not outcome.moved:
            if not self.moves_available(grid):
                state.over = True
                outcome.stalled_over = True
                logger.info("No moves left, game over (score %s)", state.score)
            else:
                logger.debug("Move %s changed nothing", direction.name)
            return outcome

        outcome.spawned = self.add_random_tile(state)
        outcome.decays = self.decay_sweep(state, skip=outcome.spawned)
        for event in outcome.decays:
            outcome.score_delta += event.score_delta

        if not self.moves_available(grid):
            state.over = True
            logger.info("No moves left, game over (score %s)", state.score)

        return outcome

    def build_traversals(self, size: int, direction: Direction) -> tuple[list[int], list[int]]:
        """Always traverse from the farthest cell in the chosen direction."""
        dx, dy = direction.vector
        xs = list(range(size))
        ys = list(range(size))
        if dx == 1:
            xs.reverse()
        if dy == 1:
            ys.reverse()
        return xs, ys

    def find_farthest_position(
        self, grid: Grid, cell: Position, dx: int, dy: int
    ) -> tuple[Position, Position]:
        """
        Walk from cell towards the vector while cells are free.

        Returns (farthest free cell, first blocked or out-of-bounds cell).
        """
        previous = cell
        current = cell.shifted(dx, dy)
        while grid.cell_available(current):
            previous = current
            current = current.shifted(dx, dy)
        return previous, current

    def prepare_tiles(self, grid: Grid):
        """Save all tile positions and remove merger info."""
        for tile in grid.tiles():
            tile.merged_from = None
            tile.save_position()

    def _fuse(self, state: GameState, tile: Tile, next_tile: Tile) -> FusionEvent:
        grid = state.grid
        product = self.ruleset.fusion.fuse(next_tile.nuclide, tile.nuclide, self.rng)

        merged = self.create_tile(next_tile.position, product)
        merged.merged_from = (tile, next_tile)

        grid.remove_tile(next_tile)
        grid.insert_tile(merged)
        grid.remove_tile(tile)

        # The consumed tile converges on the fusion cell
        tile.update_position(next_tile.position)

        points = point_value(self.ruleset.elements, product)
        state.score += points

        if product == state.winning_nuclide:
            state.won = True
            logger.info("Winning nuclide %s reached by fusion", product)

        logger.debug(
            "Fused %s + %s -> %s at %s (+%s)",
            next_tile.nuclide, tile.nuclide, product, merged.position, points,
        )
        return FusionEvent(
            position=merged.position,
            stationary=next_tile.nuclide,
            moving=tile.nuclide,
            product=product,
            points=points,
        )

    # =========================================================================
    # Tiles
    # =========================================================================

    def create_tile(self, position: Position, nuclide: str) -> Tile:
        """New tile, with a decay countdown if the nuclide has a decay rule."""
        tile = Tile(position, nuclide)
        rule = self.ruleset.elements.decay_rule(nuclide)
        if rule is not None:
            tile.turns_until_decay = draw_decay_countdown(rule, self.rng)
        return tile

    def add_random_tile(self, state: GameState) -> Tile | None:
        """Spawn a light (or occasionally heavy) nuclide in a random free cell."""
        grid = state.grid
        if not grid.cells_available():
            return None

        if self.rng.random() < 1 - self.heavy_spawn_probability:
            nuclide = self.ruleset.light_nuclide
        else:
            nuclide = self.ruleset.heavy_nuclide

        tile = self.create_tile(grid.random_available_cell(self.rng), nuclide)
        grid.insert_tile(tile)
        logger.debug("Spawned %s at %s", nuclide, tile.position)
        return tile

    def add_start_tiles(self, state: GameState, count: int):
        for _ in range(count):
            self.add_random_tile(state)

    # =========================================================================
    # Decay
    # =========================================================================

    def decay_sweep(self, state: GameState, skip: Tile | None = None) -> list[DecayEvent]:
        """
        Tick every decaying tile once; replace those whose countdown expires.

        Works on a snapshot of the tiles present before the sweep, so a
        replacement never ticks in the sweep that created it. The skip
        tile (this move's spawn) does not tick either.
        """
        events: list[DecayEvent] = []
        grid = state.grid

        for tile in grid.tiles():
            if tile is skip:
                continue
            rule = self.ruleset.elements.decay_rule(tile.nuclide)
            if rule is None or not tile.tick():
                continue

            if rule.is_branching:
                product = self.rng.choice(rule.targets)
            else:
                product = rule.targets[0]

            grid.remove_tile(tile)
            grid.insert_tile(self.create_tile(tile.position, product))
            state.score += rule.score_delta

            if product == state.winning_nuclide:
                state.won = True
                logger.info("Winning nuclide %s reached by decay", product)

            logger.debug(
                "%s decayed into %s at %s (%+g)",
                tile.nuclide, product, tile.position, rule.score_delta,
            )
            events.append(DecayEvent(
                position=tile.position,
                parent=tile.nuclide,
                product=product,
                score_delta=rule.score_delta,
            ))

        return events

    # =========================================================================
    # Termination
    # =========================================================================

    def moves_available(self, grid: Grid) -> bool:
        return grid.cells_available() or self.tile_matches_available(grid)

    def tile_matches_available(self, grid: Grid) -> bool:
        """True as soon as any tile has a fusable neighbour."""
        for position, tile in grid.each_cell():
            if tile is None:
                continue
            for direction in Direction:
                neighbour = position.shifted(*direction.vector)
                if not grid.within_bounds(neighbour):
                    continue
                other = grid.cell_content(neighbour)
                if other is not None and self.ruleset.fusion.can_fuse(other.nuclide, tile.nuclide):
                    return True
        return False
