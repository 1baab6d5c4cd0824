"""
Pytest fixtures for Fusion 2048 tests.
"""

import random

import pytest

from ..engine_core import GameState, Grid, MoveEngine, Position, Reducer, Tile
from ..rules import (
    DecayRule,
    ElementDef,
    ElementTable,
    FusionGraph,
    RuleSet,
    create_nuclear_ruleset,
)


class RecordingActuator:
    """Actuator that keeps everything it is shown."""

    def __init__(self):
        self.actuations = []
        self.continued = 0

    def actuate(self, grid, metadata):
        self.actuations.append((grid.serialize(), metadata))

    def continue_game(self):
        self.continued += 1

    @property
    def last(self):
        return self.actuations[-1][1]


def place(state: GameState, layout: dict, engine: MoveEngine | None = None) -> GameState:
    """
    Put tiles on a state's grid.

    layout maps (x, y) -> nuclide id. With an engine, decaying nuclides
    get a countdown like any engine-created tile.
    """
    for (x, y), nuclide in layout.items():
        if engine is not None:
            tile = engine.create_tile(Position(x, y), nuclide)
        else:
            tile = Tile(Position(x, y), nuclide)
        state.grid.insert_tile(tile)
    return state


def nuclide_at(state: GameState, x: int, y: int) -> str | None:
    tile = state.grid.cell_content(Position(x, y))
    return tile.nuclide if tile else None


@pytest.fixture
def ruleset() -> RuleSet:
    """The shipped nuclear ruleset."""
    return create_nuclear_ruleset()


@pytest.fixture
def toy_ruleset() -> RuleSet:
    """Small ruleset with one decaying nuclide that costs points."""
    return RuleSet(
        elements=ElementTable([
            ElementDef("Hydrogen", "Hydrogen"),
            ElementDef("Deuteron", "Deuteron", 1),
            ElementDef(
                "Parent",
                "Parent",
                5,
                decay=DecayRule(half_life_seconds=100.0, targets=("X",), score_delta=-3),
            ),
            ElementDef("X", "X", 1),
        ]),
        fusion=FusionGraph({"Hydrogen": {"Hydrogen": "Deuteron"}}),
        winning_nuclide="X",
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def engine(ruleset, rng) -> MoveEngine:
    return MoveEngine(ruleset, rng=rng)


@pytest.fixture
def reducer(ruleset, rng) -> Reducer:
    return Reducer(ruleset=ruleset, rng=rng)


@pytest.fixture
def empty_state() -> GameState:
    """An empty 4x4 game."""
    return GameState(grid=Grid(4))


@pytest.fixture
def actuator() -> RecordingActuator:
    return RecordingActuator()
