"""
Tests for the reducer (state transitions).

Tests:
- Action application
- Terminated games refuse moves without side effects
- Keep playing and restart
- The input state is never modified
"""

import random

import pytest

from ..engine_core import Action, ActionType, Direction, GameState, Grid, Reducer, apply_action
from .conftest import nuclide_at, place


class TestMoveAction:
    """Tests for move actions."""

    def test_move_returns_new_state(self, reducer, empty_state):
        place(empty_state, {(0, 0): "Hydrogen", (1, 0): "Hydrogen"})

        result = reducer.apply(empty_state, Action.move(Direction.LEFT))

        assert result.success
        assert result.changed
        assert result.moved
        assert result.score_delta == 1
        assert nuclide_at(result.new_state, 0, 0) == "Deuteron"
        assert any("Deuteron" in change for change in result.state_changes)

    def test_input_state_untouched(self, reducer, empty_state):
        place(empty_state, {(0, 0): "Hydrogen", (1, 0): "Hydrogen"})
        before = empty_state.serialize()

        reducer.apply(empty_state, Action.move(Direction.LEFT))

        assert empty_state.serialize() == before

    def test_move_accepts_direction_codes(self):
        assert Action.move(3).direction == Direction.LEFT
        assert Action.move(0).direction == Direction.UP

    def test_null_move_changes_nothing(self, reducer, empty_state):
        place(empty_state, {(0, 0): "Deuteron"})

        result = reducer.apply(empty_state, Action.move(Direction.LEFT))

        assert result.success
        assert not result.changed
        assert result.new_state is None

    def test_invalid_direction(self, reducer, empty_state):
        action = Action(action_type=ActionType.MOVE, direction=None)
        result = reducer.apply(empty_state, action)

        assert not result.success
        assert result.error_code == "INVALID_DIRECTION"

    @pytest.mark.parametrize("code", [4, 9, -1])
    def test_unknown_direction_code_is_refused(self, reducer, empty_state, code):
        place(empty_state, {(3, 0): "Hydrogen"})
        before = empty_state.serialize()

        result = reducer.apply(empty_state, Action.move(code))

        assert not result.success
        assert result.error_code == "INVALID_DIRECTION"
        assert result.new_state is None
        assert empty_state.serialize() == before

    def test_move_has_no_params(self):
        assert not hasattr(Action.move(Direction.UP), "params")

    def test_apply_action_helper(self, ruleset, empty_state):
        place(empty_state, {(3, 3): "Hydrogen"})
        result = apply_action(ruleset, empty_state, Action.move(Direction.UP), rng=random.Random(1))
        assert nuclide_at(result.new_state, 3, 0) == "Hydrogen"


class TestTerminatedGame:
    """Moves on a terminated game are strict no-ops."""

    @pytest.mark.parametrize("direction", list(Direction))
    def test_over_game_refuses_every_direction(self, reducer, empty_state, direction):
        place(empty_state, {(1, 1): "Hydrogen", (2, 1): "Hydrogen"})
        empty_state.over = True
        empty_state.score = 12
        before = empty_state.serialize()

        result = reducer.apply(empty_state, Action.move(direction))

        assert not result.success
        assert result.error_code == "GAME_TERMINATED"
        assert empty_state.serialize() == before

    def test_won_game_refuses_moves(self, reducer, empty_state):
        place(empty_state, {(3, 0): "Hydrogen"})
        empty_state.won = True

        result = reducer.apply(empty_state, Action.move(Direction.LEFT))

        assert result.error_code == "GAME_TERMINATED"


class TestKeepPlaying:
    """Tests for continuing after a win."""

    def test_keep_playing_clears_terminated(self, reducer, empty_state):
        place(empty_state, {(0, 0): "4Helium", (1, 0): "52Chromium"})
        won = reducer.apply(empty_state, Action.move(Direction.LEFT)).new_state
        assert won.won and won.terminated

        result = reducer.apply(won, Action.keep_playing())

        assert result.success
        assert not result.new_state.terminated
        assert result.new_state.won
        assert result.new_state.score == won.score
        assert result.new_state.serialize()["grid"] == won.serialize()["grid"]


class TestRestart:
    """Tests for restarting."""

    def test_restart_builds_fresh_game(self, ruleset):
        reducer = Reducer(ruleset=ruleset, rng=random.Random(3), start_tiles=2)
        state = GameState(grid=Grid(4), score=99, over=True)

        result = reducer.apply(state, Action.restart())

        assert result.success
        assert result.new_state.score == 0
        assert not result.new_state.over
        assert result.new_state.grid.tile_count() == 2
        assert result.new_state.winning_nuclide == ruleset.winning_nuclide

    def test_seeded_reducers_agree(self, ruleset):
        """The same seed gives the same game."""
        games = []
        for _ in range(2):
            reducer = Reducer(ruleset=ruleset, rng=random.Random(77))
            state = reducer.new_game()
            for direction in [Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN] * 5:
                result = reducer.apply(state, Action.move(direction))
                if result.new_state is not None:
                    state = result.new_state
            games.append(state.serialize())
        assert games[0] == games[1]
