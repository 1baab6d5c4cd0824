"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- (state, action) -> ActionResult; the input state is never modified
- Validates before applying
- Delegates move resolution to MoveEngine
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field

from .action import Action, ActionType, ActionResult, Direction
from .move_engine import MoveEngine
from .state import GameState
from ..rules import RuleSet

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the random source; all game state is in GameState.
    The ruleset provides the fusion, decay and scoring rules.
    """
    ruleset: RuleSet
    rng: random.Random = field(default_factory=random.Random)
    size: int = 4
    start_tiles: int = 2
    heavy_spawn_probability: float = 0.1

    def __post_init__(self):
        self.engine = MoveEngine(
            self.ruleset,
            rng=self.rng,
            heavy_spawn_probability=self.heavy_spawn_probability,
        )

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error. A successful
        result with no new state means the action changed nothing.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            message, code = validation_error
            return ActionResult.failure(message, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        return handler(state, action)

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (message, error code) if invalid, None if valid.
        """
        if action.action_type == ActionType.MOVE:
            if not isinstance(action.direction, Direction):
                return f"Invalid direction: {action.direction!r}", "INVALID_DIRECTION"
            if state.terminated:
                return "Game is over - no moves allowed", "GAME_TERMINATED"
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MOVE: self._handle_move,
            ActionType.RESTART: self._handle_restart,
            ActionType.KEEP_PLAYING: self._handle_keep_playing,
        }
        return handlers.get(action_type)

    def _handle_move(self, state: GameState, action: Action) -> ActionResult:
        new_state = state.clone()
        outcome = self.engine.move(new_state, action.direction)

        if not outcome.changed:
            return ActionResult(success=True, state_changes=["Nothing moved"])

        changes = [
            f"{e.stationary} + {e.moving} -> {e.product} at {e.position}"
            for e in outcome.fusions
        ]
        changes.extend(
            f"{e.parent} decayed into {e.product} at {e.position}"
            for e in outcome.decays
        )
        if outcome.spawned is not None:
            changes.append(f"{outcome.spawned.nuclide} appeared at {outcome.spawned.position}")
        if new_state.won and not state.won:
            changes.append(f"Reached {new_state.winning_nuclide}")
        if new_state.over:
            changes.append("No moves left")

        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            moved=outcome.moved,
            fusions=outcome.fusions,
            decays=outcome.decays,
            spawned=outcome.spawned,
            score_delta=outcome.score_delta,
        )

    def _handle_restart(self, state: GameState, action: Action) -> ActionResult:
        """Replace the game wholesale with a fresh one."""
        return ActionResult.success_with_state(
            self.new_game(),
            changes=["Game restarted"],
        )

    def _handle_keep_playing(self, state: GameState, action: Action) -> ActionResult:
        """Lift the win-triggered stop without touching grid or score."""
        new_state = state.clone()
        new_state.keep_playing = True
        return ActionResult.success_with_state(
            new_state,
            changes=["Keep playing after win"],
        )

    def new_game(self) -> GameState:
        """Fresh state with the starting tiles placed."""
        state = GameState.empty(self.size, winning_nuclide=self.ruleset.winning_nuclide)
        self.engine.add_start_tiles(state, self.start_tiles)
        logger.info("New %dx%d game with %d start tiles", self.size, self.size, self.start_tiles)
        return state


def apply_action(
    ruleset: RuleSet,
    state: GameState,
    action: Action,
    rng: random.Random | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer sized to the state and applies the action.
    """
    reducer = Reducer(ruleset=ruleset, rng=rng or random.Random(), size=state.size)
    return reducer.apply(state, action)
