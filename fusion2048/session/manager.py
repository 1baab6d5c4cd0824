"""
Game Manager - Drives one game and publishes it to its collaborators.

LIFECYCLE:
1. Startup: storage drops a game saved under another version
2. Setup: restore the saved game, or start fresh with the start tiles
3. Each input (move, restart, keep playing) goes through the reducer
4. After every change the state is actuated:
   - best score updated if beaten
   - snapshot saved (or cleared once the game is over)
   - grid and metadata published to the actuator

Calls must be serialized by the host; a move runs to completion before
the next one starts.
"""

from __future__ import annotations
import logging
import random
from typing import Any

from .collaborators import StorageManager, Actuator, InMemoryStorage, LoggingActuator
from .schemas import ActuationMetadata
from ..config import GameConfig
from ..engine_core import Action, ActionResult, Direction, GameState, Reducer
from ..rules import RuleSet, create_nuclear_ruleset

logger = logging.getLogger(__name__)


class GameManager:
    """
    Owns the current GameState.

    Usage:
        manager = GameManager(config=GameConfig(seed=7))
        manager.move(Direction.LEFT)
        manager.keep_playing()
        manager.restart()
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        ruleset: RuleSet | None = None,
        storage: StorageManager | None = None,
        actuator: Actuator | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or GameConfig()
        self.ruleset = ruleset or create_nuclear_ruleset()
        self.rng = rng or random.Random(self.config.seed)
        self.storage = storage or InMemoryStorage(ruleset=self.ruleset, size=self.config.size)
        self.actuator = actuator or LoggingActuator()
        self.reducer = Reducer(
            ruleset=self.ruleset,
            rng=self.rng,
            size=self.config.size,
            start_tiles=self.config.start_tiles,
            heavy_spawn_probability=self.config.heavy_spawn_probability,
        )
        self.state: GameState | None = None

        self.storage.clear_if_outdated(self.config.version)
        self.setup()

    @property
    def terminated(self) -> bool:
        return self.state.terminated

    def setup(self):
        """Reload the previous game if there is one, else start fresh."""
        previous = self.storage.load_snapshot()
        if previous:
            self.state = GameState.from_snapshot(previous, self.ruleset, self.rng)
            logger.info("Restored game with score %s", self.state.score)
        else:
            self.state = self.reducer.new_game()
        self.actuate()

    def restart(self):
        self.storage.clear_snapshot()
        self.actuator.continue_game()
        logger.info("Restarting game")
        self.setup()

    def keep_playing(self):
        """Keep playing after reaching the winning nuclide."""
        result = self.reducer.apply(self.state, Action.keep_playing())
        self.state = result.new_state
        self.actuator.continue_game()
        logger.info("Continuing past the winning nuclide")
        self.actuate()

    def move(self, direction: Direction | int) -> ActionResult:
        """
        Apply a move. Ignored while the game is terminated.

        The state is only actuated if the move changed something.
        """
        result = self.reducer.apply(self.state, Action.move(direction))
        if not result.success:
            logger.debug("Move ignored: %s", result.error)
            return result

        if result.changed:
            self.state = result.new_state
            self.actuate()
        return result

    def actuate(self):
        """Publish the current state to storage and presentation."""
        if self.storage.get_best_score() < self.state.score:
            self.storage.set_best_score(self.state.score)

        # Clear the state when the game is over (game over only, not win)
        if self.state.over:
            self.storage.clear_snapshot()
        else:
            self.storage.save_snapshot(self.serialize())

        self.actuator.actuate(
            self.state.grid,
            ActuationMetadata(
                score=self.state.score,
                over=self.state.over,
                won=self.state.won,
                best_score=self.storage.get_best_score(),
                terminated=self.state.terminated,
            ),
        )

    def serialize(self) -> dict[str, Any]:
        return self.state.serialize()
