"""
Action System - Actions and results.

Actions represent:
1. Player moves (one of four directions)
2. Session control (restart, keep playing after a win)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Direction(Enum):
    """Move directions, numbered as input sources deliver them."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def vector(self) -> tuple[int, int]:
        return _VECTORS[self]


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


class ActionType(Enum):
    """Types of actions in the system."""
    MOVE = "move"
    RESTART = "restart"
    KEEP_PLAYING = "keep_playing"


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    direction: Direction | int | None = None

    @classmethod
    def move(cls, direction: Direction | int) -> Action:
        """Factory for a move; accepts a Direction or its 0-3 code."""
        if not isinstance(direction, Direction):
            try:
                direction = Direction(direction)
            except ValueError:
                # Unknown code, kept raw so the reducer refuses it
                pass
        return cls(action_type=ActionType.MOVE, direction=direction)

    @classmethod
    def restart(cls) -> Action:
        return cls(action_type=ActionType.RESTART)

    @classmethod
    def keep_playing(cls) -> Action:
        return cls(action_type=ActionType.KEEP_PLAYING)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - What happened during a move (for presentation and tests)
    """
    success: bool
    new_state: Any | None = None  # GameState; None on success means nothing changed
    error: str | None = None
    error_code: str | None = None

    # Human-readable changes
    state_changes: list[str] = field(default_factory=list)

    # Move details
    moved: bool = False
    fusions: list[Any] = field(default_factory=list)  # FusionEvent
    decays: list[Any] = field(default_factory=list)  # DecayEvent
    spawned: Any | None = None  # Tile
    score_delta: float = 0

    @property
    def changed(self) -> bool:
        """True if the state differs from the one the action was applied to."""
        return self.success and self.new_state is not None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        **details: Any,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            **details,
        )
