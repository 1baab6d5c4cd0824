"""
Collaborators - Storage and presentation contracts.

The engine never does I/O itself. After every actuation it hands the
state to a StorageManager and an Actuator; both are supplied by the
host platform. InMemoryStorage and LoggingActuator are the defaults.
"""

from __future__ import annotations
import logging
from typing import Any, Protocol, TYPE_CHECKING

from .schemas import ActuationMetadata, SnapshotValidationError, validate_snapshot
from ..rules import RuleSet

if TYPE_CHECKING:
    from ..engine_core import Grid

logger = logging.getLogger(__name__)


class StorageManager(Protocol):
    """Persistence store for the running game and the best score."""

    def load_snapshot(self) -> dict[str, Any] | None: ...

    def save_snapshot(self, snapshot: dict[str, Any]) -> None: ...

    def clear_snapshot(self) -> None: ...

    def get_best_score(self) -> float: ...

    def set_best_score(self, score: float) -> None: ...

    def clear_if_outdated(self, version: str) -> None: ...


class Actuator(Protocol):
    """Presentation sink."""

    def actuate(self, grid: Grid, metadata: ActuationMetadata) -> None: ...

    def continue_game(self) -> None: ...


class InMemoryStorage:
    """
    Process-local storage.

    Snapshots are validated on load; a malformed one is discarded and
    treated as absent.

    Usage:
        storage = InMemoryStorage(ruleset=create_nuclear_ruleset(), size=4)
        manager = GameManager(storage=storage)
    """

    def __init__(
        self,
        ruleset: RuleSet,
        size: int | None = None,
        snapshot: dict[str, Any] | None = None,
        best_score: float = 0,
        version: str | None = None,
    ):
        self.ruleset = ruleset
        self.size = size
        self.version = version
        self._snapshot = snapshot
        self._best_score = best_score

    def load_snapshot(self) -> dict[str, Any] | None:
        if self._snapshot is None:
            return None
        try:
            return validate_snapshot(self._snapshot, self.ruleset, self.size).to_dict()
        except SnapshotValidationError as e:
            logger.warning("Discarding stored game: %s", e)
            self._snapshot = None
            return None

    def save_snapshot(self, snapshot: dict[str, Any]):
        self._snapshot = validate_snapshot(snapshot, self.ruleset, self.size).to_dict()

    def clear_snapshot(self):
        self._snapshot = None

    def get_best_score(self) -> float:
        return self._best_score

    def set_best_score(self, score: float):
        self._best_score = score

    def clear_if_outdated(self, version: str):
        if self.version != version:
            if self._snapshot is not None:
                logger.warning(
                    "Stored game is from version %s, clearing for %s", self.version, version
                )
            self._snapshot = None
            self.version = version


class LoggingActuator:
    """Publishes each actuation to the log instead of a screen."""

    def actuate(self, grid: Grid, metadata: ActuationMetadata):
        logger.info(
            "score=%s best=%s over=%s won=%s terminated=%s tiles=%d",
            metadata.score,
            metadata.best_score,
            metadata.over,
            metadata.won,
            metadata.terminated,
            grid.tile_count(),
        )

    def continue_game(self):
        logger.debug("Game message cleared")
