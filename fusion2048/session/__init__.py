"""
Session Module - Runs a game against its collaborators.

The manager is the only part of the system that talks to the outside:
- Storage (saved game, best score, version invalidation)
- Presentation (grid plus score/over/won/terminated after every change)

Input sources call move(), restart() and keep_playing().
"""

from .manager import GameManager
from .collaborators import StorageManager, Actuator, InMemoryStorage, LoggingActuator
from .schemas import (
    GridSnapshot,
    GameSnapshot,
    ActuationMetadata,
    SnapshotValidationError,
    validate_snapshot,
)

__all__ = [
    "GameManager",
    "StorageManager",
    "Actuator",
    "InMemoryStorage",
    "LoggingActuator",
    "GridSnapshot",
    "GameSnapshot",
    "ActuationMetadata",
    "SnapshotValidationError",
    "validate_snapshot",
]
