"""
Game configuration.

Defaults match the shipped game; any field can be overridden from the
environment via GameConfig.from_env().
"""

from __future__ import annotations
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """
    Settings for one game manager.

    version is the storage invalidation key: a persisted game written
    under a different version is discarded at startup.
    """
    size: int = 4
    start_tiles: int = 2
    version: str = "0.8"
    heavy_spawn_probability: float = 0.1
    seed: int | None = None

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Grid size must be >= 1, got {self.size}")
        if not 0 <= self.start_tiles <= self.size * self.size:
            raise ValueError(
                f"start_tiles must be between 0 and {self.size * self.size}, got {self.start_tiles}"
            )
        if not 0.0 <= self.heavy_spawn_probability <= 1.0:
            raise ValueError(
                f"heavy_spawn_probability must be in [0, 1], got {self.heavy_spawn_probability}"
            )

    @classmethod
    def from_env(cls) -> GameConfig:
        """Build a config from FUSION2048_* environment variables."""
        seed = os.getenv("FUSION2048_SEED")
        return cls(
            size=int(os.getenv("FUSION2048_SIZE", "4")),
            start_tiles=int(os.getenv("FUSION2048_START_TILES", "2")),
            version=os.getenv("FUSION2048_VERSION", "0.8"),
            seed=int(seed) if seed else None,
        )
