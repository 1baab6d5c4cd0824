"""
Pydantic Schemas - Persisted snapshot and actuation payload.

These models define the contract with the storage and presentation
collaborators. The engine assumes every snapshot it receives is
well-formed; rejecting malformed ones happens here, inside storage.

Snapshot layout:
    {"grid": {"size": N, "cells": cells[x][y] of nuclide id or null},
     "score": number, "over": bool, "won": bool, "keepPlaying": bool}
"""

from __future__ import annotations
from typing import Any, Optional
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..rules import RuleSet


class SnapshotValidationError(Exception):
    """Raised when a persisted snapshot is malformed."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Snapshot rejected with {len(errors)} error(s): {'; '.join(errors)}")


class GridSnapshot(BaseModel):
    """Grid contents as nuclide ids, indexed cells[x][y]."""
    size: int = Field(ge=1)
    cells: list[list[Optional[str]]]

    @model_validator(mode="after")
    def check_square(self) -> GridSnapshot:
        if len(self.cells) != self.size:
            raise ValueError(f"expected {self.size} columns, got {len(self.cells)}")
        for x, column in enumerate(self.cells):
            if len(column) != self.size:
                raise ValueError(f"column {x} has {len(column)} cells, expected {self.size}")
        return self

    def nuclides(self) -> set[str]:
        return {n for column in self.cells for n in column if n is not None}


class GameSnapshot(BaseModel):
    """A persisted game."""
    grid: GridSnapshot
    score: float = 0
    over: bool = False
    won: bool = False
    keep_playing: bool = Field(default=False, alias="keepPlaying")

    model_config = {"populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ActuationMetadata(BaseModel):
    """Everything the presentation sink gets besides the grid."""
    score: float
    over: bool
    won: bool
    best_score: float = Field(alias="bestScore")
    terminated: bool

    model_config = {"populate_by_name": True}


def validate_snapshot(
    data: dict[str, Any],
    ruleset: RuleSet,
    size: int | None = None,
) -> GameSnapshot:
    """
    Parse and check a raw snapshot.

    Rejects wrong shapes, a grid size other than the expected one, and
    nuclide ids the ruleset has never heard of.

    Raises SnapshotValidationError.
    """
    try:
        snapshot = GameSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotValidationError(
            [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        ) from e

    errors = []
    if size is not None and snapshot.grid.size != size:
        errors.append(f"grid size {snapshot.grid.size} does not match configured size {size}")

    unknown = snapshot.grid.nuclides() - ruleset.known_nuclides()
    for nuclide in sorted(unknown):
        errors.append(f"unknown nuclide '{nuclide}'")

    if errors:
        raise SnapshotValidationError(errors)
    return snapshot
