"""
Ruleset Validation - Consistency checks for the rule tables.

Validates that:
1. Every fusion product and decay target resolves (entry or mass prefix)
2. Decay rules have a positive half-life and at least one target
3. Candidate sets are non-empty
4. Winning and spawn nuclides resolve
5. Decay windows stay within a playable number of turns
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .scoring import decay_window

if TYPE_CHECKING:
    from .ruleset import RuleSet


# Beyond this a countdown stops being something a player will ever see
MAX_PLAYABLE_TURNS = 5000


class RuleSetValidationError(Exception):
    """Raised when ruleset validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Ruleset validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_ruleset(ruleset: RuleSet, max_turns: int = MAX_PLAYABLE_TURNS) -> ValidationResult:
    """
    Validate a complete ruleset.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []
    table = ruleset.elements

    for stationary, moving, product in ruleset.fusion.edges():
        if not product.candidates:
            errors.append(f"Fusion {stationary}+{moving} has no product")
        for candidate in product.candidates:
            if not table.is_resolvable(candidate):
                errors.append(
                    f"Fusion {stationary}+{moving} produces unresolvable nuclide '{candidate}'"
                )

    for pair in ruleset.fusion.duplicate_candidates:
        warnings.append(f"Fusion {pair} listed a candidate more than once")

    for element in table.decaying():
        errors.extend(_validate_decay(element.id, element.decay, table))
        if element.decay.half_life_seconds > 0:
            _, high = decay_window(element.decay.half_life_seconds)
            if high > max_turns:
                warnings.append(
                    f"{element.id} may take up to {high} turns to decay (ceiling {max_turns})"
                )

    for role, nuclide in (
        ("winning", ruleset.winning_nuclide),
        ("light spawn", ruleset.light_nuclide),
        ("heavy spawn", ruleset.heavy_nuclide),
    ):
        if not table.is_resolvable(nuclide):
            errors.append(f"The {role} nuclide '{nuclide}' is not resolvable")

    if ruleset.winning_nuclide not in ruleset.fusion.nuclides() and not any(
        ruleset.winning_nuclide in e.decay.targets for e in table.decaying()
    ):
        warnings.append(f"Winning nuclide '{ruleset.winning_nuclide}' can never be produced")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_decay(nuclide, rule, table) -> list[str]:
    errors = []
    if rule.half_life_seconds <= 0:
        errors.append(f"{nuclide} has non-positive half-life {rule.half_life_seconds}")
    if not rule.targets:
        errors.append(f"{nuclide} decays into nothing")
    for target in rule.targets:
        if not table.is_resolvable(target):
            errors.append(f"{nuclide} decays into unresolvable nuclide '{target}'")
    return errors
