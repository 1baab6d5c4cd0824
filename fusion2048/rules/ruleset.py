"""
Nuclear RuleSet

Bundles the static tables a game runs on:
- Element Table (labels, points, decay rules)
- Fusion Graph
- Winning nuclide
- Spawn nuclides

The shipped ruleset is built once per process and shared read-only.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache

from .elements import ElementTable, NUCLEAR_ELEMENTS
from .fusion import FusionGraph, NUCLEAR_FUSION_EDGES
from .validation import validate_ruleset, RuleSetValidationError


@dataclass(frozen=True)
class RuleSet:
    """Everything the move engine needs to know about nuclides."""
    elements: ElementTable
    fusion: FusionGraph
    winning_nuclide: str = "56Iron"
    light_nuclide: str = "Hydrogen"
    heavy_nuclide: str = "Deuteron"

    def known_nuclides(self) -> set[str]:
        """Ids that appear anywhere in the tables."""
        known = {element.id for element in self.elements}
        known |= self.fusion.nuclides()
        for element in self.elements.decaying():
            known.update(element.decay.targets)
        known |= {self.winning_nuclide, self.light_nuclide, self.heavy_nuclide}
        return known


@lru_cache(maxsize=None)
def create_nuclear_ruleset() -> RuleSet:
    """
    The shipped nuclear fusion ruleset.

    Raises RuleSetValidationError if the tables are inconsistent.
    """
    ruleset = RuleSet(
        elements=ElementTable(NUCLEAR_ELEMENTS),
        fusion=FusionGraph(NUCLEAR_FUSION_EDGES),
    )
    result = validate_ruleset(ruleset)
    if not result.valid:
        raise RuleSetValidationError(result.errors)
    return ruleset
