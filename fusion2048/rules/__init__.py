"""Rule tables - elements, decay, fusion graph and scoring."""

from .elements import (
    DecayRule,
    ElementDef,
    ElementTable,
    NUCLEAR_ELEMENTS,
    mass_number,
    derive_label,
)
from .fusion import FusionGraph, FusionProduct, NUCLEAR_FUSION_EDGES
from .scoring import point_value, half_life_to_turns, decay_window, draw_decay_countdown
from .ruleset import RuleSet, create_nuclear_ruleset
from .validation import validate_ruleset, ValidationResult, RuleSetValidationError

__all__ = [
    "DecayRule",
    "ElementDef",
    "ElementTable",
    "NUCLEAR_ELEMENTS",
    "mass_number",
    "derive_label",
    "FusionGraph",
    "FusionProduct",
    "NUCLEAR_FUSION_EDGES",
    "point_value",
    "half_life_to_turns",
    "decay_window",
    "draw_decay_countdown",
    "RuleSet",
    "create_nuclear_ruleset",
    "validate_ruleset",
    "ValidationResult",
    "RuleSetValidationError",
]
