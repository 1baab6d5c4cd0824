"""
Tests for the rule tables.

Tests:
- Element lookups and fallback derivation
- Fusion graph symmetry and candidate sets
- Half-life to turn mapping
- Ruleset validation
"""

import math
import random

import pytest

from ..rules import (
    DecayRule,
    ElementDef,
    ElementTable,
    FusionGraph,
    RuleSet,
    create_nuclear_ruleset,
    decay_window,
    derive_label,
    draw_decay_countdown,
    half_life_to_turns,
    mass_number,
    point_value,
    validate_ruleset,
)
from ..rules.scoring import THETA


class TestNuclideIds:
    """Tests for mass-number parsing and derived labels."""

    def test_mass_number(self):
        assert mass_number("56Iron") == 56
        assert mass_number("52mMn") == 52
        assert mass_number("Hydrogen") is None

    def test_derive_label(self):
        assert derive_label("7Li") == "Li-7"
        assert derive_label("52mMn") == "Mn-52m"
        assert derive_label("Hydrogen") == "Hydrogen"


class TestElementTable:
    """Tests for explicit entries and fallbacks."""

    def test_explicit_point_value(self, ruleset):
        assert point_value(ruleset.elements, "Deuteron") == 1
        assert point_value(ruleset.elements, "3Helium") == 1.5
        assert point_value(ruleset.elements, "56Iron") == 56

    def test_missing_entry_falls_back_to_half_mass(self, ruleset):
        """Nuclides without a table entry score mass / 2."""
        assert "23Na" not in ruleset.elements
        assert point_value(ruleset.elements, "23Na") == 11.5
        assert point_value(ruleset.elements, "8B") == 4

    def test_no_prefix_scores_zero(self, ruleset):
        assert point_value(ruleset.elements, "Hydrogen") == 0

    def test_labels(self, ruleset):
        assert ruleset.elements.label("4Helium") == "Helium-4"
        assert ruleset.elements.label("60Cu") == "Cu-60"

    def test_decay_rules(self, ruleset):
        rule = ruleset.elements.decay_rule("7Beryllium")
        assert rule.targets == ("7Li",)
        assert rule.score_delta == -3
        assert ruleset.elements.decay_rule("4Helium") is None

    def test_branching_decay(self, ruleset):
        rule = ruleset.elements.decay_rule("52mMn")
        assert rule.is_branching
        assert set(rule.targets) == {"52Chromium", "52Mn"}

    def test_duplicate_definition_rejected(self):
        with pytest.raises(ValueError):
            ElementTable([ElementDef("A", "A"), ElementDef("A", "A")])


class TestFusionGraph:
    """Tests for fusion lookups."""

    @pytest.mark.parametrize("a,b", [
        ("Hydrogen", "Hydrogen"),
        ("Hydrogen", "Deuteron"),
        ("7Beryllium", "Hydrogen"),
        ("4Helium", "52Chromium"),
        ("Deuteron", "Deuteron"),
        ("56Iron", "Hydrogen"),
    ])
    def test_can_fuse_is_symmetric(self, ruleset, a, b):
        assert ruleset.fusion.can_fuse(a, b) == ruleset.fusion.can_fuse(b, a)

    def test_reverse_edge_is_used(self, ruleset):
        """Deuteron + Hydrogen is only stored under Hydrogen."""
        rng = random.Random(0)
        assert ruleset.fusion.fuse("Deuteron", "Hydrogen", rng) == "3Helium"
        assert ruleset.fusion.fuse("Hydrogen", "Deuteron", rng) == "3Helium"

    def test_stationary_edge_preferred(self):
        graph = FusionGraph({"A": {"B": "AB"}, "B": {"A": "BA"}})
        rng = random.Random(0)
        assert graph.fuse("A", "B", rng) == "AB"
        assert graph.fuse("B", "A", rng) == "BA"

    def test_cannot_fuse_raises(self, ruleset):
        with pytest.raises(KeyError):
            ruleset.fusion.fuse("Deuteron", "Deuteron", random.Random(0))

    def test_random_product_comes_from_candidates(self, ruleset):
        rng = random.Random(42)
        candidates = set(ruleset.fusion.edge("12Carbon", "12Carbon").candidates)
        products = {ruleset.fusion.fuse("12Carbon", "12Carbon", rng) for _ in range(200)}
        assert products <= candidates
        assert len(products) > 1

    def test_candidates_deduplicated(self):
        graph = FusionGraph({"A": {"A": ["X", "Y", "X"]}})
        assert graph.edge("A", "A").candidates == ("X", "Y")
        assert graph.duplicate_candidates == ["A+A"]

    def test_partners(self, ruleset):
        assert ruleset.fusion.partners("Hydrogen") >= {"Hydrogen", "Deuteron", "7Li", "7Beryllium"}


class TestHalfLifeMapping:
    """Tests for the half-life to turns curve."""

    def test_extremely_short_half_life(self):
        """8Be decays almost instantly: a window of 4-8 turns."""
        assert decay_window(8.19e-17) == (4, 8)

    def test_monotonic(self):
        half_lives = [1e-10, 1.0, 60.0, 3600.0, 86400.0, 1e7, 1e8, 1e9]
        turns = [half_life_to_turns(h) for h in half_lives]
        assert turns == sorted(turns)

    def test_continuous_at_switch_point(self):
        below = half_life_to_turns(10 ** THETA)
        above = half_life_to_turns(10 ** (THETA + 1e-9))
        assert math.isclose(below, above, rel_tol=1e-6)

    def test_longest_lived_is_playable(self, ruleset):
        for element in ruleset.elements.decaying():
            low, high = decay_window(element.decay.half_life_seconds)
            assert 1 <= low <= high < 5000

    def test_non_positive_half_life_rejected(self):
        with pytest.raises(ValueError):
            half_life_to_turns(0)

    def test_countdown_inside_window(self):
        rule = DecayRule(half_life_seconds=53.22 * 86400, targets=("7Li",))
        low, high = decay_window(rule.half_life_seconds)
        rng = random.Random(3)
        for _ in range(50):
            assert low <= draw_decay_countdown(rule, rng) <= high


class TestRulesetValidation:
    """Tests for ruleset consistency checks."""

    def test_shipped_ruleset_is_valid(self, ruleset):
        result = validate_ruleset(ruleset)
        assert result.valid, result.errors

    def test_shipped_ruleset_is_shared(self):
        assert create_nuclear_ruleset() is create_nuclear_ruleset()

    def test_unresolvable_product(self):
        ruleset = RuleSet(
            elements=ElementTable([ElementDef("Hydrogen", "Hydrogen")]),
            fusion=FusionGraph({"Hydrogen": {"Hydrogen": "Mystery"}}),
            winning_nuclide="Hydrogen",
            heavy_nuclide="Hydrogen",
        )
        result = validate_ruleset(ruleset)
        assert not result.valid
        assert any("Mystery" in e for e in result.errors)

    def test_bad_decay_rule(self):
        ruleset = RuleSet(
            elements=ElementTable([
                ElementDef("Hydrogen", "Hydrogen"),
                ElementDef("1Bad", "Bad", decay=DecayRule(half_life_seconds=-1, targets=())),
            ]),
            fusion=FusionGraph({"Hydrogen": {"Hydrogen": "1Bad"}}),
            winning_nuclide="1Bad",
            heavy_nuclide="Hydrogen",
        )
        result = validate_ruleset(ruleset)
        assert any("half-life" in e for e in result.errors)
        assert any("decays into nothing" in e for e in result.errors)

    def test_duplicate_candidate_warning(self):
        ruleset = RuleSet(
            elements=ElementTable([ElementDef("Hydrogen", "Hydrogen")]),
            fusion=FusionGraph({"Hydrogen": {"Hydrogen": ["2H", "2H"]}}),
            winning_nuclide="2H",
            heavy_nuclide="2H",
        )
        result = validate_ruleset(ruleset)
        assert result.valid
        assert any("more than once" in w for w in result.warnings)
