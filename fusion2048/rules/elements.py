"""
Element Table - Nuclide definitions, labels, point values and decay rules.

Nuclide ids are opaque strings ("Hydrogen", "56Iron", "52mMn").
The table is not exhaustive: an id without an entry is resolved by
fallback derivation from its leading mass-number prefix.

Fallback contract:
- mass number: leading run of decimal digits, or None
- label: "<rest>-<mass>" (an isomer "m" stays with the mass)
- points: mass number / 2, or 0 without a prefix
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping


_MASS_PREFIX = re.compile(r"^(\d+)(m?)(.*)$")


def mass_number(nuclide: str) -> int | None:
    """Leading decimal prefix of a nuclide id, or None if it has none."""
    match = _MASS_PREFIX.match(nuclide)
    if not match:
        return None
    return int(match.group(1))


def derive_label(nuclide: str) -> str:
    """Display label for a nuclide with no table entry."""
    match = _MASS_PREFIX.match(nuclide)
    if not match or not match.group(3):
        return nuclide
    mass, isomer, name = match.groups()
    return f"{name}-{mass}{isomer}"


@dataclass(frozen=True)
class DecayRule:
    """
    How an unstable nuclide decays.

    One target means deterministic decay; several targets are a
    branching decay resolved uniformly at random when it happens.
    """
    half_life_seconds: float
    targets: tuple[str, ...]
    score_delta: float = 0

    @property
    def is_branching(self) -> bool:
        return len(self.targets) > 1


@dataclass(frozen=True)
class ElementDef:
    """A single Element Table entry."""
    id: str
    label: str
    point_value: float | None = None  # None = derive from mass number
    decay: DecayRule | None = None


class ElementTable:
    """
    Read-only lookup over element definitions.

    Built once and shared; lookups never mutate and never fail for
    unknown ids (they fall back to derivation).
    """

    def __init__(self, elements: Iterable[ElementDef]):
        entries: dict[str, ElementDef] = {}
        for element in elements:
            if element.id in entries:
                raise ValueError(f"Duplicate element definition: {element.id}")
            entries[element.id] = element
        self._entries: Mapping[str, ElementDef] = MappingProxyType(entries)

    def __contains__(self, nuclide: str) -> bool:
        return nuclide in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, nuclide: str) -> ElementDef | None:
        return self._entries.get(nuclide)

    def label(self, nuclide: str) -> str:
        element = self._entries.get(nuclide)
        if element and element.label:
            return element.label
        return derive_label(nuclide)

    def point_value(self, nuclide: str) -> float:
        """Explicit point value, else mass number / 2."""
        element = self._entries.get(nuclide)
        if element and element.point_value is not None:
            return element.point_value
        mass = mass_number(nuclide)
        if mass is None:
            return 0
        return mass / 2

    def decay_rule(self, nuclide: str) -> DecayRule | None:
        element = self._entries.get(nuclide)
        return element.decay if element else None

    def is_resolvable(self, nuclide: str) -> bool:
        """True if the id has an entry or a mass prefix to derive from."""
        return nuclide in self._entries or mass_number(nuclide) is not None

    def decaying(self) -> list[ElementDef]:
        """All entries carrying a decay rule."""
        return [e for e in self._entries.values() if e.decay is not None]


# ============================================================================
# Shipped nuclear data
# ============================================================================

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
YEAR = 365.2425 * DAY


def _stable(nuclide: str, label: str, points: float | None = None) -> ElementDef:
    return ElementDef(id=nuclide, label=label, point_value=points)


def _unstable(
    nuclide: str,
    half_life: float,
    targets: str | tuple[str, ...],
    score_delta: float = 0,
    label: str | None = None,
    points: float | None = None,
) -> ElementDef:
    if isinstance(targets, str):
        targets = (targets,)
    return ElementDef(
        id=nuclide,
        label=label or derive_label(nuclide),
        point_value=points,
        decay=DecayRule(
            half_life_seconds=half_life,
            targets=tuple(dict.fromkeys(targets)),
            score_delta=score_delta,
        ),
    )


NUCLEAR_ELEMENTS: tuple[ElementDef, ...] = (
    _stable("Hydrogen", "Hydrogen"),
    _stable("Deuteron", "Deuteron", 1),
    _stable("3Helium", "Helium-3", 1.5),
    _stable("4Helium", "Helium-4", 2),
    _unstable("7Beryllium", 53.22 * DAY, "7Li", -3, label="Beryllium-7", points=3),
    _unstable("8Beryllium", 8.19e-17, "4Helium", -4, label="Beryllium-8", points=4),
    _stable("12Carbon", "Carbon-12", 6),
    _stable("16Oxygen", "Oxygen-16", 8),
    _stable("20Neon", "Neon-20", 10),
    _stable("24Magnesium", "Magnesium-24", 12),
    _stable("28Silicon", "Silicon-28", 14),
    _stable("32Sulfur", "Sulfur-32", 16),
    _stable("36Argon", "Argon-36", 18),
    _stable("40Calcium", "Calcium-40", 20),
    _stable("44Calcium", "Calcium-44"),
    _unstable("44Titanium", 60 * YEAR, "44Sc", label="Titanium-44", points=22),
    _stable("48Titanium", "Titanium-48"),
    _unstable("48Chromium", 21.56 * HOUR, "48V", label="Chromium-48", points=24),
    _stable("52Chromium", "Chromium-52"),
    _unstable("52Iron", 8.275 * HOUR, "52mMn", label="Iron-52", points=26),
    _unstable("56Nickel", 6.075 * DAY, "56Co", 28, label="Nickel-56", points=28),
    _stable("56Iron", "Iron-56", 56),
    # Unstable intermediates without explicit points
    _unstable("8B", 0.77, "8Beryllium"),
    _unstable("23Mg", 11.317, "23Na"),
    _unstable("30P", 2.498 * MINUTE, "30Si"),
    _unstable("31S", 2.5534, "31P"),
    _unstable("44Sc", 3.97 * HOUR, "44Calcium"),
    _unstable("48V", 15.9735 * DAY, "48Titanium"),
    _unstable("52Mn", 5.591 * DAY, "52Chromium"),
    _unstable("52mMn", 21.1 * MINUTE, ("52Chromium", "52Mn")),
    _unstable("56Co", 77.27 * DAY, "56Iron", 28),
    _unstable("60Cu", 23.7 * MINUTE, "60Ni"),
    _unstable("60Zn", 2.38 * MINUTE, "60Cu"),
)
