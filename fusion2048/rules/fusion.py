"""
Fusion Graph - Which nuclide pairs fuse, and into what.

Edges are stored as graph[stationary][moving] -> product. A product is
either a single nuclide id or a candidate set, one of which is drawn
uniformly at random each time the fusion happens.

Lookup is symmetric: canFuse(a, b) checks both directions. When both
directions exist, the stationary tile's edge wins.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping


@dataclass(frozen=True)
class FusionProduct:
    """
    The product side of a fusion edge.

    candidates always has at least one entry; more than one means the
    product is chosen at fusion time.
    """
    candidates: tuple[str, ...]

    @property
    def is_random(self) -> bool:
        return len(self.candidates) > 1

    def resolve(self, rng: random.Random) -> str:
        if not self.is_random:
            return self.candidates[0]
        return rng.choice(self.candidates)


class FusionGraph:
    """
    Immutable directed fusion graph.

    Usage:
        graph = FusionGraph({"Hydrogen": {"Hydrogen": "Deuteron"}})
        graph.can_fuse("Hydrogen", "Hydrogen")  # True
        graph.fuse("Hydrogen", "Hydrogen", rng)  # "Deuteron"
    """

    def __init__(self, edges: Mapping[str, Mapping[str, str | Iterable[str]]]):
        graph: dict[str, Mapping[str, FusionProduct]] = {}
        self.duplicate_candidates: list[str] = []

        for stationary, row in edges.items():
            products: dict[str, FusionProduct] = {}
            for moving, product in row.items():
                products[moving] = self._make_product(stationary, moving, product)
            graph[stationary] = MappingProxyType(products)

        self._graph: Mapping[str, Mapping[str, FusionProduct]] = MappingProxyType(graph)

    def _make_product(self, stationary: str, moving: str, product) -> FusionProduct:
        if isinstance(product, str):
            return FusionProduct(candidates=(product,))

        product = list(product)
        # Deduplicate deliberately, keeping first-seen order
        unique = tuple(dict.fromkeys(product))
        if len(unique) != len(product):
            self.duplicate_candidates.append(f"{stationary}+{moving}")
        return FusionProduct(candidates=unique)

    def edge(self, stationary: str, moving: str) -> FusionProduct | None:
        """The stored edge for exactly this direction, if any."""
        row = self._graph.get(stationary)
        if row is None:
            return None
        return row.get(moving)

    def can_fuse(self, a: str, b: str) -> bool:
        return self.edge(a, b) is not None or self.edge(b, a) is not None

    def product_of(self, stationary: str, moving: str) -> FusionProduct | None:
        """Edge for the pair, preferring the stationary tile's direction."""
        product = self.edge(stationary, moving)
        if product is None:
            product = self.edge(moving, stationary)
        return product

    def fuse(self, stationary: str, moving: str, rng: random.Random) -> str:
        """
        Resolve the product of fusing two nuclides.

        Raises KeyError if the pair cannot fuse; callers check can_fuse
        first.
        """
        product = self.product_of(stationary, moving)
        if product is None:
            raise KeyError(f"{stationary} and {moving} cannot fuse")
        return product.resolve(rng)

    def partners(self, nuclide: str) -> set[str]:
        """Every nuclide that can fuse with the given one, in either direction."""
        found = set(self._graph.get(nuclide, {}).keys())
        for stationary, row in self._graph.items():
            if nuclide in row:
                found.add(stationary)
        return found

    def edges(self) -> Iterable[tuple[str, str, FusionProduct]]:
        for stationary, row in self._graph.items():
            for moving, product in row.items():
                yield stationary, moving, product

    def nuclides(self) -> set[str]:
        """Every id the graph mentions, as reactant or product."""
        found: set[str] = set()
        for stationary, moving, product in self.edges():
            found.add(stationary)
            found.add(moving)
            found.update(product.candidates)
        return found


NUCLEAR_FUSION_EDGES: dict[str, dict[str, str | tuple[str, ...]]] = {
    "Hydrogen": {
        "Hydrogen": "Deuteron",
        "Deuteron": "3Helium",
        "7Li": "4Helium",
    },
    "3Helium": {
        "3Helium": "4Helium",
        "4Helium": "7Beryllium",
    },
    "4Helium": {
        "4Helium": "8Beryllium",  # decays back into helium almost at once
        "8Beryllium": "12Carbon",
        "12Carbon": "16Oxygen",
        "16Oxygen": "20Neon",
        "20Neon": "24Magnesium",
        "24Magnesium": "28Silicon",
        "28Silicon": "32Sulfur",
        "32Sulfur": "36Argon",
        "36Argon": "40Calcium",
        "40Calcium": "44Titanium",
        "44Titanium": "48Chromium",
        "48Chromium": "52Iron",
        "52Iron": "56Nickel",
        "56Nickel": "60Zn",
        "44Calcium": "48Titanium",
        "48Titanium": "52Chromium",
        "52Chromium": "56Iron",
        "56Iron": "60Ni",
    },
    "7Beryllium": {
        "Hydrogen": "8B",
    },
    "12Carbon": {
        "12Carbon": ("20Neon", "23Na", "23Mg", "24Magnesium", "16Oxygen"),
    },
    "16Oxygen": {
        "16Oxygen": ("28Silicon", "31P", "31S", "30Si", "30P", "32Sulfur", "24Magnesium"),
    },
    "23Na": {
        "Hydrogen": "24Magnesium",
    },
    "30Si": {
        "Hydrogen": "31P",
    },
    "31P": {
        "Hydrogen": "32Sulfur",
    },
}
