"""Organism genetics — rarity scale, trait tables and name fragments.

Trait values are ordered weakest first. A rarity's ordinal is also the highest
trait index a freshly mutated organism may roll, so rarer organisms can reach
stronger values without being guaranteed them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Rarity(IntEnum):
    """Ordinal rarity scale (Common < ... < Mythic)."""

    COMMON = 0
    RARE = 1
    EPIC = 2
    LEGENDARY = 3
    MYTHIC = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> Rarity:
        return cls[label.upper()]


@dataclass(frozen=True)
class TraitCategory:
    """One genetic trait and the values it can take."""

    id: str
    name: str
    values: tuple[str, ...]
    # Power bonus per value index; empty = trait never adds power
    power_bonuses: tuple[int, ...] = ()

    def bonus_for(self, value: str) -> int:
        if not self.power_bonuses or value not in self.values:
            return 0
        return self.power_bonuses[self.values.index(value)]


# ── Trait categories ─────────────────────────────────────────────

SPEED = TraitCategory(
    id="speed",
    name="Speed",
    values=("Slow", "Fast", "Swift", "Lightning"),
)

STRENGTH = TraitCategory(
    id="strength",
    name="Strength",
    values=("Weak", "Strong", "Mighty", "Titanic"),
    power_bonuses=(0, 25, 50, 100),
)

INTELLIGENCE = TraitCategory(
    id="intelligence",
    name="Intelligence",
    values=("Primitive", "Smart", "Genius", "Hypermind"),
    power_bonuses=(0, 25, 50, 100),
)

ADAPTABILITY = TraitCategory(
    id="adaptability",
    name="Adaptability",
    values=("Fragile", "Hardy", "Adaptive", "Invulnerable"),
)

SIZE = TraitCategory(
    id="size",
    name="Size",
    values=("Micro", "Small", "Medium", "Gigantic"),
)

COLOUR = TraitCategory(
    id="colour",
    name="Colour",
    values=("Grey", "Green", "Blue", "Golden", "Rainbow"),
)


ALL_TRAITS: tuple[TraitCategory, ...] = (
    SPEED,
    STRENGTH,
    INTELLIGENCE,
    ADAPTABILITY,
    SIZE,
    COLOUR,
)

NAME_PREFIXES: tuple[str, ...] = ("Proto", "Neo", "Mega", "Hyper", "Ultra")
NAME_SUFFIXES: tuple[str, ...] = ("zoid", "form", "blast", "cyte", "morph")
