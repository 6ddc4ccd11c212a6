"""Era definitions — progression stages unlocked with DNA."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EraDef:
    """Definition of a single evolutionary era."""

    id: str
    name: str
    emoji: str
    description: str
    # DNA spent once to unlock (0 = starting era)
    unlock_cost: float
    # Multiplies DNA earned per evolution while this era is current
    multiplier: float
    # Display-only level cap for the era
    max_level: int = 50


# ── Eras (ordered by unlock cost) ────────────────────────────────

CELLULAR = EraDef(
    id="cellular",
    name="Cellular Era",
    emoji="🦠",
    description="Simple organisms in the primordial soup.",
    unlock_cost=0,
    multiplier=1,
    max_level=50,
)

MULTICELLULAR = EraDef(
    id="multicellular",
    name="Multicellular Era",
    emoji="🐛",
    description="Complex organisms take shape.",
    unlock_cost=1_000,
    multiplier=2,
    max_level=100,
)

ANIMAL = EraDef(
    id="animal",
    name="Animal Era",
    emoji="🦕",
    description="Predators and prey.",
    unlock_cost=10_000,
    multiplier=5,
    max_level=200,
)

MIND = EraDef(
    id="mind",
    name="Era of Mind",
    emoji="🧠",
    description="Intelligence and technology emerge.",
    unlock_cost=100_000,
    multiplier=10,
    max_level=500,
)

COSMIC = EraDef(
    id="cosmic",
    name="Cosmic Era",
    emoji="🚀",
    description="Galactic expansion.",
    unlock_cost=1_000_000,
    multiplier=25,
    max_level=1000,
)


ALL_ERAS: tuple[EraDef, ...] = (CELLULAR, MULTICELLULAR, ANIMAL, MIND, COSMIC)
