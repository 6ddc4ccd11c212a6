"""Organelle definitions — one-time purchasable upgrades and their effects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OrganelleEffect(Enum):
    """What an organelle modifies."""

    DNA_MULTIPLIER = auto()   # Multiply DNA earned per evolution
    AUTO_EVOLVE = auto()      # Automatic evolutions per second (client-driven)
    PASSIVE_INCOME = auto()   # Flat DNA per second, accrued on lookup
    PROTECTION = auto()       # Flag only; no numeric effect


@dataclass(frozen=True)
class OrganelleDef:
    """Definition of a single organelle."""

    id: str
    name: str
    emoji: str
    cost: float
    description: str
    effect: OrganelleEffect
    # Interpretation depends on effect: multiplier, evolutions/s or DNA/s
    value: float = 0.0


# ── Organelles ───────────────────────────────────────────────────

MITOCHONDRIA = OrganelleDef(
    id="mitochondria",
    name="Mitochondria",
    emoji="⚡",
    cost=10,
    description="x2 DNA production",
    effect=OrganelleEffect.DNA_MULTIPLIER,
    value=2,
)

NUCLEUS = OrganelleDef(
    id="nucleus",
    name="Nucleus",
    emoji="🔵",
    cost=50,
    description="Automatic division",
    effect=OrganelleEffect.AUTO_EVOLVE,
    value=1,
)

RIBOSOMES = OrganelleDef(
    id="ribosomes",
    name="Ribosomes",
    emoji="🔬",
    cost=100,
    description="x3 DNA production",
    effect=OrganelleEffect.DNA_MULTIPLIER,
    value=3,
)

ENDOPLASMIC_RETICULUM = OrganelleDef(
    id="endoplasmic_reticulum",
    name="Endoplasmic Reticulum",
    emoji="🌐",
    cost=250,
    description="Automatic division x2",
    effect=OrganelleEffect.AUTO_EVOLVE,
    value=2,
)

CHLOROPLASTS = OrganelleDef(
    id="chloroplasts",
    name="Chloroplasts",
    emoji="🌱",
    cost=500,
    description="Passive DNA income",
    effect=OrganelleEffect.PASSIVE_INCOME,
    value=5,
)

VACUOLES = OrganelleDef(
    id="vacuoles",
    name="Vacuoles",
    emoji="💧",
    cost=1_000,
    description="x5 DNA production",
    effect=OrganelleEffect.DNA_MULTIPLIER,
    value=5,
)

CYTOSKELETON = OrganelleDef(
    id="cytoskeleton",
    name="Cytoskeleton",
    emoji="🦴",
    cost=2_500,
    description="Automatic division x5",
    effect=OrganelleEffect.AUTO_EVOLVE,
    value=5,
)

LYSOSOMES = OrganelleDef(
    id="lysosomes",
    name="Lysosomes",
    emoji="🗑️",
    cost=5_000,
    description="Protection against viruses",
    effect=OrganelleEffect.PROTECTION,
)


ALL_ORGANELLES: tuple[OrganelleDef, ...] = (
    MITOCHONDRIA,
    NUCLEUS,
    RIBOSOMES,
    ENDOPLASMIC_RETICULUM,
    CHLOROPLASTS,
    VACUOLES,
    CYTOSKELETON,
    LYSOSOMES,
)
