"""Player state — single source of truth for one player."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from evotap.data.traits import Rarity


@dataclass
class Organism:
    """A minted or bred organism. Only ``reward_token_id`` changes after creation."""

    id: str
    name: str
    rarity: Rarity
    era: str
    traits: dict[str, str]
    power: int
    generation: int = 1
    parents: list[str] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)
    reward_token_id: str | None = None


@dataclass
class PlayerState:
    """Complete mutable state for one player."""

    player_id: str

    # ── Core resources ───────────────────────────────────
    dna: float = 0.0
    total_evolutions: int = 0
    experience: float = 0.0
    level: int = 1

    # ── Eras ─────────────────────────────────────────────
    current_era: str = "cellular"
    unlocked_eras: list[str] = field(default_factory=lambda: ["cellular"])

    # ── Owned things ─────────────────────────────────────
    organelles: list[str] = field(default_factory=list)
    organisms: list[Organism] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)

    # ── Derived rates ────────────────────────────────────
    passive_income: float = 0.0          # DNA per second
    evolutions_per_second: float = 0.0   # rate of the most recent evolve call

    # ── Timestamps ───────────────────────────────────────
    last_evolve_at: float | None = None  # rate calculation
    last_update_at: float | None = None  # passive accrual
    created_at: float = field(default_factory=time.time)

    # ── Lifetime stats ───────────────────────────────────
    tokens_received: int = 0

    def find_organism(self, organism_id: str) -> Organism | None:
        for organism in self.organisms:
            if organism.id == organism_id:
                return organism
        return None

    @property
    def rarest_organism(self) -> Rarity | None:
        if not self.organisms:
            return None
        return max(o.rarity for o in self.organisms)
