"""Balance constants — all tuning knobs in one place.

Tweak these to adjust pacing and costs. The engine never reads module
globals directly: every operation takes a ``GameConfig`` so a server can run
with a different table set (tests do this too).

Mutation cost follows: base_mutation_cost * (2 ^ organisms_owned)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from evotap.data.achievements import ALL_ACHIEVEMENTS, AchievementDef
from evotap.data.eras import ALL_ERAS, EraDef
from evotap.data.organelles import ALL_ORGANELLES, OrganelleDef
from evotap.data.traits import ALL_TRAITS, NAME_PREFIXES, NAME_SUFFIXES, TraitCategory


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for DNA generation, levels and the token exchange."""

    # Level = floor(sqrt(experience / experience_per_level)) + 1
    experience_per_level: float = 100.0

    # Exchange: DNA per reward token, and the smallest accepted amount
    exchange_rate: float = 100.0
    exchange_minimum: float = 100.0

    # Large number formatting thresholds
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
        (1e15, "Qa"),
        (1e18, "Qi"),
    )


@dataclass(frozen=True)
class GeneticsBalance:
    """Tuning for organism mutation and breeding."""

    base_mutation_cost: float = 1_000.0
    breeding_cost: float = 5_000.0

    # Rarity draw weights, Common → Mythic (sum = 100)
    rarity_weights: tuple[int, ...] = (50, 30, 15, 4, 1)
    # Power multiplier per rarity, Common → Mythic
    rarity_power_multipliers: tuple[float, ...] = (1.0, 1.5, 2.0, 3.0, 5.0)
    base_power: int = 100

    # Breeding: chance of inheriting each parent's trait (rest = re-roll)
    inherit_chance: float = 0.30


@dataclass(frozen=True)
class GameConfig:
    """Top-level container for balance constants and content tables."""

    economy: EconomyBalance = field(default_factory=EconomyBalance)
    genetics: GeneticsBalance = field(default_factory=GeneticsBalance)

    eras: tuple[EraDef, ...] = ALL_ERAS
    organelles: tuple[OrganelleDef, ...] = ALL_ORGANELLES
    achievements: tuple[AchievementDef, ...] = ALL_ACHIEVEMENTS
    traits: tuple[TraitCategory, ...] = ALL_TRAITS
    name_prefixes: tuple[str, ...] = NAME_PREFIXES
    name_suffixes: tuple[str, ...] = NAME_SUFFIXES

    # Tag passed to the reward ledger for every issuance
    game_tag: str = "evotap"
    leaderboard_size: int = 10

    @property
    def starting_era(self) -> EraDef:
        return self.eras[0]

    def find_era(self, era_id: str) -> EraDef | None:
        for era in self.eras:
            if era.id == era_id:
                return era
        return None

    def find_organelle(self, organelle_id: str) -> OrganelleDef | None:
        for organelle in self.organelles:
            if organelle.id == organelle_id:
                return organelle
        return None


# Default configuration — import this where no custom config is injected
DEFAULT_CONFIG = GameConfig()
