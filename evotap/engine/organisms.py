"""Procedural organisms — weighted rarity draws, trait rolls and breeding."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass

from evotap.data.achievements import AchievementDef
from evotap.data.balance import DEFAULT_CONFIG, GameConfig
from evotap.data.traits import Rarity, TraitCategory
from evotap.engine.achievements import check_achievements
from evotap.engine.errors import InsufficientFundsError, NotFoundError
from evotap.engine.player_state import Organism, PlayerState


@dataclass
class MutationResult:
    organism: Organism
    cost: float
    remaining_dna: float
    new_achievements: list[AchievementDef]


@dataclass
class BreedResult:
    hybrid: Organism
    cost: float
    remaining_dna: float
    new_achievements: list[AchievementDef]


def new_organism_id(now: float | None = None) -> str:
    """Millisecond timestamp plus 32 random bits, hex encoded."""
    if now is None:
        now = time.time()
    return f"{int(now * 1000):x}-{random.getrandbits(32):08x}"


def mutation_cost(state: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> float:
    """Cost doubles with every organism already owned."""
    return config.genetics.base_mutation_cost * (2 ** len(state.organisms))


def roll_rarity(config: GameConfig = DEFAULT_CONFIG) -> Rarity:
    """Weighted draw over the rarity scale."""
    weights = config.genetics.rarity_weights
    roll = random.random() * sum(weights)
    cumulative = 0.0
    for rarity, weight in zip(Rarity, weights):
        cumulative += weight
        if roll < cumulative:
            return rarity
    return Rarity.COMMON


def roll_trait(category: TraitCategory, rarity: Rarity) -> str:
    """Uniform draw from the values this rarity may reach.

    Rarity raises the ceiling of the draw, not its floor.
    """
    ceiling = min(int(rarity), len(category.values) - 1)
    return category.values[random.randint(0, ceiling)]


def compute_power(
    traits: dict[str, str],
    rarity: Rarity,
    config: GameConfig = DEFAULT_CONFIG,
) -> int:
    """Base power plus trait bonuses, scaled by the rarity multiplier."""
    power = config.genetics.base_power
    for category in config.traits:
        value = traits.get(category.id)
        if value is not None:
            power += category.bonus_for(value)
    return int(math.floor(power * config.genetics.rarity_power_multipliers[rarity]))


def generate_organism(
    era_id: str,
    now: float | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> Organism:
    """Create a random first-generation organism."""
    if now is None:
        now = time.time()
    rarity = roll_rarity(config)
    traits = {category.id: roll_trait(category, rarity) for category in config.traits}
    name = random.choice(config.name_prefixes) + random.choice(config.name_suffixes)
    return Organism(
        id=new_organism_id(now),
        name=name,
        rarity=rarity,
        era=era_id,
        traits=traits,
        power=compute_power(traits, rarity, config),
        generation=1,
        parents=[],
        created_at=now,
    )


def hybrid_rarity(a: Rarity, b: Rarity) -> Rarity:
    """Average of the parents' ordinals, rounded half up, clamped to Mythic."""
    index = int(math.floor((int(a) + int(b)) / 2 + 0.5))
    return Rarity(min(index, max(Rarity)))


def create_hybrid(
    parent_a: Organism,
    parent_b: Organism,
    now: float | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> Organism:
    """Cross two organisms.

    For each trait a single roll decides: parent A's value, parent B's
    value, or a fresh draw from the full table.
    """
    if now is None:
        now = time.time()
    inherit = config.genetics.inherit_chance
    traits: dict[str, str] = {}
    for category in config.traits:
        roll = random.random()
        if roll < inherit and category.id in parent_a.traits:
            traits[category.id] = parent_a.traits[category.id]
        elif inherit <= roll < inherit * 2 and category.id in parent_b.traits:
            traits[category.id] = parent_b.traits[category.id]
        else:
            traits[category.id] = random.choice(category.values)

    rarity = hybrid_rarity(parent_a.rarity, parent_b.rarity)
    era = _later_era(parent_a.era, parent_b.era, config)

    return Organism(
        id=new_organism_id(now),
        name=f"{parent_a.name}-{parent_b.name} Hybrid",
        rarity=rarity,
        era=era,
        traits=traits,
        power=compute_power(traits, rarity, config),
        generation=max(parent_a.generation, parent_b.generation) + 1,
        parents=[parent_a.id, parent_b.id],
        created_at=now,
    )


def _later_era(a: str, b: str, config: GameConfig) -> str:
    order = [era.id for era in config.eras]
    rank_a = order.index(a) if a in order else -1
    rank_b = order.index(b) if b in order else -1
    return a if rank_a >= rank_b else b


def mutate(
    state: PlayerState,
    now: float | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> MutationResult:
    """Spend DNA on a random organism."""
    cost = mutation_cost(state, config)
    if state.dna < cost:
        raise InsufficientFundsError("Not enough DNA for mutation")

    organism = generate_organism(state.current_era, now, config)
    state.dna -= cost
    state.organisms.append(organism)

    new_achievements = check_achievements(state, config)

    return MutationResult(
        organism=organism,
        cost=cost,
        remaining_dna=state.dna,
        new_achievements=new_achievements,
    )


def breed(
    state: PlayerState,
    organism_a_id: str,
    organism_b_id: str,
    now: float | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> BreedResult:
    """Cross two of the player's organisms into a hybrid."""
    parent_a = state.find_organism(organism_a_id)
    parent_b = state.find_organism(organism_b_id)
    if parent_a is None or parent_b is None:
        raise NotFoundError("Organism not found")

    cost = config.genetics.breeding_cost
    if state.dna < cost:
        raise InsufficientFundsError("Not enough DNA for breeding")

    hybrid = create_hybrid(parent_a, parent_b, now, config)
    state.dna -= cost
    state.organisms.append(hybrid)

    new_achievements = check_achievements(state, config)

    return BreedResult(
        hybrid=hybrid,
        cost=cost,
        remaining_dna=state.dna,
        new_achievements=new_achievements,
    )
