"""Tests for organism mutation and breeding."""

from unittest.mock import patch

import pytest

from evotap.data.achievements import ALL_ACHIEVEMENTS
from evotap.data.traits import ALL_TRAITS, COLOUR, INTELLIGENCE, SPEED, STRENGTH, Rarity
from evotap.engine.economy import new_player
from evotap.engine.errors import InsufficientFundsError, NotFoundError
from evotap.engine.organisms import (
    breed,
    compute_power,
    create_hybrid,
    generate_organism,
    hybrid_rarity,
    mutate,
    mutation_cost,
    new_organism_id,
    roll_rarity,
    roll_trait,
)
from evotap.engine.player_state import Organism


def _quiet_player(dna: float = 0.0):
    state = new_player("p1")
    state.achievements = [a.id for a in ALL_ACHIEVEMENTS]
    state.dna = dna
    return state


def _organism(oid: str, rarity: Rarity = Rarity.COMMON, generation: int = 1, era: str = "cellular",
              trait_value_index: int = 0) -> Organism:
    traits = {
        c.id: c.values[min(trait_value_index, len(c.values) - 1)]
        for c in (SPEED, STRENGTH, INTELLIGENCE, COLOUR)
    }
    return Organism(
        id=oid,
        name=oid.capitalize(),
        rarity=rarity,
        era=era,
        traits=traits,
        power=100,
        generation=generation,
    )


# ── Mutation cost ────────────────────────────────────────────────

def test_mutation_cost_doubles_per_organism():
    state = _quiet_player()
    assert mutation_cost(state) == 1_000
    state.organisms.append(_organism("a"))
    assert mutation_cost(state) == 2_000
    state.organisms.append(_organism("b"))
    assert mutation_cost(state) == 4_000


def test_mutate_debits_and_appends():
    state = _quiet_player(dna=1_500)
    result = mutate(state, now=1000.0)
    assert result.cost == 1_000
    assert state.dna == 500
    assert state.organisms == [result.organism]
    assert result.organism.generation == 1
    assert result.organism.parents == []
    assert result.organism.era == "cellular"


def test_mutate_insufficient_funds_leaves_state():
    state = _quiet_player(dna=999)
    with pytest.raises(InsufficientFundsError):
        mutate(state)
    assert state.dna == 999
    assert state.organisms == []


def test_mutate_uses_current_era():
    state = _quiet_player(dna=1_000)
    state.current_era = "animal"
    result = mutate(state)
    assert result.organism.era == "animal"


# ── Random draws ─────────────────────────────────────────────────

def test_roll_rarity_weight_bands():
    with patch("evotap.engine.organisms.random.random", return_value=0.0):
        assert roll_rarity() == Rarity.COMMON
    with patch("evotap.engine.organisms.random.random", return_value=0.5):
        assert roll_rarity() == Rarity.RARE
    with patch("evotap.engine.organisms.random.random", return_value=0.9):
        assert roll_rarity() == Rarity.EPIC
    with patch("evotap.engine.organisms.random.random", return_value=0.97):
        assert roll_rarity() == Rarity.LEGENDARY
    with patch("evotap.engine.organisms.random.random", return_value=0.995):
        assert roll_rarity() == Rarity.MYTHIC


def test_common_traits_stay_at_the_bottom():
    for _ in range(50):
        assert roll_trait(STRENGTH, Rarity.COMMON) == "Weak"


def test_rarity_raises_the_trait_ceiling():
    allowed = set(STRENGTH.values[:3])
    for _ in range(100):
        assert roll_trait(STRENGTH, Rarity.EPIC) in allowed


def test_mythic_can_reach_the_last_colour():
    with patch("evotap.engine.organisms.random.randint", side_effect=lambda lo, hi: hi):
        assert roll_trait(COLOUR, Rarity.MYTHIC) == "Rainbow"
        assert roll_trait(STRENGTH, Rarity.MYTHIC) == "Titanic"


def test_compute_power():
    traits = {"strength": "Titanic", "intelligence": "Genius", "speed": "Lightning"}
    assert compute_power(traits, Rarity.COMMON) == 250
    assert compute_power(traits, Rarity.EPIC) == 500
    assert compute_power(traits, Rarity.RARE) == 375
    assert compute_power({}, Rarity.MYTHIC) == 500


def test_generated_organism_has_every_trait():
    organism = generate_organism("cellular", now=1000.0)
    assert set(organism.traits) == {
        "speed", "strength", "intelligence", "adaptability", "size", "colour",
    }
    assert organism.power == compute_power(organism.traits, organism.rarity)


def test_organism_ids_are_unique():
    ids = {new_organism_id(1000.0) for _ in range(200)}
    assert len(ids) == 200


# ── Breeding ─────────────────────────────────────────────────────

def test_hybrid_rarity_rounds_half_up():
    assert hybrid_rarity(Rarity.COMMON, Rarity.COMMON) == Rarity.COMMON
    assert hybrid_rarity(Rarity.COMMON, Rarity.RARE) == Rarity.RARE
    assert hybrid_rarity(Rarity.COMMON, Rarity.EPIC) == Rarity.RARE
    assert hybrid_rarity(Rarity.EPIC, Rarity.MYTHIC) == Rarity.LEGENDARY
    assert hybrid_rarity(Rarity.MYTHIC, Rarity.MYTHIC) == Rarity.MYTHIC


def test_hybrid_inherits_from_first_parent():
    a = _organism("a", trait_value_index=3)
    b = _organism("b", trait_value_index=0)
    with patch("evotap.engine.organisms.random.random", return_value=0.1):
        child = create_hybrid(a, b, now=1000.0)
    for key in a.traits:
        assert child.traits[key] == a.traits[key]


def test_hybrid_inherits_from_second_parent():
    a = _organism("a", trait_value_index=3)
    b = _organism("b", trait_value_index=0)
    with patch("evotap.engine.organisms.random.random", return_value=0.45):
        child = create_hybrid(a, b, now=1000.0)
    for key in b.traits:
        assert child.traits[key] == b.traits[key]


def test_hybrid_lineage():
    a = _organism("a", generation=1)
    b = _organism("b", generation=3, era="animal")
    for roll in (0.1, 0.45, 0.9):
        with patch("evotap.engine.organisms.random.random", return_value=roll):
            child = create_hybrid(a, b, now=1000.0)
        assert child.generation == 4
        assert child.parents == ["a", "b"]
        assert child.era == "animal"
        assert child.name == "A-B Hybrid"


def test_hybrid_fresh_roll_uses_full_table():
    a = _organism("a", rarity=Rarity.COMMON)
    b = _organism("b", rarity=Rarity.COMMON)
    with patch("evotap.engine.organisms.random.random", return_value=0.9), \
            patch("evotap.engine.organisms.random.choice", side_effect=lambda seq: seq[-1]):
        child = create_hybrid(a, b, now=1000.0)
    for category in ALL_TRAITS:
        assert child.traits[category.id] == category.values[-1]
    assert child.traits["colour"] == "Rainbow"
    assert child.rarity == Rarity.COMMON


def test_breed_debits_flat_cost():
    state = _quiet_player(dna=6_000)
    state.organisms = [_organism("a"), _organism("b")]
    result = breed(state, "a", "b", now=1000.0)
    assert result.cost == 5_000
    assert state.dna == 1_000
    assert state.organisms[-1] is result.hybrid
    assert result.hybrid.parents == ["a", "b"]


def test_breed_unknown_parent():
    state = _quiet_player(dna=6_000)
    state.organisms = [_organism("a")]
    with pytest.raises(NotFoundError):
        breed(state, "a", "zzz")
    assert state.dna == 6_000


def test_breed_insufficient_funds():
    state = _quiet_player(dna=4_999)
    state.organisms = [_organism("a"), _organism("b")]
    with pytest.raises(InsufficientFundsError):
        breed(state, "a", "b")
    assert len(state.organisms) == 2
