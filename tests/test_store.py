"""Tests for player persistence backends."""

import json

from evotap.data.traits import Rarity
from evotap.engine.economy import new_player
from evotap.engine.player_state import Organism
from evotap.engine.service import GameService
from evotap.engine.store import InMemoryPlayerStore, JsonFilePlayerStore, player_from_dict, player_to_dict


def _sample_player():
    state = new_player("alice")
    state.dna = 1234.5
    state.total_evolutions = 77
    state.organelles = ["mitochondria"]
    state.achievements = ["first_cell"]
    state.organisms.append(Organism(
        id="abc-1",
        name="Protozoid",
        rarity=Rarity.LEGENDARY,
        era="cellular",
        traits={"speed": "Fast"},
        power=300,
        reward_token_id="evotap-7",
    ))
    return state


def test_json_file_store_save_and_load(tmp_path):
    store = JsonFilePlayerStore(tmp_path)
    store.save("alice", _sample_player())

    loaded = store.load("alice")
    assert loaded.dna == 1234.5
    assert loaded.total_evolutions == 77
    assert loaded.organelles == ["mitochondria"]
    assert loaded.organisms[0].rarity == Rarity.LEGENDARY
    assert loaded.organisms[0].reward_token_id == "evotap-7"


def test_json_file_store_writes_rarity_labels(tmp_path):
    store = JsonFilePlayerStore(tmp_path)
    store.save("alice", _sample_player())
    data = json.loads(store.path_for("alice").read_text())
    assert data["organisms"][0]["rarity"] == "Legendary"


def test_json_file_store_missing_player(tmp_path):
    assert JsonFilePlayerStore(tmp_path).load("nobody") is None


def test_player_ids_are_quoted_into_file_names(tmp_path):
    store = JsonFilePlayerStore(tmp_path)
    path = store.path_for("../evil/id")
    assert path.parent == tmp_path


def test_in_memory_store_snapshots():
    store = InMemoryPlayerStore()
    state = _sample_player()
    store.save("alice", state)
    state.dna = 0
    assert store.load("alice").dna == 1234.5
    assert len(store) == 1


def test_old_saves_fill_defaults():
    state = player_from_dict({"id": "bob", "dna": 5})
    assert state.current_era == "cellular"
    assert state.unlocked_eras == ["cellular"]
    assert state.organisms == []


def test_service_reloads_from_disk(tmp_path):
    store = JsonFilePlayerStore(tmp_path)
    GameService(store=store, clock=lambda: 1000.0).evolve("alice", 4)

    reloaded = GameService(store=store, clock=lambda: 1000.0).get_player("alice")
    assert reloaded.total_evolutions == 4
    assert reloaded.achievements == ["first_cell"]
    assert player_to_dict(reloaded)["id"] == "alice"
