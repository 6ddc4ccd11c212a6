"""Tests for the game service: locking, passive accrual and side-effect policy."""

import threading
from unittest.mock import MagicMock

import pytest

from evotap.data.achievements import ALL_ACHIEVEMENTS
from evotap.engine.collaborators import LocalRewardLedger
from evotap.engine.errors import ExchangeFailedError, InsufficientFundsError, InvalidInputError
from evotap.engine.service import GameService
from evotap.engine.store import InMemoryPlayerStore


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _service(**kwargs) -> GameService:
    kwargs.setdefault("clock", FakeClock())
    return GameService(**kwargs)


def _quiet(service: GameService, player_id: str, dna: float = 0.0):
    state = service.get_player(player_id)
    state.achievements = [a.id for a in ALL_ACHIEVEMENTS]
    state.dna = dna
    return state


# ── Players ──────────────────────────────────────────────────────

def test_unknown_player_is_created():
    service = _service()
    view = service.player_view("alice")
    assert view["id"] == "alice"
    assert view["dna"] == 0
    assert view["mutation_cost"] == 1_000
    assert view["token_balance"] == 0


def test_empty_player_id_rejected():
    service = _service()
    with pytest.raises(InvalidInputError):
        service.evolve("", 1)


def test_passive_income_accrues_on_lookup():
    clock = FakeClock()
    service = _service(clock=clock)
    state = _quiet(service, "p1")
    state.passive_income = 5

    clock.now += 10
    assert service.get_player("p1").dna == 50

    clock.now += 0.1
    assert service.get_player("p1").dna == 50


# ── Collaborator failures ────────────────────────────────────────

def test_store_failure_does_not_fail_operation():
    store = MagicMock()
    store.load.return_value = None
    store.save.side_effect = OSError("disk full")
    service = _service(store=store)

    result = service.evolve("p1", 3)
    assert result.total_dna == 3 + 10
    assert service.get_player("p1").total_evolutions == 3


def test_store_load_failure_starts_fresh():
    store = MagicMock()
    store.load.side_effect = ValueError("corrupt save")
    service = _service(store=store)
    assert service.get_player("p1").dna == 0


def test_reward_token_failure_keeps_the_organism():
    ledger = MagicMock()
    ledger.mint_reward.side_effect = RuntimeError("ledger offline")
    service = _service(ledger=ledger)
    _quiet(service, "p1", dna=1_000)

    result = service.mutate("p1")
    assert result.organism.reward_token_id is None
    assert service.get_player("p1").dna == 0
    assert len(service.list_organisms("p1")) == 1


def test_reward_token_attached_to_organism():
    ledger = LocalRewardLedger()
    service = _service(ledger=ledger)
    _quiet(service, "p1", dna=1_000)

    result = service.mutate("p1")
    assert result.organism.reward_token_id == "evotap-1"
    assert ledger.rewards("p1") == [("evotap-1", result.organism.rarity.label)]


def test_achievement_rewards_and_notifications():
    ledger = LocalRewardLedger()
    notifier = MagicMock()
    service = _service(ledger=ledger, notifier=notifier)

    service.evolve("p1", 1)
    assert [descriptor for _, descriptor in ledger.rewards("p1")] == ["Bronze Cell"]
    notifier.notify.assert_called_once()
    assert notifier.notify.call_args[0][1].id == "first_cell"


def test_notifier_failure_is_swallowed():
    notifier = MagicMock()
    notifier.notify.side_effect = RuntimeError("webhook down")
    service = _service(notifier=notifier)

    result = service.evolve("p1", 1)
    assert [a.id for a in result.new_achievements] == ["first_cell"]
    assert service.get_player("p1").dna == 11


def test_balance_failure_reports_zero():
    ledger = MagicMock()
    ledger.balance.side_effect = RuntimeError("ledger offline")
    service = _service(ledger=ledger)
    assert service.player_view("p1")["token_balance"] == 0


# ── Exchange ─────────────────────────────────────────────────────

def test_exchange_credits_ledger():
    ledger = LocalRewardLedger()
    service = _service(ledger=ledger)
    _quiet(service, "p1", dna=500)

    result = service.exchange("p1", 350)
    assert result.tokens_received == 3
    assert ledger.balance("p1") == 3
    assert service.player_view("p1")["token_balance"] == 3


def test_exchange_ledger_failure_restores_dna():
    ledger = MagicMock()
    ledger.mint_tokens.side_effect = RuntimeError("ledger offline")
    service = _service(ledger=ledger)
    _quiet(service, "p1", dna=500)

    with pytest.raises(ExchangeFailedError):
        service.exchange("p1", 200)
    assert service.get_player("p1").dna == 500


# ── Persistence ──────────────────────────────────────────────────

def test_state_is_saved_after_each_operation():
    store = InMemoryPlayerStore()
    service = _service(store=store)
    service.evolve("p1", 2)
    assert store.load("p1").total_evolutions == 2


def test_saved_player_is_loaded_by_a_new_service():
    store = InMemoryPlayerStore()
    _service(store=store).evolve("p1", 5)

    fresh = _service(store=store)
    assert fresh.get_player("p1").total_evolutions == 5


# ── Concurrency ──────────────────────────────────────────────────

def test_concurrent_evolves_are_not_lost():
    service = _service()
    _quiet(service, "p1")

    def worker():
        for _ in range(100):
            service.evolve("p1", 1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    state = service.get_player("p1")
    assert state.total_evolutions == 800
    assert state.dna == 800


def test_concurrent_purchases_debit_once():
    service = _service()
    _quiet(service, "p1", dna=10)
    outcomes = []

    def worker():
        try:
            service.buy_organelle("p1", "mitochondria")
            outcomes.append("ok")
        except Exception as exc:
            outcomes.append(type(exc).__name__)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert service.get_player("p1").dna == 0
    assert service.get_player("p1").organelles == ["mitochondria"]


def test_mutation_costs_are_charged_sequentially():
    service = _service()
    _quiet(service, "p1", dna=3_000)
    service.mutate("p1")
    service.mutate("p1")
    with pytest.raises(InsufficientFundsError):
        service.mutate("p1")
    assert service.get_player("p1").dna == 0


# ── Queries ──────────────────────────────────────────────────────

def test_leaderboard_and_health():
    service = _service()
    service.evolve("a", 5)
    service.evolve("b", 9)

    board = service.leaderboard()
    assert [e["user_id"] for e in board["top_evolutions"]] == ["b", "a"]

    health = service.health()
    assert health["status"] == "OK"
    assert health["players"] == 2
    assert health["total_evolutions"] == 14


def test_token_balance_does_not_touch_player_state():
    clock = FakeClock()
    ledger = LocalRewardLedger()
    service = _service(clock=clock, ledger=ledger)
    state = _quiet(service, "p1", dna=500)
    state.passive_income = 5
    service.exchange("p1", 200)
    dna = state.dna

    clock.now += 10
    assert service.token_balance("p1") == 2
    assert state.dna == dna
    assert state.last_update_at == 1000.0


def test_token_balance_failure_reports_zero():
    ledger = MagicMock()
    ledger.balance.side_effect = RuntimeError("ledger offline")
    assert _service(ledger=ledger).token_balance("p1") == 0
