"""Game service — owns the live player table and applies side-effect policy.

Every operation runs under a lock dedicated to the player it touches, so the
check-then-debit sequences in the engine cannot interleave for one player.
Different players never contend. Persistence, reward tokens and notifications
are best effort: their failures are logged and the in-memory mutation stands.
The one exception is ``exchange``, which reverses its debit when token
issuance fails.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator

from evotap.data.achievements import AchievementDef
from evotap.data.balance import DEFAULT_CONFIG, GameConfig
from evotap.engine import economy, organisms
from evotap.engine.collaborators import LocalRewardLedger, LogNotifier, Notifier, RewardLedger
from evotap.engine.errors import InvalidInputError
from evotap.engine.leaderboard import build_leaderboard
from evotap.engine.player_state import Organism, PlayerState
from evotap.engine.store import InMemoryPlayerStore, PlayerStore, player_to_dict

logger = logging.getLogger(__name__)


class GameService:
    """Single owner of all player state for one process."""

    def __init__(
        self,
        store: PlayerStore | None = None,
        ledger: RewardLedger | None = None,
        notifier: Notifier | None = None,
        config: GameConfig = DEFAULT_CONFIG,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store if store is not None else InMemoryPlayerStore()
        self.ledger = ledger if ledger is not None else LocalRewardLedger()
        self.notifier = notifier if notifier is not None else LogNotifier()
        self.config = config
        self.clock = clock

        self._registry_lock = threading.Lock()
        self._players: dict[str, PlayerState] = {}
        self._locks: dict[str, threading.Lock] = {}

    # ── Player access ────────────────────────────────────────────

    def _lock_for(self, player_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(player_id)
            if lock is None:
                lock = self._locks[player_id] = threading.Lock()
            return lock

    def _load_or_create(self, player_id: str) -> PlayerState:
        with self._registry_lock:
            state = self._players.get(player_id)
        if state is not None:
            return state

        try:
            state = self.store.load(player_id)
        except Exception as exc:
            logger.warning("Could not load player %s: %s", player_id, exc)
            state = None
        if state is None:
            state = economy.new_player(player_id, self.config)
            logger.info("New player %s", player_id)

        with self._registry_lock:
            self._players[player_id] = state
        return state

    @contextmanager
    def _player(self, player_id: str) -> Iterator[PlayerState]:
        """Hold the player's lock, creating the player and accruing passive DNA."""
        if not isinstance(player_id, str) or not player_id:
            raise InvalidInputError("user_id is required")
        with self._lock_for(player_id):
            state = self._load_or_create(player_id)
            economy.accrue_passive(state, self.clock())
            yield state

    def get_player(self, player_id: str) -> PlayerState:
        with self._player(player_id) as state:
            return state

    def player_view(self, player_id: str) -> dict:
        """Serialised player plus ledger balance and derived numbers."""
        with self._player(player_id) as state:
            data = player_to_dict(state)
            data["auto_evolutions"] = economy.compute_auto_evolutions(state, self.config)
            data["protected"] = economy.is_protected(state, self.config)
            data["mutation_cost"] = organisms.mutation_cost(state, self.config)
        data["token_balance"] = self.token_balance(player_id)
        return data

    def token_balance(self, player_id: str) -> int:
        """Ledger balance, or 0 when the ledger cannot be reached."""
        try:
            return self.ledger.balance(player_id)
        except Exception as exc:
            logger.warning("Ledger unavailable for %s: %s", player_id, exc)
            return 0

    # ── Mutations ────────────────────────────────────────────────

    def evolve(self, player_id: str, clicks: int = 1) -> economy.EvolveResult:
        with self._player(player_id) as state:
            result = economy.evolve(state, clicks, self.clock(), self.config)
            self._reward_achievements(player_id, result.new_achievements)
            self._persist(state)
            return result

    def buy_organelle(self, player_id: str, organelle_id: str) -> economy.PurchaseResult:
        with self._player(player_id) as state:
            result = economy.purchase_organelle(state, organelle_id, self.config)
            self._persist(state)
            return result

    def unlock_era(self, player_id: str, era_id: str) -> economy.UnlockResult:
        with self._player(player_id) as state:
            result = economy.unlock_era(state, era_id, self.config)
            self._reward_achievements(player_id, result.new_achievements)
            self._persist(state)
            return result

    def mutate(self, player_id: str) -> organisms.MutationResult:
        with self._player(player_id) as state:
            result = organisms.mutate(state, self.clock(), self.config)
            self._attach_reward_token(player_id, result.organism)
            self._reward_achievements(player_id, result.new_achievements)
            self._persist(state)
            return result

    def breed(self, player_id: str, organism_a_id: str, organism_b_id: str) -> organisms.BreedResult:
        with self._player(player_id) as state:
            result = organisms.breed(state, organism_a_id, organism_b_id, self.clock(), self.config)
            self._attach_reward_token(player_id, result.hybrid)
            self._reward_achievements(player_id, result.new_achievements)
            self._persist(state)
            return result

    def exchange(self, player_id: str, amount: float) -> economy.ExchangeResult:
        tag = self.config.game_tag

        def issue(tokens: int) -> None:
            self.ledger.mint_tokens(player_id, tokens, tag)

        with self._player(player_id) as state:
            result = economy.exchange_dna(state, amount, issue, self.config)
            self._persist(state)
            return result

    # ── Queries ──────────────────────────────────────────────────

    def list_organisms(self, player_id: str) -> list[Organism]:
        with self._player(player_id) as state:
            return list(state.organisms)

    def _snapshot(self) -> list[PlayerState]:
        with self._registry_lock:
            return list(self._players.values())

    def leaderboard(self, limit: int | None = None) -> dict:
        return build_leaderboard(self._snapshot(), limit, self.config)

    def health(self) -> dict:
        players = self._snapshot()
        return {
            "status": "OK",
            "game": "EvoTap",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "players": len(players),
            "total_evolutions": sum(p.total_evolutions for p in players),
        }

    # ── Best-effort side effects ─────────────────────────────────

    def _persist(self, state: PlayerState) -> None:
        try:
            self.store.save(state.player_id, state)
        except Exception as exc:
            logger.warning("Failed to save player %s: %s", state.player_id, exc)

    def _attach_reward_token(self, player_id: str, organism: Organism) -> None:
        try:
            organism.reward_token_id = self.ledger.mint_reward(
                player_id, organism.rarity.label, self.config.game_tag,
            )
        except Exception as exc:
            logger.warning("Reward token for organism %s failed: %s", organism.id, exc)

    def _reward_achievements(self, player_id: str, earned: list[AchievementDef]) -> None:
        for achievement in earned:
            if achievement.reward_token:
                try:
                    self.ledger.mint_reward(player_id, achievement.reward_token, self.config.game_tag)
                except Exception as exc:
                    logger.warning("Achievement token %r failed: %s", achievement.reward_token, exc)
            try:
                self.notifier.notify(player_id, achievement)
            except Exception as exc:
                logger.warning("Achievement notification failed: %s", exc)
