"""Outbound collaborators — reward-token ledger and achievement notifications.

Both are best effort from the game's point of view: the service logs and
ignores their failures, except during a DNA exchange.
"""

from __future__ import annotations

import itertools
import logging
import threading

from evotap.data.achievements import AchievementDef

logger = logging.getLogger(__name__)


class RewardLedger:
    """Issues reward tokens. Backends override every method."""

    def mint_reward(self, player_id: str, descriptor: str, game_tag: str) -> str:
        """Mint a one-off reward token and return its id."""
        raise NotImplementedError

    def mint_tokens(self, player_id: str, amount: int, game_tag: str) -> None:
        """Credit ``amount`` fungible tokens to the player."""
        raise NotImplementedError

    def balance(self, player_id: str) -> int:
        raise NotImplementedError


class LocalRewardLedger(RewardLedger):
    """In-process ledger: sequential token ids and per-player balances."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._balances: dict[str, int] = {}
        self._rewards: dict[str, list[tuple[str, str]]] = {}

    def mint_reward(self, player_id: str, descriptor: str, game_tag: str) -> str:
        with self._lock:
            token_id = f"{game_tag}-{next(self._ids)}"
            self._rewards.setdefault(player_id, []).append((token_id, descriptor))
        logger.info("Reward token %s (%s) minted for %s", token_id, descriptor, player_id)
        return token_id

    def mint_tokens(self, player_id: str, amount: int, game_tag: str) -> None:
        with self._lock:
            self._balances[player_id] = self._balances.get(player_id, 0) + amount
        logger.info("%d %s tokens issued to %s", amount, game_tag, player_id)

    def balance(self, player_id: str) -> int:
        with self._lock:
            return self._balances.get(player_id, 0)

    def rewards(self, player_id: str) -> list[tuple[str, str]]:
        with self._lock:
            return list(self._rewards.get(player_id, []))


class Notifier:
    """Delivers achievement notifications."""

    def notify(self, player_id: str, achievement: AchievementDef) -> None:
        raise NotImplementedError


class LogNotifier(Notifier):
    def notify(self, player_id: str, achievement: AchievementDef) -> None:
        logger.info("🏆 %s earned achievement %r", player_id, achievement.name)
