"""Leaderboard — three independent top-N rankings over all players."""

from __future__ import annotations

from typing import Callable, Iterable

from evotap.data.balance import DEFAULT_CONFIG, GameConfig
from evotap.engine.economy import current_era
from evotap.engine.player_state import PlayerState


def rank_players(
    players: Iterable[PlayerState],
    key: Callable[[PlayerState], float],
    limit: int,
) -> list[tuple[int, PlayerState]]:
    """Sort descending by ``key`` and assign ranks starting at 1.

    The sort is stable: players with equal keys keep their input order.
    """
    ordered = sorted(players, key=key, reverse=True)
    return [(rank, player) for rank, player in enumerate(ordered[:limit], start=1)]


def build_leaderboard(
    players: list[PlayerState],
    limit: int | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> dict:
    """Top players by evolutions, by level and by organism count."""
    if limit is None:
        limit = config.leaderboard_size

    top_evolutions = [
        {
            "rank": rank,
            "user_id": p.player_id,
            "total_evolutions": p.total_evolutions,
            "era": current_era(p, config).name,
        }
        for rank, p in rank_players(players, lambda p: p.total_evolutions, limit)
    ]

    top_level = [
        {
            "rank": rank,
            "user_id": p.player_id,
            "level": p.level,
            "experience": p.experience,
        }
        for rank, p in rank_players(players, lambda p: p.level, limit)
    ]

    top_organisms = []
    for rank, p in rank_players(players, lambda p: len(p.organisms), limit):
        rarest = p.rarest_organism
        top_organisms.append({
            "rank": rank,
            "user_id": p.player_id,
            "organisms": len(p.organisms),
            "rarest": rarest.label if rarest is not None else "None",
        })

    return {
        "top_evolutions": top_evolutions,
        "top_level": top_level,
        "top_organisms": top_organisms,
        "total_players": len(players),
        "total_evolutions": sum(p.total_evolutions for p in players),
    }
