"""Achievement evaluation — run after every mutation that moves a tracked metric."""

from __future__ import annotations

from evotap.data.achievements import AchievementDef, AchievementMetric
from evotap.data.balance import DEFAULT_CONFIG, GameConfig
from evotap.engine.player_state import PlayerState


def metric_value(state: PlayerState, metric: AchievementMetric) -> float:
    """Current value of the statistic an achievement watches."""
    if metric == AchievementMetric.EVOLUTIONS:
        return state.total_evolutions
    if metric == AchievementMetric.ERAS_UNLOCKED:
        return len(state.unlocked_eras)
    if metric == AchievementMetric.ORGANISMS_OWNED:
        return len(state.organisms)
    if metric == AchievementMetric.EVOLUTIONS_PER_SECOND:
        return state.evolutions_per_second
    return 0.0


def check_achievements(
    state: PlayerState,
    config: GameConfig = DEFAULT_CONFIG,
) -> list[AchievementDef]:
    """Award every unearned achievement whose threshold has been reached.

    Achievements are evaluated in declaration order. Each one is recorded,
    its DNA reward credited, and returned so the caller can issue reward
    tokens and notifications.
    """
    earned: list[AchievementDef] = []
    for achievement in config.achievements:
        if achievement.id in state.achievements:
            continue
        if metric_value(state, achievement.metric) < achievement.threshold:
            continue
        state.achievements.append(achievement.id)
        state.dna += achievement.reward
        earned.append(achievement)
    return earned
