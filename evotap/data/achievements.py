"""Achievement definitions — one-time milestones with a DNA reward."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AchievementMetric(Enum):
    """Which player statistic an achievement watches."""

    EVOLUTIONS = "evolutions"
    ERAS_UNLOCKED = "eras"
    ORGANISMS_OWNED = "organisms"
    EVOLUTIONS_PER_SECOND = "eps"


@dataclass(frozen=True)
class AchievementDef:
    """Definition of a single achievement."""

    id: str
    name: str
    metric: AchievementMetric
    threshold: float
    # DNA credited when earned
    reward: float
    # Reward token minted on the ledger when earned (None = no token)
    reward_token: str | None = None


# Declaration order is evaluation order.
ALL_ACHIEVEMENTS: tuple[AchievementDef, ...] = (
    AchievementDef(
        id="first_cell",
        name="First Cell",
        metric=AchievementMetric.EVOLUTIONS,
        threshold=1,
        reward=10,
        reward_token="Bronze Cell",
    ),
    AchievementDef(
        id="cell_division",
        name="Cell Division",
        metric=AchievementMetric.EVOLUTIONS,
        threshold=10,
        reward=25,
    ),
    AchievementDef(
        id="colony",
        name="Colony",
        metric=AchievementMetric.EVOLUTIONS,
        threshold=100,
        reward=100,
        reward_token="Silver Colony",
    ),
    AchievementDef(
        id="multicellularity",
        name="Multicellularity",
        metric=AchievementMetric.EVOLUTIONS,
        threshold=1_000,
        reward=500,
        reward_token="Gold Organism",
    ),
    AchievementDef(
        id="complex_life",
        name="Complex Life",
        metric=AchievementMetric.EVOLUTIONS,
        threshold=10_000,
        reward=2_500,
        reward_token="Diamond Life",
    ),
    AchievementDef(
        id="evolutionary_leap",
        name="Evolutionary Leap",
        metric=AchievementMetric.ERAS_UNLOCKED,
        threshold=2,
        reward=1_000,
        reward_token="Epic Evolution",
    ),
    AchievementDef(
        id="evolution_master",
        name="Master of Evolution",
        metric=AchievementMetric.ERAS_UNLOCKED,
        threshold=5,
        reward=10_000,
        reward_token="Mythic Master",
    ),
    AchievementDef(
        id="gene_collector",
        name="Gene Collector",
        metric=AchievementMetric.ORGANISMS_OWNED,
        threshold=10,
        reward=5_000,
        reward_token="Legendary Collector",
    ),
    AchievementDef(
        id="speed_evolution",
        name="Speed Evolution",
        metric=AchievementMetric.EVOLUTIONS_PER_SECOND,
        threshold=100,
        reward=7_500,
        reward_token="Cosmic Speed",
    ),
)
