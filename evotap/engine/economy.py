"""Economy engine — DNA generation, spending, exchange and number formatting."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable

from evotap.data.achievements import AchievementDef
from evotap.data.balance import DEFAULT_CONFIG, GameConfig
from evotap.data.eras import EraDef
from evotap.data.organelles import OrganelleEffect
from evotap.engine.achievements import check_achievements
from evotap.engine.errors import (
    AlreadyOwnedError,
    AlreadyUnlockedError,
    BelowMinimumError,
    ExchangeFailedError,
    InsufficientFundsError,
    InvalidInputError,
    NotFoundError,
)
from evotap.engine.player_state import PlayerState


@dataclass
class EvolveResult:
    dna_earned: float
    total_dna: float
    level: int
    current_era: str
    auto_evolutions: int
    new_achievements: list[AchievementDef] = field(default_factory=list)


@dataclass
class PurchaseResult:
    organelle: str
    remaining_dna: float
    effect: str


@dataclass
class UnlockResult:
    unlocked_era: str
    remaining_dna: float
    new_achievements: list[AchievementDef] = field(default_factory=list)


@dataclass
class ExchangeResult:
    dna_used: float
    tokens_received: int
    remaining_dna: float


def new_player(player_id: str, config: GameConfig = DEFAULT_CONFIG) -> PlayerState:
    """Create a fresh player starting in the first era."""
    start = config.starting_era.id
    return PlayerState(
        player_id=player_id,
        current_era=start,
        unlocked_eras=[start],
    )


def current_era(state: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> EraDef:
    """The player's current era, falling back to the starting era."""
    return config.find_era(state.current_era) or config.starting_era


def compute_level(experience: float, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Level = floor(sqrt(experience / experience_per_level)) + 1."""
    per_level = config.economy.experience_per_level
    return int(math.floor(math.sqrt(max(experience, 0.0) / per_level))) + 1


def compute_multiplier(state: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> float:
    """DNA per evolution: era multiplier × every owned DNA_MULTIPLIER organelle."""
    multiplier = current_era(state, config).multiplier
    for oid in state.organelles:
        organelle = config.find_organelle(oid)
        if organelle and organelle.effect == OrganelleEffect.DNA_MULTIPLIER:
            multiplier *= organelle.value
    return multiplier


def compute_auto_evolutions(state: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Automatic evolutions per second granted by owned organelles."""
    total = 0.0
    for oid in state.organelles:
        organelle = config.find_organelle(oid)
        if organelle and organelle.effect == OrganelleEffect.AUTO_EVOLVE:
            total += organelle.value
    return int(total)


def is_protected(state: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> bool:
    for oid in state.organelles:
        organelle = config.find_organelle(oid)
        if organelle and organelle.effect == OrganelleEffect.PROTECTION:
            return True
    return False


def evolve(
    state: PlayerState,
    clicks: int = 1,
    now: float | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> EvolveResult:
    """Apply ``clicks`` evolutions. Client-submitted counts are trusted."""
    if isinstance(clicks, bool) or not isinstance(clicks, int) or clicks < 1:
        raise InvalidInputError("clicks must be a positive integer")
    try:
        float(clicks)
    except OverflowError:
        raise InvalidInputError("clicks is too large") from None
    if now is None:
        now = time.time()

    era = current_era(state, config)
    earned = clicks * compute_multiplier(state, config)

    state.dna += earned
    state.total_evolutions += clicks
    state.experience += clicks
    state.level = compute_level(state.experience, config)

    # Rate stays at its previous value until two evolutions are timestamped apart
    if state.last_evolve_at is not None:
        elapsed = now - state.last_evolve_at
        if elapsed > 0:
            state.evolutions_per_second = clicks / elapsed
    state.last_evolve_at = now

    new_achievements = check_achievements(state, config)

    return EvolveResult(
        dna_earned=earned,
        total_dna=state.dna,
        level=state.level,
        current_era=era.name,
        auto_evolutions=compute_auto_evolutions(state, config),
        new_achievements=new_achievements,
    )


def purchase_organelle(
    state: PlayerState,
    organelle_id: str,
    config: GameConfig = DEFAULT_CONFIG,
) -> PurchaseResult:
    """Buy an organelle once at its flat cost."""
    organelle = config.find_organelle(organelle_id)
    if organelle is None:
        raise NotFoundError(f"Organelle not found: {organelle_id}")
    if organelle_id in state.organelles:
        raise AlreadyOwnedError(f"Organelle already owned: {organelle.name}")
    if state.dna < organelle.cost:
        raise InsufficientFundsError("Not enough DNA")

    state.dna -= organelle.cost
    state.organelles.append(organelle_id)

    if organelle.effect == OrganelleEffect.PASSIVE_INCOME:
        state.passive_income += organelle.value

    return PurchaseResult(
        organelle=organelle.name,
        remaining_dna=state.dna,
        effect=organelle.description,
    )


def unlock_era(
    state: PlayerState,
    era_id: str,
    config: GameConfig = DEFAULT_CONFIG,
) -> UnlockResult:
    """Unlock an era and make it current."""
    era = config.find_era(era_id)
    if era is None:
        raise NotFoundError(f"Era not found: {era_id}")
    if era_id in state.unlocked_eras:
        raise AlreadyUnlockedError(f"Era already unlocked: {era.name}")
    if state.dna < era.unlock_cost:
        raise InsufficientFundsError("Not enough DNA to unlock era")

    state.dna -= era.unlock_cost
    state.unlocked_eras.append(era_id)
    state.current_era = era_id

    new_achievements = check_achievements(state, config)

    return UnlockResult(
        unlocked_era=era.name,
        remaining_dna=state.dna,
        new_achievements=new_achievements,
    )


def next_era(state: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> EraDef | None:
    """Cheapest era the player has not unlocked yet."""
    for era in config.eras:
        if era.id not in state.unlocked_eras:
            return era
    return None


def accrue_passive(
    state: PlayerState,
    now: float | None = None,
) -> float:
    """Credit passive income earned since the last lookup. Returns DNA earned."""
    if now is None:
        now = time.time()
    earned = 0.0
    if state.last_update_at is not None:
        elapsed = max(0.0, now - state.last_update_at)
        earned = float(math.floor(state.passive_income * elapsed))
        state.dna += earned
    state.last_update_at = now
    return earned


def exchange_dna(
    state: PlayerState,
    amount: float,
    issue_tokens: Callable[[int], object],
    config: GameConfig = DEFAULT_CONFIG,
) -> ExchangeResult:
    """Swap DNA for reward tokens.

    The DNA is debited before ``issue_tokens`` is called. If issuance raises,
    the debit is reversed and ``ExchangeFailedError`` is raised.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidInputError("dna_amount must be a number")
    try:
        finite = math.isfinite(amount)
    except OverflowError:
        finite = False
    if not finite:
        raise InvalidInputError("dna_amount must be finite")
    bal = config.economy
    if amount < bal.exchange_minimum:
        raise BelowMinimumError(f"Minimum {bal.exchange_minimum:.0f} DNA to exchange")
    if amount > state.dna:
        raise InsufficientFundsError("Not enough DNA")

    tokens = int(amount // bal.exchange_rate)

    state.dna -= amount
    try:
        issue_tokens(tokens)
    except Exception as exc:
        state.dna += amount
        raise ExchangeFailedError(f"Token issuance failed: {exc}") from exc

    state.tokens_received += tokens
    return ExchangeResult(
        dna_used=amount,
        tokens_received=tokens,
        remaining_dna=state.dna,
    )


def format_number(n: float, config: GameConfig = DEFAULT_CONFIG) -> str:
    """Format a number with suffixes for readability."""
    if n < 0:
        return f"-{format_number(-n, config)}"

    for threshold, suffix in reversed(config.economy.suffixes):
        if n >= threshold:
            value = n / threshold
            if value >= 100:
                return f"{value:.0f}{suffix}"
            elif value >= 10:
                return f"{value:.1f}{suffix}"
            else:
                return f"{value:.2f}{suffix}"

    if n >= 100:
        return f"{n:.0f}"
    elif n >= 10:
        return f"{n:.1f}"
    elif n == int(n):
        return str(int(n))
    else:
        return f"{n:.1f}"
