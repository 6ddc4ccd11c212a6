"""HUD widget — DNA counter, level, era and rates."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from evotap.data.balance import DEFAULT_CONFIG, GameConfig
from evotap.engine.economy import (
    compute_auto_evolutions,
    compute_multiplier,
    current_era,
    format_number,
    next_era,
)
from evotap.engine.organisms import mutation_cost
from evotap.engine.player_state import PlayerState


class HUD(Widget):
    """Heads-up display showing core player stats."""

    DEFAULT_CSS = """
    HUD {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    dna: reactive[str] = reactive("0")
    level: reactive[int] = reactive(1)
    era_name: reactive[str] = reactive("")
    era_emoji: reactive[str] = reactive("")
    per_evolve: reactive[str] = reactive("1")
    passive: reactive[str] = reactive("0/s")
    auto: reactive[int] = reactive(0)
    eps: reactive[str] = reactive("0")
    evolutions: reactive[int] = reactive(0)
    tokens: reactive[int] = reactive(0)
    mutation_cost: reactive[str] = reactive("")
    goal_text: reactive[str] = reactive("")
    goal_pct: reactive[float] = reactive(0.0)

    def render(self) -> Text:
        text = Text()

        text.append(f"  === {self.era_emoji} {self.era_name} ===\n\n", style="bold cyan")

        text.append("  DNA: ", style="dim")
        text.append(f"{self.dna}\n", style="bold green")

        text.append("  Per Evolution: ", style="dim")
        text.append(f"{self.per_evolve}\n", style="green")

        text.append("  Passive: ", style="dim")
        text.append(f"{self.passive}\n", style="green")

        text.append("  Auto: ", style="dim")
        text.append(f"{self.auto}/s\n", style="green")

        text.append("\n")

        text.append("  Level: ", style="dim")
        text.append(f"{self.level}\n", style="bold cyan")
        text.append("  Evolutions: ", style="dim")
        text.append(f"{self.evolutions}\n", style="cyan")
        text.append("  Evo/s: ", style="dim")
        text.append(f"{self.eps}\n", style="cyan")

        text.append("\n")

        text.append("  Tokens: ", style="dim")
        text.append(f"{self.tokens}\n", style="bold yellow")
        text.append("  Next Mutation: ", style="dim")
        text.append(f"{self.mutation_cost}\n", style="yellow")

        text.append("\n")

        if self.goal_text:
            text.append("  Goal: ", style="dim")
            text.append(f"{self.goal_text}\n", style="bold white")
            bar_width = 16
            filled = int(self.goal_pct * bar_width)
            bar = "#" * filled + "." * (bar_width - filled)
            text.append(f"  [{bar}] {self.goal_pct * 100:.0f}%\n", style="green")
            text.append("\n")

        text.append("  [Space] Evolve  [1-8] Buy\n", style="dim italic")
        text.append("  [U] Unlock era  [M] Mutate\n", style="dim italic")
        text.append("  [B] Breed  [X] Exchange\n", style="dim italic")
        text.append("  [Q] Quit\n", style="dim italic")

        return text

    def update_from_state(
        self,
        state: PlayerState,
        token_balance: int = 0,
        config: GameConfig = DEFAULT_CONFIG,
    ) -> None:
        """Sync HUD with player state."""
        era = current_era(state, config)
        self.dna = format_number(state.dna)
        self.level = state.level
        self.era_name = era.name
        self.era_emoji = era.emoji
        self.per_evolve = format_number(compute_multiplier(state, config))
        self.passive = f"{format_number(state.passive_income)}/s"
        self.auto = compute_auto_evolutions(state, config)
        self.eps = f"{state.evolutions_per_second:.1f}"
        self.evolutions = state.total_evolutions
        self.tokens = token_balance
        self.mutation_cost = format_number(mutation_cost(state, config))

        upcoming = next_era(state, config)
        if upcoming is None:
            self.goal_text = "All eras unlocked"
            self.goal_pct = 1.0
        else:
            self.goal_text = f"{upcoming.name} at {format_number(upcoming.unlock_cost)}"
            self.goal_pct = min(state.dna / upcoming.unlock_cost, 1.0) if upcoming.unlock_cost else 1.0
