"""Organism panel — the player's most recent organisms."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from evotap.data.traits import Rarity
from evotap.engine.player_state import PlayerState

RARITY_STYLES = {
    Rarity.COMMON: "white",
    Rarity.RARE: "bold blue",
    Rarity.EPIC: "bold magenta",
    Rarity.LEGENDARY: "bold yellow",
    Rarity.MYTHIC: "bold red",
}


class OrganismPanel(Widget):
    DEFAULT_CSS = """
    OrganismPanel {
        width: 100%;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    count: reactive[int] = reactive(0)
    shown: int = 6

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state: PlayerState | None = None

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Organisms ═══\n\n", style="bold magenta")

        if self._state is None or not self._state.organisms:
            text.append("  None yet...\n", style="dim italic")
            text.append("  Press [M] to mutate.\n", style="dim italic")
            return text

        for organism in reversed(self._state.organisms[-self.shown:]):
            text.append(f"  {organism.name}\n", style=RARITY_STYLES[organism.rarity])
            text.append(
                f"      {organism.rarity.label} · Gen {organism.generation} · Power {organism.power}\n",
                style="dim",
            )
            traits = ", ".join(organism.traits.values())
            text.append(f"      {traits}\n\n", style="dim italic")

        hidden = len(self._state.organisms) - self.shown
        if hidden > 0:
            text.append(f"  …and {hidden} more\n", style="dim")
        return text

    def update_from_state(self, state: PlayerState) -> None:
        self._state = state
        self.count = len(state.organisms)
