"""Organelle panel — the purchasable organelles with cost and ownership."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from evotap.data.balance import DEFAULT_CONFIG, GameConfig
from evotap.engine.economy import format_number
from evotap.engine.player_state import PlayerState


class OrganellePanel(Widget):
    """Lists every organelle; number keys buy them."""

    DEFAULT_CSS = """
    OrganellePanel {
        width: 100%;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    # Serialized ownership/affordability for reactivity
    fingerprint: reactive[str] = reactive("")

    def __init__(self, config: GameConfig = DEFAULT_CONFIG, **kwargs) -> None:
        super().__init__(**kwargs)
        self._config = config
        self._state: PlayerState | None = None

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Organelles ═══\n\n", style="bold magenta")

        if self._state is None:
            return text

        for i, organelle in enumerate(self._config.organelles):
            owned = organelle.id in self._state.organelles
            affordable = self._state.dna >= organelle.cost

            text.append(f"  [{i + 1}] ", style="bold")
            if owned:
                text.append(f"{organelle.emoji} {organelle.name} ", style="dim")
                text.append("OWNED\n", style="bold green")
            else:
                name_style = "bold green" if affordable else "bold red"
                text.append(f"{organelle.emoji} {organelle.name}\n", style=name_style)

            text.append(f"      {organelle.description}\n", style="dim italic")

            if not owned:
                cost_style = "green" if affordable else "red"
                text.append(f"      Cost: {format_number(organelle.cost)} DNA\n", style=cost_style)

            text.append("\n")

        return text

    def update_from_state(self, state: PlayerState) -> None:
        """Sync panel with player state."""
        self._state = state
        self.fingerprint = ",".join(
            f"{o.id}:{int(o.id in state.organelles)}:{int(state.dna >= o.cost)}"
            for o in self._config.organelles
        )
