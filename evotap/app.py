"""EvoTap — Main Textual Application.

A single-player terminal client. It drives the same ``GameService`` the web
API uses, so every rule (costs, achievements, passive income) is shared.
"""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import Footer, Header

from evotap.data.achievements import AchievementDef
from evotap.engine.economy import compute_auto_evolutions, format_number, next_era
from evotap.engine.errors import GameError
from evotap.engine.service import GameService
from evotap.ui.hud import HUD
from evotap.ui.organelle_panel import OrganellePanel
from evotap.ui.organism_panel import OrganismPanel


class EvoTapApp(App):
    """The EvoTap TUI game application."""

    TITLE = "EvoTap — Evolution Clicker"
    SUB_TITLE = "Evolve. Mutate. Breed."

    CSS = """
    #game-container { height: 1fr; }
    #hud-panel { width: 1fr; }
    #organelle-panel { width: 1fr; }
    #organism-panel { width: 1fr; }
    """

    BINDINGS = [
        Binding("space", "evolve", "Evolve", show=True, priority=True),
        Binding("u", "unlock_era", "Unlock Era", show=True),
        Binding("m", "mutate", "Mutate", show=True),
        Binding("b", "breed", "Breed", show=True),
        Binding("x", "exchange", "Exchange", show=True),
        Binding("q", "quit_game", "Quit", show=True),
    ] + [
        Binding(str(n), f"buy_organelle({n - 1})", f"Buy #{n}", show=False)
        for n in range(1, 10)
    ]

    # Auto evolutions are submitted once per tick
    _TICK_INTERVAL: float = 1.0

    def __init__(self, service: GameService, player_id: str = "local") -> None:
        super().__init__()
        self._service = service
        self._player_id = player_id
        self._tick_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield OrganellePanel(self._service.config, id="organelle-panel")
            yield OrganismPanel(id="organism-panel")
        yield Footer()

    def on_mount(self) -> None:
        self._tick_timer = self.set_interval(self._TICK_INTERVAL, self._game_tick)
        self._sync_ui()

    def _game_tick(self) -> None:
        """Submit automatic evolutions and refresh (lookup also accrues passive DNA)."""
        state = self._service.get_player(self._player_id)
        auto = compute_auto_evolutions(state, self._service.config)
        if auto > 0:
            self._run(lambda: self._service.evolve(self._player_id, auto))
        self._sync_ui()

    def _sync_ui(self) -> None:
        """Push player state to all widgets."""
        state = self._service.get_player(self._player_id)
        balance = self._service.token_balance(self._player_id)
        cfg = self._service.config

        self.query_one("#hud-panel", HUD).update_from_state(state, balance, cfg)
        self.query_one("#organelle-panel", OrganellePanel).update_from_state(state)
        self.query_one("#organism-panel", OrganismPanel).update_from_state(state)

    def _run(self, operation):
        """Run a service call, turning game errors into notifications."""
        try:
            return operation()
        except GameError as err:
            self.notify(err.message, severity="error", timeout=2)
            return None

    def _announce(self, achievements: list[AchievementDef]) -> None:
        for achievement in achievements:
            self.notify(
                f"🏆 {achievement.name}! +{format_number(achievement.reward)} DNA",
                severity="warning", timeout=3,
            )

    # ── Actions ──────────────────────────────────────

    def action_evolve(self) -> None:
        result = self._run(lambda: self._service.evolve(self._player_id, 1))
        if result is not None:
            self._announce(result.new_achievements)
        self._sync_ui()

    def action_buy_organelle(self, index: int) -> None:
        organelles = self._service.config.organelles
        if index >= len(organelles):
            return
        result = self._run(lambda: self._service.buy_organelle(self._player_id, organelles[index].id))
        if result is not None:
            self.notify(f"{result.organelle}: {result.effect}", severity="information", timeout=2)
        self._sync_ui()

    def action_unlock_era(self) -> None:
        state = self._service.get_player(self._player_id)
        upcoming = next_era(state, self._service.config)
        if upcoming is None:
            self.notify("Every era is already unlocked.", severity="information", timeout=2)
            return
        result = self._run(lambda: self._service.unlock_era(self._player_id, upcoming.id))
        if result is not None:
            self.notify(f"{upcoming.emoji} {result.unlocked_era} unlocked!", severity="warning", timeout=3)
            self._announce(result.new_achievements)
        self._sync_ui()

    def action_mutate(self) -> None:
        result = self._run(lambda: self._service.mutate(self._player_id))
        if result is not None:
            o = result.organism
            self.notify(
                f"🧬 {o.name} ({o.rarity.label}, power {o.power}) for {format_number(result.cost)} DNA",
                severity="information", timeout=3,
            )
            self._announce(result.new_achievements)
        self._sync_ui()

    def action_breed(self) -> None:
        """Breed the two most recent organisms."""
        state = self._service.get_player(self._player_id)
        if len(state.organisms) < 2:
            self.notify("Need two organisms to breed.", severity="error", timeout=2)
            return
        a, b = state.organisms[-2], state.organisms[-1]
        result = self._run(lambda: self._service.breed(self._player_id, a.id, b.id))
        if result is not None:
            h = result.hybrid
            self.notify(
                f"🧬 {h.name} — Gen {h.generation}, {h.rarity.label}",
                severity="information", timeout=3,
            )
            self._announce(result.new_achievements)
        self._sync_ui()

    def action_exchange(self) -> None:
        """Exchange all DNA in whole-token multiples."""
        state = self._service.get_player(self._player_id)
        rate = self._service.config.economy.exchange_rate
        amount = (state.dna // rate) * rate
        result = self._run(lambda: self._service.exchange(self._player_id, amount))
        if result is not None:
            self.notify(
                f"💰 {result.tokens_received} tokens for {format_number(result.dna_used)} DNA",
                severity="information", timeout=2,
            )
        self._sync_ui()

    def action_quit_game(self) -> None:
        self.exit()
