"""EvoTap Web — Flask server that wraps the game service.

Exposes a JSON API for player actions. Passive income is accrued lazily:
every request that touches a player catches up on elapsed time first.
"""

from __future__ import annotations

from flask import Flask, jsonify, request

from evotap.data.achievements import AchievementDef
from evotap.data.traits import Rarity
from evotap.engine.errors import GameError, InvalidInputError
from evotap.engine.service import GameService
from evotap.engine.store import organism_to_dict


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------

def _achievement_json(a: AchievementDef) -> dict:
    return {
        "id": a.id,
        "name": a.name,
        "type": a.metric.value,
        "requirement": a.threshold,
        "reward": a.reward,
        "reward_token": a.reward_token,
    }


def _catalog(service: GameService) -> dict:
    cfg = service.config
    return {
        "eras": [
            {
                "id": e.id,
                "name": e.name,
                "emoji": e.emoji,
                "description": e.description,
                "unlock_cost": e.unlock_cost,
                "multiplier": e.multiplier,
                "max_level": e.max_level,
            }
            for e in cfg.eras
        ],
        "organelles": [
            {
                "id": o.id,
                "name": o.name,
                "emoji": o.emoji,
                "cost": o.cost,
                "effect": o.description,
                "effect_type": o.effect.name.lower(),
                "value": o.value,
            }
            for o in cfg.organelles
        ],
        "achievements": [_achievement_json(a) for a in cfg.achievements],
        "traits": [
            {"id": t.id, "name": t.name, "values": list(t.values)}
            for t in cfg.traits
        ],
        "rarities": [
            {"name": r.label, "weight": w}
            for r, w in zip(Rarity, cfg.genetics.rarity_weights)
        ],
        "costs": {
            "base_mutation": cfg.genetics.base_mutation_cost,
            "breeding": cfg.genetics.breeding_cost,
            "exchange_minimum": cfg.economy.exchange_minimum,
            "exchange_rate": cfg.economy.exchange_rate,
        },
    }


def _body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _require(body: dict, key: str):
    value = body.get(key)
    if value is None or value == "":
        raise InvalidInputError(f"{key} is required")
    return value


# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

def create_app(service: GameService | None = None) -> Flask:
    """Build the Flask app around ``service`` (a fresh in-memory one by default)."""
    app = Flask(__name__)
    game = service if service is not None else GameService()
    app.config["GAME_SERVICE"] = game

    @app.errorhandler(GameError)
    def handle_game_error(err: GameError):
        return jsonify(err.to_dict()), err.status

    # ── Players ──────────────────────────────────────────────

    @app.route("/api/player/<user_id>")
    def api_player(user_id: str):
        return jsonify(game.player_view(user_id))

    @app.route("/api/nfts/<user_id>")
    def api_nfts(user_id: str):
        return jsonify([organism_to_dict(o) for o in game.list_organisms(user_id)])

    # ── Actions ──────────────────────────────────────────────

    @app.route("/api/evolve", methods=["POST"])
    def action_evolve():
        body = _body()
        user_id = _require(body, "user_id")
        result = game.evolve(user_id, body.get("clicks", 1))
        return jsonify({
            "success": True,
            "dna_earned": result.dna_earned,
            "total_dna": result.total_dna,
            "level": result.level,
            "current_era": result.current_era,
            "auto_evolutions": result.auto_evolutions,
            "new_achievements": [_achievement_json(a) for a in result.new_achievements],
        })

    @app.route("/api/buy-organelle", methods=["POST"])
    def action_buy_organelle():
        body = _body()
        user_id = _require(body, "user_id")
        result = game.buy_organelle(user_id, _require(body, "organelle_id"))
        return jsonify({
            "success": True,
            "organelle": result.organelle,
            "remaining_dna": result.remaining_dna,
            "effect": result.effect,
        })

    @app.route("/api/unlock-era", methods=["POST"])
    def action_unlock_era():
        body = _body()
        user_id = _require(body, "user_id")
        result = game.unlock_era(user_id, _require(body, "era_id"))
        return jsonify({
            "success": True,
            "unlocked_era": result.unlocked_era,
            "remaining_dna": result.remaining_dna,
            "new_achievements": [_achievement_json(a) for a in result.new_achievements],
        })

    @app.route("/api/mutate", methods=["POST"])
    def action_mutate():
        user_id = _require(_body(), "user_id")
        result = game.mutate(user_id)
        return jsonify({
            "success": True,
            "organism": organism_to_dict(result.organism),
            "cost": result.cost,
            "remaining_dna": result.remaining_dna,
            "new_achievements": [_achievement_json(a) for a in result.new_achievements],
        })

    @app.route("/api/breed", methods=["POST"])
    def action_breed():
        body = _body()
        user_id = _require(body, "user_id")
        result = game.breed(
            user_id,
            _require(body, "organism1_id"),
            _require(body, "organism2_id"),
        )
        return jsonify({
            "success": True,
            "hybrid": organism_to_dict(result.hybrid),
            "cost": result.cost,
            "remaining_dna": result.remaining_dna,
            "new_achievements": [_achievement_json(a) for a in result.new_achievements],
        })

    @app.route("/api/exchange-dna", methods=["POST"])
    def action_exchange():
        body = _body()
        user_id = _require(body, "user_id")
        result = game.exchange(user_id, _require(body, "dna_amount"))
        return jsonify({
            "success": True,
            "dna_used": result.dna_used,
            "tokens_received": result.tokens_received,
            "remaining_dna": result.remaining_dna,
        })

    # ── Static tables ────────────────────────────────────────

    @app.route("/api/eras")
    def api_eras():
        return jsonify(_catalog(game)["eras"])

    @app.route("/api/organelles")
    def api_organelles():
        return jsonify(_catalog(game)["organelles"])

    @app.route("/api/achievements")
    def api_achievements():
        return jsonify(_catalog(game)["achievements"])

    @app.route("/api/config")
    def api_config():
        return jsonify(_catalog(game))

    # ── Rankings / health ────────────────────────────────────

    @app.route("/api/leaderboard")
    def api_leaderboard():
        limit = request.args.get("limit", default=game.config.leaderboard_size, type=int)
        if limit is None or limit < 1:
            raise InvalidInputError("limit must be a positive integer")
        return jsonify(game.leaderboard(limit))

    @app.route("/health")
    @app.route("/api/health")
    def health():
        return jsonify(game.health())

    return app


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(
    service: GameService | None = None,
    host: str = "127.0.0.1",
    port: int = 3002,
    debug: bool = False,
) -> None:
    """Start the Flask development server."""
    app = create_app(service)
    app.run(host=host, port=port, debug=debug, use_reloader=False, threaded=True)
