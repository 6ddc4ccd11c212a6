"""Player persistence — swappable store backends and (de)serialisation."""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path
from urllib.parse import quote

from evotap.data.traits import Rarity
from evotap.engine.player_state import Organism, PlayerState

SAVE_DIR = Path.home() / ".evotap" / "players"


# ── Serialisation helpers ────────────────────────────────────────


def organism_to_dict(o: Organism) -> dict:
    return {
        "id": o.id,
        "name": o.name,
        "rarity": o.rarity.label,
        "era": o.era,
        "traits": dict(o.traits),
        "power": o.power,
        "generation": o.generation,
        "parents": list(o.parents),
        "created_at": o.created_at,
        "reward_token_id": o.reward_token_id,
    }


def organism_from_dict(d: dict) -> Organism:
    return Organism(
        id=d["id"],
        name=d.get("name", ""),
        rarity=Rarity.from_label(d.get("rarity", "Common")),
        era=d.get("era", "cellular"),
        traits=dict(d.get("traits", {})),
        power=d.get("power", 0),
        generation=d.get("generation", 1),
        parents=list(d.get("parents", [])),
        created_at=d.get("created_at", time.time()),
        reward_token_id=d.get("reward_token_id"),
    )


def player_to_dict(state: PlayerState) -> dict:
    s = state
    return {
        "id": s.player_id,
        "dna": s.dna,
        "total_evolutions": s.total_evolutions,
        "experience": s.experience,
        "level": s.level,
        "current_era": s.current_era,
        "unlocked_eras": list(s.unlocked_eras),
        "organelles": list(s.organelles),
        "organisms": [organism_to_dict(o) for o in s.organisms],
        "achievements": list(s.achievements),
        "passive_income": s.passive_income,
        "evolutions_per_second": s.evolutions_per_second,
        "last_evolve_at": s.last_evolve_at,
        "last_update_at": s.last_update_at,
        "created_at": s.created_at,
        "tokens_received": s.tokens_received,
    }


def player_from_dict(d: dict) -> PlayerState:
    return PlayerState(
        player_id=d["id"],
        dna=d.get("dna", 0.0),
        total_evolutions=d.get("total_evolutions", 0),
        experience=d.get("experience", 0.0),
        level=d.get("level", 1),
        current_era=d.get("current_era", "cellular"),
        unlocked_eras=list(d.get("unlocked_eras", ["cellular"])),
        organelles=list(d.get("organelles", [])),
        organisms=[organism_from_dict(o) for o in d.get("organisms", [])],
        achievements=list(d.get("achievements", [])),
        passive_income=d.get("passive_income", 0.0),
        evolutions_per_second=d.get("evolutions_per_second", 0.0),
        last_evolve_at=d.get("last_evolve_at"),
        last_update_at=d.get("last_update_at"),
        created_at=d.get("created_at", time.time()),
        tokens_received=d.get("tokens_received", 0),
    )


# ── Backends ─────────────────────────────────────────────────────


class PlayerStore:
    """Persistence collaborator. Backends override ``save`` and ``load``."""

    def save(self, player_id: str, state: PlayerState) -> None:
        raise NotImplementedError

    def load(self, player_id: str) -> PlayerState | None:
        raise NotImplementedError


class InMemoryPlayerStore(PlayerStore):
    """Keeps serialised snapshots in a dict for the life of the process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshots: dict[str, dict] = {}

    def save(self, player_id: str, state: PlayerState) -> None:
        snapshot = player_to_dict(state)
        with self._lock:
            self._snapshots[player_id] = snapshot

    def load(self, player_id: str) -> PlayerState | None:
        with self._lock:
            snapshot = self._snapshots.get(player_id)
        if snapshot is None:
            return None
        return player_from_dict(snapshot)

    def __len__(self) -> int:
        return len(self._snapshots)


class JsonFilePlayerStore(PlayerStore):
    """One JSON file per player under ``directory``."""

    def __init__(self, directory: Path | str = SAVE_DIR) -> None:
        self.directory = Path(directory)

    def path_for(self, player_id: str) -> Path:
        return self.directory / f"{quote(player_id, safe='')}.json"

    def save(self, player_id: str, state: PlayerState) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_for(player_id).write_text(json.dumps(player_to_dict(state), indent=2))

    def load(self, player_id: str) -> PlayerState | None:
        path = self.path_for(player_id)
        if not path.exists():
            return None
        return player_from_dict(json.loads(path.read_text()))
