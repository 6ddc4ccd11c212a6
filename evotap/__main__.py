"""Entry point for EvoTap."""

import os

from evotap.app import EvoTapApp
from evotap.engine.service import GameService
from evotap.engine.store import SAVE_DIR, JsonFilePlayerStore


def main() -> None:
    store = JsonFilePlayerStore(os.environ.get("EVOTAP_SAVE_DIR", str(SAVE_DIR)))
    app = EvoTapApp(GameService(store=store), player_id=os.environ.get("EVOTAP_PLAYER", "local"))
    app.run()


if __name__ == "__main__":
    main()
