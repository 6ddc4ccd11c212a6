"""Entry point for the web version: python -m evotap.web"""

import argparse
import logging
import os
import sys

from evotap.engine.service import GameService
from evotap.engine.store import SAVE_DIR, InMemoryPlayerStore, JsonFilePlayerStore
from evotap.web.server import run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="EvoTap — Web API")
    parser.add_argument("--host", default=os.environ.get("EVOTAP_HOST", "127.0.0.1"),
                        help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=int(os.environ.get("EVOTAP_PORT", "3002")),
                        help="Port (default: 3002)")
    parser.add_argument("--save-dir", default=os.environ.get("EVOTAP_SAVE_DIR", str(SAVE_DIR)),
                        help="Directory for player JSON files")
    parser.add_argument("--memory", action="store_true", help="Keep players in memory only")
    parser.add_argument("--log-level", default=os.environ.get("EVOTAP_LOG_LEVEL", "INFO"),
                        help="Logging level (default: INFO)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger = logging.getLogger("evotap")

    store = InMemoryPlayerStore() if args.memory else JsonFilePlayerStore(args.save_dir)
    logger.info("🧬 EvoTap starting on http://%s:%d/", args.host, args.port)
    if not args.memory:
        logger.info("Saving players to %s", args.save_dir)

    run_server(GameService(store=store), host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
