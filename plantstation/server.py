"""Entry point for the PlantStation dashboard server.

Host, port and debug come from the same ``PLANTSTATION_*`` environment
variables as the rest of the configuration.
"""
from __future__ import annotations

import logging

from plantstation import create_app
from plantstation.config import load_config
from plantstation.domain.exceptions import ConfigurationError


def main() -> int:
    try:
        config = load_config()
        app = create_app()
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logging.error("Invalid configuration: %s", exc)
        return 2

    logging.info("Starting server on %s:%s", config.host, config.port)
    try:
        app.run(host=config.host, port=config.port, debug=config.DEBUG, use_reloader=False)
        logging.info("Server stopped.")
        return 0
    except KeyboardInterrupt:
        logging.info("Server stopped by user.")
        return 0
    except Exception as exc:  # pragma: no cover - top-level runtime errors
        logging.exception("ERROR: Failed to start server: %s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
