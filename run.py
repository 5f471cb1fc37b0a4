"""Development server for the FX rate engine."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from rate_engine import create_app

ENV_FILE = Path(__file__).resolve().with_name(".env")

logger = logging.getLogger("rate_engine.run")


def main() -> None:
    load_dotenv(ENV_FILE)
    app = create_app(os.getenv("APP_ENV"))

    engine = app.extensions["conversion_engine"]
    logger.info(
        "Serving %d currencies; matrix sweep every %ss",
        len(engine.refresher.currencies),
        int(engine.cache.ttl.total_seconds()),
    )
    app.run(
        host=os.getenv("FLASK_RUN_HOST", "0.0.0.0"),
        port=int(os.getenv("FLASK_RUN_PORT", "5000")),
        debug=app.config.get("DEBUG", False),
    )


if __name__ == "__main__":
    main()
