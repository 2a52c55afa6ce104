"""HTTP server process entrypoint."""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from intent_relay.app import create_app
from intent_relay.config.logging import configure_logging
from intent_relay.config.settings import load_settings
from intent_relay.web.server import create_api

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the relay HTTP server."""

    # `LOG_LEVEL` is read from the process environment, so export `.env` before logging is set up.
    load_dotenv(".env")
    settings = load_settings()
    configure_logging()

    api = create_api(create_app(settings))

    logger.info("proxy server running on http://localhost:%d", settings.port)
    uvicorn.run(api, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
