"""Process logging for the intent relay.

Relay calls log a summary line for each upstream request and response (message count or search
query, status code); content previews go to DEBUG only. The parse endpoint logs which strategy produced each intent.
"""

from __future__ import annotations

import logging
import os


def configure_logging(level: str | None = None) -> None:
    """Set the root level from `level` or `LOG_LEVEL` (default INFO).

    httpx and httpcore log every outbound request at INFO, which would duplicate the relay's own
    summary lines, so both are held at WARNING.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
