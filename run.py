"""Entry point for the User Records API.

Starts the FastAPI application with Uvicorn.  Host and port come from
``HOST`` and ``PORT`` (see ``user_store_api.app.core.config``), which
may also be placed in ``backend.env`` next to this file.

Usage:
    python run.py
"""
import logging
import sys

from uvicorn import Config, Server

from user_store_api.app.core.config import settings
from user_store_api.app.main import app

logger = logging.getLogger(__name__)


def main() -> int:
    """Serve the API until interrupted.

    Returns a non-zero status when the server never started.  Uvicorn
    itself exits with status 1 when the listening socket cannot be
    bound.
    """
    config = Config(app=app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    server = Server(config)
    server.run()
    if not server.started:
        logger.error("Could not start server on %s:%s", settings.host, settings.port)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
