"""Entry point for the Farm Service API.

Starts the API under Uvicorn.  It is intended to be executed from the
project root, for example under Pterodactyl or Docker, where you only
specify a single Python file to run.

Configuration such as PORT and DATABASE_URL may be placed in a `.env`
file in the same directory.

Usage:
    python run.py

Uvicorn handles SIGINT/SIGTERM and runs the application shutdown,
which closes the database before the process exits.
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from farm_service_api.app.core.config import settings
from farm_service_api.app.core.logging_config import build_log_config
from farm_service_api.app.main import app


async def main() -> bool:
    """Serve the API on ``settings.host``:``settings.port``.

    Returns ``False`` if the application failed to start, for example
    when the database could not be opened.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=build_log_config(settings.log_level, settings.log_file or None),
    )
    server = Server(config)
    await server.serve()
    return server.started


if __name__ == "__main__":
    try:
        started = asyncio.run(main())
    except KeyboardInterrupt:
        started = True
    if not started:
        logging.getLogger(__name__).critical("Farm Service API failed to start")
        sys.exit(1)
