"""Entry point for the Raffle Board API.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker or a PaaS where you only specify a single Python file to run.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``3000``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from raffle_board_api.app.core.config import settings
from raffle_board_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Logging is already configured by create_app
        log_config=None,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server running on http://localhost:%s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
