"""
Main entrypoint for the Raffle Board API.

This module assembles the FastAPI application, sets up logging,
includes the API router and wires the database pool into the
application lifecycle.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn raffle_board_api.app.main:app --reload

When the configured static directory exists (``public`` by default),
the board's web client is served from ``/``.
"""

import logging
import os
import sqlite3
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .core.config import Settings, settings
from .core.logging_config import setup_logging
from .api.router import router as api_router
from .core.db import Database, get_database_path, init_db
from .core.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the process‑wide ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    cfg = app_settings or settings
    setup_logging(cfg.log_level, cfg.log_file or None)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, debug=cfg.debug)
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        # The pool is published before migrating so that, should the
        # migration fail, handlers still report storage errors per request.
        db = Database(get_database_path(cfg.database_url), cfg.db_pool_size)
        app.state.db = db
        try:
            init_db(db)
        except sqlite3.Error:
            logger.exception("Error connecting to or initialising the database at %s", db.path)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        db = getattr(app.state, "db", None)
        if db is not None:
            db.close()

    # Mounted last so that the API routes take precedence over ``/``.
    if os.path.isdir(cfg.static_dir):
        app.mount("/", StaticFiles(directory=cfg.static_dir, html=True), name="static")
    else:
        logger.debug("Static directory %s not found; web client not served", cfg.static_dir)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
