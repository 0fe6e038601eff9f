"""
SQLite database integration, connection pool and migration system.

This module provides the process‑wide ``Database`` handle (a small pool
of SQLite connections), the ``get_db`` dependency used by FastAPI
routes to obtain it, and ``init_db`` which brings the schema up to date
on application start.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.  A migration
is either a SQL script or a callable receiving a cursor; callables are
used where the step depends on the current shape of the database.
"""

import logging
import os
import queue
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from fastapi import Request

logger = logging.getLogger(__name__)

RESERVATION_TABLE = "rifa"

_SQLITE_URL_PREFIX = "sqlite:///"


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Accepts either a plain filesystem path or a ``sqlite:///`` URL.  An
    absolute path is used directly, anything else is resolved relative
    to the current working directory.
    """
    db_url = database_url
    if db_url.startswith(_SQLITE_URL_PREFIX):
        db_url = db_url[len(_SQLITE_URL_PREFIX):]
    if os.path.isabs(db_url):
        return db_url
    return str((Path.cwd() / db_url).resolve())


def table_columns(conn: Union[sqlite3.Connection, sqlite3.Cursor], table: str) -> list[str]:
    """Return the column names of ``table`` (empty if it does not exist)."""
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return [row[1] for row in rows]


class Database:
    """Pool of SQLite connections shared by all request handlers.

    Connections are opened on demand and handed back to the pool after
    use.  At most ``pool_size`` idle connections are kept; surplus ones
    are closed on release.  The pool itself does no locking beyond the
    thread‑safe queue: write serialization is left to SQLite.
    """

    def __init__(self, path: str, pool_size: int = 5) -> None:
        self.path = path
        self.pool_size = max(pool_size, 1)
        self._idle: "queue.LifoQueue[sqlite3.Connection]" = queue.LifoQueue()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path, check_same_thread=False)
        # Return rows as dict‑like objects keyed by column name
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _acquire(self) -> sqlite3.Connection:
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            return self._connect()

    def _release(self, conn: sqlite3.Connection) -> None:
        if self._idle.qsize() < self.pool_size:
            self._idle.put_nowait(conn)
        else:
            conn.close()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Borrow a connection; commit on success, roll back on error."""
        conn = self._acquire()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._release(conn)

    def close(self) -> None:
        """Close every idle connection held by the pool."""
        closed = 0
        while True:
            try:
                conn = self._idle.get_nowait()
            except queue.Empty:
                break
            conn.close()
            closed += 1
        logger.debug("Closed %s pooled connection(s) for %s", closed, self.path)


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the pool created at startup."""
    return request.app.state.db


def _add_is_paid_column(cursor: sqlite3.Cursor) -> None:
    # Tables created by earlier deployments may already carry the column
    # without a matching row in ``migrations``.
    if "is_paid" in table_columns(cursor, RESERVATION_TABLE):
        logger.info("Column is_paid already present")
        return
    cursor.execute(
        f"ALTER TABLE {RESERVATION_TABLE} ADD COLUMN is_paid INTEGER NOT NULL DEFAULT 0"
    )
    logger.info("Column is_paid added")


Migration = Union[str, Callable[[sqlite3.Cursor], None]]

MIGRATIONS: list[tuple[int, Migration]] = [
    # Migration 1: baseline reservation table
    (
        1,
        f"""
        CREATE TABLE IF NOT EXISTS {RESERVATION_TABLE} (
            number INTEGER PRIMARY KEY,
            name TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: payment flag, 0 (false) or 1 (true)
    (2, _add_is_paid_column),
]

LATEST_VERSION = MIGRATIONS[-1][0]


def init_db(db: Database, target_version: Optional[int] = None) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies every migration above it, up to
    ``target_version`` when given.  Existing data is never dropped.
    Storage errors propagate to the caller.

    Returns the schema version after the run.
    """
    with db.connection() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, migration in MIGRATIONS:
            if version <= current_version:
                continue
            if target_version is not None and version > target_version:
                break
            if callable(migration):
                migration(cursor)
            else:
                cursor.executescript(migration)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            current_version = version

    logger.info(
        "Database connected and table %s up to date (schema version %s)",
        RESERVATION_TABLE,
        current_version,
    )
    return current_version
