"""
Service layer for raffle number reservations.

Each operation maps to a single parameterized statement against the
``rifa`` table.  Saving is an atomic upsert keyed by ``number`` (the
last writer wins) and releasing is an unconditional delete, so
releasing a free number is a successful no‑op.

sqlite3 calls block (up to the busy timeout while another writer holds
the lock), so the statements run in a worker thread via
``asyncio.to_thread`` and the event loop keeps serving.

Storage errors (``sqlite3.Error``) are not handled here; they propagate
to the API layer which turns them into server errors.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from typing import Dict, Union

from raffle_board_api.app.core.db import RESERVATION_TABLE, Database, table_columns
from raffle_board_api.app.schemas.reservation import (
    ActionResult,
    ReservationRead,
    ReservationSave,
)

logger = logging.getLogger(__name__)

EMPTY_NAME_MESSAGE = "Name cannot be empty."


class ReservationService:
    """Service class for reserving and releasing raffle numbers."""

    @classmethod
    async def list_reservations(
        cls, db: Database
    ) -> Dict[str, Union[ReservationRead, str]]:
        """Return every reservation keyed by its number as a string.

        On the current schema each value is a ``ReservationRead``.  A
        database still on the legacy schema generation (no ``is_paid``
        column) yields the flat ``{"<number>": "<name>"}`` form instead.
        """
        return await asyncio.to_thread(cls._select_all, db)

    @classmethod
    async def save_reservation(cls, db: Database, data: ReservationSave) -> ActionResult:
        """Reserve ``data.number`` for ``data.name`` or overwrite the holder.

        Raises ``ValueError`` when the name is missing or blank; nothing
        is written in that case.
        """
        if data.name is None or not data.name.strip():
            raise ValueError(EMPTY_NAME_MESSAGE)

        # An omitted flag stores the column default (not paid)
        is_paid = bool(data.is_paid)
        await asyncio.to_thread(cls._upsert, db, data.number, data.name, is_paid)
        logger.info("Saved number %s for %s (paid=%s)", data.number, data.name, is_paid)
        return ActionResult(success=True, message=f"Number {data.number} saved for {data.name}")

    @classmethod
    async def release_reservation(cls, db: Database, number: int) -> ActionResult:
        """Delete the reservation for ``number`` if there is one."""
        affected = await asyncio.to_thread(cls._delete, db, number)
        if affected:
            logger.info("Released number %s", number)
        else:
            logger.debug("Number %s was already free", number)
        return ActionResult(success=True, message=f"Number {number} released")

    @classmethod
    def _select_all(cls, db: Database) -> Dict[str, Union[ReservationRead, str]]:
        with db.connection() as conn:
            if "is_paid" not in table_columns(conn, RESERVATION_TABLE):
                rows = conn.execute(f"SELECT number, name FROM {RESERVATION_TABLE}").fetchall()
                return {str(row["number"]): row["name"] for row in rows}
            rows = conn.execute(
                f"SELECT number, name, is_paid FROM {RESERVATION_TABLE}"
            ).fetchall()
            return {str(row["number"]): cls._row_to_reservation_read(row) for row in rows}

    @staticmethod
    def _upsert(db: Database, number: int, name: str, is_paid: bool) -> None:
        with db.connection() as conn:
            if "is_paid" in table_columns(conn, RESERVATION_TABLE):
                conn.execute(
                    f"""
                    INSERT INTO {RESERVATION_TABLE} (number, name, is_paid)
                    VALUES (?, ?, ?)
                    ON CONFLICT(number) DO UPDATE SET name = excluded.name, is_paid = excluded.is_paid
                    """,
                    (number, name, int(is_paid)),
                )
            else:
                conn.execute(
                    f"""
                    INSERT INTO {RESERVATION_TABLE} (number, name)
                    VALUES (?, ?)
                    ON CONFLICT(number) DO UPDATE SET name = excluded.name
                    """,
                    (number, name),
                )

    @staticmethod
    def _delete(db: Database, number: int) -> int:
        with db.connection() as conn:
            cursor = conn.execute(f"DELETE FROM {RESERVATION_TABLE} WHERE number = ?", (number,))
            return cursor.rowcount

    @staticmethod
    def _row_to_reservation_read(row: sqlite3.Row) -> ReservationRead:
        """Convert a database row to a ReservationRead schema instance."""
        # SQLite stores the flag as 0/1; older tables may hold NULL
        return ReservationRead(name=row["name"], is_paid=bool(row["is_paid"]))
