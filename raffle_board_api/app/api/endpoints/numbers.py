"""
Raffle number endpoints.

These routes back the reservation board: list every reserved number,
reserve or update a number, and release it.  Handlers receive the
shared connection pool through the ``get_db`` dependency and delegate
to ``ReservationService``.  Storage failures are raised as
``StorageError``; the application's handler turns them into HTTP 500
with a top‑level ``{"message", "error"}`` body.
"""

import sqlite3
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from raffle_board_api.app.core.db import Database, get_db
from raffle_board_api.app.core.errors import StorageError
from raffle_board_api.app.schemas.reservation import (
    ActionResult,
    ReservationRelease,
    ReservationSave,
)
from raffle_board_api.app.services.reservation_service import ReservationService

router = APIRouter()


@router.get("/numbers", response_model=Dict[str, Any])
async def list_numbers(db: Database = Depends(get_db)) -> Dict[str, Any]:
    """Return all reserved numbers.

    The result maps each number (as a string) to ``{"name", "is_paid"}``.
    Numbers absent from the mapping are free.
    """
    try:
        return await ReservationService.list_reservations(db)
    except sqlite3.Error as e:
        raise StorageError("Error fetching numbers", e) from e


@router.post("/save", response_model=ActionResult)
async def save_number(payload: ReservationSave, db: Database = Depends(get_db)) -> ActionResult:
    """Reserve a number, or overwrite the holder and paid flag of a reserved one.

    Returns HTTP 400 if the name is missing or blank.
    """
    try:
        return await ReservationService.save_reservation(db, payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except sqlite3.Error as e:
        raise StorageError("Error saving number", e) from e


@router.post("/release", response_model=ActionResult)
async def release_number(payload: ReservationRelease, db: Database = Depends(get_db)) -> ActionResult:
    """Release a number.  Releasing a free number succeeds as well."""
    try:
        return await ReservationService.release_reservation(db, payload.number)
    except sqlite3.Error as e:
        raise StorageError("Error releasing number", e) from e
