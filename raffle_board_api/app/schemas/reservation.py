"""
Pydantic models for raffle number reservations.

A reservation binds a raffle number to a holder name and a payment
flag.  ``ReservationSave`` deliberately accepts a missing or null
``name`` so the service can reject it with a client error instead of a
schema validation error.
"""

from typing import Optional

from pydantic import BaseModel, Field

# SQLite INTEGER range; larger values cannot be bound as parameters.
MIN_NUMBER = -(2**63)
MAX_NUMBER = 2**63 - 1


class ReservationSave(BaseModel):
    """Schema for reserving a number or updating an existing reservation."""

    number: int = Field(..., ge=MIN_NUMBER, le=MAX_NUMBER, description="Raffle number to reserve", examples=[7])
    name: Optional[str] = Field(None, description="Display name of the holder", examples=["Ana"])
    # ``None`` stores the column default (not paid).
    is_paid: Optional[bool] = Field(None, description="Whether the number has been paid for")


class ReservationRelease(BaseModel):
    """Schema for releasing a number."""

    number: int = Field(..., ge=MIN_NUMBER, le=MAX_NUMBER, description="Raffle number to release", examples=[7])


class ReservationRead(BaseModel):
    """A reservation as returned by the listing endpoint."""

    name: str
    is_paid: bool = False


class ActionResult(BaseModel):
    success: bool = True
    message: str
