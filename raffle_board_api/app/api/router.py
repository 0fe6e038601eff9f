"""
Top‑level API router.

Aggregates the domain routers served under the ``/api`` prefix.  The
board has a single domain, the raffle numbers, whose routes are
mounted without an extra prefix to keep the public paths
``/api/numbers``, ``/api/save`` and ``/api/release``.
"""

from fastapi import APIRouter

from .endpoints import numbers

router = APIRouter()

router.include_router(numbers.router, tags=["numbers"])
