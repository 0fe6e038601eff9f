"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, database), ``api``
(routes), ``schemas`` (request and response models) and ``services``
(reservation logic).
"""

from .main import app  # noqa: F401
