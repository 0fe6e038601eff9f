"""
Logging configuration for the service.

``setup_logging`` installs the process's handlers on the root logger:
a console handler and, when ``LOG_FILE`` is set, a file handler.
Uvicorn's own loggers are stripped of their handlers and made to
propagate, so server, access and application records share one format
and one destination.  ``run.py`` starts uvicorn with ``log_config=None``
so it does not reinstall its handlers afterwards.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _route_uvicorn_to_root() -> None:
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the API process.

    Does nothing when the root logger already has handlers (pytest,
    an embedding server, a repeated ``create_app`` call).

    Parameters
    ----------
    level : str
        Logging level name such as ``"DEBUG"`` or ``"INFO"``.  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File receiving a copy of every record (``LOG_FILE``).  Missing
        parent directories are created.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    _route_uvicorn_to_root()
