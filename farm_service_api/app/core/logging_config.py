"""
Logging configuration for the API process.

Application modules log under the ``farm_service_api`` hierarchy
(``logging.getLogger(__name__)``) and uvicorn logs under ``uvicorn``,
``uvicorn.error`` and ``uvicorn.access``.  ``build_log_config`` returns a
``logging.config.dictConfig`` mapping that sends all of them through the
same console handler (and an optional file handler) with one format, so
that request lines and service messages interleave readably.

``setup_logging`` applies that mapping when the app is created;
``run.py`` also hands it to uvicorn as ``log_config`` so uvicorn does not
install its own formatters over it.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

APP_LOGGER = "farm_service_api"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.access")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_name(level: str) -> str:
    name = (level or "").upper()
    # getLevelName maps known names to their number and anything else to a string.
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


def build_log_config(level: str = "INFO", logfile: Optional[str] = None) -> Dict[str, Any]:
    """Return a ``dictConfig`` mapping for the app and uvicorn loggers.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"debug"``, ``"INFO"``).  Case
        insensitive; an unknown name falls back to ``INFO``.
    logfile : Optional[str]
        Path of a file that receives a copy of every record.  The parent
        directory is created.  Relative paths resolve against the current
        working directory.
    """
    level = _level_name(level)
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    }
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(log_path),
            "encoding": "utf-8",
        }

    handler_names = list(handlers)
    loggers = {
        name: {"handlers": handler_names, "level": level, "propagate": False}
        for name in (APP_LOGGER,) + UVICORN_LOGGERS
    }
    # uvicorn.error has no handlers of its own and reaches ours through "uvicorn".
    loggers["uvicorn.error"] = {"level": level, "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}},
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the app and uvicorn loggers once per process."""
    if logging.getLogger(APP_LOGGER).handlers:
        # Already configured (a repeated create_app call, or run.py).
        return
    logging.config.dictConfig(build_log_config(level, logfile))
