"""
Logging setup for the inventory service.

Records go to the console and, when ``LOG_FILE`` is set, to a
size-capped rotating file.  Uvicorn's per-request access lines are
demoted to WARNING unless the service runs at DEBUG, so the store's own
INFO lines (products created, replaced, removed) stay readable in a
busy log.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3

ACCESS_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> bool:
    """Configure the root logger once.

    Returns ``True`` when handlers were installed and ``False`` when the
    root logger already had some (uvicorn, pytest or an earlier
    ``create_app`` call); in that case only the access loggers are
    adjusted.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    access_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in ACCESS_LOGGERS:
        logging.getLogger(name).setLevel(access_level)

    root = logging.getLogger()
    if root.handlers:
        return False
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    return True
