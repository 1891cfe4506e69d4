"""
Root logger setup for the mentor API.

Records go to stderr and, when ``LOG_DIR`` is set, to one file per day
inside that directory (``<LOG_DIR>/2024-01-01.log``).
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional


def daily_logfile(log_dir: str, day: Optional[date] = None) -> str:
    """Return the path of the log file for ``day`` (today by default)."""
    day = day or date.today()
    return str(Path(log_dir) / f"{day.isoformat()}.log")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console and optional file handlers to the root logger.

    Does nothing when the root logger already has handlers, so repeated
    ``create_app`` calls in tests keep a single set.  ``level`` is a
    case-insensitive level name; unknown names fall back to INFO.  The
    parent directory of ``logfile`` is created on demand.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
