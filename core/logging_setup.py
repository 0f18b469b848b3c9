"""
Logging configuration for the command-line entry point.

Library modules only create module-level loggers; handlers are installed here.
"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.config import get_app_dir


def setup_logging(
        debug: bool = False,
        quiet: bool = False,
        log_dir: Optional[Path] = None,
) -> Path:
    """
    Configure application-wide logging.

    - Logs to ~/.osrs_price_checker/app.log (rotating, max ~1 MB, 3 backups)
    - Also logs warnings to console (stderr); stdout stays reserved for results

    Returns:
        Path of the log file
    """
    log_dir = log_dir or get_app_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"

    level = logging.DEBUG if debug else logging.INFO
    if debug:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers (useful if re-running in dev/REPL)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # File handler with rotation
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # ~1 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    )
    file_handler.setFormatter(file_fmt)
    file_handler.setLevel(level)
    root_logger.addHandler(file_handler)

    # Console handler (simple readable format)
    console_handler = logging.StreamHandler()
    console_fmt = logging.Formatter("[%(levelname)s] %(name)s - %(message)s")
    console_handler.setFormatter(console_fmt)
    console_handler.setLevel(console_level)
    root_logger.addHandler(console_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO if debug else logging.WARNING)

    root_logger.info("Logging initialized")
    root_logger.info(f"Log file: {log_file}")
    return log_file
