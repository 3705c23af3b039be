# core/logging_setup.py
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.config import get_config_dir

LOG_FILE_NAME = "engine.log"
LOG_MAX_BYTES = 1_000_000  # ~1 MB
LOG_BACKUP_COUNT = 3

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
CONSOLE_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> Path:
    """
    Configure engine-wide logging. Hosts call this once at startup,
    before creating controllers:

        from core.logging_setup import setup_logging
        setup_logging(debug=args.debug)

    - Logs to ~/.a11y_engine/engine.log unless ``log_file`` is given
      (rotating, max ~1 MB, 3 backups)
    - Also logs to console (stderr) for interactive runs

    Controllers log focus moves, trap transitions and announcements at
    DEBUG, so pass debug=True when tracing keyboard interaction.

    Returns:
        Path of the log file in use
    """
    if log_file is None:
        log_file = get_config_dir() / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Re-running (tests, REPL) replaces the previous handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handlers = [
        (RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        ), FILE_FORMAT),
        (logging.StreamHandler(), CONSOLE_FORMAT),
    ]
    for handler, fmt in handlers:
        handler.setFormatter(logging.Formatter(fmt))
        handler.setLevel(level)
        root_logger.addHandler(handler)

    root_logger.info(f"Engine logging initialized ({logging.getLevelName(level)})")
    root_logger.info(f"Log file: {log_file}")
    return log_file
