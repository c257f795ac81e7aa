#===============================================================================
#  Hermes | logging_setup.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  One-time configuration of the "hermes" logger (file handler, kv format).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from .constants import LOG_FILE_NAME

LOGGER_NAME = "hermes"
LOG_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"

_HANDLER: Optional[logging.Handler] = None


def configure_logging(log_dir: Path, level: int = logging.INFO) -> Dict[str, str]:
    """Attach a file handler to the package logger. Safe to call repeatedly."""
    global _HANDLER
    log_path = log_dir / LOG_FILE_NAME
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        if _HANDLER is None:
            handler = logging.FileHandler(log_path, encoding="utf-8")
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
            _HANDLER = handler
    except OSError:
        # no file to write to: leave records to the root logger
        logger.warning("Log directory unusable: %s", log_dir, exc_info=True)
        return {
            "log_path": "",
            "format": "kv",
            "handlers": "none",
            "logger_name": LOGGER_NAME,
        }

    logger.propagate = False
    return {
        "log_path": str(log_path),
        "format": "kv",
        "handlers": "file",
        "logger_name": LOGGER_NAME,
    }


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)
