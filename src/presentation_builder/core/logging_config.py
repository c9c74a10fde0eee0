# Presentation Builder
# Copyright © 2025 Presentation Builder contributors
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Logging configuration with file rotation."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from presentation_builder.config import AppConfig, load_config

PACKAGE_LOGGER = "presentation_builder"


def setup_logging(
    config: AppConfig | None = None,
    console_level: int = logging.WARNING,
    *,
    log_dir: Path | None = None,
) -> Path:
    """
    Configure package logging with file rotation.

    Creates two log files:
    - presentation-builder.log: DEBUG+ package messages (5 MB per file, 3 rotations)
    - errors.log: ERROR+ messages from any logger (2 MB per file, 3 rotations)

    Args:
        config: Application config; the cached default is used when omitted
        console_level: Minimum level for console output (default: WARNING)
        log_dir: Override for the log directory

    Returns:
        Path to the log directory
    """
    config = config or load_config()
    log_dir = log_dir or config.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_presentation_builder", False):
            root_logger.removeHandler(handler)
            handler.close()

    detailed_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)-8s | %(name)s | %(message)s")

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(logging.DEBUG)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    app_log_path = log_dir / "presentation-builder.log"
    app_handler = RotatingFileHandler(
        app_log_path,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    app_handler.setLevel(logging.DEBUG)
    app_handler.setFormatter(detailed_formatter)
    pkg_logger.addHandler(app_handler)

    error_log_path = log_dir / "errors.log"
    error_handler = RotatingFileHandler(
        error_log_path,
        maxBytes=2 * 1024 * 1024,  # 2 MB
        backupCount=3,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    error_handler._presentation_builder = True  # type: ignore[attr-defined]
    root_logger.addHandler(error_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    pkg_logger.addHandler(console_handler)

    log = logging.getLogger(__name__)
    log.info("%s logging initialized", config.app_name)
    log.info("Log directory: %s", log_dir)
    log.info("Database: %s", config.db_path)
    log.info("Platform: %s, Python: %s", sys.platform, sys.version.split()[0])

    return log_dir
