"""
Logging setup and configuration utilities.

This module configures loguru sinks for the application and forwards records
from the standard ``logging`` module, which the library modules log through.
"""

import logging
import sys
from pathlib import Path
from types import FrameType
from typing import Optional

from loguru import logger as loguru_logger

from ..config.models import LoggingConfig


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Use the matching loguru level if it exists
        try:
            level: object = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller that originated the record
        frame: Optional[FrameType] = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage())


def setup_logging(config: LoggingConfig) -> None:
    """
    Setup application logging with the given configuration.

    Args:
        config: Logging configuration
    """
    _setup_loguru_logging(config)

    if config.intercept_standard_logging:
        _intercept_standard_logging()


def _setup_loguru_logging(config: LoggingConfig) -> None:
    """Setup logging sinks using loguru."""
    # Remove default handler
    loguru_logger.remove()

    # Console logging
    if config.console_enabled:
        loguru_logger.add(
            sys.stderr,
            format=config.format,
            level=config.level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=False
        )

    # File logging
    if config.file_enabled:
        log_dir = Path(config.log_directory)
        log_dir.mkdir(parents=True, exist_ok=True)

        loguru_logger.add(
            log_dir / "bootcast.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
                   "{name}:{function}:{line} - {message}",
            level=config.level.upper(),
            rotation=config.max_file_size,
            retention=config.backup_count,
            compression="zip",
            backtrace=True,
            diagnose=False
        )


def _intercept_standard_logging() -> None:
    """Route the root standard logger into loguru, which applies the level."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
