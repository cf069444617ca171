#!/usr/bin/env python3
"""
Windows Reset Toolkit Logging Module

This module provides logging with verbosity levels and a SUCCESS level
for all Windows Reset Toolkit components.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

# Between INFO (20) and WARNING (30)
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def verbosity_to_level(verbosity: int) -> int:
    """
    Map a -v count to a logging level.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)

    Returns:
        int: Logging level
    """
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG

def setup_logger(name: str,
                 verbosity: int = 1,
                 log_file: Optional[str] = None,
                 max_size: int = 5242880,  # 5MB
                 backup_count: int = 3) -> logging.Logger:
    """
    Set up a logger with configurable verbosity levels.

    Args:
        name: Logger name
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Path to log file (if None, no file logging)
        max_size: Maximum size of log file before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        logging.Logger: Configured logger
    """
    log_level = verbosity_to_level(verbosity)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_size,
                backupCount=backup_count,
                encoding='utf-8'
            )
            # The file always gets full detail
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.setLevel(logging.DEBUG)
        except OSError as e:
            # Console logging still works
            logger.error(f"Failed to set up log file {log_file}: {e}")

    # Records stop here instead of reaching the root handlers
    logger.propagate = False

    return logger

class VerbosityLogger(logging.Logger):
    """Logger class with verbosity-aware methods and a SUCCESS level."""

    def __init__(self, name, level=logging.NOTSET):
        super().__init__(name, level)
        self.verbosity = 1

    def set_verbosity(self, verbosity: int) -> None:
        """Set the verbosity level."""
        self.verbosity = verbosity

    def v(self, msg, *args, **kwargs):
        """Log at verbosity level 1 (-v)."""
        if self.verbosity >= 1:
            self.info(msg, *args, **kwargs)

    def vv(self, msg, *args, **kwargs):
        """Log at verbosity level 2 (-vv)."""
        if self.verbosity >= 2:
            self.debug(msg, *args, **kwargs)

    def success(self, msg, *args, **kwargs):
        """Log a completed operation."""
        if self.isEnabledFor(SUCCESS):
            self._log(SUCCESS, msg, args, **kwargs)

# Register the custom logger class
logging.setLoggerClass(VerbosityLogger)

def get_logger(name: str,
              verbosity: int = 1,
              log_file: Optional[str] = None,
              max_size: int = 5242880,
              backup_count: int = 3) -> logging.Logger:
    """
    Get a logger with the specified configuration.

    Args:
        name: Logger name
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Path to log file (if None, no file logging)
        max_size: Maximum size of log file before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        logging.Logger: Configured logger
    """
    logger = setup_logger(name, verbosity, log_file, max_size, backup_count)

    if isinstance(logger, VerbosityLogger):
        logger.set_verbosity(verbosity)

    return logger

# Parent of every toolkit module logger
ROOT_LOGGER = "reset_toolkit"

def get_module_logger(module: str) -> logging.Logger:
    """
    Get a handler-less child of the toolkit logger.

    Records propagate to ROOT_LOGGER, which configure_logging() sets up once
    for the whole process.
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{module}")

def configure_logging(verbosity: int = 1,
                      log_file: Optional[str] = None,
                      max_size: int = 5242880,
                      backup_count: int = 3) -> logging.Logger:
    """Configure the toolkit root logger and return it."""
    return get_logger(ROOT_LOGGER, verbosity, log_file, max_size, backup_count)
