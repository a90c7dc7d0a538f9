"""
Logging configuration for the mail merge compiler.

Library modules only ask for loggers here; handlers are installed once by
``setup_logging`` (called from the CLI or by an embedding application).
"""

import logging
import sys
from typing import Optional

from ..core.config import Config


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_file: Optional path of a log file written in addition to the console
        verbose: Enable DEBUG level output

    Returns:
        The configured root logger of the package
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(Config.LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(Config.CONSOLE_LOG_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(Config.LOG_FORMAT, datefmt=Config.LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    """Get the package-level logger."""
    return logging.getLogger(Config.LOGGER_NAME)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a logger for a module, nested under the package logger."""
    if module_name.startswith(Config.LOGGER_NAME):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{Config.LOGGER_NAME}.{module_name}")


def get_merge_logger() -> logging.Logger:
    return logging.getLogger(f"{Config.LOGGER_NAME}.merge")


def get_composer_logger() -> logging.Logger:
    return logging.getLogger(f"{Config.LOGGER_NAME}.composer")


def get_docx_logger() -> logging.Logger:
    return logging.getLogger(f"{Config.LOGGER_NAME}.docx")
