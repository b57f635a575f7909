"""
Logging for the URL Analyzer: one package logger, one child per pipeline stage.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "url_analyzer",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the package logger.

    Handlers go to stderr (stdout belongs to the CLI's JSON) and, optionally,
    a file. A second call only changes the level.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional path of an extra log file

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """Logger for one stage, e.g. get_module_logger("charset") → "url_analyzer.charset"."""
    return logging.getLogger(f"url_analyzer.{module_name}")
