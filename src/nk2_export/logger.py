"""
Logging configuration and utilities for the NK2 export tool.

This module provides logging setup and utility functions for structured
logging throughout the application.

Dependencies:
    - logging: Standard library for logging functionality
    - sys: Standard library for system-specific parameters
    - pathlib: Standard library for path handling
    - typing: Standard library for type hints
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from logging import Logger

from nk2_export.contact_parser import Contact

LOGGER_NAME = "nk2_export"


def setup_logger(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> Logger:
    """
    Set up and configure the application logger.

    :param verbose: Emit per-property and per-contact trace output
    :param log_file: Optional path to a log file receiving all messages
    :param console_output: Whether to output logs to console
    :return: Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
        logger.info("Logging initialized. Log file: %s", log_file)

    return logger


def log_contacts(logger: Logger, contacts: List[Contact]) -> None:
    """
    Log every extracted contact at debug level.

    :param logger: Logger instance
    :param contacts: Extracted contacts
    """
    for contact in contacts:
        weight = '?' if contact.weight is None else contact.weight
        logger.debug(
            "Contact | %s | %s | %s", contact.name, contact.email, weight
        )


def log_statistics(logger: Logger, stats: Dict[str, Any]) -> None:
    """
    Log summary statistics.

    :param logger: Logger instance
    :param stats: Dictionary containing statistics
    """
    logger.info("=" * 60)
    logger.info("EXPORT SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Rows read: {stats.get('rows_read', 0)}")
    logger.info(f"Contacts extracted: {stats.get('contacts_extracted', 0)}")
    logger.info(f"Rows skipped: {stats.get('rows_skipped', 0)}")
    logger.info(f"Contacts written: {stats.get('contacts_written', 0)}")
    logger.info("=" * 60)
