"""
Utility functions for GitHub Profile Scraper
"""

import os
import logging
from datetime import datetime
from config import LOGS_DIR, LOG_FORMAT, LOG_DATE_FORMAT, LOGGER_NAME, NOT_AVAILABLE


def setup_logging(log_level=logging.INFO, logs_dir=LOGS_DIR):
    """Setup logging to both file and console"""
    # Create logs directory if it doesn't exist
    if not os.path.exists(logs_dir):
        os.makedirs(logs_dir)

    # Create log filename with timestamp
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_filename = os.path.join(logs_dir, f'github_scraper_{timestamp}.log')

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # File handler
    file_handler = logging.FileHandler(log_filename, encoding='utf-8')
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.info(f"Logging initialized. Log file: {log_filename}")
    logger.info(f"Log level: {logging.getLevelName(log_level)}")

    return logger


def or_na(value):
    """Return value, or the N/A placeholder when the API left it out"""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, str) and not value.strip():
        return NOT_AVAILABLE
    return value


def dig(data, *keys):
    """Walk nested dicts, returning None as soon as a level is missing"""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data
