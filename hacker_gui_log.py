"""
HackerOS GUI - Logging
Run history goes to a log file in the data folder and to the console
"""
import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FILE_NAME = "hacker-gui.log"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
MAX_LOG_BYTES = 512 * 1024
LOG_BACKUPS = 3


def configure_logging(log_dir: str, level: int = logging.INFO) -> logging.Logger:
    """
    Attach file and console handlers to the "hacker_gui" logger

    The logic and UI modules log to children of this logger
    ("hacker_gui.logic", "hacker_gui.ui"). Calling this again once
    handlers are attached changes nothing.

    Args:
        log_dir: Folder for hacker-gui.log (usually the settings data folder)
        level: Minimum level written by both handlers

    Returns:
        The configured "hacker_gui" logger
    """
    app_logger = logging.getLogger("hacker_gui")
    if app_logger.handlers:
        return app_logger

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, LOG_FILE_NAME)

    handlers = [
        RotatingFileHandler(log_path, maxBytes=MAX_LOG_BYTES,
                            backupCount=LOG_BACKUPS, encoding="utf-8"),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)
    app_logger.setLevel(level)

    app_logger.debug("Log file: %s", log_path)
    return app_logger
