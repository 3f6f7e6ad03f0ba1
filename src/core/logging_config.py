"""Set up the application loggers (every module logs through logging.getLogger(__name__))"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
ROOT_LOGGER_NAME = "src"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger. Calling it again only updates the level."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
