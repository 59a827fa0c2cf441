import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)-8s] [%(module)-20s] - %(message)s"


def setup_logger(level="INFO") -> logging.Logger:
    """
    Configure the root logger with a single stdout handler.
    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)
    return logger
