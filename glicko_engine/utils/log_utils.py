"""logging setup shared across the package"""
import sys
import logging

LOGGER_NAME = 'glicko_engine'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """returns a child of the package logger, attaching the stdout handler the first time"""
    package_logger = logging.getLogger(LOGGER_NAME)
    if not package_logger.handlers:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(stream_handler)
        package_logger.setLevel(logging.WARNING)
    return logging.getLogger(name)
