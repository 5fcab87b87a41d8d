import logging
import sys

LOGGER_NAME = 'notestash'
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Sends the package's log output to stderr. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
