import logging

import config_paths

LOGGER_NAME = "litrev"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level="INFO", log_path=None):
    """Send the app's log records to a file; curses owns the terminal."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if any(getattr(h, "_litrev", False) for h in logger.handlers):
        return logger

    path = log_path or config_paths.LOG_PATH
    try:
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._litrev = True
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name):
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
