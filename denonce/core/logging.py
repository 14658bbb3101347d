import logging

from .config import settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def get_logger(name: str):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(settings.LOG_LEVEL)

    ch = logging.StreamHandler()
    ch.setLevel(settings.LOG_LEVEL)
    ch.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(ch)

    # keep records out of uvicorn's root handlers
    logger.propagate = False

    return logger
