import logging

from app.core.settings import settings


def setup_logging(name: str = "kggen") -> logging.Logger:
    level = settings.LOG_LEVEL.upper()

    logger = logging.getLogger(name)

    if logger.handlers:
        return logger  # prevent duplicate logs

    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    # console handler
    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    # file handler
    if settings.LOG_FILE:
        fh = logging.FileHandler(settings.LOG_FILE)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger

###LOG_LEVEL=DEBUG
