# ABOUTME: Centralized logging setup shared by the web entry point and scripts.
# ABOUTME: Installs one console handler on the root logger and aligns third-party loggers.

import logging

from timeweather.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "uvicorn", "uvicorn.access", "uvicorn.error")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure a consistent logging format for the whole process.

    Existing root handlers are replaced, so calling this twice does not duplicate output.
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO; keep it but route it through the root handler
    for name in _THIRD_PARTY_LOGGERS:
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.WARNING if name == "httpcore" else level)
