# paige_api/utils/logger.py
import logging
import sys

from paige_api.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"


def _configure_logger() -> logging.Logger:
    app_logger = logging.getLogger("paige_api")
    if app_logger.handlers:
        return app_logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    app_logger.addHandler(handler)
    app_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    app_logger.propagate = False
    return app_logger


logger = _configure_logger()
