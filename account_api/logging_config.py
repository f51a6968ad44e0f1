"""Logging configuration for the application."""

import logging
import sys

from account_api.config import Settings, settings as default_settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings = default_settings) -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.DEBUG is True, otherwise settings.LOG_LEVEL.
    Output goes to stdout.
    """
    if settings.DEBUG:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
