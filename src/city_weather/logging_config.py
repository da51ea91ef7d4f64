"""Centralized logging configuration."""

import logging

from city_weather.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL):
    """
    Configure a consistent logging format for the entire application.
    """
    # Define the standard formatter
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Configure specific third-party loggers to use the same format.
    # httpx logs full request URLs at INFO, and those carry the appid.
    loggers_to_configure = {
        "uvicorn": level,
        "uvicorn.access": level,
        "uvicorn.error": level,
        "fastapi": level,
        "httpx": "WARNING",
    }

    for logger_name, logger_level in loggers_to_configure.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(logger_level)

        # Remove existing handlers to avoid duplicate logs
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Don't propagate to avoid duplicate messages
        logger.propagate = False

        handler = logging.StreamHandler()
        handler.setLevel(logger_level)
        handler.setFormatter(formatter)

        logger.addHandler(handler)
