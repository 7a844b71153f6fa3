"""Centralized logging configuration."""

import logging

from weather_bot.config import DEBUG


def configure_logging(debug: bool = DEBUG) -> None:
    """
    Configure one logging format for the bot and the libraries it drives.

    Args:
        debug: Log at DEBUG instead of INFO (cache hits, request parameters)
    """
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # httpx logs full request URLs at INFO, which would include the appid
    third_party_levels = {
        "uvicorn": logging.INFO,
        "uvicorn.access": logging.INFO,
        "uvicorn.error": logging.INFO,
        "fastapi": logging.INFO,
        "httpx": logging.WARNING,
    }

    for logger_name, logger_level in third_party_levels.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(logger_level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Don't propagate to avoid duplicate messages
        logger.propagate = False

        handler = logging.StreamHandler()
        handler.setLevel(logger_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
