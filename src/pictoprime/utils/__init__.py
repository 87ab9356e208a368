"""Utility modules for pictoprime."""

from pictoprime.utils.log import LOGGER_NAME, setup_logger

__all__ = [
    "LOGGER_NAME",
    "setup_logger",
]
