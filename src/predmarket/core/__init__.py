"""Core utilities: constants, logging, exceptions."""

from predmarket.core.exceptions import PredmarketError
from predmarket.core.logging import get_logger, setup_logging

__all__ = [
    "PredmarketError",
    "get_logger",
    "setup_logging",
]
