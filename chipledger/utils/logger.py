"""Logging configuration."""
import logging
import sys
from typing import Optional, Union

from chipledger.config import config

ROOT_LOGGER = "chipledger"


def _root() -> logging.Logger:
    """Return the package logger, attaching the stdout handler once."""
    root = logging.getLogger(ROOT_LOGGER)
    
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the package logger.
    
    Args:
        name: Logger name, typically __name__ of the calling module.
        
    Returns:
        Logger that propagates to the configured package logger.
    """
    root = _root()
    if not name or name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_level(level: Union[int, str]) -> None:
    """Change the package log level at runtime (e.g. ``--verbose``)."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _root().setLevel(level)
