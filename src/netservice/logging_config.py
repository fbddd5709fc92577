import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .models.config import NetworkConfig

# Thread name shows which context a completion ran on
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s [%(threadName)s] %(name)s: %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up the ``netservice`` logger.

    Console output goes to stderr so it never mixes with a host
    application's stdout. The file handler opens its file on the first
    record.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("netservice")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8", delay=True))

        for handler in handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    logger.propagate = False

    return logger


def setup_logging_from_config(config: "NetworkConfig", force: bool = False) -> logging.Logger:
    """Configure the netservice logger from a NetworkConfig's log settings."""
    return setup_logging(level=config.log_level, log_file=config.log_file, force=force)
