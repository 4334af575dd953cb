"""Centralized logging configuration for PyFishery."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'pyfishery'

# Create logger
logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.DEBUG)

# Create console handler with formatting
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.WARNING)

# Create formatter
formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
console_handler.setFormatter(formatter)

# Add handler to logger
logger.addHandler(console_handler)


def set_console_level(level: Union[int, str]) -> None:
    """Set the verbosity of the console handler (e.g. ``logging.DEBUG``)."""
    console_handler.setLevel(level)


def configure_file_logging(
    log_dir: Union[str, Path], filename: str = 'pyfishery.log'
) -> Optional[logging.FileHandler]:
    """Attach a DEBUG-level file handler writing to ``log_dir/filename``.

    Parameters
    ----------
    log_dir : str or Path
        Directory for the log file; created if missing.
    filename : str
        Log file name.

    Returns
    -------
    logging.FileHandler or None
        The new handler, or None if the directory could not be created.
    """
    log_dir = Path(log_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        # If can't create logs directory, just use console
        logger.warning("Cannot create log directory %s: %s", log_dir, exc)
        return None

    file_handler = logging.FileHandler(log_dir / filename)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    return file_handler


def get_logger(name: str = None):
    """Get a logger instance.

    Parameters
    ----------
    name : str, optional
        Logger name (typically __name__). If None, returns root package logger.

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    if name:
        if name == LOGGER_NAME or name.startswith(LOGGER_NAME + '.'):
            return logging.getLogger(name)
        return logging.getLogger(f'{LOGGER_NAME}.{name}')
    return logger
