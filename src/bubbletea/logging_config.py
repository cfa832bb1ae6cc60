"""
Logging Configuration
=====================
Installs the console (and optional file) handlers of the 'bubbletea' logger.

The level and the file come from config.py, which reads them from the
BUBBLETEA_LOG_LEVEL and BUBBLETEA_LOG_FILE environment variables. Pour,
drain and redraw events are logged at INFO, per-mesh details at DEBUG.
"""
import logging
import sys
from typing import Optional, Union

from bubbletea.config import LOG_FILE, LOG_LEVEL

APP_LOGGER = "bubbletea"

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Raised to ERROR, PyVista warns about every degenerate mesh
QUIET_LOGGERS = ("pyvista", "vtk")

# Marks handlers installed here, so a second call replaces only those
_HANDLER_ATTR = "_bubbletea_handler"


def resolve_level(level: Union[int, str]) -> int:
    """
    Accepts a level number or a name such as 'debug' / 'INFO'.

    Raises:
        ValueError: If the name is not a known logging level.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'.")
    return value


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_ATTR, True)
    return handler


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        level: Level number or name. Defaults to config.LOG_LEVEL.
        log_file: Path of a log file (overwritten). Defaults to config.LOG_FILE;
            no file handler when both are empty.

    Returns:
        The 'bubbletea' logger.
    """
    level = resolve_level(LOG_LEVEL if level is None else level)
    log_file = log_file or LOG_FILE

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_ATTR, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = _tagged(logging.StreamHandler(sys.stderr))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = _tagged(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.ERROR))

    logger.debug(f"Logging at {logging.getLevelName(level)}" + (f", file {log_file}" if log_file else ""))
    return logger
