"""
Logging utilities for the ztcentral client.

The library itself only creates module loggers under the ``ztcentral``
namespace and never configures handlers. Applications (and the bundled CLI)
call ``setup_logger`` to get console output.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
DEFAULT_LEVEL = logging.WARNING
ROOT_LOGGER = "ztcentral"

LOG_COLORS = {
    "DEBUG": "\033[94m",
    "INFO": "\033[92m",
    "WARNING": "\033[93m",
    "ERROR": "\033[91m",
    "CRITICAL": "\033[95m",
    "RESET": "\033[0m"
}


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to log messages in the terminal."""

    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: str = DEFAULT_DATE_FORMAT,
                 use_colors: bool = True, stream=None):
        super().__init__(fmt, datefmt)
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if self.use_colors and record.levelname in LOG_COLORS:
            return f"{LOG_COLORS[record.levelname]}{message}{LOG_COLORS['RESET']}"
        return message


def setup_logger(name: str = ROOT_LOGGER,
                 level: Union[int, str] = DEFAULT_LEVEL,
                 file_path: Optional[Union[str, Path]] = None,
                 format_string: Optional[str] = None,
                 use_colors: bool = True,
                 propagate: bool = False) -> logging.Logger:
    """
    Configures a logger with a console handler and an optional file handler.

    Args:
        name: Logger name
        level: Logging level (name or value)
        file_path: Path to the log file (optional)
        format_string: Custom message format
        use_colors: If True, uses colors in the terminal
        propagate: If True, propagates messages to parent loggers

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(_level_value(level))
    logger.propagate = propagate

    fmt = format_string or DEFAULT_FORMAT
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColoredFormatter(fmt, use_colors=use_colors, stream=console_handler.stream))
    logger.addHandler(console_handler)

    if file_path:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(file_path)
        # Files never get color codes
        file_handler.setFormatter(logging.Formatter(fmt, DEFAULT_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.debug(f"Logger '{name}' configured with level {logging.getLevelName(logger.level)}")
    if file_path:
        logger.debug(f"Logs written to {file_path}")

    return logger


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Retrieves a logger, configuring it if it is a top-level logger without handlers.

    Sub-loggers (dotted names) are left to propagate to their parent.
    """
    logger = logging.getLogger(name)

    if not logger.handlers and '.' not in name:
        return setup_logger(name, level if level is not None else DEFAULT_LEVEL)
    if level is not None:
        logger.setLevel(_level_value(level))
    return logger


def set_log_level(level: Union[int, str], logger_name: Optional[str] = None) -> None:
    """
    Sets the logging level for one logger or for every ``ztcentral`` logger.

    Args:
        level: Logging level (name or integer value)
        logger_name: Specific logger name (if None, affects the whole package)
    """
    level = _level_value(level)

    if logger_name:
        logging.getLogger(logger_name).setLevel(level)
        return

    logging.getLogger(ROOT_LOGGER).setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(f"{ROOT_LOGGER}."):
            logging.getLogger(name).setLevel(level)


def _level_value(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level
