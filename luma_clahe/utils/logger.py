import logging
import sys
from ..config import settings

PACKAGE_LOGGER_NAME = "luma_clahe"

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def _resolve_level(level):
    if isinstance(level, int):
        return level
    return LOG_LEVEL_MAP.get(str(level).upper(), logging.INFO)


def _package_logger():
    """The single `luma_clahe` logger that owns the console handler."""
    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not any(getattr(h, "_luma_clahe_console", False) for h in root.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(log_formatter)
        console_handler._luma_clahe_console = True
        root.addHandler(console_handler)
        root.setLevel(_resolve_level(getattr(settings, 'LOGGING_LEVEL', 'INFO')))
        # Embedding applications attach their own handlers here or on the root
        root.propagate = False
    return root


def configure_logging(level=None):
    """
    Set the package log level at runtime.

    Args:
        level: Level name ('DEBUG', 'INFO', ...) or logging constant. Defaults
               to settings.LOGGING_LEVEL; unknown names fall back to INFO.

    Returns:
        The package logger.
    """
    root = _package_logger()
    if level is None:
        level = getattr(settings, 'LOGGING_LEVEL', 'INFO')
    root.setLevel(_resolve_level(level))
    return root


def get_logger(name):
    """
    Gets a logger under the package logger.

    Module loggers carry no handlers of their own; records propagate to the
    `luma_clahe` logger. Names outside the package are nested beneath it.
    """
    _package_logger()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
