"""Package-wide logging setup for navgraph.

Every module obtains its logger through :func:`get_logger`. All loggers hang
off the ``navgraph`` logger, which owns the only handler. The initial level
can be set with the ``NAVGRAPH_LOG_LEVEL`` environment variable.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "navgraph"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "NAVGRAPH_LOG_LEVEL"

_configured = False


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into a ``logging`` constant.

    Unknown or empty names fall back to ``default``.
    """
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the ``navgraph`` logger.

    Repeated calls are no-ops until :func:`reset_logging` is called.

    Args:
        level: Logging level. Defaults to ``NAVGRAPH_LOG_LEVEL`` or INFO.
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stdout StreamHandler).
    """
    global _configured

    if _configured:
        return

    if level is None:
        level = level_from_name(os.environ.get(LOG_LEVEL_ENV))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees our records
    root_logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``).

    Child loggers carry no handlers of their own and inherit the level of the
    ``navgraph`` logger.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``navgraph`` logger and its handlers."""
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def set_verbosity(verbose: bool = False, quiet: bool = False) -> int:
    """Apply the CLI verbosity flags and return the resulting level.

    ``verbose`` wins over ``quiet``.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    set_global_log_level(level)
    return level


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the handler and forget the configuration (mainly for testing)."""
    global _configured
    _configured = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
