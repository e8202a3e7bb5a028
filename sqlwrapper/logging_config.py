"""
Centralized logging configuration for sqlwrapper.

Nothing is configured on import. The ``sqlwrapper`` logger gets its console
handler the first time ``get_logger`` is called, and rotating log files only
when ``LOG_DIR`` is set.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional
import functools


# ANSI Color codes for console output
class Colors:
    RESET = '\033[0m'
    BOLD = '\033[1m'

    RED = '\033[31m'
    WHITE = '\033[37m'

    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_CYAN = '\033[96m'


LOG_FORMAT = '[%(asctime)s] %(levelname)-8s %(name)-20s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Set on records that must reach the console regardless of LOG_LEVEL
DEBUG_OUTPUT = 'debug_output'


class ColoredFormatter(logging.Formatter):
    """Console formatter with the level and logger name in colour."""

    LEVEL_COLORS = {
        'DEBUG': Colors.BRIGHT_BLACK,
        'INFO': Colors.BRIGHT_BLUE,
        'WARNING': Colors.BRIGHT_YELLOW,
        'ERROR': Colors.BRIGHT_RED,
        'CRITICAL': Colors.RED + Colors.BOLD,
    }

    def __init__(self, datefmt: str = DATE_FORMAT):
        super().__init__(datefmt=datefmt)

    def format(self, record):
        level_color = self.LEVEL_COLORS.get(record.levelname, Colors.WHITE)
        timestamp = self.formatTime(record, self.datefmt)

        line = (
            f"{Colors.BRIGHT_BLACK}[{timestamp}]{Colors.RESET} "
            f"{level_color}{record.levelname:<8s}{Colors.RESET} "
            f"{Colors.BRIGHT_CYAN}{record.name:<20s}{Colors.RESET}: "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


class ConsoleFilter(logging.Filter):
    """Pass records at or above ``level``, plus any flagged as debug output."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno >= self.level or getattr(record, DEBUG_OUTPUT, False)


class WrapperLogger:
    """Attaches the package handlers once per process."""

    _instance = None
    _loggers = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(WrapperLogger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self.log_level = getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO)
        self.logs_dir = os.getenv('LOG_DIR') or None

        if self.logs_dir:
            os.makedirs(self.logs_dir, exist_ok=True)

        self._configure_package_logger()

    def _file_handler(self, filename: str, max_bytes: int, backup_count: int) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(self.logs_dir, filename),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def _configure_package_logger(self):
        package_logger = logging.getLogger('sqlwrapper')
        package_logger.setLevel(logging.DEBUG)

        # Level filtering happens in ConsoleFilter so debug output can bypass it
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.addFilter(ConsoleFilter(self.log_level))
        console_handler.setFormatter(ColoredFormatter())
        package_logger.addHandler(console_handler)

        if self.logs_dir:
            package_logger.addHandler(self._file_handler('sqlwrapper.log', 50*1024*1024, 5))

    def get_logger(self, name: str, log_file: Optional[str] = None) -> logging.Logger:
        """
        Get a logger below the ``sqlwrapper`` tree.

        Args:
            name: Logger name
            log_file: Extra rotating file for this logger, used only when
                ``LOG_DIR`` is set
        """
        logger = self._loggers.get(name)
        if logger is None:
            logger = logging.getLogger(name)
            if log_file and self.logs_dir:
                logger.addHandler(self._file_handler(log_file, 10*1024*1024, 3))
            self._loggers[name] = logger
        return logger


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """Convenience function to get a logger."""
    return WrapperLogger().get_logger(name, log_file)


def log_function_call(logger: logging.Logger, log_args: bool = False):
    """Log entry, completion and failure of the decorated function."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if log_args:
                logger.debug("Calling %s(args=%r, kwargs=%r)", func.__name__, args, kwargs)
            else:
                logger.debug("Calling %s", func.__name__)

            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("%s failed", func.__name__)
                raise
            logger.debug("%s returned", func.__name__)
            return result

        return wrapper
    return decorator


class DatabaseLogger:
    """Special logger for database operations.

    With ``verbose`` set, queries and connection events are logged at INFO and
    flagged for the console, so they reach stdout at any ``LOG_LEVEL``.
    Otherwise they are logged at DEBUG.
    """

    def __init__(self, verbose: bool = False):
        self.logger = get_logger('sqlwrapper.database', 'database.log')
        self.verbose = verbose

    def _log(self, message: str):
        if self.verbose:
            self.logger.info(message, extra={DEBUG_OUTPUT: True})
        else:
            self.logger.debug(message)

    def log_query(self, query: str, params: tuple = None):
        """Log database queries."""
        if params:
            self._log(f"SQL Query: {query} | Params: {params}")
        else:
            self._log(f"SQL Query: {query}")

    def log_connection(self, operation: str):
        """Log database connection operations."""
        self._log(f"Database connection: {operation}")

    def log_error(self, operation: str, error: Exception):
        """Log database errors."""
        self.logger.error(f"Database error in {operation}: {error}", exc_info=True)
