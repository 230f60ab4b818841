"""Structured logging for localization storage."""

import logging
import sys
from typing import Optional
from pathlib import Path
from .colors import Colors

ROOT_LOGGER_NAME = 'localization_storage'


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors console output by log level.

    File handlers use a plain ``logging.Formatter`` so log files stay free of
    ANSI escape codes.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DIM,
        logging.INFO: '',
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the formatter.

        Args:
            fmt: Format string for log messages
            use_colors: Whether to use ANSI colors
        """
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno, '')
            if color:
                message = f"{color}{message}{Colors.ENDC}"

        return message


class Logger:
    """
    Package logger for localization storage.

    One instance per process. Owns the console handler (and an optional file
    handler) attached to the ``localization_storage`` logger; modules log
    through child loggers obtained with :meth:`get_logger`. Console logs go
    to stderr; stdout carries command output only.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []

        self._console_handler = self._create_console_handler()
        self._logger.addHandler(self._console_handler)

        self._file_handler: Optional[logging.FileHandler] = None

        Logger._initialized = True

    def _create_console_handler(
        self,
        level: int = logging.INFO,
        use_colors: bool = True
    ) -> logging.StreamHandler:
        """
        Create a console handler with optional colors.

        Args:
            level: Minimum log level for console output
            use_colors: Whether to use ANSI colors

        Returns:
            Configured StreamHandler
        """
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter(fmt='%(message)s', use_colors=use_colors))
        return handler

    def _create_file_handler(
        self,
        file_path: Path,
        level: int = logging.DEBUG
    ) -> logging.FileHandler:
        """
        Create a file handler with timestamps.

        Args:
            file_path: Path to log file
            level: Minimum log level for file output

        Returns:
            Configured FileHandler
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(file_path, encoding='utf-8')
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Configure console verbosity and optional file output.

        Args:
            verbose: Enable DEBUG console output
            quiet: Only WARNING and above on the console (wins over verbose)
            log_file: Optional file path for logging
            use_colors: Whether to use colors in console
        """
        if quiet:
            console_level = logging.WARNING
        elif verbose:
            console_level = logging.DEBUG
        else:
            console_level = logging.INFO

        self._logger.removeHandler(self._console_handler)
        self._console_handler = self._create_console_handler(
            level=console_level,
            use_colors=use_colors
        )
        self._logger.addHandler(self._console_handler)

        if log_file:
            if self._file_handler:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
            self._file_handler = self._create_file_handler(log_file)
            self._logger.addHandler(self._file_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """
        Return the package logger, or a child logger for ``name``.

        Args:
            name: Optional module name, e.g. ``'store'``

        Returns:
            Logger instance
        """
        if name:
            return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        return self._logger


_logger: Optional[Logger] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a module logger under the ``localization_storage`` hierarchy.

    Creates the package :class:`Logger` (and its console handler) on first use.

    Args:
        name: Optional module name for hierarchical logging

    Returns:
        ``logging.Logger`` instance
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger.get_logger(name)


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """
    Configure the package logger.

    Args:
        verbose: Enable verbose (DEBUG) console output
        quiet: Enable quiet mode (WARNING+ only)
        log_file: Optional file path for logging
        use_colors: Whether to use colors in console
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    _logger.configure(
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        use_colors=use_colors
    )


def reset_logger() -> None:
    """Reset the package logger (mainly for testing)."""
    global _logger
    if _logger is not None:
        for handler in _logger._logger.handlers[:]:
            handler.close()
            _logger._logger.removeHandler(handler)
    _logger = None
    Logger._instance = None
    Logger._initialized = False
