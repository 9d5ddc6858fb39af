"""Centralized logging for leb.

Progress and diagnostics go to stderr so that stdout stays reserved for
machine-readable benchmark results.

Usage:
    from leb.utils.logger import Logger

    # Configure once at startup (required before any logging)
    Logger.configure(level="INFO", timestamps=False)

    # Get a logger anywhere in the codebase
    log = Logger.get("runner")
    log.info("Spawning adapter keepsuit")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when trying to use Logger before calling Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Centralized logging for leb.

    Must be configured once before use. Attempting to log before configuration
    raises LoggerNotConfiguredError.

    Example:
        >>> Logger.configure(level="DEBUG", output="stderr")
        >>> log = Logger.get("orchestrator")
        >>> log.info("bench: running all benchmarks")
    """

    _configured: bool = False
    _root_name: str = "leb"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "INFO",
        output: str | Path | TextIO | None = "stderr",
        timestamps: bool = False,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Configure the logger. Must be called before any logging.

        Args:
            level: Log level name or LogLevel value.
            output: Where to send logs:
                - "stderr": sys.stderr (default)
                - None: stdout
                - str/Path: File path
                - TextIO: Any file-like object
            timestamps: Include timestamps in messages.
            include_location: Include [filename:lineno].
            format_string: Custom format string (overrides the other options).
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler: logging.Handler
        if output is None:
            new_handler = logging.StreamHandler(sys.stdout)
        elif output == "stderr":
            new_handler = logging.StreamHandler(sys.stderr)
        elif isinstance(output, str | Path):
            new_handler = logging.FileHandler(str(output))
        elif hasattr(output, "write"):
            new_handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        new_handler.setLevel(level.to_logging_level())

        if format_string is None:
            parts = []
            if timestamps:
                parts.append("%(asctime)s")
            parts.append("%(levelname)s")
            parts.append("[%(name)s]")
            if include_location:
                parts.append("[%(filename)s:%(lineno)d]")
            parts.append("%(message)s")
            format_string = " ".join(parts)

        new_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name (appended to "leb."). If None, returns root logger.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def get_or_default(cls, name: str) -> logging.Logger:
        """Get a logger, configuring WARNING-level stderr output if needed.

        Library entry points (runner, orchestrator) use this so they can be
        driven from tests or scripts without the CLI having configured logging.
        """
        if not cls._configured:
            cls.configure(level=LogLevel.WARNING)
        return cls.get(name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change log level without reconfiguring.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured
