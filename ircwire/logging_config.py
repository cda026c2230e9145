"""
Logging configuration for ircwire applications.

Provides a configurable colorlog setup and structured error logging for
transport failures.
"""

import logging
import os
import sys
from typing import Any

import colorlog


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error with structured context.

    Args:
        error_type: Category of the error (e.g., 'network', 'parsing')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"

    if exception:
        structured_message += f" | Exception: {type(exception).__name__}: {str(exception)}"

    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.getLogger("ircwire").log(level, structured_message)


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, debug: bool | None = None):
        """Initialize the configurator.

        Args:
            debug: Force DEBUG level; when None the DEBUG env var decides.
        """
        self.debug = debug

    def _resolve_level(self) -> int:
        if self.debug is not None:
            return logging.DEBUG if self.debug else logging.INFO
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

    def configure(self) -> int:
        """Configure root logging with colored output using colorlog.

        Returns:
            The log level that was applied.
        """
        log_level = self._resolve_level()

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self.build_formatter())

        logging.basicConfig(level=log_level, handlers=[handler], force=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # Suppress websockets library frame-level debug messages
        logging.getLogger("websockets").setLevel(logging.INFO)
        return log_level
