"""
Logging configuration for svsetup.

This module sets up logging with file rotation, colored console output,
and configurable log levels.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .settings import config

# Global console for rich output
console = Console()


def setup_logging(
    log_level: Optional[str] = None,
    enable_file_logging: Optional[bool] = None,
    enable_rich_logging: Optional[bool] = None,
) -> None:
    """Setup logging configuration."""

    log_level = log_level or config.get("logging.level", "INFO")
    enable_file_logging = enable_file_logging if enable_file_logging is not None else config.get("logging.file_logging", True)
    enable_rich_logging = enable_rich_logging if enable_rich_logging is not None else config.get("ui.colored_output", True)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)

    # Console handler
    if enable_rich_logging and sys.stdout.isatty():
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        console_formatter = logging.Formatter("%(message)s")
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S"
        )

    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    # File handler (if enabled)
    if enable_file_logging:
        try:
            log_file = Path(config.get("logging.log_file"))
            log_file.parent.mkdir(parents=True, exist_ok=True)

            max_bytes = _parse_size(config.get("logging.max_log_size", "10MB"))
            backup_count = config.get("logging.backup_count", 5)

            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )

            file_formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            )

            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(logging.DEBUG)  # File logs everything
            root_logger.addHandler(file_handler)

        except OSError as e:
            logging.getLogger(__name__).warning(f"Failed to setup file logging: {e}")

    # Quiet HTTP libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging setup complete. Level: {log_level}, File: {enable_file_logging}")


def _parse_size(size_str: str) -> int:
    """Parse size string like '10MB' to bytes."""
    size_str = size_str.upper()

    # Longest suffixes first so 'MB' is not read as 'B'
    multipliers = {
        'GB': 1024 ** 3,
        'MB': 1024 ** 2,
        'KB': 1024,
        'B': 1,
    }

    for suffix, multiplier in multipliers.items():
        if size_str.endswith(suffix):
            try:
                number = float(size_str[:-len(suffix)])
                return int(number * multiplier)
            except ValueError:
                break

    # Default to 10MB if parsing fails
    return 10 * 1024 ** 2
