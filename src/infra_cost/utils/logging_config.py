"""Logging configuration for the infra-cost CLI."""

import json
import logging
import logging.handlers
import os
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

ROOT_LOGGER_NAME = "infra_cost"


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


@dataclass
class LoggingConfig:
    """Configuration for logging system."""

    level: LogLevel = LogLevel.WARNING
    format_type: LogFormat = LogFormat.DETAILED
    enable_file_logging: bool = False
    enable_console_logging: bool = True
    log_directory: str = str(Path.home() / ".infra-cost" / "logs")
    log_filename: str = "infra-cost.log"
    max_file_size_mb: int = 10
    backup_count: int = 5
    console_colors: bool = True
    sensitive_data_patterns: List[str] = field(
        default_factory=lambda: [r"secret", r"token", r"password", r"credential"]
    )

    @classmethod
    def for_verbosity(cls, verbose: bool) -> "LoggingConfig":
        """Console logging at DEBUG when verbose, WARNING otherwise."""
        return cls(level=LogLevel.DEBUG if verbose else LogLevel.WARNING)


class SensitiveDataFilter(logging.Filter):
    """Filter to redact sensitive words from log messages."""

    def __init__(self, patterns: List[str]) -> None:
        super().__init__()
        self.compiled_patterns = [re.compile(pattern, re.IGNORECASE) for pattern in patterns]

    def filter(self, record: logging.LogRecord) -> bool:
        # Records are modified, never dropped
        if isinstance(record.msg, str):
            for pattern in self.compiled_patterns:
                record.msg = pattern.sub("[REDACTED]", record.msg)
        return True


class StructuredFormatter(logging.Formatter):
    """Formats log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with color support."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = True) -> None:
        """
        Initialize the colored formatter.

        Args:
            use_colors: Whether to use colors in output
        """
        super().__init__()
        self.use_colors = use_colors and self._supports_color()

    def _supports_color(self) -> bool:
        """Check if the terminal supports colors."""
        return (
            hasattr(sys.stderr, "isatty")
            and sys.stderr.isatty()
            and os.environ.get("TERM") != "dumb"
        )

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            reset = self.COLORS["RESET"]
            formatted = (
                f"{color}[{timestamp}] {record.levelname:<8}{reset} - "
                f"{record.name} - {record.getMessage()}"
            )
        else:
            formatted = f"[{timestamp}] {record.levelname:<8} - {record.name} - {record.getMessage()}"

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"
        return formatted


class LoggingManager:
    """
    Configures the ``infra_cost`` logger hierarchy.

    Console output goes to stderr so command output on stdout stays clean.
    File logging uses a rotating handler with JSON records.
    """

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()

    def setup_logging(self) -> logging.Logger:
        """Set up handlers on the package root logger and return it."""
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(getattr(logging, self.config.level.value))

        # Re-running setup must not stack handlers
        root_logger.handlers.clear()

        if self.config.enable_console_logging:
            root_logger.addHandler(self._create_console_handler())

        if self.config.enable_file_logging:
            Path(self.config.log_directory).mkdir(parents=True, exist_ok=True)
            root_logger.addHandler(self._create_file_handler())

        for logger_name in ("asyncio", "urllib3"):
            logging.getLogger(logger_name).setLevel(logging.WARNING)

        return root_logger

    def _create_console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(getattr(logging, self.config.level.value))

        formatter: logging.Formatter
        if self.config.format_type == LogFormat.JSON:
            formatter = StructuredFormatter()
        elif self.config.format_type == LogFormat.DETAILED and self.config.console_colors:
            formatter = ColoredConsoleFormatter()
        else:
            formatter = logging.Formatter(
                "[%(asctime)s] %(levelname)-8s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

        handler.setFormatter(formatter)
        if self.config.sensitive_data_patterns:
            handler.addFilter(SensitiveDataFilter(self.config.sensitive_data_patterns))
        return handler

    def _create_file_handler(self) -> logging.Handler:
        """Create rotating file handler."""
        log_file = Path(self.config.log_directory) / self.config.log_filename

        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_file),
            maxBytes=self.config.max_file_size_mb * 1024 * 1024,
            backupCount=self.config.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(getattr(logging, self.config.level.value))
        handler.setFormatter(StructuredFormatter())

        if self.config.sensitive_data_patterns:
            handler.addFilter(SensitiveDataFilter(self.config.sensitive_data_patterns))
        return handler


def setup_logging(verbose: bool = False, config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Set up logging for the CLI.

    Args:
        verbose: Log at DEBUG level instead of WARNING
        config: Explicit logging configuration, takes precedence over ``verbose``

    Returns:
        The configured ``infra_cost`` root logger
    """
    manager = LoggingManager(config or LoggingConfig.for_verbosity(verbose))
    return manager.setup_logging()
