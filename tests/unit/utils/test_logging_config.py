"""Tests for logging configuration."""

import json
import logging
import logging.handlers

import pytest

from infra_cost.utils.logging_config import (
    ROOT_LOGGER_NAME,
    ColoredConsoleFormatter,
    LogFormat,
    LoggingConfig,
    LoggingManager,
    LogLevel,
    SensitiveDataFilter,
    StructuredFormatter,
    setup_logging,
)


def _record(message, level=logging.INFO):
    return logging.LogRecord(
        name="infra_cost.cache.manager",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


@pytest.fixture
def restore_root_logger():
    """Restore the package logger after a test reconfigures it."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)


class TestLoggingConfig:
    """Test LoggingConfig defaults."""

    def test_defaults(self):
        config = LoggingConfig()

        assert config.level == LogLevel.WARNING
        assert config.format_type == LogFormat.DETAILED
        assert config.enable_file_logging is False
        assert config.log_directory.endswith("logs")

    def test_for_verbosity(self):
        assert LoggingConfig.for_verbosity(True).level == LogLevel.DEBUG
        assert LoggingConfig.for_verbosity(False).level == LogLevel.WARNING


class TestSensitiveDataFilter:
    """Test redaction of sensitive words."""

    def test_redacts_matching_words(self):
        log_filter = SensitiveDataFilter([r"secret", r"token"])
        record = _record("Loaded Token from secret store")

        assert log_filter.filter(record) is True
        assert record.msg == "Loaded [REDACTED] from [REDACTED] store"

    def test_leaves_other_messages_alone(self):
        record = _record("Cache hit for budgets")

        SensitiveDataFilter([r"secret"]).filter(record)

        assert record.msg == "Cache hit for budgets"


class TestFormatters:
    """Test log formatters."""

    def test_structured_formatter_emits_json(self):
        output = json.loads(StructuredFormatter().format(_record("Cached budgets")))

        assert output["level"] == "INFO"
        assert output["logger"] == "infra_cost.cache.manager"
        assert output["message"] == "Cached budgets"
        assert output["line"] == 10

    def test_console_formatter_without_colors(self):
        formatter = ColoredConsoleFormatter(use_colors=False)

        output = formatter.format(_record("Cache miss", level=logging.WARNING))

        assert output.endswith("WARNING  - infra_cost.cache.manager - Cache miss")
        assert "\033[" not in output


class TestLoggingManager:
    """Test handler setup on the package logger."""

    def test_console_handler_on_stderr(self, restore_root_logger):
        root_logger = setup_logging(verbose=True)

        assert root_logger.name == ROOT_LOGGER_NAME
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], logging.StreamHandler)

    def test_setup_is_idempotent(self, restore_root_logger):
        setup_logging()
        root_logger = setup_logging()

        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.WARNING

    def test_json_console_format(self, restore_root_logger):
        root_logger = setup_logging(config=LoggingConfig(format_type=LogFormat.JSON))

        assert isinstance(root_logger.handlers[0].formatter, StructuredFormatter)

    def test_file_logging(self, tmp_path, restore_root_logger):
        config = LoggingConfig(
            level=LogLevel.INFO,
            enable_file_logging=True,
            enable_console_logging=False,
            log_directory=str(tmp_path / "logs"),
        )

        root_logger = LoggingManager(config).setup_logging()
        logging.getLogger("infra_cost.cache.manager").info("Pruned 3 expired cache entries")
        for handler in root_logger.handlers:
            handler.flush()

        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], logging.handlers.RotatingFileHandler)
        line = (tmp_path / "logs" / "infra-cost.log").read_text(encoding="utf-8").strip()
        assert json.loads(line)["message"] == "Pruned 3 expired cache entries"
