import logging
import os
from unittest.mock import patch

import pytest

from wizmatik.logging_config import ColoredFormatter, LoggingSettings, configure_logging


def make_record(level: int) -> logging.LogRecord:
    return logging.LogRecord("wizmatik.test", level, __file__, 1, "hello", None, None)


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    with patch.dict(os.environ, {}, clear=True):
        configure_logging(level="INFO", color=False)


def test_colored_formatter_wraps_level_name():
    formatter = ColoredFormatter("%(levelname)s %(message)s")
    record = make_record(logging.ERROR)

    output = formatter.format(record)

    assert output == "\x1b[31mERROR\x1b[0m hello"
    assert record.levelname == "ERROR"


def test_colored_formatter_plain_when_color_off():
    formatter = ColoredFormatter("%(levelname)s %(message)s", use_color=False)

    assert formatter.format(make_record(logging.WARNING)) == "WARNING hello"


def test_settings_from_environment():
    with patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_COLOR": "false", "LOG_EVENTS_LEVEL": "WARNING"}, clear=True):
        settings = LoggingSettings()

    assert settings.level == "debug"
    assert settings.color is False
    assert settings.events_level == "WARNING"


def test_configure_logging_quiets_http_client_loggers():
    with patch.dict(os.environ, {}, clear=True):
        configure_logging(level="DEBUG")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_configure_logging_reads_level_from_environment():
    with patch.dict(os.environ, {"LOG_LEVEL": "warning", "LOG_EVENTS_LEVEL": "error"}, clear=True):
        settings = configure_logging()

    assert settings.level == "warning"
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("wizmatik.events").level == logging.ERROR


def test_explicit_arguments_win():
    with patch.dict(os.environ, {"LOG_LEVEL": "ERROR", "LOG_COLOR": "true"}, clear=True):
        settings = configure_logging(level="INFO", color=False)

    assert settings.color is False
    assert logging.getLogger().level == logging.INFO
    formatter = logging.getLogger().handlers[0].formatter
    assert isinstance(formatter, ColoredFormatter)
    assert formatter.use_color is False
