import logging
import sys
from logging import config as logging_config

from pydantic_settings import BaseSettings, SettingsConfigDict

# Loggers that are chatty at INFO (one line per outgoing request)
NOISY_LOGGERS = ("httpx", "httpcore")

LEVEL_COLORS = {
    "DEBUG": "\x1b[36m",
    "INFO": "\x1b[32m",
    "WARNING": "\x1b[33m",
    "ERROR": "\x1b[31m",
    "CRITICAL": "\x1b[41m",
}
RESET = "\x1b[0m"


class LoggingSettings(BaseSettings):
    """Log level and coloring, loaded from LOG_* environment variables."""

    level: str = "INFO"
    color: bool | None = None  # None: color only when stdout is a terminal
    events_level: str | None = None

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color, unless ``use_color`` is off."""

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname) if self.use_color else None
        if color is None:
            return super().format(record)
        levelname = record.levelname
        record.levelname = f"{color}{levelname}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def configure_logging(level: str | None = None, color: bool | None = None) -> LoggingSettings:
    """Route app and uvicorn logs to stdout.

    Explicit arguments win over LOG_LEVEL / LOG_COLOR. The gallery event logger
    follows LOG_EVENTS_LEVEL when set, the app level otherwise.
    """
    settings = LoggingSettings()
    if level is not None:
        settings.level = level
    if color is not None:
        settings.color = color
    use_color = settings.color if settings.color is not None else sys.stdout.isatty()
    level_name = settings.level.upper()

    def formatter(fmt: str) -> dict:
        return {"()": ColoredFormatter, "fmt": fmt, "datefmt": "%Y-%m-%d %H:%M:%S", "use_color": use_color}

    def stream_handler(formatter_name: str) -> dict:
        return {"class": "logging.StreamHandler", "formatter": formatter_name, "stream": "ext://sys.stdout"}

    uvicorn_logger = {"handlers": ["default"], "level": level_name, "propagate": False}
    logging_config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s"),
                "access": formatter("%(asctime)s %(levelname)-5s %(message)s"),
            },
            "handlers": {"default": stream_handler("default"), "access": stream_handler("access")},
            "loggers": {
                "uvicorn": uvicorn_logger,
                "uvicorn.error": uvicorn_logger,
                "uvicorn.access": {"handlers": ["access"], "level": level_name, "propagate": False},
                "wizmatik.events": {"level": (settings.events_level or level_name).upper()},
            },
            "root": {"handlers": ["default"], "level": level_name},
        }
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return settings


__all__ = ["ColoredFormatter", "LoggingSettings", "configure_logging"]
