import json
import logging
from datetime import UTC, datetime
from typing import Any

EVENTS_LOGGER = "wizmatik.events"


class StructuredLogger:
    """Gallery event log.

    Each event is one JSON object written as the log message of the
    ``wizmatik.events`` logger. Context bound with :meth:`bind` (the gallery
    session id, usually) is repeated on every event of that logger.
    """

    def __init__(self, name: str = EVENTS_LOGGER, context: dict[str, Any] | None = None):
        self._logger = logging.getLogger(name)
        self.context = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **context: Any) -> "StructuredLogger":
        return StructuredLogger(self.name, {**self.context, **context})

    def build_payload(self, event: str, fields: dict[str, Any]) -> dict[str, Any]:
        payload: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat(), "event": event, **self.context}
        extra = fields.pop("extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        elif extra is not None:
            payload["extra"] = extra
        payload.update(fields)
        return payload

    def log_event(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        """Emit ``event`` with the bound context and ``fields``.

        logger.bind(session_id=sid).log_event("page_advanced", page=2)
        """
        if not self._logger.isEnabledFor(level):
            return
        payload = self.build_payload(event, fields)
        self._logger.log(level, json.dumps(payload, default=str), extra={"event": event})

    def __getattr__(self, attr: str):
        # debug/info/warning/error/exception go straight to the wrapped logger
        if attr.startswith("_"):
            raise AttributeError(attr)
        return getattr(self._logger, attr)


logger = StructuredLogger()

__all__ = ["EVENTS_LOGGER", "StructuredLogger", "logger"]
