# infrastructure/logging/loguru_logger.py
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from loguru import logger as _loguru

from application.ports.logger import LoggerPort


class LoguruLogger(LoggerPort):
    """
    LoggerPort backed by loguru. Bound fields travel in loguru's ``extra``
    and are also rendered into the message as JSON.
    """

    def __init__(self, bound: Optional[Dict[str, Any]] = None, sink_logger=None):
        self.bound: Dict[str, Any] = dict(bound or {})
        self._logger = (sink_logger or _loguru).bind(**self.bound)
        self._root = sink_logger or _loguru

    def bind(self, **fields: Any) -> "LoguruLogger":
        merged = dict(self.bound)
        merged.update(fields)
        return LoguruLogger(bound=merged, sink_logger=self._root)

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("DEBUG", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("INFO", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._emit("WARNING", event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("ERROR", event, fields)

    def _emit(self, level: str, event: str, fields: Dict[str, Any]) -> None:
        payload = dict(self.bound)
        payload.update(fields)
        message = f"{event} {json.dumps(payload, ensure_ascii=False, default=str)}"
        self._logger.bind(**fields).log(level, message)
