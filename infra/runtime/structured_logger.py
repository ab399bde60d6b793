from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

LEVELS = {"info": 20, "warning": 30, "error": 40}


class StructuredLogger:
    """
    Emits one JSON object per event.

    Events below ``min_level`` are dropped, so by default only warnings
    (such as failed verifications) and errors reach the output.
    """

    def __init__(self, min_level: str = "warning", stream: TextIO | None = None) -> None:
        if min_level not in LEVELS:
            raise ValueError(f"unknown log level '{min_level}', expected one of {sorted(LEVELS)}")
        self._threshold = LEVELS[min_level]
        self._stream = stream

    def info(self, message: str, **fields: Any) -> None:
        self._emit("info", message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._emit("warning", message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._emit("error", message, fields)

    def _emit(self, level: str, message: str, fields: dict[str, Any]) -> None:
        if LEVELS[level] < self._threshold:
            return
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "message": message,
            "fields": fields,
        }
        stream = self._stream or sys.stderr
        print(json.dumps(payload, sort_keys=True, default=repr), file=stream)
