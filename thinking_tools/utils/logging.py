from __future__ import annotations
import json, logging, sys, time, uuid
from typing import Any, TextIO
from datetime import datetime, timezone

# stdout は MCP のプロトコル用なので、ログは常に stderr へ出す
EXTRA_FIELDS = ("request_id", "tool", "status", "elapsed_ms", "artifacts_count", "part", "parts", "path", "chars")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": int(time.time() * 1000),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        for k in EXTRA_FIELDS:
            v = getattr(record, k, None)
            if v is not None:
                payload[k] = v
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> None:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def new_request_id() -> str:
    return uuid.uuid4().hex
