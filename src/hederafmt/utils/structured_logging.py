# src/hederafmt/utils/structured_logging.py
from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any, Dict, Optional

Json = Dict[str, Any]


def _now_ms() -> int:
    return int(time.time() * 1000)


def configure_structured_logging(level_name: Optional[str] = None) -> logging.Handler:
    """Route records to stdout as bare JSONL messages and return the handler.

    The level comes from `level_name`, else HEDERAFMT_LOG_LEVEL, else INFO.
    A repeat call only moves the level of the root logger and of the handler
    installed by the first call.
    """
    name = (level_name or os.environ.get("HEDERAFMT_LOG_LEVEL") or "INFO").strip().upper()
    level = getattr(logging, name, logging.INFO)

    root = logging.getLogger()
    handler: Optional[logging.Handler] = getattr(root, "_hederafmt_handler", None)
    if handler is None or handler not in root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.handlers = [handler]
        setattr(root, "_hederafmt_handler", handler)

    handler.setLevel(level)
    root.setLevel(level)
    return handler


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    """Emit a single JSONL log event."""
    payload: Json = {"ts_ms": _now_ms(), "event": str(event)}
    payload.update(fields)
    try:
        logger.info(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=repr))
    except (TypeError, ValueError):
        parts = [f"event={event}"] + [f"{k}={fields.get(k)!r}" for k in sorted(fields.keys())]
        logger.info(" ".join(parts))
