"""
Lightweight structured trace of spin events.

Enabled when the DEBUG_LOG_PATH env var is set. Each call appends one JSON
line tagged with the wheel and spin it belongs to, so one spin trajectory
can be pulled out of the file and replayed without touching the regular logs.
"""

from __future__ import annotations

import json
import os
import time
from typing import Any


def debug_log(
    event: str,
    location: str,
    message: str,
    data: dict[str, Any] | None = None,
    *,
    wheel_id: str = "wheel",
    spin_id: int | None = None,
) -> None:
    """
    Append a JSONL trace entry to DEBUG_LOG_PATH if configured.
    """
    path = os.getenv("DEBUG_LOG_PATH")
    if not path:
        return

    payload = {
        "wheelId": wheel_id,
        "spinId": spin_id,
        "event": event,
        "timestamp": int(time.time() * 1000),
        "location": location,
        "message": message,
        "data": data or {},
    }

    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload) + "\n")
    except Exception:
        # Tracing must never interfere with a spin
        return
