"""Millisecond clock used to timestamp outgoing notifications."""

from __future__ import annotations

import threading
import time

_lock = threading.Lock()
_last_millis = 0


def current_millis() -> int:
    """Return milliseconds since the epoch, never lower than a previous call.

    The wall clock may be stepped backwards (NTP corrections); in that case the
    last value handed out is repeated until real time catches up.
    """

    global _last_millis
    now = time.time_ns() // 1_000_000
    with _lock:
        if now > _last_millis:
            _last_millis = now
        return _last_millis


__all__ = ["current_millis"]
