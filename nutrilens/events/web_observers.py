"""Web-facing observers for planner and lookup warnings.

This module subscribes to the GLOBAL_EVENT_BUS for:
  - plan.fallback
  - lookup.failed

and stores a lightweight in-memory ring buffer of recent notices that the web
layer serves so clients can show transient, dismissible warnings.

Design:
  * Each notice gets an auto-increment integer id (cursor) so clients can
    request only newer ones (since=<last_id_seen>).
  * A Lock guards the buffer; sync FastAPI handlers run in a thread pool.
  * A MAX_EVENTS cap prevents unbounded memory growth.
  * dismiss(id) removes a notice once the user has closed it.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_FALLBACK, LOOKUP_FAILED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 100
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            for k in ('date', 'slot', 'source', 'query', 'message'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]
    logger.debug(f"Recorded notice {evt['id']} ({event_name})")


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(PLAN_FALLBACK, _record)
    GLOBAL_EVENT_BUS.subscribe(LOOKUP_FAILED, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return notices newer than 'since' (exclusive).

    If since is None, returns every buffered notice.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def dismiss(event_id: int) -> bool:
    with _lock:
        for i, evt in enumerate(_events):
            if evt['id'] == event_id:
                del _events[i]
                return True
    return False


def clear():
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'dismiss', 'clear']
