"""Web-facing observers for shopping-list cost events.

Subscribes to the GLOBAL_EVENT_BUS for reconciliation, drift and repricing
events and keeps an in-memory ring buffer the HTTP layer can poll.

  * Each event gets an auto-increment id (cursor); clients ask for
    since=<last_id_seen> to receive only newer events.
  * A Lock guards the buffer; state is per-process.
  * MAX_EVENTS caps memory.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, SHOPPING_LIST_RECONCILED, SHOPPING_LIST_TOTAL_DRIFT, SHOPPING_LIST_REPRICED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False

_OBSERVED = (SHOPPING_LIST_RECONCILED, SHOPPING_LIST_TOTAL_DRIFT, SHOPPING_LIST_REPRICED)
_COPIED_FIELDS = ('list_id', 'previous_total', 'new_total', 'changed', 'difference', 'item_count')


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            for k in _COPIED_FIELDS:
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _OBSERVED:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.debug("Web observers subscribed to %s", ", ".join(_OBSERVED))


def get_events(since: Optional[int] = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), plus next_cursor for the next poll."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
