"""Save-status observer.

Subscribes to the GLOBAL_EVENT_BUS for ``state.saved`` and keeps a small
in-memory ring buffer of recent save results so the API can report when the
plan was last persisted ("Saved 12s ago").

Each record gets an auto-increment id so clients can ask only for newer
records (since=<last_id_seen>). A Lock guards the buffer because saves
complete on the autosave timer thread.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
import time

from .Event_Bus import GLOBAL_EVENT_BUS, STATE_SAVED

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 50
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    payload = payload if isinstance(payload, dict) else {}
    with _lock:
        _events.append({
            'id': _next_id,
            'type': event_name,
            'ok': bool(payload.get('ok')),
            'at': payload.get('at', time.time()),
        })
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(STATE_SAVED, _record)
    _started = True


def last_saved_at() -> Optional[float]:
    """Epoch seconds of the most recent successful save, if any."""
    with _lock:
        for evt in reversed(_events):
            if evt['ok']:
                return evt['at']
    return None


def saved_label(ts: Optional[float], now: Optional[float] = None) -> str:
    if not ts:
        return ''
    secs = max(0, int((now if now is not None else time.time()) - ts))
    if secs < 10:
        return 'just now'
    if secs < 60:
        return f'{secs}s ago'
    mins = secs // 60
    if mins < 60:
        return f'{mins}m ago'
    return f'{mins // 60}h ago'


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return save records newer than 'since' (exclusive), plus next_cursor."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def reset():
    """Forget recorded saves (used by tests)."""
    global _next_id
    with _lock:
        _events.clear()
        _next_id = 1


__all__ = ['start', 'last_saved_at', 'saved_label', 'get_events', 'reset']
