"""Observer bus for planner state events.

Events:
  state.changed -> payload {"reason": str}           (session swapped in a new state)
  state.saved   -> payload {"ok": bool, "at": float} (a save attempt finished)

Listeners are callables taking (event_name, payload). Saves finish on the
autosave timer thread, so subscription changes and delivery share a lock.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from threading import Lock
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

STATE_CHANGED = "state.changed"
STATE_SAVED = "state.saved"

Listener = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._lock = Lock()
		self._listeners: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener):
		with self._lock:
			if callback not in self._listeners[event_name]:
				self._listeners[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Listener):
		with self._lock:
			if callback in self._listeners.get(event_name, []):
				self._listeners[event_name].remove(callback)

	def listeners(self, event_name: str) -> List[Listener]:
		with self._lock:
			return list(self._listeners.get(event_name, []))

	def publish(self, event_name: str, payload: Any = None) -> int:
		"""Deliver to every listener; returns how many handled it without raising."""
		delivered = 0
		for cb in self.listeners(event_name):
			try:
				cb(event_name, payload)
				delivered += 1
			except Exception:
				logger.exception("Listener %r failed on %s", cb, event_name)
		return delivered


# Process-wide bus shared by the session, autosave and save observers
GLOBAL_EVENT_BUS = EventBus()

__all__ = ['EventBus', 'GLOBAL_EVENT_BUS', 'Listener', 'STATE_CHANGED', 'STATE_SAVED']
