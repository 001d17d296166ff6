"""Simple Event Bus / Observer implementation for shopping-list cost events.

Event names:
  shopping_list.reconciled -> payload {"list_id", "previous_total", "new_total", "changed"}
  shopping_list.total_drift -> payload {"list_id", "previous_total", "new_total", "difference"}
  shopping_list.repriced -> payload {"list_id", "item_count", "previous_total", "new_total"}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from threading import Lock
from typing import Callable, Any, Dict, Tuple

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
SHOPPING_LIST_RECONCILED = "shopping_list.reconciled"
SHOPPING_LIST_TOTAL_DRIFT = "shopping_list.total_drift"
SHOPPING_LIST_REPRICED = "shopping_list.repriced"

Subscriber = Callable[[str, Any], None]


class EventBus:
	"""Subscriber registry, safe to use from the threadpool that runs sync routes."""

	def __init__(self):
		self._lock = Lock()
		self._subscribers: Dict[str, Tuple[Subscriber, ...]] = {}

	def subscribe(self, event_name: str, callback: Subscriber) -> Callable[[], bool]:
		"""Register callback once per event; returns a function that removes it again."""
		with self._lock:
			current = self._subscribers.get(event_name, ())
			if callback not in current:
				self._subscribers[event_name] = current + (callback,)
		return lambda: self.unsubscribe(event_name, callback)

	def unsubscribe(self, event_name: str, callback: Subscriber) -> bool:
		"""Returns False when callback was not subscribed."""
		with self._lock:
			current = self._subscribers.get(event_name, ())
			if callback not in current:
				return False
			remaining = tuple(cb for cb in current if cb != callback)
			if remaining:
				self._subscribers[event_name] = remaining
			else:
				del self._subscribers[event_name]
			return True

	def publish(self, event_name: str, payload: Any):
		# tuples are replaced, never mutated, so delivery runs outside the lock
		with self._lock:
			targets = self._subscribers.get(event_name, ())
		for cb in targets:
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'SHOPPING_LIST_RECONCILED', 'SHOPPING_LIST_TOTAL_DRIFT', 'SHOPPING_LIST_REPRICED'
]
