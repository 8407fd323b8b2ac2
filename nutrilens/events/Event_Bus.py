"""Simple Event Bus / Observer implementation for user-facing notices.

Event names used so far:
  plan.generated -> payload {"date": str, "slot": str | None, "meals": dict}
  plan.fallback  -> payload {"date": str, "slot": str | None, "message": str}
  lookup.failed  -> payload {"source": "nutrition" | "product", "query": str, "message": str}

Subscribers are callables taking (event_name, payload). web_observers records
only the warning events (plan.fallback, lookup.failed) as dismissible notices;
plan.generated carries no warning and is published for other in-process
listeners.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_GENERATED = "plan.generated"
PLAN_FALLBACK = "plan.fallback"
LOOKUP_FAILED = "lookup.failed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# a broken listener must not break the action that emitted the event
				logger.exception(f"Error delivering {event_name} to {cb}")


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'PLAN_GENERATED', 'PLAN_FALLBACK', 'LOOKUP_FAILED'
]
