"""Event helper utilities.

This module provides helper functions for publishing planner and lookup
events using the global event bus.

Quick import:
    from nutrilens.events.event_helpers import (
        publish_plan_generated, publish_plan_fallback, publish_lookup_failed
    )
"""
from __future__ import annotations
from typing import Dict, Optional
from .Event_Bus import (
    publish,
    PLAN_GENERATED, PLAN_FALLBACK, LOOKUP_FAILED,
)

__all__ = [
    'publish_plan_generated', 'publish_plan_fallback', 'publish_lookup_failed',
    'PLAN_GENERATED', 'PLAN_FALLBACK', 'LOOKUP_FAILED',
]


def publish_plan_generated(day: str, slot: Optional[str], meals: Dict[str, str]):
    """Publish a plan.generated event."""
    publish(PLAN_GENERATED, {
        'date': day,
        'slot': slot,
        'meals': dict(meals),
    })


def publish_plan_fallback(day: str, slot: Optional[str], message: str):
    """Publish a plan.fallback event: the plan was filled from offline suggestions."""
    publish(PLAN_FALLBACK, {
        'date': day,
        'slot': slot,
        'message': message,
    })


def publish_lookup_failed(source: str, query: str, message: str):
    """Publish a lookup.failed event for a nutrition search or barcode lookup."""
    publish(LOOKUP_FAILED, {
        'source': source,
        'query': query,
        'message': message,
    })
