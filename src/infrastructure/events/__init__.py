# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event infrastructure module for the study planner.

Components:
- EventBus: In-memory synchronous pub/sub with pattern matching
- EventTypes: Centralized event type constants
- EventPatterns: Wildcard patterns for groups of events

Quick Start:
    from src.infrastructure.events import EventBus, EventPatterns

    bus = EventBus()
    bus.subscribe(EventPatterns.ALL_PLANNER, my_handler)
"""

from src.infrastructure.events.bus import (
    EventBus,
    EventData,
    EventHandler,
)
from src.infrastructure.events.types import (
    EventPatterns,
    EventTypes,
)

__all__ = [
    # Event Bus
    "EventBus",
    "EventData",
    "EventHandler",
    # Event Types
    "EventTypes",
    "EventPatterns",
]
