"""Domain events published after a unit of work commits.

Subscribers run synchronously in the publishing call. A failing subscriber is
logged and skipped: it can never undo or fail the operation that emitted the
event.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable

from washbook.domain.entities import Appointment, User, Vendor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppointmentCreated:
    appointment: Appointment
    vendor: Vendor


@dataclass(frozen=True)
class AppointmentCompleted:
    appointment: Appointment
    coin_reward: int


@dataclass(frozen=True)
class UserRegistered:
    user: User


Handler = Callable[[Any], None]


class EventBus:
    """Minimal in-process publish/subscribe dispatcher."""

    def __init__(self):
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: Handler) -> None:
        """Register a handler for one event type."""
        self._handlers[event_type].append(handler)

    def publish(self, event: Any) -> None:
        """Deliver an event to every handler registered for its type."""
        for handler in list(self._handlers[type(event)]):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %r failed for %s", handler, type(event).__name__
                )
