"""
In-process publish/subscribe for "something changed" notifications.

Events carry no payload; subscribers re-fetch whatever they display.
"""

import inspect
import logging
from enum import Enum
from typing import Awaitable, Callable, Union

logger = logging.getLogger(__name__)


class ScheduleEvent(str, Enum):
    TEAMS_UPDATED = "teamsUpdated"
    BOOKINGS_UPDATED = "bookingsUpdated"
    PEOPLE_UPDATED = "peopleUpdated"
    PRODUCTS_UPDATED = "productsUpdated"


Handler = Callable[[], Union[None, Awaitable[None]]]


class EventBus:
    """Fan-out of change events to sync or async handlers"""

    def __init__(self):
        self._handlers: dict[ScheduleEvent, list[Handler]] = {event: [] for event in ScheduleEvent}

    def subscribe(self, event: ScheduleEvent, handler: Handler) -> None:
        if handler not in self._handlers[event]:
            self._handlers[event].append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        for event in ScheduleEvent:
            self.subscribe(event, handler)

    def unsubscribe(self, event: ScheduleEvent, handler: Handler) -> None:
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    def unsubscribe_all(self, handler: Handler) -> None:
        for event in ScheduleEvent:
            self.unsubscribe(event, handler)

    async def publish(self, event: ScheduleEvent) -> int:
        """
        Call every handler of an event in subscription order.

        A failing handler is logged and skipped so one broken view cannot
        stop the others from refreshing.

        Returns:
            Number of handlers that completed
        """
        completed = 0
        for handler in list(self._handlers[event]):
            try:
                result = handler()
                if inspect.isawaitable(result):
                    await result
                completed += 1
            except Exception as e:
                logger.error(f"❌ {event.value} handler {getattr(handler, '__qualname__', handler)} failed: {e}")
        logger.debug(f"📣 {event.value} delivered to {completed} handler(s)")
        return completed
