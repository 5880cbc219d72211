"""
Event Notifier for Album Service

In-process publish/subscribe fan-out owned by the application.
Client session bridges and the NATS forwarder register as subscribers.
"""

import asyncio
import fnmatch
import inspect
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, List, Set

from core.nats_client import Event

from ..protocols import EventHandler

logger = logging.getLogger(__name__)


@dataclass
class Subscription:
    """Handler registered for an event type pattern"""
    subscription_id: str
    pattern: str
    handler: EventHandler
    name: str


class EventNotifier:
    """
    Publish/subscribe fan-out.

    publish_event() schedules one delivery task per matching subscriber and
    returns without waiting for delivery. Handler failures are logged and
    never reach the publisher. Must be used from a running event loop.
    """

    def __init__(self):
        self._subscriptions: Dict[str, Subscription] = {}
        self._pending: Set[asyncio.Task] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def subscribe(self, handler: EventHandler, pattern: str = "*", name: str = None) -> str:
        """
        Register a handler.

        Args:
            handler: Sync or async callable receiving the Event
            pattern: fnmatch pattern on the event type, e.g. "config.*"
            name: Label used in log messages

        Returns:
            str: Subscription ID for unsubscribe()
        """
        subscription_id = uuid.uuid4().hex
        self._subscriptions[subscription_id] = Subscription(
            subscription_id=subscription_id,
            pattern=pattern,
            handler=handler,
            name=name or getattr(handler, "__qualname__", repr(handler)),
        )
        logger.debug(f"Subscriber {subscription_id} registered for '{pattern}'")
        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """Remove a subscription, returns False if it was unknown"""
        return self._subscriptions.pop(subscription_id, None) is not None

    def _matching(self, event: Event) -> List[Subscription]:
        return [
            sub for sub in self._subscriptions.values()
            if fnmatch.fnmatchcase(event.type, sub.pattern)
        ]

    async def publish_event(self, event: Event) -> None:
        """Fan the event out to all matching subscribers"""
        for subscription in self._matching(event):
            task = asyncio.create_task(self._deliver(subscription, event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _deliver(self, subscription: Subscription, event: Event) -> None:
        try:
            result = subscription.handler(event)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(
                f"Subscriber {subscription.name} failed to handle {event.type} event {event.id}: {e}"
            )

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


__all__ = ["Subscription", "EventNotifier"]
