"""
Cache invalidation signals

After a mutation commits, the use case publishes entity-tagged events.
The external cache layer subscribes and decides what to evict.
"""

import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Type-level tags, one per tracked entity type
ENTITY_TAGS = {
    "ProductionLine": "production-line",
    "Process": "process",
    "User": "user",
}


class InvalidationEvent(BaseModel):
    """Signal that cached data tagged with entity_tag is stale"""

    entity_type: str
    entity_tag: str


def events_for(entity_type: str, entity_id) -> List[InvalidationEvent]:
    """One type-level event and one event for the specific instance"""
    type_tag = ENTITY_TAGS.get(entity_type, entity_type.lower())
    return [
        InvalidationEvent(entity_type=entity_type, entity_tag=type_tag),
        InvalidationEvent(entity_type=entity_type, entity_tag=f"{type_tag}:{entity_id}"),
    ]


Subscriber = Callable[[InvalidationEvent], Awaitable[None]]


class InvalidationEmitter(ABC):
    """Outbound port for invalidation events"""

    @abstractmethod
    async def publish(self, event: InvalidationEvent) -> None:
        pass

    async def publish_for(self, entity_type: str, entity_id) -> None:
        for event in events_for(entity_type, entity_id):
            await self.publish(event)


class InvalidationBus(InvalidationEmitter):
    """
    In-process publish/subscribe registry.

    Publishing happens after commit: a failing subscriber is logged and never
    propagated, the mutation it reports on is already durable.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    async def publish(self, event: InvalidationEvent) -> None:
        for subscriber in list(self._subscribers):
            try:
                await subscriber(event)
            except Exception:
                logger.exception(
                    f"Invalidation subscriber failed for tag {event.entity_tag}"
                )
