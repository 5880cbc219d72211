"""
NATS Client for Python Microservices
Provides the event envelope and a NATS publisher for cross-service delivery

The in-process fan-out lives with each service (see album_service.events.notifier);
NATSEventBus is registered there as one more subscriber so that every event a
service publishes locally is also forwarded to the broker.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

import nats
from nats.aio.client import Client as NATS


class DecimalEncoder(json.JSONEncoder):
    """Custom JSON encoder that handles Decimal and datetime types"""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event types published to connected clients"""

    # Client sync
    CONFIG_UPDATED = "config.updated"

    # Human-readable notifications
    NOTIFY_SUCCESS = "notify.success"


class ServiceSource(Enum):
    """Service sources"""

    ALBUM_SERVICE = "album_service"
    GATEWAY = "api_gateway"


class Event:
    """Event model"""

    def __init__(
        self,
        event_type: EventType,
        source: ServiceSource,
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value
        self.source = source.value
        self.data = data
        self.subject = subject
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        event = cls.__new__(cls)
        event.id = data.get("id")
        event.type = data.get("type")
        event.source = data.get("source")
        event.subject = data.get("subject")
        event.timestamp = data.get("timestamp")
        event.data = data.get("data", {})
        event.metadata = data.get("metadata", {})
        event.version = data.get("version", "1.0.0")
        return event

    def __repr__(self) -> str:
        return f"Event(type={self.type!r}, source={self.source!r}, id={self.id!r})"


class NATSEventBus:
    """
    NATS publisher for service events.

    Owns one broker connection; subjects follow events.<source>.<type>.
    """

    def __init__(self, service_name: str, url: str):
        """
        Initialize NATS Event Bus.

        Args:
            service_name: Name of the service (used as connection name)
            url: NATS server URL, e.g. nats://localhost:4222
        """
        self.service_name = service_name
        self.url = url
        self._client: Optional[NATS] = None
        logger.info(f"NATS EventBus initialized: {url}")

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._client.is_connected

    async def connect(self):
        """Connect to the NATS server"""
        try:
            self._client = await nats.connect(self.url, name=self.service_name)
            logger.info(f"Connected to NATS as {self.service_name}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS: {e}")
            raise

    @staticmethod
    def subject_for(event: Event) -> str:
        return f"events.{event.source}.{event.type}"

    async def publish_event(self, event: Event) -> bool:
        """
        Publish an event to NATS.

        Returns:
            bool: True if the broker accepted the message
        """
        if not self.is_connected:
            logger.warning(f"NATS not connected, dropping {event.type} event")
            return False

        try:
            payload = json.dumps(event.to_dict(), cls=DecimalEncoder).encode()
            await self._client.publish(
                self.subject_for(event),
                payload,
                headers={"event_type": event.type, "source": event.source},
            )
            logger.debug(f"Published {event.type} event {event.id} to NATS")
            return True
        except Exception as e:
            logger.error(f"Failed to publish {event.type} event to NATS: {e}")
            return False

    async def close(self):
        """Drain and close the connection"""
        if self._client is not None:
            await self._client.drain()
            self._client = None
            logger.info("NATS connection closed")


async def create_event_bus(service_name: str, url: str) -> NATSEventBus:
    """
    Create and connect an event bus instance.

    Args:
        service_name: Name of the service using the event bus
        url: NATS server URL

    Returns:
        NATSEventBus: Connected instance, owned by the caller
    """
    event_bus = NATSEventBus(service_name=service_name, url=url)
    await event_bus.connect()
    return event_bus


__all__ = [
    "DecimalEncoder",
    "EventType",
    "ServiceSource",
    "Event",
    "NATSEventBus",
    "create_event_bus",
]
