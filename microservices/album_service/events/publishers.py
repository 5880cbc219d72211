"""
Event Publishers for Album Service

Centralized event publishing logic for album_service
Publishes client sync and notification events through the injected event bus
"""

import logging

from core.nats_client import Event, EventType, ServiceSource
from ..models import ClientConfig
from .models import SuccessEventData

logger = logging.getLogger(__name__)


class AlbumEventPublishers:
    """Publishers for album service events"""

    def __init__(self, event_bus):
        """
        Initialize event publishers

        Args:
            event_bus: Event bus instance (EventNotifier in production)
        """
        self.event_bus = event_bus

    async def publish_config_updated(self, config: ClientConfig):
        """
        Publish config.updated event

        Args:
            config: Complete client-visible configuration snapshot
        """
        if not self.event_bus:
            logger.warning("Event bus not available, skipping config.updated event")
            return

        try:
            event = Event(
                event_type=EventType.CONFIG_UPDATED,
                source=ServiceSource.ALBUM_SERVICE,
                data=config.model_dump(mode="json")
            )

            await self.event_bus.publish_event(event)
            logger.info("Published config.updated event")

        except Exception as e:
            logger.error(f"Failed to publish config.updated event: {e}")

    async def publish_success(self, message: str):
        """
        Publish notify.success event

        Args:
            message: Human-readable message, e.g. "Album Trip created"
        """
        if not self.event_bus:
            logger.warning("Event bus not available, skipping notify.success event")
            return

        try:
            event_data = SuccessEventData(message=message)

            event = Event(
                event_type=EventType.NOTIFY_SUCCESS,
                source=ServiceSource.ALBUM_SERVICE,
                data=event_data.model_dump()
            )

            await self.event_bus.publish_event(event)
            logger.info(f"Published notify.success event: {message}")

        except Exception as e:
            logger.error(f"Failed to publish notify.success event: {e}")
