"""
Event Notifier Component Golden Tests

Fan-out behavior of the in-process event notifier and its use by AlbumService.

Usage:
    pytest tests/component/golden/album_service/test_event_notifier_golden.py -v
"""
import asyncio

import pytest

from core.auth_dependencies import VerifiedCaller
from core.nats_client import Event, EventType, ServiceSource
from microservices.album_service.album_service import AlbumUnauthorizedError
from microservices.album_service.models import AlbumParams
from tests.component.golden.album_service.mocks import RecordingSubscriber
from tests.fixtures import make_album

pytestmark = [pytest.mark.component, pytest.mark.golden, pytest.mark.asyncio]

CALLER = VerifiedCaller(subject="session:test", method="session")


def make_event(event_type: EventType = EventType.NOTIFY_SUCCESS, message: str = "hello") -> Event:
    return Event(
        event_type=event_type,
        source=ServiceSource.ALBUM_SERVICE,
        data={"message": message},
    )


# =============================================================================
# Fan-out
# =============================================================================

class TestEventNotifier:
    """GOLDEN: Publish/subscribe fan-out"""

    async def test_delivers_to_every_subscriber(self, notifier):
        first, second = RecordingSubscriber(), RecordingSubscriber()
        notifier.subscribe(first)
        notifier.subscribe(second)

        event = make_event()
        await notifier.publish_event(event)
        await notifier.drain()

        assert first.events == [event]
        assert second.events == [event]

    async def test_publish_does_not_wait_for_delivery(self, notifier):
        release = asyncio.Event()
        received = []

        async def slow_handler(event):
            await release.wait()
            received.append(event)

        notifier.subscribe(slow_handler)
        await notifier.publish_event(make_event())

        assert received == []
        assert notifier.pending_count == 1

        release.set()
        await notifier.drain()

        assert len(received) == 1
        assert notifier.pending_count == 0

    async def test_pattern_filters_event_types(self, notifier):
        config_only = RecordingSubscriber()
        notifier.subscribe(config_only, pattern="config.*")

        await notifier.publish_event(make_event(EventType.NOTIFY_SUCCESS))
        await notifier.publish_event(make_event(EventType.CONFIG_UPDATED))
        await notifier.drain()

        assert config_only.types == ["config.updated"]

    async def test_sync_handlers_supported(self, notifier):
        received = []
        notifier.subscribe(received.append)

        await notifier.publish_event(make_event())
        await notifier.drain()

        assert len(received) == 1

    async def test_failing_subscriber_is_isolated(self, notifier):
        recorder = RecordingSubscriber()

        async def broken(event):
            raise RuntimeError("subscriber crashed")

        notifier.subscribe(broken, name="broken")
        notifier.subscribe(recorder)

        await notifier.publish_event(make_event())
        await notifier.drain()

        assert len(recorder.events) == 1

    async def test_unsubscribe(self, notifier):
        recorder = RecordingSubscriber()
        subscription_id = notifier.subscribe(recorder)

        assert notifier.unsubscribe(subscription_id) is True
        assert notifier.unsubscribe(subscription_id) is False
        assert notifier.subscriber_count == 0

        await notifier.publish_event(make_event())
        await notifier.drain()

        assert recorder.events == []

    async def test_publish_without_subscribers(self, notifier):
        await notifier.publish_event(make_event())
        await notifier.drain()

        assert notifier.pending_count == 0


# =============================================================================
# Service Integration
# =============================================================================

class TestServiceNotifications:
    """GOLDEN: Events observed by a notifier subscriber"""

    async def test_rename_events_reach_subscriber(self, album_service, mock_album_repository, recorder, notifier):
        trip = make_album(name="Trip")
        mock_album_repository.set_album(trip)

        await album_service.rename_album(trip.id, AlbumParams(album_name="Trip2"), CALLER)
        await notifier.drain()

        assert sorted(recorder.types) == ["config.updated", "notify.success"]
        (success,) = recorder.of_type("notify.success")
        assert success.data == {"message": "Album Trip2 updated"}
        assert success.source == "album_service"

    async def test_event_sees_committed_state(self, album_service, mock_album_repository, notifier):
        trip = make_album(name="Trip")
        mock_album_repository.set_album(trip)
        seen = []

        def check_store(event):
            seen.append(mock_album_repository.get(trip.id).favorite)

        notifier.subscribe(check_store, pattern="config.updated")

        await album_service.like_album(trip.id, CALLER)
        await notifier.drain()

        assert seen == [True]

    async def test_unauthorized_emits_nothing(self, album_service, mock_album_repository, recorder, notifier):
        trip = make_album(name="Trip")
        mock_album_repository.set_album(trip)

        for call in (
            album_service.like_album(trip.id, None),
            album_service.dislike_album(trip.id, None),
            album_service.rename_album(trip.id, AlbumParams(album_name="X"), None),
            album_service.create_album(AlbumParams(album_name="Y"), None),
        ):
            with pytest.raises(AlbumUnauthorizedError):
                await call
        await notifier.drain()

        assert recorder.events == []
        assert mock_album_repository.write_count == 0
